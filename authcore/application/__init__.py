"""Application layer: auth state store and intent handlers."""
