"""Infrastructure adapters (logging, identity provider, in-memory ports)."""
