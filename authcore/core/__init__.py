"""Core building blocks shared by every layer (config, results, errors)."""
