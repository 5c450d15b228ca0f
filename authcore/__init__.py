"""Authentication domain core.

Normalizes identity-provider outcomes into a domain error taxonomy, exposes
a single capability-rich repository contract, and keeps a race-free
client-side authentication state machine.
"""

__version__ = "0.1.0"
