"""User account status."""

from enum import Enum


class UserStatus(str, Enum):
    """Lifecycle status of a user account.

    PENDING_VERIFICATION is the state right after registration while the
    provider waits for email confirmation.
    """

    ACTIVE = "active"
    PENDING_VERIFICATION = "pending_verification"
    SUSPENDED = "suspended"
    LOCKED = "locked"
    DISABLED = "disabled"
