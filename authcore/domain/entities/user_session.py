"""UserSession entity for multi-device session listings.

Sessions are query results, not cached state: the state store only tracks
the current device implicitly through is_authenticated.
"""

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class UserSession:
    """A provider session on one device.

    Attributes:
        id: Session identifier.
        user_id: Owning user (lookup only, not ownership).
        device_id: Device the session lives on.
        is_active: Whether the provider still honors the session.
        expires_at: Expiry timestamp.
        created_at: Creation timestamp.
        last_active_at: Last activity timestamp.
        is_current: True for the session of this device.
    """

    id: str
    user_id: str
    device_id: str
    is_active: bool
    expires_at: datetime
    created_at: datetime
    last_active_at: datetime
    is_current: bool = False

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check expiry.

        Args:
            now: Reference time (defaults to current UTC time).

        Returns:
            bool: True if expires_at is in the past.
        """
        return (now or datetime.now(UTC)) >= self.expires_at
