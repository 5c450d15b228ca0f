"""SecurityEventSinkProtocol - security audit trail port.

Sink failures never fail the originating auth operation; the repository
logs and swallows them.
"""

from datetime import datetime
from typing import Protocol

from authcore.domain.entities import SecurityEvent


class SecurityEventSinkProtocol(Protocol):
    """Security event storage (port)."""

    async def record(self, event: SecurityEvent) -> None:
        """Persist one event."""
        ...

    async def query(
        self,
        user_id: str,
        *,
        since: datetime | None = None,
        limit: int = 50,
    ) -> list[SecurityEvent]:
        """Return a user's events, newest first.

        Args:
            user_id: User to query.
            since: Only events at or after this time.
            limit: Maximum number of events.
        """
        ...
