"""In-memory security event sink (reference SecurityEventSinkProtocol adapter)."""

from datetime import datetime

from authcore.domain.entities import SecurityEvent


class InMemorySecurityEventSink:
    """List-backed event store; newest-first queries."""

    def __init__(self) -> None:
        self.events: list[SecurityEvent] = []

    async def record(self, event: SecurityEvent) -> None:
        self.events.append(event)

    async def query(
        self,
        user_id: str,
        *,
        since: datetime | None = None,
        limit: int = 50,
    ) -> list[SecurityEvent]:
        matching = [
            event
            for event in self.events
            if event.user_id == user_id and (since is None or event.timestamp >= since)
        ]
        matching.sort(key=lambda event: event.timestamp, reverse=True)
        return matching[:limit]
