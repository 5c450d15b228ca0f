"""Security audit entities (events and alerts)."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from uuid_extensions import uuid7

from authcore.domain.enums import SecurityEventSeverity, SecurityEventType


@dataclass(frozen=True, slots=True, kw_only=True)
class SecurityEvent:
    """Immutable security event handed to the security event sink.

    Attributes:
        type: What happened.
        user_id: Affected user, None when unknown (e.g. failed login for an
            unknown account).
        severity: Event severity.
        metadata: Extra context. Must never contain secrets.
        id: Auto-generated time-ordered identifier.
        timestamp: Auto-generated UTC timestamp.
    """

    type: SecurityEventType
    user_id: str | None
    severity: SecurityEventSeverity = SecurityEventSeverity.LOW
    metadata: dict[str, Any] = field(default_factory=dict)
    id: UUID = field(default_factory=uuid7)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True, slots=True, kw_only=True)
class SecurityAlert:
    """Result of a suspicious-activity check."""

    type: str
    severity: SecurityEventSeverity
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    resolved: bool = False
    id: UUID = field(default_factory=uuid7)
