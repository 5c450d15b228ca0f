"""Provider user mapper.

Converts the provider's UserDTO into the AuthUser domain entity. This is
the only place a UserDTO is read; no provider field crosses into the
domain unmapped.

Metadata keys understood (all optional):
    role, status, first_name, last_name, mfa_enabled, biometric_enabled
"""

import re
from typing import Any

import structlog

from authcore.domain.entities import AuthUser
from authcore.domain.enums import UserRole, UserStatus
from authcore.domain.protocols import UserDTO

logger = structlog.get_logger(__name__)

MAX_DISPLAY_NAME_LENGTH = 100

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


class AuthUserMapper:
    """Mapper for converting provider users to AuthUser.

    Handles:
    - Email normalization (trim, lower-case)
    - Display name sanitization (control characters, length)
    - HTTPS-only avatar URLs
    - Role and status lookup from provider metadata, with safe defaults
    - First/last name fallback from the display name

    Thread-safe: No mutable state.
    """

    def to_entity(self, dto: UserDTO) -> AuthUser:
        """Map a UserDTO to AuthUser.

        Args:
            dto: Provider user.

        Returns:
            AuthUser: Immutable domain user.
        """
        metadata = dto.metadata or {}
        display_name = self._sanitize_display_name(dto.display_name)
        first_name, last_name = self._names(metadata, display_name)

        return AuthUser(
            id=dto.id,
            email=(dto.email or "").strip().lower(),
            email_verified=bool(dto.email_verified),
            role=self._role(metadata.get("role"), dto.id),
            status=self._status(metadata.get("status")),
            first_name=first_name,
            last_name=last_name,
            display_name=display_name,
            photo_url=self._photo_url(dto.photo_url),
            created_at=dto.created_at,
            last_sign_in_at=dto.last_sign_in_at,
            mfa_enabled=bool(metadata.get("mfa_enabled", False)),
            biometric_enabled=bool(metadata.get("biometric_enabled", False)),
        )

    @staticmethod
    def _sanitize_display_name(value: str | None) -> str | None:
        if not value:
            return None
        cleaned = _CONTROL_CHARS.sub("", value).strip()
        return cleaned[:MAX_DISPLAY_NAME_LENGTH] or None

    @staticmethod
    def _photo_url(value: str | None) -> str | None:
        if value and value.startswith("https://"):
            return value
        return None

    @staticmethod
    def _names(
        metadata: dict[str, Any], display_name: str | None
    ) -> tuple[str | None, str | None]:
        first_name = metadata.get("first_name") or None
        last_name = metadata.get("last_name") or None
        if first_name or last_name or not display_name:
            return first_name, last_name
        head, _, tail = display_name.partition(" ")
        return head, tail.strip() or None

    @staticmethod
    def _role(value: Any, user_id: str) -> UserRole:
        if value is None or isinstance(value, UserRole):
            return value or UserRole.USER
        if UserRole.is_valid(str(value)):
            return UserRole(str(value))
        logger.warning("auth_user_unknown_role", user_id=user_id, role=str(value))
        return UserRole.USER

    @staticmethod
    def _status(value: Any) -> UserStatus:
        try:
            return UserStatus(value) if value else UserStatus.ACTIVE
        except ValueError:
            return UserStatus.ACTIVE
