"""In-memory identity provider (reference AuthDataSource adapter).

Behaves like a hosted email/password provider closely enough for
development and tests: accounts, a current session per device, email
verification tokens, multi-device session listings, and out-of-band
auth state notifications. Failures are raised as AuthProviderException
with provider-style codes and messages, exactly like a real SDK wrapper.

Not thread-safe; intended for a single asyncio event loop.
"""

import secrets
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from itertools import count
from typing import Any

import structlog

from authcore.domain.entities import UserSession
from authcore.domain.protocols import (
    AuthProviderException,
    AuthStateCallback,
    Unsubscribe,
    UserDTO,
)

logger = structlog.get_logger(__name__)

SESSION_LIFETIME = timedelta(hours=1)
VERIFICATION_TOKEN_LIFETIME = timedelta(hours=24)


@dataclass
class _Account:
    """Mutable provider-side account record."""

    id: str
    email: str
    password: str
    email_verified: bool = False
    display_name: str | None = None
    photo_url: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_sign_in_at: datetime | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dto(self) -> UserDTO:
        return UserDTO(
            id=self.id,
            email=self.email,
            display_name=self.display_name,
            photo_url=self.photo_url,
            email_verified=self.email_verified,
            created_at=self.created_at,
            last_sign_in_at=self.last_sign_in_at,
            metadata=dict(self.metadata),
        )


class InMemoryAuthDataSource:
    """Reference AuthDataSource backed by dictionaries.

    Args:
        device_id: Identifier of "this" device for session listings.
        require_email_confirmation: When True, sign-up returns None and
            opens no session until the email is verified.
        min_password_length: Provider-side minimum password length.

    Example:
        >>> source = InMemoryAuthDataSource()
        >>> source.seed_user("ada@example.com", "S3cure!pass", email_verified=True)
        >>> dto = await source.sign_in_with_email_and_password(
        ...     "ada@example.com", "S3cure!pass"
        ... )
    """

    def __init__(
        self,
        *,
        device_id: str = "this-device",
        require_email_confirmation: bool = False,
        min_password_length: int = 6,
    ) -> None:
        self._device_id = device_id
        self._require_email_confirmation = require_email_confirmation
        self._min_password_length = min_password_length
        self._accounts: dict[str, _Account] = {}
        self._current: _Account | None = None
        self._current_session_id: str | None = None
        self._sessions: dict[str, UserSession] = {}
        self._verification_tokens: dict[str, tuple[str, datetime]] = {}
        self._listeners: dict[int, AuthStateCallback] = {}
        self._listener_ids = count(1)
        self.sent_password_resets: list[str] = []

    # -------------------------------------------------------------------------
    # Test and development helpers
    # -------------------------------------------------------------------------

    def seed_user(
        self,
        email: str,
        password: str,
        *,
        email_verified: bool = True,
        display_name: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> UserDTO:
        """Create an account without signing in."""
        account = _Account(
            id=f"user-{secrets.token_hex(8)}",
            email=email.strip().lower(),
            password=password,
            email_verified=email_verified,
            display_name=display_name,
            metadata=dict(metadata or {}),
        )
        self._accounts[account.email] = account
        return account.to_dto()

    def issue_verification_token(self, email: str, *, ttl: timedelta | None = None) -> str:
        """Issue an email verification token (what the provider would email)."""
        token = secrets.token_urlsafe(24)
        expires_at = datetime.now(UTC) + (ttl or VERIFICATION_TOKEN_LIFETIME)
        self._verification_tokens[token] = (email.strip().lower(), expires_at)
        return token

    def add_remote_session(self, device_id: str) -> UserSession:
        """Open a session for the current user on another device."""
        account = self._require_current()
        return self._open_session(account, device_id)

    def expire_session(self) -> None:
        """Simulate an out-of-band session expiry."""
        if self._current_session_id is not None:
            self._close_session(self._current_session_id)
        self._current = None
        self._current_session_id = None
        self._notify(None)

    def emit(self, user: UserDTO | None) -> None:
        """Dispatch an arbitrary auth state notification."""
        self._notify(user)

    # -------------------------------------------------------------------------
    # AuthDataSource: core capabilities
    # -------------------------------------------------------------------------

    async def sign_in_with_email_and_password(self, email: str, password: str) -> UserDTO:
        account = self._accounts.get(email.strip().lower())
        # Unknown email and wrong password produce the same provider error
        if account is None or not secrets.compare_digest(account.password, password):
            raise AuthProviderException(
                "Invalid login credentials", code="invalid_credentials", status=400
            )
        if self._require_email_confirmation and not account.email_verified:
            raise AuthProviderException(
                "Email not confirmed", code="email_not_confirmed", status=400
            )
        self._start_session(account)
        return account.to_dto()

    async def create_user_with_email_and_password(
        self, email: str, password: str
    ) -> UserDTO | None:
        normalized = email.strip().lower()
        if normalized in self._accounts:
            raise AuthProviderException(
                "User already registered", code="user_already_exists", status=422
            )
        if len(password) < self._min_password_length:
            raise AuthProviderException(
                f"Password should be at least {self._min_password_length} characters",
                code="weak_password",
                status=422,
            )
        account = _Account(
            id=f"user-{secrets.token_hex(8)}", email=normalized, password=password
        )
        self._accounts[normalized] = account
        self.issue_verification_token(normalized)
        if self._require_email_confirmation:
            return None
        self._start_session(account)
        return account.to_dto()

    async def sign_out(self) -> None:
        if self._current is None:
            return
        if self._current_session_id is not None:
            self._close_session(self._current_session_id)
        self._current = None
        self._current_session_id = None
        self._notify(None)

    async def send_password_reset_email(self, email: str) -> None:
        # Unknown emails are accepted silently
        self.sent_password_resets.append(email.strip().lower())

    async def get_current_user(self) -> UserDTO | None:
        return self._current.to_dto() if self._current is not None else None

    def on_auth_state_changed(self, callback: AuthStateCallback) -> Unsubscribe:
        listener_id = next(self._listener_ids)
        self._listeners[listener_id] = callback

        def unsubscribe() -> None:
            self._listeners.pop(listener_id, None)

        return unsubscribe

    # -------------------------------------------------------------------------
    # AuthDataSource: account capabilities
    # -------------------------------------------------------------------------

    async def verify_email(self, token: str) -> UserDTO:
        entry = self._verification_tokens.get(token)
        if entry is None:
            raise AuthProviderException("Token is invalid", code="invalid_token", status=400)
        email, expires_at = entry
        if datetime.now(UTC) >= expires_at:
            raise AuthProviderException("Token has expired", code="token_expired", status=400)
        account = self._accounts[email]
        if account.email_verified:
            raise AuthProviderException(
                "Email already verified", code="email_already_verified", status=409
            )
        account.email_verified = True
        del self._verification_tokens[token]
        if self._current is account:
            self._notify(account.to_dto())
        return account.to_dto()

    async def update_password(self, current_password: str, new_password: str) -> None:
        account = self._require_current()
        if not secrets.compare_digest(account.password, current_password):
            raise AuthProviderException(
                "Invalid login credentials", code="invalid_credentials", status=400
            )
        if len(new_password) < self._min_password_length:
            raise AuthProviderException(
                "Password is too short", code="password_too_short", status=422
            )
        account.password = new_password

    async def update_user_metadata(self, data: dict[str, Any]) -> UserDTO:
        account = self._require_current()
        account.metadata.update(data)
        self._notify(account.to_dto())
        return account.to_dto()

    async def list_sessions(self) -> list[UserSession]:
        account = self._require_current()
        return [
            replace(session, is_current=session.id == self._current_session_id)
            for session in self._sessions.values()
            if session.user_id == account.id and session.is_active
        ]

    async def revoke_session(self, session_id: str) -> None:
        account = self._require_current()
        session = self._sessions.get(session_id)
        if session is None or session.user_id != account.id:
            raise AuthProviderException(
                "Session not found", code="session_not_found", status=404
            )
        if session_id == self._current_session_id:
            await self.sign_out()
            return
        self._close_session(session_id)

    async def revoke_other_sessions(self) -> None:
        account = self._require_current()
        for session in list(self._sessions.values()):
            if session.user_id == account.id and session.id != self._current_session_id:
                self._close_session(session.id)

    async def refresh_session(self) -> UserDTO:
        account = self._require_current()
        now = datetime.now(UTC)
        if self._current_session_id is not None:
            session = self._sessions[self._current_session_id]
            self._sessions[session.id] = replace(
                session, last_active_at=now, expires_at=now + SESSION_LIFETIME
            )
        self._notify(account.to_dto())
        return account.to_dto()

    # -------------------------------------------------------------------------
    # Provider-internal operations used by sibling in-memory adapters
    # -------------------------------------------------------------------------

    def sign_in_external(
        self, email: str, *, display_name: str | None = None
    ) -> tuple[UserDTO, bool]:
        """Sign in through a federated identity, creating the account if needed.

        Returns:
            tuple[UserDTO, bool]: The user and whether it was created.
        """
        normalized = email.strip().lower()
        account = self._accounts.get(normalized)
        created = account is None
        if account is None:
            account = _Account(
                id=f"user-{secrets.token_hex(8)}",
                email=normalized,
                password=secrets.token_urlsafe(16),
                email_verified=True,
                display_name=display_name,
            )
            self._accounts[normalized] = account
        self._start_session(account)
        return account.to_dto(), created

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _require_current(self) -> _Account:
        if self._current is None:
            raise AuthProviderException(
                "Auth session missing", code="session_not_found", status=401
            )
        return self._current

    def _start_session(self, account: _Account) -> None:
        account.last_sign_in_at = datetime.now(UTC)
        session = self._open_session(account, self._device_id)
        self._current = account
        self._current_session_id = session.id
        self._notify(account.to_dto())

    def _open_session(self, account: _Account, device_id: str) -> UserSession:
        now = datetime.now(UTC)
        session = UserSession(
            id=f"session-{secrets.token_hex(6)}",
            user_id=account.id,
            device_id=device_id,
            is_active=True,
            expires_at=now + SESSION_LIFETIME,
            created_at=now,
            last_active_at=now,
        )
        self._sessions[session.id] = session
        return session

    def _close_session(self, session_id: str) -> None:
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions[session_id] = replace(session, is_active=False)

    def _notify(self, user: UserDTO | None) -> None:
        # Re-check membership per listener: a disposer invoked during
        # dispatch must stop its listener even for this notification.
        for listener_id in list(self._listeners):
            callback = self._listeners.get(listener_id)
            if callback is None:
                continue
            try:
                callback(user)
            except Exception as e:
                logger.warning(
                    "auth_state_listener_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
