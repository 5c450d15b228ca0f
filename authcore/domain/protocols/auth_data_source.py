"""AuthDataSource protocol - thin async boundary to the identity provider.

Port (interface) for hexagonal architecture. Infrastructure adapters wrap a
concrete provider SDK and implement this protocol.

Contract:
    - Operations resolve with provider-shaped results (UserDTO) or raise
      AuthProviderException. They never return or raise domain errors;
      translation happens one layer up in the repository.
    - "No current user" is None, never an exception.
    - on_auth_state_changed returns a disposer. After the disposer runs, no
      further callback is invoked, including notifications already being
      dispatched.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol

from authcore.domain.entities import UserSession

type AuthStateCallback = Callable[["UserDTO | None"], None]
type Unsubscribe = Callable[[], None]


@dataclass(frozen=True, slots=True, kw_only=True)
class UserDTO:
    """Provider wire shape of a user.

    Mapped exactly once into AuthUser by AuthUserMapper; nothing past the
    repository ever sees a UserDTO.

    Attributes:
        id: Provider user id.
        email: Email as reported by the provider (not normalized).
        display_name: Optional display name.
        photo_url: Optional avatar URL.
        email_verified: Whether the provider confirmed the email.
        created_at: Account creation time.
        last_sign_in_at: Last sign-in time.
        metadata: Provider user metadata (role, names, mfa/biometric flags).
    """

    id: str
    email: str | None
    display_name: str | None = None
    photo_url: str | None = None
    email_verified: bool = False
    created_at: datetime | None = None
    last_sign_in_at: datetime | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class AuthProviderException(Exception):
    """Provider-shaped failure raised by data source adapters.

    Carries the provider's own code and message verbatim. Only the
    repository may inspect it (through ProviderErrorMapper).

    Attributes:
        code: Provider error code (may be None when only a message exists).
        message: Raw provider message.
        status: Optional HTTP-like status reported by the provider.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status = status


class AuthDataSource(Protocol):
    """Identity provider boundary (port).

    This is a Protocol (not ABC) for structural typing.
    Implementations don't need to inherit from this.

    Core capability set:
        sign_in_with_email_and_password, create_user_with_email_and_password,
        sign_out, send_password_reset_email, get_current_user,
        on_auth_state_changed

    Account capabilities used by the repository:
        verify_email, update_password, update_user_metadata,
        list_sessions, revoke_session, revoke_other_sessions,
        refresh_session
    """

    async def sign_in_with_email_and_password(self, email: str, password: str) -> UserDTO:
        """Sign in with email and password.

        Returns:
            UserDTO: The signed-in provider user.

        Raises:
            AuthProviderException: Credentials rejected or provider failure.
        """
        ...

    async def create_user_with_email_and_password(
        self, email: str, password: str
    ) -> UserDTO | None:
        """Create an account.

        Returns:
            UserDTO | None: The new user, or None while the provider waits
            for email confirmation and exposes no session.

        Raises:
            AuthProviderException: Email taken, weak password, etc.
        """
        ...

    async def sign_out(self) -> None:
        """Sign out the current session remotely."""
        ...

    async def send_password_reset_email(self, email: str) -> None:
        """Ask the provider to send a password reset email."""
        ...

    async def get_current_user(self) -> UserDTO | None:
        """Return the signed-in user, or None when there is none."""
        ...

    def on_auth_state_changed(self, callback: AuthStateCallback) -> Unsubscribe:
        """Subscribe to out-of-band session transitions.

        The callback receives the new user (None after sign-out or
        expiry) on token refresh, external sign-out, and session expiry.

        Returns:
            Unsubscribe: Disposer; idempotent.
        """
        ...

    async def verify_email(self, token: str) -> UserDTO:
        """Confirm an email address with a verification token."""
        ...

    async def update_password(self, current_password: str, new_password: str) -> None:
        """Change the current user's password."""
        ...

    async def update_user_metadata(self, data: dict[str, Any]) -> UserDTO:
        """Merge data into the current user's metadata."""
        ...

    async def list_sessions(self) -> list[UserSession]:
        """List the current user's sessions across devices."""
        ...

    async def revoke_session(self, session_id: str) -> None:
        """Revoke one session."""
        ...

    async def revoke_other_sessions(self) -> None:
        """Revoke every session except the current one."""
        ...

    async def refresh_session(self) -> UserDTO:
        """Refresh the current session's tokens."""
        ...
