"""Authentication commands (user intents).

Commands are immutable data containers (frozen=True, kw_only=True); the
matching handler executes the intent and returns a Result. Commands are
hashable: identical in-flight commands share one execution.

Secrets are excluded from repr so a logged command never leaks them.
"""

from dataclasses import dataclass, field

from authcore.domain.entities import AuthUser, MFAChallenge
from authcore.domain.enums import OAuthProvider
from authcore.domain.types import Email, MFACode, Password, VerificationToken


@dataclass(frozen=True, kw_only=True)
class LoginUser:
    """Sign in with email and password.

    Example:
        >>> command = LoginUser(email="test@example.com", password="password123")
        >>> result = await handler.handle(command)
    """

    email: Email
    password: Password = field(repr=False)


@dataclass(frozen=True, kw_only=True)
class RegisterUser:
    """Create an account.

    The password is not policy-checked here; the provider enforces its own
    rules and reports WeakPasswordError.
    """

    email: Email
    password: Password = field(repr=False)
    first_name: str | None = None
    last_name: str | None = None


@dataclass(frozen=True, kw_only=True)
class LogoutUser:
    """End the session on this device."""


@dataclass(frozen=True, kw_only=True)
class RequestPasswordReset:
    """Send a password reset email."""

    email: Email


@dataclass(frozen=True, kw_only=True)
class VerifyMFAChallenge:
    """Complete the second factor of a login.

    Attributes:
        challenge_id: Id from LoginResponse.mfa_challenge.
        code: One-time code entered by the user.
        factor_id: Optional factor id (known from the challenge).
    """

    challenge_id: str
    code: MFACode = field(repr=False)
    factor_id: str | None = None


@dataclass(frozen=True, kw_only=True)
class AuthenticateWithBiometric:
    """Unlock the stored session with a biometric prompt."""

    prompt: str = "Authenticate to continue"


@dataclass(frozen=True, kw_only=True)
class OAuthLogin:
    """Sign in with a social provider."""

    provider: OAuthProvider


@dataclass(frozen=True, kw_only=True)
class UpdatePassword:
    """Change the password of the signed-in user."""

    current_password: Password = field(repr=False)
    new_password: Password = field(repr=False)


@dataclass(frozen=True, kw_only=True)
class VerifyEmail:
    """Confirm an email address with the token from the verification email."""

    token: VerificationToken = field(repr=False)


@dataclass(frozen=True, kw_only=True)
class RestoreSession:
    """Load the provider's current user into the state store (app start)."""


@dataclass(frozen=True, kw_only=True)
class LoginResponse:
    """Outcome of a login intent.

    Exactly one of user and mfa_challenge is set. A challenge means the
    first factor was accepted and VerifyMFAChallenge must follow.
    """

    user: AuthUser | None = None
    mfa_challenge: MFAChallenge | None = None

    @property
    def requires_mfa(self) -> bool:
        return self.mfa_challenge is not None
