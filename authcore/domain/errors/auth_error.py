"""Authentication error taxonomy.

Closed set of provider-independent authentication failure kinds. Every
provider failure is translated into exactly one of these by the provider
error mapper before it leaves the repository.

Architecture:
    - Inherit from DomainError (core layer), NOT from Exception
    - Returned in Result.Failure, never raised
    - public_payload() is the only representation shown to end users

Security:
    InvalidCredentialsError and UserNotFoundError produce byte-identical
    public payloads so an observer cannot enumerate accounts.
    GenericAuthError keeps the raw provider message for logs only.

Usage:
    from authcore.domain.errors import InvalidCredentialsError, MFARequiredError

    match result:
        case Failure(error=MFARequiredError() as error):
            start_challenge(error.challenge)
        case Failure(error=error):
            show(error.public_payload())
"""

from dataclasses import dataclass
from typing import Any

from authcore.core.enums import ErrorCode
from authcore.core.errors import DomainError
from authcore.domain.entities import MFAChallenge
from authcore.domain.enums import BiometricType

GENERIC_CREDENTIALS_MESSAGE = "Invalid email or password"
GENERIC_FAILURE_MESSAGE = "Something went wrong. Please try again."


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthError(DomainError):
    """Base of the authentication error taxonomy."""

    def public_payload(self) -> dict[str, Any]:
        """User-facing representation (safe to render).

        Returns:
            dict: ``{"code": ..., "message": ...}`` plus kind-specific,
            non-sensitive fields.
        """
        return {"code": self.code.value, "message": self.message}


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidCredentialsError(AuthError):
    """Email/password combination rejected by the provider."""

    code: ErrorCode = ErrorCode.INVALID_CREDENTIALS
    message: str = GENERIC_CREDENTIALS_MESSAGE

    def public_payload(self) -> dict[str, Any]:
        """Same payload as UserNotFoundError (anti-enumeration)."""
        return {
            "code": ErrorCode.INVALID_CREDENTIALS.value,
            "message": GENERIC_CREDENTIALS_MESSAGE,
        }


@dataclass(frozen=True, slots=True, kw_only=True)
class UserNotFoundError(AuthError):
    """No account exists for the given identifier.

    Distinct internally (logs, security events) but rendered exactly like
    InvalidCredentialsError.
    """

    code: ErrorCode = ErrorCode.USER_NOT_FOUND
    message: str = "User not found"

    def public_payload(self) -> dict[str, Any]:
        """Same payload as InvalidCredentialsError (anti-enumeration)."""
        return {
            "code": ErrorCode.INVALID_CREDENTIALS.value,
            "message": GENERIC_CREDENTIALS_MESSAGE,
        }


@dataclass(frozen=True, slots=True, kw_only=True)
class UserNotAuthenticatedError(AuthError):
    """Operation requires a signed-in user and there is none."""

    code: ErrorCode = ErrorCode.USER_NOT_AUTHENTICATED
    message: str = "Please sign in to continue"


@dataclass(frozen=True, slots=True, kw_only=True)
class MFARequiredError(AuthError):
    """First factor accepted, a second factor is required.

    Non-terminal: callers redirect into the challenge flow. The payload
    carries only the challenge id, type, and masked target.
    """

    challenge: MFAChallenge
    code: ErrorCode = ErrorCode.MFA_REQUIRED
    message: str = "Multi-factor authentication required"

    def public_payload(self) -> dict[str, Any]:
        """Challenge reference for the MFA screen."""
        return {
            "code": self.code.value,
            "message": self.message,
            "challenge_id": self.challenge.challenge_id,
            "type": self.challenge.type.value,
            "masked_target": self.challenge.masked_target,
        }


@dataclass(frozen=True, slots=True, kw_only=True)
class WeakPasswordError(AuthError):
    """Provider rejected the password as too weak."""

    rules: tuple[str, ...] = ()
    code: ErrorCode = ErrorCode.PASSWORD_TOO_WEAK
    message: str = "Password is too weak"

    def public_payload(self) -> dict[str, Any]:
        """Includes the violated rules (safe to disclose)."""
        return {"code": self.code.value, "message": self.message, "rules": list(self.rules)}


@dataclass(frozen=True, slots=True, kw_only=True)
class PasswordPolicyViolationError(AuthError):
    """Password fails the local password policy."""

    violations: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()
    code: ErrorCode = ErrorCode.PASSWORD_POLICY_VIOLATION
    message: str = "Password does not meet policy requirements"

    def public_payload(self) -> dict[str, Any]:
        """Includes violations and actionable suggestions."""
        return {
            "code": self.code.value,
            "message": self.message,
            "violations": list(self.violations),
            "suggestions": list(self.suggestions),
        }


@dataclass(frozen=True, slots=True, kw_only=True)
class EmailAlreadyInUseError(AuthError):
    """Registration with an email that already has an account."""

    code: ErrorCode = ErrorCode.EMAIL_ALREADY_IN_USE
    message: str = "An account with this email already exists"


@dataclass(frozen=True, slots=True, kw_only=True)
class BiometricNotAvailableError(AuthError):
    """Device cannot perform biometric authentication."""

    biometric_type: BiometricType = BiometricType.NONE
    code: ErrorCode = ErrorCode.BIOMETRIC_NOT_AVAILABLE
    message: str = "Biometric authentication is not available on this device"

    def public_payload(self) -> dict[str, Any]:
        """Includes the sensor kind so the UI can offer a fallback."""
        return {
            "code": self.code.value,
            "message": self.message,
            "biometric_type": self.biometric_type.value,
        }


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidTokenError(AuthError):
    """Email verification token is malformed or unknown."""

    code: ErrorCode = ErrorCode.TOKEN_INVALID
    message: str = "Invalid verification token"


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenExpiredError(AuthError):
    """Email verification token has expired."""

    code: ErrorCode = ErrorCode.TOKEN_EXPIRED
    message: str = "Verification token has expired"


@dataclass(frozen=True, slots=True, kw_only=True)
class EmailAlreadyVerifiedError(AuthError):
    """Email verification attempted for an already verified address."""

    code: ErrorCode = ErrorCode.EMAIL_ALREADY_VERIFIED
    message: str = "Email address is already verified"


@dataclass(frozen=True, slots=True, kw_only=True)
class GenericAuthError(AuthError):
    """Fallback for unrecognized provider failures and internal defects.

    raw_message is for logs only and never reaches public_payload().
    """

    raw_message: str | None = None
    code: ErrorCode = ErrorCode.AUTHENTICATION_FAILED
    message: str = "Authentication failed"

    def public_payload(self) -> dict[str, Any]:
        """Generic payload without the raw message."""
        return {"code": self.code.value, "message": GENERIC_FAILURE_MESSAGE}
