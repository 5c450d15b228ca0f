"""Provider error mapper.

Translates identity-provider failures into exactly one member of the
authentication error taxonomy. Total and pure: every input, including
unknown codes, plain exceptions and None, resolves to an AuthError and
nothing is raised or logged here (callers log).

Resolution order:
    1. Already a domain AuthError -> returned unchanged
    2. Exact provider code (PROVIDER_CODE_MAP)
    3. Message substring (PROVIDER_MESSAGE_PATTERNS); providers often send
       only a message
    4. GenericAuthError wrapping the raw message

Adding a provider code is a one-line entry in PROVIDER_CODE_MAP.
"""

from typing import Any

from authcore.domain.errors import (
    AuthError,
    EmailAlreadyInUseError,
    EmailAlreadyVerifiedError,
    GenericAuthError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    UserNotFoundError,
    WeakPasswordError,
)
from authcore.domain.protocols import AuthProviderException

# =============================================================================
# Mapping tables
# =============================================================================

# Provider error code (lower-cased) -> taxonomy member
PROVIDER_CODE_MAP: dict[str, type[AuthError]] = {
    # Credentials
    "invalid_credentials": InvalidCredentialsError,
    "invalid_grant": InvalidCredentialsError,
    "email_address_invalid": InvalidCredentialsError,
    "email_not_confirmed": InvalidCredentialsError,
    # Accounts
    "user_not_found": UserNotFoundError,
    "email_already_exists": EmailAlreadyInUseError,
    "email_exists": EmailAlreadyInUseError,
    "user_already_exists": EmailAlreadyInUseError,
    # Passwords
    "weak_password": WeakPasswordError,
    "password_too_short": WeakPasswordError,
    # Email verification tokens
    "invalid_token": InvalidTokenError,
    "bad_jwt": InvalidTokenError,
    "token_expired": TokenExpiredError,
    "otp_expired": TokenExpiredError,
    "email_already_verified": EmailAlreadyVerifiedError,
    # MFA codes
    "mfa_verification_failed": InvalidTokenError,
    "mfa_challenge_expired": TokenExpiredError,
    # Known, deliberately generic
    "signup_disabled": GenericAuthError,
}

# Message fragment (lower-cased) -> taxonomy member, checked in order
PROVIDER_MESSAGE_PATTERNS: tuple[tuple[str, type[AuthError]], ...] = (
    ("invalid login credentials", InvalidCredentialsError),
    ("invalid email or password", InvalidCredentialsError),
    ("email not confirmed", InvalidCredentialsError),
    ("user not found", UserNotFoundError),
    ("no user found", UserNotFoundError),
    ("user already registered", EmailAlreadyInUseError),
    ("email address already in use", EmailAlreadyInUseError),
    ("duplicate", EmailAlreadyInUseError),
    ("password is too short", WeakPasswordError),
    ("password should be at least", WeakPasswordError),
    ("weak password", WeakPasswordError),
    ("token has expired", TokenExpiredError),
    ("token expired", TokenExpiredError),
    ("expired token", TokenExpiredError),
    ("invalid token", InvalidTokenError),
    ("token is invalid", InvalidTokenError),
    ("malformed token", InvalidTokenError),
    ("email already verified", EmailAlreadyVerifiedError),
    ("already confirmed", EmailAlreadyVerifiedError),
)

# Provider code -> violated rule names for WeakPasswordError
_WEAK_PASSWORD_RULES: dict[str, tuple[str, ...]] = {
    "password_too_short": ("min_length",),
    "weak_password": ("strength",),
}


class ProviderErrorMapper:
    """Table-driven provider error translator.

    Stateless: one instance can be shared by every repository.

    Example:
        >>> mapper = ProviderErrorMapper()
        >>> error = mapper.map(AuthProviderException("Invalid login credentials"))
        >>> type(error).__name__
        'InvalidCredentialsError'
    """

    def map(self, provider_error: object) -> AuthError:
        """Map any failure to exactly one AuthError.

        Args:
            provider_error: AuthProviderException, any other exception,
                an AuthError, or None.

        Returns:
            AuthError: Taxonomy member. Unknown input yields GenericAuthError.
        """
        if isinstance(provider_error, AuthError):
            return provider_error

        if not isinstance(provider_error, AuthProviderException):
            raw = str(provider_error) if provider_error is not None else None
            return GenericAuthError(raw_message=raw)

        code = (provider_error.code or "").lower()
        message = provider_error.message or ""

        error_type = PROVIDER_CODE_MAP.get(code) or self._match_message(message)
        if error_type is None or error_type is GenericAuthError:
            return GenericAuthError(
                raw_message=message,
                details=self._details(provider_error),
            )
        if error_type is WeakPasswordError:
            return WeakPasswordError(
                rules=_WEAK_PASSWORD_RULES.get(code, ("strength",)),
                details=self._details(provider_error),
            )
        return error_type(details=self._details(provider_error))

    @staticmethod
    def _match_message(message: str) -> type[AuthError] | None:
        lowered = message.lower()
        for fragment, error_type in PROVIDER_MESSAGE_PATTERNS:
            if fragment in lowered:
                return error_type
        return None

    @staticmethod
    def _details(provider_error: AuthProviderException) -> dict[str, Any]:
        # Log-only context; public_payload() never reads details
        return {
            "provider_code": provider_error.code,
            "provider_status": provider_error.status,
        }
