"""Domain errors package.

Usage:
    from authcore.domain.errors import AuthError, InvalidCredentialsError
"""

from authcore.domain.errors.auth_error import (
    GENERIC_CREDENTIALS_MESSAGE,
    GENERIC_FAILURE_MESSAGE,
    AuthError,
    BiometricNotAvailableError,
    EmailAlreadyInUseError,
    EmailAlreadyVerifiedError,
    GenericAuthError,
    InvalidCredentialsError,
    InvalidTokenError,
    MFARequiredError,
    PasswordPolicyViolationError,
    TokenExpiredError,
    UserNotAuthenticatedError,
    UserNotFoundError,
    WeakPasswordError,
)

__all__ = [
    "AuthError",
    "BiometricNotAvailableError",
    "EmailAlreadyInUseError",
    "EmailAlreadyVerifiedError",
    "GENERIC_CREDENTIALS_MESSAGE",
    "GENERIC_FAILURE_MESSAGE",
    "GenericAuthError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MFARequiredError",
    "PasswordPolicyViolationError",
    "TokenExpiredError",
    "UserNotAuthenticatedError",
    "UserNotFoundError",
    "WeakPasswordError",
]
