"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Credential errors (INVALID_CREDENTIALS, USER_NOT_FOUND)
- Session errors (USER_NOT_AUTHENTICATED)
- Second factor errors (MFA_REQUIRED, BIOMETRIC_NOT_AVAILABLE)
- Password errors (PASSWORD_TOO_WEAK, PASSWORD_POLICY_VIOLATION)
- Conflict errors (EMAIL_ALREADY_IN_USE, EMAIL_ALREADY_VERIFIED)
- Token errors (TOKEN_INVALID, TOKEN_EXPIRED)
- Fallback (AUTHENTICATION_FAILED)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Credential errors
    INVALID_CREDENTIALS = "invalid_credentials"
    USER_NOT_FOUND = "user_not_found"

    # Session errors
    USER_NOT_AUTHENTICATED = "user_not_authenticated"

    # Second factor errors
    MFA_REQUIRED = "mfa_required"
    BIOMETRIC_NOT_AVAILABLE = "biometric_not_available"

    # Password errors
    PASSWORD_TOO_WEAK = "password_too_weak"
    PASSWORD_POLICY_VIOLATION = "password_policy_violation"

    # Conflict errors
    EMAIL_ALREADY_IN_USE = "email_already_in_use"
    EMAIL_ALREADY_VERIFIED = "email_already_verified"

    # Verification token errors
    TOKEN_INVALID = "token_invalid"
    TOKEN_EXPIRED = "token_expired"

    # Fallback for anything the provider reports that we do not recognize
    AUTHENTICATION_FAILED = "authentication_failed"
