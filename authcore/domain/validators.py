"""Validation functions used by the Annotated types in domain.types.

Pure functions that raise ValueError on invalid input.
"""

import re

_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_MFA_CODE_PATTERN = re.compile(r"^\d{6}$")
_URLSAFE_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def validate_email(v: str) -> str:
    """Validate and normalize an email address.

    Example:
        >>> validate_email(" User@Example.COM ")
        'user@example.com'
    """
    normalized = v.strip().lower()
    if not _EMAIL_PATTERN.match(normalized):
        raise ValueError("Invalid email format")
    return normalized


def validate_mfa_code(v: str) -> str:
    """Validate a 6-digit one-time code (surrounding whitespace ignored)."""
    code = v.strip()
    if not _MFA_CODE_PATTERN.match(code):
        raise ValueError("MFA code must be 6 digits")
    return code


def validate_verification_token(v: str) -> str:
    """Validate an email verification token (urlsafe base64)."""
    if not v:
        raise ValueError("Token cannot be empty")
    if not _URLSAFE_TOKEN_PATTERN.match(v):
        raise ValueError("Invalid token format")
    return v
