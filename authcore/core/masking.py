"""Redaction helpers for emails and phone numbers.

Used for MFA challenge targets shown to the user and for any log line that
needs to identify an account without exposing it.
"""

import re

_NON_DIGIT = re.compile(r"\D")


def mask_email(email: str | None) -> str | None:
    """Mask the local part of an email address.

    Args:
        email: Email address (None passes through).

    Returns:
        str | None: First two characters of the local part, then ``***``.

    Example:
        >>> mask_email("alice@example.com")
        'al***@example.com'
    """
    if not email:
        return email
    local, sep, domain = email.partition("@")
    if not sep:
        return f"{local[:2]}***"
    return f"{local[:2]}***@{domain}"


def mask_phone(phone: str | None, visible_digits: int = 4) -> str | None:
    """Mask a phone number, keeping only the trailing digits.

    Example:
        >>> mask_phone("+1 (555) 123-4567")
        '***-***-4567'
    """
    if not phone:
        return phone
    digits = _NON_DIGIT.sub("", phone)
    return f"***-***-{digits[-visible_digits:]}"
