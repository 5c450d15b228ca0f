"""Annotated types with centralized validation.

Usage:
    from pydantic import TypeAdapter
    from authcore.domain.types import Email

    email = TypeAdapter(Email).validate_python("User@Example.COM")  # 'user@example.com'

Command dataclasses annotate their fields with these types; hosts that
accept user input validate through pydantic before building a command.
"""

from typing import Annotated

from pydantic import AfterValidator, Field

from authcore.domain.validators import (
    validate_email,
    validate_mfa_code,
    validate_verification_token,
)

Email = Annotated[
    str,
    Field(min_length=5, max_length=255, description="Email address"),
    AfterValidator(validate_email),
]
"""Email address, normalized to lowercase."""

Password = Annotated[
    str,
    Field(min_length=1, max_length=128, description="Password (policy checked separately)"),
]
"""Password as typed by the user.

Strength is not checked here: sign-in must accept legacy passwords and the
local policy lives in AuthRepository.validate_password.
"""

MFACode = Annotated[
    str,
    Field(description="6-digit one-time code"),
    AfterValidator(validate_mfa_code),
]

VerificationToken = Annotated[
    str,
    Field(min_length=16, max_length=256, description="Email verification token"),
    AfterValidator(validate_verification_token),
]
