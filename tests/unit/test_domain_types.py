"""Unit tests for Annotated domain types and their validators.

Tests cover:
- Email normalization and rejection
- Password accepts legacy (weak) passwords
- MFA code format
- Verification token format and length
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from authcore.domain.types import Email, MFACode, Password, VerificationToken
from authcore.domain.validators import (
    validate_email,
    validate_mfa_code,
    validate_verification_token,
)


@pytest.mark.unit
class TestEmailType:
    def test_normalizes_case_and_whitespace(self):
        assert TypeAdapter(Email).validate_python("  User@Example.COM ") == (
            "user@example.com"
        )

    @pytest.mark.parametrize("value", ["not-an-email", "user@", "@example.com", "a@b.c"])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValidationError):
            TypeAdapter(Email).validate_python(value)


@pytest.mark.unit
class TestPasswordType:
    def test_accepts_short_legacy_password(self):
        assert TypeAdapter(Password).validate_python("pw") == "pw"

    def test_rejects_empty(self):
        with pytest.raises(ValidationError):
            TypeAdapter(Password).validate_python("")


@pytest.mark.unit
class TestMFACodeType:
    def test_strips_whitespace(self):
        assert TypeAdapter(MFACode).validate_python(" 123456 ") == "123456"

    @pytest.mark.parametrize("value", ["12345", "1234567", "12a456"])
    def test_rejects_non_six_digit_codes(self, value):
        with pytest.raises(ValidationError, match="6 digits"):
            TypeAdapter(MFACode).validate_python(value)


@pytest.mark.unit
class TestVerificationTokenType:
    def test_accepts_urlsafe_token(self):
        token = "abcDEF123_-abcDEF123"
        assert TypeAdapter(VerificationToken).validate_python(token) == token

    def test_rejects_short_token(self):
        with pytest.raises(ValidationError):
            TypeAdapter(VerificationToken).validate_python("short")

    def test_rejects_non_urlsafe_characters(self):
        with pytest.raises(ValidationError, match="Invalid token format"):
            TypeAdapter(VerificationToken).validate_python("abc+def/ghi=jklmnop")


@pytest.mark.unit
class TestValidatorFunctions:
    def test_validate_email_raises_value_error(self):
        with pytest.raises(ValueError, match="Invalid email format"):
            validate_email("nope")

    def test_validate_mfa_code_returns_stripped(self):
        assert validate_mfa_code("000111\n") == "000111"

    def test_validate_verification_token_rejects_empty(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            validate_verification_token("")
