"""Unit tests for AuthUserMapper (UserDTO -> AuthUser)."""

from datetime import UTC, datetime

import pytest

from authcore.domain.enums import UserRole, UserStatus
from authcore.domain.protocols import UserDTO
from authcore.infrastructure.auth import AuthUserMapper


@pytest.fixture
def mapper():
    return AuthUserMapper()


def make_dto(**overrides) -> UserDTO:
    values = {
        "id": "user-1",
        "email": "Ada@Example.com ",
        "display_name": "Ada Lovelace",
        "photo_url": "https://cdn.example.com/ada.png",
        "email_verified": True,
        "created_at": datetime(2024, 1, 1, tzinfo=UTC),
        "last_sign_in_at": None,
        "metadata": {},
    }
    values.update(overrides)
    return UserDTO(**values)


@pytest.mark.unit
class TestAuthUserMapper:
    def test_maps_core_fields(self, mapper):
        user = mapper.to_entity(make_dto())

        assert user.id == "user-1"
        assert user.email == "ada@example.com"
        assert user.email_verified is True
        assert user.role == UserRole.USER
        assert user.status == UserStatus.ACTIVE
        assert user.created_at == datetime(2024, 1, 1, tzinfo=UTC)

    def test_names_fall_back_to_display_name(self, mapper):
        user = mapper.to_entity(make_dto())

        assert user.first_name == "Ada"
        assert user.last_name == "Lovelace"

    def test_metadata_names_take_precedence(self, mapper):
        user = mapper.to_entity(make_dto(metadata={"first_name": "Augusta"}))

        assert user.first_name == "Augusta"
        assert user.last_name is None

    def test_display_name_is_sanitized(self, mapper):
        user = mapper.to_entity(make_dto(display_name="Ada\x00\x1b" + "x" * 200))

        assert "\x00" not in user.display_name
        assert len(user.display_name) == 100

    def test_non_https_photo_url_dropped(self, mapper):
        user = mapper.to_entity(make_dto(photo_url="http://cdn.example.com/ada.png"))

        assert user.photo_url is None

    def test_role_and_flags_from_metadata(self, mapper):
        user = mapper.to_entity(
            make_dto(
                metadata={
                    "role": "admin",
                    "status": "suspended",
                    "mfa_enabled": True,
                    "biometric_enabled": True,
                }
            )
        )

        assert user.role == UserRole.ADMIN
        assert user.status == UserStatus.SUSPENDED
        assert user.mfa_enabled is True
        assert user.biometric_enabled is True

    def test_unknown_role_and_status_default_safely(self, mapper):
        user = mapper.to_entity(make_dto(metadata={"role": "owner", "status": "weird"}))

        assert user.role == UserRole.USER
        assert user.status == UserStatus.ACTIVE

    def test_missing_email_maps_to_empty_string(self, mapper):
        user = mapper.to_entity(make_dto(email=None, display_name=None))

        assert user.email == ""
        assert user.display_name is None
