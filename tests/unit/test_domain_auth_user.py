"""Unit tests for AuthUser, roles and permissions.

Tests cover:
- Immutability and derived properties
- Pending confirmation placeholder
- Security level
- Role hierarchy and wildcard permissions
"""

from dataclasses import FrozenInstanceError, replace

import pytest

from authcore.domain.entities import PENDING_CONFIRMATION_USER_ID, AuthUser
from authcore.domain.enums import (
    Permission,
    UserRole,
    UserStatus,
    permissions_for,
    role_grants,
)
from tests.conftest import create_auth_user


@pytest.mark.unit
class TestAuthUser:
    def test_is_immutable(self):
        user = create_auth_user()

        with pytest.raises(FrozenInstanceError):
            user.email = "other@example.com"  # type: ignore[misc]

    def test_replace_produces_new_instance(self):
        user = create_auth_user()

        updated = replace(user, email_verified=False)

        assert user.email_verified is True
        assert updated.email_verified is False

    def test_full_name_prefers_first_and_last(self):
        user = AuthUser(
            id="u-1",
            email="ada@example.com",
            email_verified=True,
            first_name="Ada",
            last_name="Lovelace",
            display_name="Countess",
        )

        assert user.full_name == "Ada Lovelace"

    def test_full_name_falls_back_to_email_local_part(self):
        assert create_auth_user(email="ada@example.com").full_name == "ada"

    def test_pending_confirmation_placeholder(self):
        user = AuthUser.pending_confirmation("new@example.com")

        assert user.id == PENDING_CONFIRMATION_USER_ID
        assert user.email_verified is False
        assert user.status == UserStatus.PENDING_VERIFICATION
        assert user.is_authenticatable() is True

    @pytest.mark.parametrize(
        "status", [UserStatus.SUSPENDED, UserStatus.LOCKED, UserStatus.DISABLED]
    )
    def test_blocked_statuses_are_not_authenticatable(self, status):
        user = replace(create_auth_user(), status=status)

        assert user.is_authenticatable() is False
        assert user.is_active() is False

    def test_security_level(self):
        basic = create_auth_user()
        enhanced = replace(basic, mfa_enabled=True)
        maximum = replace(enhanced, biometric_enabled=True)

        assert basic.security_level() == "basic"
        assert enhanced.security_level() == "enhanced"
        assert maximum.security_level() == "maximum"


@pytest.mark.unit
class TestRolesAndPermissions:
    def test_role_hierarchy(self):
        assert UserRole.ADMIN.includes(UserRole.MODERATOR) is True
        assert UserRole.USER.includes(UserRole.USER) is True
        assert UserRole.MODERATOR.includes(UserRole.ADMIN) is False

    def test_user_permissions(self):
        assert permissions_for(UserRole.USER) == [
            "read_profile",
            "update_profile",
            "change_password",
        ]

    def test_super_admin_holds_wildcard(self):
        assert permissions_for(UserRole.SUPER_ADMIN) == ["*"]
        assert role_grants(UserRole.SUPER_ADMIN, "anything_at_all") is True

    def test_role_grants_accepts_enum_and_string(self):
        assert role_grants(UserRole.ADMIN, Permission.ADMIN_ACCESS) is True
        assert role_grants(UserRole.ADMIN, "admin_access") is True
        assert role_grants(UserRole.USER, Permission.ADMIN_ACCESS) is False

    def test_can_perform_uses_role(self):
        moderator = create_auth_user(role=UserRole.MODERATOR)

        assert moderator.can_perform("moderate_content") is True
        assert moderator.can_perform("admin_access") is False
