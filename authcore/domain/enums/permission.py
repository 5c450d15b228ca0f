"""Permissions and the static role-to-permission registry.

Permissions are plain action names checked by AuthUser.can_perform and the
repository's has_permission. SUPER_ADMIN holds the wildcard.

Usage:
    from authcore.domain.enums import Permission, permissions_for

    if Permission.ADMIN_ACCESS in permissions_for(user.role):
        ...
"""

from enum import Enum

from authcore.domain.enums.user_role import UserRole


class Permission(str, Enum):
    """Actions a user may be permitted to perform."""

    READ_PROFILE = "read_profile"
    UPDATE_PROFILE = "update_profile"
    CHANGE_PASSWORD = "change_password"
    MODERATE_CONTENT = "moderate_content"
    ADMIN_ACCESS = "admin_access"


WILDCARD_PERMISSION = "*"

_BASE = (Permission.READ_PROFILE, Permission.UPDATE_PROFILE, Permission.CHANGE_PASSWORD)

ROLE_PERMISSIONS: dict[UserRole, tuple[str, ...]] = {
    UserRole.USER: tuple(p.value for p in _BASE),
    UserRole.MODERATOR: tuple(p.value for p in (*_BASE, Permission.MODERATE_CONTENT)),
    UserRole.ADMIN: tuple(
        p.value
        for p in (*_BASE, Permission.MODERATE_CONTENT, Permission.ADMIN_ACCESS)
    ),
    UserRole.SUPER_ADMIN: (WILDCARD_PERMISSION,),
}


def permissions_for(role: UserRole) -> list[str]:
    """Return the permission names granted to a role.

    Args:
        role: User role.

    Returns:
        list[str]: Granted permissions. ``["*"]`` for SUPER_ADMIN.
    """
    return list(ROLE_PERMISSIONS.get(role, ()))


def role_grants(role: UserRole, permission: str) -> bool:
    """Check whether a role grants a permission (wildcard aware).

    Args:
        role: User role.
        permission: Permission name (Permission value or custom string).

    Returns:
        bool: True if granted.
    """
    granted = ROLE_PERMISSIONS.get(role, ())
    name = permission.value if isinstance(permission, Permission) else permission
    return WILDCARD_PERMISSION in granted or name in granted
