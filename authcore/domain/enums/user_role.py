"""User roles for role-based access checks.

Role Hierarchy:
    super_admin > admin > moderator > user

Usage:
    from authcore.domain.enums import UserRole

    if user.role == UserRole.ADMIN:
        ...
"""

from enum import Enum


class UserRole(str, Enum):
    """User roles.

    String Enum:
        Inherits from str for easy serialization into provider metadata.
        Values are lowercase to match the provider's stored role claim.
    """

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    @classmethod
    def values(cls) -> list[str]:
        """Get all role values as strings.

        Returns:
            list[str]: ['user', 'moderator', 'admin', 'super_admin'].
        """
        return [role.value for role in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check if a string is a valid role.

        Args:
            value: String to check.

        Returns:
            bool: True if value is a valid role.
        """
        return value in cls.values()

    def includes(self, other: "UserRole") -> bool:
        """Check whether this role is at least as privileged as another.

        Args:
            other: Required role.

        Returns:
            bool: True if self ranks at or above other in the hierarchy.

        Example:
            >>> UserRole.ADMIN.includes(UserRole.MODERATOR)
            True
        """
        order = list(UserRole)
        return order.index(self) >= order.index(other)
