"""Domain enums.

Available Enums:
    - UserRole, UserStatus: account classification
    - MFAType, MFAFactorStatus: second factors
    - BiometricType: device sensors
    - OAuthProvider: social sign-in providers
    - PasswordStrength: password policy buckets
    - SecurityEventType, SecurityEventSeverity: security audit trail
    - Permission: role-based access checks
"""

from authcore.domain.enums.biometric_type import BiometricType
from authcore.domain.enums.mfa_type import MFAFactorStatus, MFAType
from authcore.domain.enums.oauth_provider import OAuthProvider
from authcore.domain.enums.password_strength import PasswordStrength
from authcore.domain.enums.permission import (
    ROLE_PERMISSIONS,
    WILDCARD_PERMISSION,
    Permission,
    permissions_for,
    role_grants,
)
from authcore.domain.enums.security_event import (
    SecurityEventSeverity,
    SecurityEventType,
)
from authcore.domain.enums.user_role import UserRole
from authcore.domain.enums.user_status import UserStatus

__all__ = [
    "BiometricType",
    "MFAFactorStatus",
    "MFAType",
    "OAuthProvider",
    "PasswordStrength",
    "Permission",
    "ROLE_PERMISSIONS",
    "SecurityEventSeverity",
    "SecurityEventType",
    "UserRole",
    "UserStatus",
    "WILDCARD_PERMISSION",
    "permissions_for",
    "role_grants",
]
