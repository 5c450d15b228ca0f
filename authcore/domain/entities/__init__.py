"""Domain entities."""

from authcore.domain.entities.auth_user import (
    PENDING_CONFIRMATION_USER_ID,
    AuthUser,
)
from authcore.domain.entities.mfa import MFAChallenge, MFAEnrollment, MFAFactor
from authcore.domain.entities.password_validation import PasswordValidationResult
from authcore.domain.entities.security_event import SecurityAlert, SecurityEvent
from authcore.domain.entities.user_session import UserSession

__all__ = [
    "AuthUser",
    "MFAChallenge",
    "MFAEnrollment",
    "MFAFactor",
    "PENDING_CONFIRMATION_USER_ID",
    "PasswordValidationResult",
    "SecurityAlert",
    "SecurityEvent",
    "UserSession",
]
