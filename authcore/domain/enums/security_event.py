"""Security event types and severities.

Every security-relevant repository operation emits one of these through the
security event sink. Values are snake_case strings so they can be stored
as-is by the sink.
"""

from enum import Enum


class SecurityEventType(str, Enum):
    """Security event types, grouped by category."""

    # =========================================================================
    # Authentication
    # =========================================================================
    LOGIN = "login"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"
    REGISTRATION = "registration"
    PASSWORD_CHANGED = "password_changed"
    PASSWORD_RESET = "password_reset"
    EMAIL_VERIFICATION_SUCCESS = "email_verification_success"

    # =========================================================================
    # Second factors
    # =========================================================================
    MFA_ENABLED = "mfa_enabled"
    MFA_DISABLED = "mfa_disabled"
    MFA_CHALLENGE_CREATED = "mfa_challenge_created"
    MFA_CHALLENGE_VERIFIED = "mfa_challenge_verified"
    BIOMETRIC_ENABLED = "biometric_enabled"
    BIOMETRIC_DISABLED = "biometric_disabled"
    BIOMETRIC_AUTH_SUCCESS = "biometric_auth_success"
    BIOMETRIC_AUTH_FAILED = "biometric_auth_failed"

    # =========================================================================
    # OAuth
    # =========================================================================
    OAUTH_LINKED = "oauth_linked"
    OAUTH_UNLINKED = "oauth_unlinked"

    # =========================================================================
    # Sessions and threats
    # =========================================================================
    SUSPICIOUS_ACTIVITY = "suspicious_activity"
    SESSION_REFRESHED = "session_refreshed"
    SESSION_TERMINATED = "session_terminated"


class SecurityEventSeverity(str, Enum):
    """Security event severity."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"
