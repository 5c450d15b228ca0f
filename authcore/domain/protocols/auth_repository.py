"""AuthRepository protocol - the single authentication capability contract.

Port (interface) for hexagonal architecture. Upper layers depend only on
this protocol and never branch on provider identity; a test double
satisfies the same interface and is passed in at construction.

Contract:
    - Every method returns Result[T, AuthError]; nothing is raised.
    - Provider failures leave the repository only after passing through
      ProviderErrorMapper.
    - Domain errors produced internally (MFARequiredError,
      UserNotAuthenticatedError) are returned unchanged.
    - register() succeeding with email_verified=False is the "pending
      confirmation" signal, not an error.
"""

from collections.abc import Callable
from typing import Protocol

from authcore.core.result import Result
from authcore.domain.entities import (
    AuthUser,
    MFAEnrollment,
    MFAFactor,
    PasswordValidationResult,
    SecurityAlert,
    SecurityEvent,
    UserSession,
)
from authcore.domain.enums import MFAType, OAuthProvider, UserRole
from authcore.domain.errors import AuthError
from authcore.domain.protocols.auth_data_source import Unsubscribe
from authcore.domain.protocols.biometric_protocol import BiometricAvailability

type AuthUserListener = Callable[[AuthUser | None], None]


class AuthRepository(Protocol):
    """Authentication repository (port).

    Capability groups:
        Password auth: login, register, logout, reset_password,
            validate_password, verify_email, update_password
        MFA: enable_mfa, disable_mfa, verify_mfa_setup, get_mfa_factors,
            verify_mfa_challenge
        Biometric: is_biometric_available, enable_biometric,
            disable_biometric, authenticate_with_biometric
        OAuth: login_with_google, login_with_apple, login_with_microsoft,
            link_oauth_provider, unlink_oauth_provider
        Roles: get_user_roles, has_role, has_permission,
            get_user_permissions
        Sessions: get_current_user, get_active_sessions,
            terminate_session, terminate_other_sessions, refresh_session,
            set_session_timeout, observe_auth_state
        Security: log_security_event, get_security_events,
            check_suspicious_activity
    """

    # Password authentication

    async def login(self, email: str, password: str) -> Result[AuthUser, AuthError]:
        """Sign in with email and password.

        Returns:
            Success(AuthUser) on success.
            Failure(MFARequiredError) when a second factor is required.
            Failure(AuthError) for any mapped provider failure.
        """
        ...

    async def register(
        self,
        email: str,
        password: str,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> Result[AuthUser, AuthError]:
        """Create an account.

        Returns:
            Success(AuthUser), possibly with email_verified=False while
            confirmation is pending.
        """
        ...

    async def logout(self) -> Result[None, AuthError]:
        """Sign out remotely."""
        ...

    async def reset_password(self, email: str) -> Result[None, AuthError]:
        """Request a password reset email."""
        ...

    async def validate_password(
        self, password: str
    ) -> Result[PasswordValidationResult, AuthError]:
        """Evaluate a password against the local policy (no provider call)."""
        ...

    async def verify_email(self, token: str) -> Result[AuthUser, AuthError]:
        """Confirm the email address with a verification token."""
        ...

    async def update_password(
        self, current_password: str, new_password: str
    ) -> Result[None, AuthError]:
        """Change the password after validating the new one locally.

        Returns:
            Failure(PasswordPolicyViolationError) if the new password fails
            the local policy; nothing is sent to the provider then.
        """
        ...

    # Multi-factor authentication

    async def enable_mfa(
        self,
        factor_type: MFAType,
        *,
        phone: str | None = None,
        friendly_name: str | None = None,
    ) -> Result[MFAEnrollment, AuthError]:
        """Enroll a new second factor."""
        ...

    async def disable_mfa(self, factor_id: str) -> Result[None, AuthError]:
        """Remove a second factor."""
        ...

    async def verify_mfa_setup(self, factor_id: str, code: str) -> Result[None, AuthError]:
        """Verify a newly enrolled factor."""
        ...

    async def get_mfa_factors(self) -> Result[list[MFAFactor], AuthError]:
        """List enrolled factors."""
        ...

    async def verify_mfa_challenge(
        self,
        challenge_id: str,
        code: str,
        *,
        factor_id: str | None = None,
    ) -> Result[AuthUser, AuthError]:
        """Complete the MFA challenge issued during login."""
        ...

    # Biometric authentication

    async def is_biometric_available(self) -> Result[BiometricAvailability, AuthError]:
        """Report device biometric availability."""
        ...

    async def enable_biometric(self) -> Result[None, AuthError]:
        """Create device keys and flag biometric sign-in on the account."""
        ...

    async def disable_biometric(self) -> Result[None, AuthError]:
        """Delete device keys and clear the account flag."""
        ...

    async def authenticate_with_biometric(
        self, prompt: str = "Authenticate to continue"
    ) -> Result[AuthUser, AuthError]:
        """Sign in by biometric confirmation of the stored session."""
        ...

    # OAuth

    async def login_with_google(self) -> Result[AuthUser, AuthError]:
        """Sign in with Google."""
        ...

    async def login_with_apple(self) -> Result[AuthUser, AuthError]:
        """Sign in with Apple."""
        ...

    async def login_with_microsoft(self) -> Result[AuthUser, AuthError]:
        """Sign in with Microsoft."""
        ...

    async def link_oauth_provider(self, provider: OAuthProvider) -> Result[None, AuthError]:
        """Link a social identity to the current user."""
        ...

    async def unlink_oauth_provider(self, provider: OAuthProvider) -> Result[None, AuthError]:
        """Unlink a social identity from the current user."""
        ...

    # Roles and permissions

    async def get_user_roles(self) -> Result[list[UserRole], AuthError]:
        """Roles of the current user."""
        ...

    async def has_role(self, role: UserRole) -> Result[bool, AuthError]:
        """True if the current user holds role."""
        ...

    async def has_permission(self, permission: str) -> Result[bool, AuthError]:
        """True if the current user's role grants permission."""
        ...

    async def get_user_permissions(self) -> Result[list[str], AuthError]:
        """Permissions granted to the current user."""
        ...

    # Session lifecycle

    async def get_current_user(self) -> Result[AuthUser | None, AuthError]:
        """Current user, or Success(None) when signed out."""
        ...

    async def get_active_sessions(self) -> Result[list[UserSession], AuthError]:
        """Active sessions of the current user across devices."""
        ...

    async def terminate_session(self, session_id: str) -> Result[None, AuthError]:
        """Revoke one session."""
        ...

    async def terminate_other_sessions(self) -> Result[None, AuthError]:
        """Revoke every session except this device's."""
        ...

    async def refresh_session(self) -> Result[AuthUser, AuthError]:
        """Refresh the current session."""
        ...

    async def set_session_timeout(
        self, minutes: int | None = None
    ) -> Result[int, AuthError]:
        """Store the session timeout preference (None: configured default).

        Returns:
            Success(int): The effective (clamped) timeout in minutes.
        """
        ...

    def observe_auth_state(self, listener: AuthUserListener) -> Unsubscribe:
        """Subscribe to out-of-band session changes as domain users."""
        ...

    # Security events

    async def log_security_event(
        self, event: SecurityEvent, *, attribute_to_current_user: bool = False
    ) -> Result[None, AuthError]:
        """Record a security event. Always succeeds.

        A missing user_id is filled from the signed-in user only when
        attribute_to_current_user is set.
        """
        ...

    async def get_security_events(
        self, *, limit: int | None = None
    ) -> Result[list[SecurityEvent], AuthError]:
        """Recent security events of the current user."""
        ...

    async def check_suspicious_activity(self) -> Result[list[SecurityAlert], AuthError]:
        """Evaluate recent events of the current user for suspicious patterns."""
        ...
