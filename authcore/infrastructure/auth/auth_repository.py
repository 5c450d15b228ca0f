"""Provider-backed AuthRepository.

The single translation boundary between the identity provider and the
rest of the core. Every provider failure is caught here, passed through
ProviderErrorMapper, logged, and returned as Failure(AuthError). Domain
errors produced here (MFARequiredError, UserNotAuthenticatedError,
PasswordPolicyViolationError, BiometricNotAvailableError) are returned as
they are, never re-mapped.

Cross-cutting concerns added on top of the data source:
    - MFA challenge interception on login
    - Security events for every security-relevant operation, on success
      and failure paths (fire-and-forget)
    - Local password policy, suspicious activity detection, role and
      permission checks
    - Suppression of out-of-band session notifications for users that are
      still half-way through an MFA login

Architecture:
    Implements authcore.domain.protocols.AuthRepository structurally (no
    inheritance). All collaborators are injected.
"""

import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from typing import Any

from authcore.core.config import Settings, get_settings
from authcore.core.masking import mask_email, mask_phone
from authcore.core.result import Failure, Result, Success
from authcore.domain.entities import (
    AuthUser,
    MFAChallenge,
    MFAEnrollment,
    MFAFactor,
    PasswordValidationResult,
    SecurityAlert,
    SecurityEvent,
    UserSession,
)
from authcore.domain.enums import (
    MFAType,
    OAuthProvider,
    PasswordStrength,
    SecurityEventSeverity,
    SecurityEventType,
    UserRole,
    permissions_for,
)
from authcore.domain.errors import (
    AuthError,
    BiometricNotAvailableError,
    GenericAuthError,
    InvalidTokenError,
    MFARequiredError,
    PasswordPolicyViolationError,
    UserNotAuthenticatedError,
)
from authcore.domain.protocols import (
    AuthDataSource,
    AuthUserListener,
    BiometricAvailability,
    BiometricProtocol,
    LoggerProtocol,
    MFAProtocol,
    OAuthProtocol,
    SecurityEventSinkProtocol,
    Unsubscribe,
    UserDTO,
)
from authcore.infrastructure.auth.auth_user_mapper import AuthUserMapper
from authcore.infrastructure.auth.error_mapper import ProviderErrorMapper

# Upper bound of events scanned by check_suspicious_activity
SUSPICIOUS_ACTIVITY_SCAN_LIMIT = 1000

_SPECIAL_CHARACTERS = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")


@dataclass(frozen=True, slots=True)
class _PasswordRule:
    name: str
    error: str
    suggestion: str
    check: Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class _PendingChallenge:
    factor_id: str
    user_id: str


class ProviderAuthRepository:
    """AuthRepository implementation over provider ports.

    Args:
        data_source: Identity provider boundary.
        mfa: Second-factor provider.
        biometric: Device biometric capability.
        oauth: Social sign-in provider.
        security_sink: Security event storage.
        logger: Structured logger.
        settings: Policy settings (defaults to the cached global settings).
        error_mapper: Provider error translator.
        user_mapper: UserDTO -> AuthUser mapper.
    """

    def __init__(
        self,
        *,
        data_source: AuthDataSource,
        mfa: MFAProtocol,
        biometric: BiometricProtocol,
        oauth: OAuthProtocol,
        security_sink: SecurityEventSinkProtocol,
        logger: LoggerProtocol,
        settings: Settings | None = None,
        error_mapper: ProviderErrorMapper | None = None,
        user_mapper: AuthUserMapper | None = None,
    ) -> None:
        self._data_source = data_source
        self._mfa = mfa
        self._biometric = biometric
        self._oauth = oauth
        self._security_sink = security_sink
        self._logger = logger.bind(component="auth_repository")
        self._settings = settings or get_settings()
        self._error_mapper = error_mapper or ProviderErrorMapper()
        self._user_mapper = user_mapper or AuthUserMapper()
        self._pending_challenges: dict[str, _PendingChallenge] = {}
        self._pending_enrollment_phones: dict[str, str] = {}
        # Users whose provider session exists but still owes a second factor
        self._awaiting_second_factor: set[str] = set()
        self._logins_in_flight = 0
        self._password_rules = self._build_password_rules(self._settings.password_min_length)

    # =========================================================================
    # Password authentication
    # =========================================================================

    async def login(self, email: str, password: str) -> Result[AuthUser, AuthError]:
        """Sign in with email and password.

        Flow:
        1. Sign in at the provider
        2. On provider failure: map, emit LOGIN_FAILED, return Failure
        3. If the account has MFA enabled: hold the provider session back
           until the second factor, issue a challenge and return
           Failure(MFARequiredError)
        4. Emit LOGIN and return Success(AuthUser)

        Session notifications are held back for the whole call, so a
        provider that notifies on a later loop tick still finds the user
        marked as awaiting its second factor.
        """
        self._logins_in_flight += 1
        try:
            # Step 1: Provider sign-in
            try:
                dto = await self._data_source.sign_in_with_email_and_password(email, password)
            except Exception as e:
                # Step 2: Failed login
                error = self._map_failure("login", e, email=mask_email(email))
                await self._record(
                    SecurityEventType.LOGIN_FAILED,
                    None,
                    SecurityEventSeverity.MEDIUM,
                    email=mask_email(email),
                    reason=error.code.value,
                )
                return Failure(error=error)

            user = self._user_mapper.to_entity(dto)

            # Step 3: Second factor
            if user.mfa_enabled:
                self._awaiting_second_factor.add(user.id)
                challenge_result = await self._issue_mfa_challenge(dto)
                if isinstance(challenge_result, Failure):
                    await self._abandon_first_factor_session(user.id)
                    return challenge_result
                challenge = challenge_result.value
                if challenge is not None:
                    self._logger.info(
                        "auth_login_mfa_required",
                        user_id=user.id,
                        mfa_type=challenge.type.value,
                    )
                    return Failure(error=MFARequiredError(challenge=challenge))
            self._awaiting_second_factor.discard(user.id)
        finally:
            self._logins_in_flight -= 1

        # Step 4: Success
        await self._record(SecurityEventType.LOGIN, user.id, method="password")
        self._logger.info("auth_login_succeeded", user_id=user.id)
        return Success(value=user)

    async def register(
        self,
        email: str,
        password: str,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> Result[AuthUser, AuthError]:
        """Create an account.

        Success with email_verified=False is the pending-confirmation
        signal. When the provider opens no session until confirmation, a
        placeholder user (PENDING_VERIFICATION) is returned.
        """
        try:
            dto = await self._data_source.create_user_with_email_and_password(email, password)
        except Exception as e:
            return Failure(error=self._map_failure("register", e, email=mask_email(email)))

        if dto is None:
            user = AuthUser.pending_confirmation(email.strip().lower())
            await self._record(
                SecurityEventType.REGISTRATION,
                None,
                email=mask_email(email),
                confirmation_pending=True,
            )
            self._logger.info("auth_register_pending_confirmation", email=mask_email(email))
            return Success(value=user)

        names = {
            key: value
            for key, value in (("first_name", first_name), ("last_name", last_name))
            if value
        }
        if names:
            try:
                dto = await self._data_source.update_user_metadata(names)
            except Exception as e:
                # The account exists; a missing profile name is not a registration failure
                self._map_failure("register_profile", e, user_id=dto.id)

        user = self._user_mapper.to_entity(dto)
        await self._record(SecurityEventType.REGISTRATION, user.id)
        self._logger.info(
            "auth_register_succeeded",
            user_id=user.id,
            email_verified=user.email_verified,
        )
        return Success(value=user)

    async def logout(self) -> Result[None, AuthError]:
        user_id = await self._current_user_id()
        # Abandoned MFA logins end with the session
        self._pending_challenges.clear()
        self._awaiting_second_factor.clear()
        try:
            await self._data_source.sign_out()
        except Exception as e:
            return Failure(error=self._map_failure("logout", e, user_id=user_id))
        await self._record(SecurityEventType.LOGOUT, user_id)
        self._logger.info("auth_logout_succeeded", user_id=user_id)
        return Success(value=None)

    async def reset_password(self, email: str) -> Result[None, AuthError]:
        try:
            await self._data_source.send_password_reset_email(email)
        except Exception as e:
            return Failure(
                error=self._map_failure("reset_password", e, email=mask_email(email))
            )
        await self._record(
            SecurityEventType.PASSWORD_RESET,
            None,
            SecurityEventSeverity.MEDIUM,
            email=mask_email(email),
        )
        return Success(value=None)

    async def validate_password(
        self, password: str
    ) -> Result[PasswordValidationResult, AuthError]:
        return Success(value=self._evaluate_password(password))

    async def verify_email(self, token: str) -> Result[AuthUser, AuthError]:
        try:
            dto = await self._data_source.verify_email(token)
        except Exception as e:
            return Failure(error=self._map_failure("verify_email", e))
        user = self._user_mapper.to_entity(dto)
        await self._record(SecurityEventType.EMAIL_VERIFICATION_SUCCESS, user.id)
        return Success(value=user)

    async def update_password(
        self, current_password: str, new_password: str
    ) -> Result[None, AuthError]:
        """Change the password.

        The new password is checked against the local policy first; a
        violation returns PasswordPolicyViolationError without contacting
        the provider.
        """
        current = await self._require_current_dto("update_password")
        if isinstance(current, Failure):
            return current

        validation = self._evaluate_password(new_password)
        if not validation.is_valid:
            suggestions = tuple(
                rule.suggestion
                for rule in self._password_rules
                if rule.name in validation.violations
            )
            return Failure(
                error=PasswordPolicyViolationError(
                    violations=tuple(validation.violations),
                    suggestions=suggestions,
                )
            )

        user_id = current.value.id
        try:
            await self._data_source.update_password(current_password, new_password)
        except Exception as e:
            return Failure(error=self._map_failure("update_password", e, user_id=user_id))

        await self._record(
            SecurityEventType.PASSWORD_CHANGED, user_id, SecurityEventSeverity.MEDIUM
        )
        self._logger.info("auth_password_changed", user_id=user_id)
        return Success(value=None)

    # =========================================================================
    # Multi-factor authentication
    # =========================================================================

    async def enable_mfa(
        self,
        factor_type: MFAType,
        *,
        phone: str | None = None,
        friendly_name: str | None = None,
    ) -> Result[MFAEnrollment, AuthError]:
        current = await self._require_current_dto("enable_mfa")
        if isinstance(current, Failure):
            return current
        try:
            enrollment = await self._mfa.enroll(
                factor_type, friendly_name=friendly_name, phone=phone
            )
        except Exception as e:
            return Failure(error=self._map_failure("enable_mfa", e, user_id=current.value.id))
        if phone:
            self._pending_enrollment_phones[enrollment.factor_id] = phone
        return Success(value=enrollment)

    async def verify_mfa_setup(self, factor_id: str, code: str) -> Result[None, AuthError]:
        """Verify a new factor and flag MFA on the account."""
        current = await self._require_current_dto("verify_mfa_setup")
        if isinstance(current, Failure):
            return current
        user_id = current.value.id
        try:
            await self._mfa.verify_enrollment(factor_id, code)
            factors = await self._mfa.list_factors()
            factor_type = next(
                (factor.type for factor in factors if factor.id == factor_id), MFAType.TOTP
            )
            metadata: dict[str, Any] = {
                "mfa_enabled": True,
                "preferred_mfa_method": factor_type.value,
            }
            phone = self._pending_enrollment_phones.pop(factor_id, None)
            if phone:
                metadata["phone"] = phone
            await self._data_source.update_user_metadata(metadata)
        except Exception as e:
            return Failure(error=self._map_failure("verify_mfa_setup", e, user_id=user_id))

        await self._record(
            SecurityEventType.MFA_ENABLED,
            user_id,
            SecurityEventSeverity.MEDIUM,
            mfa_type=factor_type.value,
        )
        return Success(value=None)

    async def disable_mfa(self, factor_id: str) -> Result[None, AuthError]:
        current = await self._require_current_dto("disable_mfa")
        if isinstance(current, Failure):
            return current
        user_id = current.value.id
        try:
            await self._mfa.unenroll(factor_id)
            remaining = [f for f in await self._mfa.list_factors() if f.is_verified]
            if not remaining:
                await self._data_source.update_user_metadata({"mfa_enabled": False})
        except Exception as e:
            return Failure(error=self._map_failure("disable_mfa", e, user_id=user_id))

        await self._record(
            SecurityEventType.MFA_DISABLED,
            user_id,
            SecurityEventSeverity.HIGH,
            factor_id=factor_id,
        )
        return Success(value=None)

    async def get_mfa_factors(self) -> Result[list[MFAFactor], AuthError]:
        current = await self._require_current_dto("get_mfa_factors")
        if isinstance(current, Failure):
            return current
        try:
            return Success(value=await self._mfa.list_factors())
        except Exception as e:
            return Failure(error=self._map_failure("get_mfa_factors", e, user_id=current.value.id))

    async def verify_mfa_challenge(
        self,
        challenge_id: str,
        code: str,
        *,
        factor_id: str | None = None,
    ) -> Result[AuthUser, AuthError]:
        """Complete the challenge issued by login.

        Returns:
            Success(AuthUser) once the second factor is accepted.
            Failure(InvalidTokenError) for a challenge this repository did
            not issue, whatever factor_id is supplied.
        """
        pending = self._pending_challenges.get(challenge_id)
        if pending is None:
            self._logger.warning("auth_mfa_challenge_unknown", challenge_id=challenge_id)
            return Failure(error=InvalidTokenError(message="Unknown MFA challenge"))

        try:
            await self._mfa.verify_challenge(factor_id or pending.factor_id, challenge_id, code)
            dto = await self._data_source.get_current_user()
        except Exception as e:
            error = self._map_failure("verify_mfa_challenge", e, challenge_id=challenge_id)
            await self._record(
                SecurityEventType.LOGIN_FAILED,
                pending.user_id,
                SecurityEventSeverity.MEDIUM,
                reason=error.code.value,
                method="mfa",
            )
            return Failure(error=error)

        self._pending_challenges.pop(challenge_id, None)
        if dto is None:
            return Failure(error=UserNotAuthenticatedError())

        self._awaiting_second_factor.discard(dto.id)
        user = self._user_mapper.to_entity(dto)
        await self._record(SecurityEventType.MFA_CHALLENGE_VERIFIED, user.id)
        await self._record(SecurityEventType.LOGIN, user.id, method="mfa")
        self._logger.info("auth_login_succeeded", user_id=user.id, method="mfa")
        return Success(value=user)

    # =========================================================================
    # Biometric authentication
    # =========================================================================

    async def is_biometric_available(self) -> Result[BiometricAvailability, AuthError]:
        try:
            return Success(value=await self._biometric.check_availability())
        except Exception as e:
            return Failure(error=self._map_failure("is_biometric_available", e))

    async def enable_biometric(self) -> Result[None, AuthError]:
        current = await self._require_current_dto("enable_biometric")
        if isinstance(current, Failure):
            return current
        user_id = current.value.id
        try:
            availability = await self._biometric.check_availability()
            if not availability.available:
                return Failure(
                    error=BiometricNotAvailableError(
                        biometric_type=availability.biometric_type
                    )
                )
            await self._biometric.create_keys()
            await self._data_source.update_user_metadata(
                {
                    "biometric_enabled": True,
                    "biometric_type": availability.biometric_type.value,
                }
            )
        except Exception as e:
            return Failure(error=self._map_failure("enable_biometric", e, user_id=user_id))

        await self._record(
            SecurityEventType.BIOMETRIC_ENABLED,
            user_id,
            SecurityEventSeverity.MEDIUM,
            biometric_type=availability.biometric_type.value,
        )
        return Success(value=None)

    async def disable_biometric(self) -> Result[None, AuthError]:
        current = await self._require_current_dto("disable_biometric")
        if isinstance(current, Failure):
            return current
        user_id = current.value.id
        try:
            await self._biometric.delete_keys()
            await self._data_source.update_user_metadata({"biometric_enabled": False})
        except Exception as e:
            return Failure(error=self._map_failure("disable_biometric", e, user_id=user_id))

        await self._record(
            SecurityEventType.BIOMETRIC_DISABLED, user_id, SecurityEventSeverity.MEDIUM
        )
        return Success(value=None)

    async def authenticate_with_biometric(
        self, prompt: str = "Authenticate to continue"
    ) -> Result[AuthUser, AuthError]:
        """Unlock the stored provider session with a biometric prompt.

        Flow:
        1. Sensor must be available and keys must exist on this device
        2. Prompt the user; a rejected prompt emits BIOMETRIC_AUTH_FAILED
        3. Load the stored session's user; none means not authenticated
        """
        try:
            # Step 1: Device readiness
            availability = await self._biometric.check_availability()
            if not availability.available:
                return Failure(
                    error=BiometricNotAvailableError(
                        biometric_type=availability.biometric_type
                    )
                )
            if not await self._biometric.keys_exist():
                return Failure(
                    error=BiometricNotAvailableError(
                        biometric_type=availability.biometric_type,
                        message="Biometric sign-in is not set up on this device",
                    )
                )

            # Step 2: Prompt
            outcome = await self._biometric.authenticate(prompt)
            if not outcome.success:
                await self._record(
                    SecurityEventType.BIOMETRIC_AUTH_FAILED,
                    None,
                    SecurityEventSeverity.MEDIUM,
                    reason=outcome.error,
                )
                return Failure(error=GenericAuthError(raw_message=outcome.error))

            # Step 3: Stored session
            dto = await self._data_source.get_current_user()
        except Exception as e:
            return Failure(error=self._map_failure("authenticate_with_biometric", e))

        if dto is None or dto.id in self._awaiting_second_factor:
            return Failure(error=UserNotAuthenticatedError())

        user = self._user_mapper.to_entity(dto)
        await self._record(
            SecurityEventType.BIOMETRIC_AUTH_SUCCESS,
            user.id,
            biometric_type=availability.biometric_type.value,
        )
        return Success(value=user)

    # =========================================================================
    # OAuth
    # =========================================================================

    async def login_with_google(self) -> Result[AuthUser, AuthError]:
        return await self._login_with_oauth(OAuthProvider.GOOGLE)

    async def login_with_apple(self) -> Result[AuthUser, AuthError]:
        return await self._login_with_oauth(OAuthProvider.APPLE)

    async def login_with_microsoft(self) -> Result[AuthUser, AuthError]:
        return await self._login_with_oauth(OAuthProvider.MICROSOFT)

    async def link_oauth_provider(self, provider: OAuthProvider) -> Result[None, AuthError]:
        return await self._change_oauth_link(
            provider, self._oauth.link, SecurityEventType.OAUTH_LINKED
        )

    async def unlink_oauth_provider(self, provider: OAuthProvider) -> Result[None, AuthError]:
        return await self._change_oauth_link(
            provider, self._oauth.unlink, SecurityEventType.OAUTH_UNLINKED
        )

    # =========================================================================
    # Roles and permissions
    # =========================================================================

    async def get_user_roles(self) -> Result[list[UserRole], AuthError]:
        current = await self._require_current_user("get_user_roles")
        if isinstance(current, Failure):
            return current
        return Success(value=[current.value.role])

    async def has_role(self, role: UserRole) -> Result[bool, AuthError]:
        """True if the current user's role is role or ranks above it."""
        current = await self._require_current_user("has_role")
        if isinstance(current, Failure):
            return current
        return Success(value=current.value.role.includes(role))

    async def has_permission(self, permission: str) -> Result[bool, AuthError]:
        current = await self._require_current_user("has_permission")
        if isinstance(current, Failure):
            return current
        return Success(value=current.value.can_perform(permission))

    async def get_user_permissions(self) -> Result[list[str], AuthError]:
        current = await self._require_current_user("get_user_permissions")
        if isinstance(current, Failure):
            return current
        return Success(value=permissions_for(current.value.role))

    # =========================================================================
    # Session lifecycle
    # =========================================================================

    async def get_current_user(self) -> Result[AuthUser | None, AuthError]:
        """Load the signed-in user.

        Returns:
            Success(None) when nobody is signed in, including a provider
            session that has not passed its MFA challenge yet.
        """
        try:
            dto = await self._data_source.get_current_user()
        except Exception as e:
            return Failure(error=self._map_failure("get_current_user", e))
        if dto is None or dto.id in self._awaiting_second_factor:
            return Success(value=None)
        return Success(value=self._user_mapper.to_entity(dto))

    async def get_active_sessions(self) -> Result[list[UserSession], AuthError]:
        current = await self._require_current_dto("get_active_sessions")
        if isinstance(current, Failure):
            return current
        try:
            sessions = await self._data_source.list_sessions()
        except Exception as e:
            return Failure(
                error=self._map_failure("get_active_sessions", e, user_id=current.value.id)
            )
        now = datetime.now(UTC)
        return Success(
            value=[s for s in sessions if s.is_active and not s.is_expired(now)]
        )

    async def terminate_session(self, session_id: str) -> Result[None, AuthError]:
        current = await self._require_current_dto("terminate_session")
        if isinstance(current, Failure):
            return current
        user_id = current.value.id
        try:
            await self._data_source.revoke_session(session_id)
        except Exception as e:
            error = self._map_failure("terminate_session", e, user_id=user_id)
            await self._record(
                SecurityEventType.SESSION_TERMINATED,
                user_id,
                SecurityEventSeverity.MEDIUM,
                session_id=session_id,
                succeeded=False,
            )
            return Failure(error=error)

        await self._record(
            SecurityEventType.SESSION_TERMINATED,
            user_id,
            SecurityEventSeverity.MEDIUM,
            session_id=session_id,
            succeeded=True,
        )
        return Success(value=None)

    async def terminate_other_sessions(self) -> Result[None, AuthError]:
        current = await self._require_current_dto("terminate_other_sessions")
        if isinstance(current, Failure):
            return current
        user_id = current.value.id
        try:
            await self._data_source.revoke_other_sessions()
        except Exception as e:
            error = self._map_failure("terminate_other_sessions", e, user_id=user_id)
            await self._record(
                SecurityEventType.SESSION_TERMINATED,
                user_id,
                SecurityEventSeverity.MEDIUM,
                scope="others",
                succeeded=False,
            )
            return Failure(error=error)

        await self._record(
            SecurityEventType.SESSION_TERMINATED,
            user_id,
            SecurityEventSeverity.MEDIUM,
            scope="others",
            succeeded=True,
        )
        return Success(value=None)

    async def refresh_session(self) -> Result[AuthUser, AuthError]:
        current = await self._require_current_dto("refresh_session")
        if isinstance(current, Failure):
            return current
        try:
            dto = await self._data_source.refresh_session()
        except Exception as e:
            return Failure(error=self._map_failure("refresh_session", e))
        user = self._user_mapper.to_entity(dto)
        await self._record(SecurityEventType.SESSION_REFRESHED, user.id)
        return Success(value=user)

    async def set_session_timeout(self, minutes: int | None = None) -> Result[int, AuthError]:
        """Store the session timeout preference, clamped into the configured bounds.

        Args:
            minutes: Requested timeout; None restores session_timeout_default_minutes.

        Returns:
            Success(int): Effective timeout in minutes.
        """
        current = await self._require_current_dto("set_session_timeout")
        if isinstance(current, Failure):
            return current
        user_id = current.value.id
        if minutes is None:
            minutes = self._settings.session_timeout_default_minutes

        low = self._settings.session_timeout_min_minutes
        high = self._settings.session_timeout_max_minutes
        effective = min(max(minutes, low), high)
        if effective != minutes:
            self._logger.warning(
                "auth_session_timeout_clamped",
                user_id=user_id,
                requested_minutes=minutes,
                effective_minutes=effective,
            )

        try:
            await self._data_source.update_user_metadata({"session_timeout_minutes": effective})
        except Exception as e:
            return Failure(error=self._map_failure("set_session_timeout", e, user_id=user_id))
        return Success(value=effective)

    def observe_auth_state(self, listener: AuthUserListener) -> Unsubscribe:
        """Subscribe to out-of-band session changes as AuthUser values.

        Users signing in are not forwarded while a password login is in
        flight or while they still owe a second factor; the login and
        verify_mfa_challenge results carry them instead. Sign-outs (None)
        are always forwarded.
        """

        def on_change(dto: UserDTO | None) -> None:
            if dto is None:
                listener(None)
                return
            if self._logins_in_flight or dto.id in self._awaiting_second_factor:
                self._logger.debug("auth_state_change_deferred", user_id=dto.id)
                return
            listener(self._user_mapper.to_entity(dto))

        return self._data_source.on_auth_state_changed(on_change)

    # =========================================================================
    # Security events
    # =========================================================================

    async def log_security_event(
        self, event: SecurityEvent, *, attribute_to_current_user: bool = False
    ) -> Result[None, AuthError]:
        """Record a security event (fire-and-forget).

        Args:
            event: Event to record. user_id=None is kept as is unless
                attribute_to_current_user is set.
            attribute_to_current_user: Fill a missing user_id from the
                signed-in provider user.

        Sink failures are logged and never returned.

        Returns:
            Success(None): Always.
        """
        try:
            if event.user_id is None and attribute_to_current_user:
                dto = await self._data_source.get_current_user()
                if dto is not None:
                    event = replace(event, user_id=dto.id)
            await self._security_sink.record(event)
        except Exception as e:
            self._logger.warning(
                "security_event_record_failed",
                event_type=event.type.value,
                event_id=str(event.id),
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return Success(value=None)

        self._logger.info(
            "security_event_recorded",
            event_type=event.type.value,
            severity=event.severity.value,
            user_id=event.user_id,
            event_id=str(event.id),
        )
        return Success(value=None)

    async def get_security_events(
        self, *, limit: int | None = None
    ) -> Result[list[SecurityEvent], AuthError]:
        current = await self._require_current_dto("get_security_events")
        if isinstance(current, Failure):
            return current
        user_id = current.value.id
        try:
            events = await self._security_sink.query(
                user_id, limit=limit or self._settings.security_events_default_limit
            )
        except Exception as e:
            return Failure(error=self._map_failure("get_security_events", e, user_id=user_id))
        return Success(value=events)

    async def check_suspicious_activity(self) -> Result[list[SecurityAlert], AuthError]:
        """Scan the current user's recent events for suspicious patterns.

        Within the configured window (default 24h):
        - more failed logins than the threshold (default 5): HIGH
          "multiple_failed_logins"
        - more password changes than the threshold (default 2): MEDIUM
          "suspicious_activity"

        Each alert is itself recorded as a SUSPICIOUS_ACTIVITY event.
        """
        current = await self._require_current_dto("check_suspicious_activity")
        if isinstance(current, Failure):
            return current
        user_id = current.value.id

        now = datetime.now(UTC)
        since = now - timedelta(hours=self._settings.suspicious_activity_window_hours)
        try:
            events = await self._security_sink.query(
                user_id, since=since, limit=SUSPICIOUS_ACTIVITY_SCAN_LIMIT
            )
        except Exception as e:
            return Failure(
                error=self._map_failure("check_suspicious_activity", e, user_id=user_id)
            )

        failed_logins = sum(1 for e in events if e.type == SecurityEventType.LOGIN_FAILED)
        password_changes = sum(
            1 for e in events if e.type == SecurityEventType.PASSWORD_CHANGED
        )

        alerts: list[SecurityAlert] = []
        if failed_logins > self._settings.suspicious_failed_login_threshold:
            alerts.append(
                SecurityAlert(
                    type="multiple_failed_logins",
                    severity=SecurityEventSeverity.HIGH,
                    message=f"{failed_logins} failed login attempts in the last "
                    f"{self._settings.suspicious_activity_window_hours} hours",
                    timestamp=now,
                )
            )
        if password_changes > self._settings.suspicious_password_change_threshold:
            alerts.append(
                SecurityAlert(
                    type="suspicious_activity",
                    severity=SecurityEventSeverity.MEDIUM,
                    message=f"{password_changes} password changes in the last "
                    f"{self._settings.suspicious_activity_window_hours} hours",
                    timestamp=now,
                )
            )

        for alert in alerts:
            await self._record(
                SecurityEventType.SUSPICIOUS_ACTIVITY,
                user_id,
                alert.severity,
                alert_type=alert.type,
                alert_id=str(alert.id),
            )
        if alerts:
            self._logger.warning(
                "auth_suspicious_activity_detected",
                user_id=user_id,
                alert_types=[alert.type for alert in alerts],
            )
        return Success(value=alerts)

    # =========================================================================
    # Internals
    # =========================================================================

    def _map_failure(self, operation: str, error: Exception, **context: Any) -> AuthError:
        """Translate a provider failure and log it (raw message to logs only)."""
        mapped = self._error_mapper.map(error)
        self._logger.warning(
            "auth_provider_error",
            operation=operation,
            error_code=mapped.code.value,
            provider_code=getattr(error, "code", None),
            provider_message=str(error),
            error_type=type(error).__name__,
            **context,
        )
        return mapped

    async def _record(
        self,
        event_type: SecurityEventType,
        user_id: str | None,
        severity: SecurityEventSeverity = SecurityEventSeverity.LOW,
        **metadata: Any,
    ) -> None:
        await self.log_security_event(
            SecurityEvent(
                type=event_type,
                user_id=user_id,
                severity=severity,
                metadata={"app": self._settings.app_name, **metadata},
            )
        )

    async def _current_user_id(self) -> str | None:
        try:
            dto = await self._data_source.get_current_user()
        except Exception as e:
            self._map_failure("get_current_user", e)
            return None
        return dto.id if dto is not None else None

    async def _require_current_dto(self, operation: str) -> Result[UserDTO, AuthError]:
        try:
            dto = await self._data_source.get_current_user()
        except Exception as e:
            return Failure(error=self._map_failure(operation, e))
        if dto is None or dto.id in self._awaiting_second_factor:
            self._logger.info("auth_not_authenticated", operation=operation)
            return Failure(error=UserNotAuthenticatedError())
        return Success(value=dto)

    async def _require_current_user(self, operation: str) -> Result[AuthUser, AuthError]:
        current = await self._require_current_dto(operation)
        if isinstance(current, Failure):
            return current
        return Success(value=self._user_mapper.to_entity(current.value))

    async def _abandon_first_factor_session(self, user_id: str) -> None:
        """Sign out a provider session whose MFA challenge could not be issued."""
        try:
            await self._data_source.sign_out()
        except Exception as e:
            self._map_failure("mfa_challenge_sign_out", e, user_id=user_id)

    async def _issue_mfa_challenge(
        self, dto: UserDTO
    ) -> Result[MFAChallenge | None, AuthError]:
        """Create a challenge on the user's preferred verified factor.

        Returns:
            Success(None) when no verified factor exists (MFA flag stale).
        """
        metadata = dto.metadata or {}
        try:
            preferred = MFAType(metadata.get("preferred_mfa_method", MFAType.TOTP.value))
        except ValueError:
            preferred = MFAType.TOTP

        try:
            factors = [f for f in await self._mfa.list_factors() if f.is_verified]
            if not factors:
                self._logger.warning("auth_mfa_enabled_without_factor", user_id=dto.id)
                return Success(value=None)
            factor = next((f for f in factors if f.type == preferred), factors[0])
            challenge_id = await self._mfa.create_challenge(factor.id)
        except Exception as e:
            return Failure(error=self._map_failure("mfa_challenge", e, user_id=dto.id))

        if factor.type == MFAType.SMS:
            masked = mask_phone(metadata.get("phone"), self._settings.mfa_masked_phone_digits)
        elif factor.type == MFAType.EMAIL:
            masked = mask_email(dto.email)
        else:
            masked = None

        self._pending_challenges[challenge_id] = _PendingChallenge(
            factor_id=factor.id, user_id=dto.id
        )
        await self._record(
            SecurityEventType.MFA_CHALLENGE_CREATED,
            dto.id,
            mfa_type=factor.type.value,
        )
        return Success(
            value=MFAChallenge(
                challenge_id=challenge_id,
                type=factor.type,
                masked_target=masked,
                factor_id=factor.id,
            )
        )

    async def _login_with_oauth(self, provider: OAuthProvider) -> Result[AuthUser, AuthError]:
        try:
            credential = await self._oauth.sign_in(provider)
        except Exception as e:
            error = self._map_failure("oauth_login", e, provider=provider.value)
            await self._record(
                SecurityEventType.LOGIN_FAILED,
                None,
                SecurityEventSeverity.MEDIUM,
                method="oauth",
                provider=provider.value,
                reason=error.code.value,
            )
            return Failure(error=error)

        user = self._user_mapper.to_entity(credential.user)
        if credential.is_new_user:
            await self._record(SecurityEventType.REGISTRATION, user.id, provider=provider.value)
        await self._record(
            SecurityEventType.LOGIN, user.id, method="oauth", provider=provider.value
        )
        self._logger.info("auth_login_succeeded", user_id=user.id, provider=provider.value)
        return Success(value=user)

    async def _change_oauth_link(
        self,
        provider: OAuthProvider,
        action: Callable[[OAuthProvider], Awaitable[None]],
        event_type: SecurityEventType,
    ) -> Result[None, AuthError]:
        current = await self._require_current_dto(event_type.value)
        if isinstance(current, Failure):
            return current
        user_id = current.value.id
        try:
            await action(provider)
        except Exception as e:
            return Failure(
                error=self._map_failure(
                    event_type.value, e, user_id=user_id, provider=provider.value
                )
            )
        await self._record(
            event_type, user_id, SecurityEventSeverity.MEDIUM, provider=provider.value
        )
        return Success(value=None)

    def _evaluate_password(self, password: str) -> PasswordValidationResult:
        failed = [rule for rule in self._password_rules if not rule.check(password)]
        score = 20 * (len(self._password_rules) - len(failed))
        return PasswordValidationResult(
            is_valid=not failed,
            strength=PasswordStrength.from_score(score),
            score=score,
            errors=[rule.error for rule in failed],
            violations=[rule.name for rule in failed],
        )

    @staticmethod
    def _build_password_rules(min_length: int) -> tuple[_PasswordRule, ...]:
        return (
            _PasswordRule(
                "min_length",
                f"Password must be at least {min_length} characters long",
                f"Use at least {min_length} characters",
                lambda p: len(p) >= min_length,
            ),
            _PasswordRule(
                "uppercase",
                "Password must contain at least one uppercase letter",
                "Add an uppercase letter",
                lambda p: any(c.isupper() for c in p),
            ),
            _PasswordRule(
                "lowercase",
                "Password must contain at least one lowercase letter",
                "Add a lowercase letter",
                lambda p: any(c.islower() for c in p),
            ),
            _PasswordRule(
                "digit",
                "Password must contain at least one number",
                "Add a number",
                lambda p: any(c.isdigit() for c in p),
            ),
            _PasswordRule(
                "special_character",
                "Password must contain at least one special character",
                'Add a special character such as !@#$%^&*(),.?":{}|<>',
                lambda p: bool(_SPECIAL_CHARACTERS.search(p)),
            ),
        )
