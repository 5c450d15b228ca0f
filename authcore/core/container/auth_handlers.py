"""Authentication handler factories.

Each factory takes the repository explicitly (test doubles are passed in
by construction) and pulls the shared store, gate and logger from the
application-scoped singletons unless overridden.
"""

from typing import TYPE_CHECKING

from authcore.core.container.infrastructure import (
    get_auth_operation_gate,
    get_auth_state_store,
    get_logger,
)

if TYPE_CHECKING:
    from authcore.application.commands.handlers import (
        AuthenticateWithBiometricHandler,
        AuthOperationGate,
        LoginUserHandler,
        LogoutUserHandler,
        OAuthLoginHandler,
        RegisterUserHandler,
        RequestPasswordResetHandler,
        RestoreSessionHandler,
        UpdatePasswordHandler,
        VerifyEmailHandler,
        VerifyMFAChallengeHandler,
    )
    from authcore.application.services import AuthSessionObserver
    from authcore.application.state import AuthStateStore
    from authcore.domain.protocols import AuthRepository


# ============================================================================
# Authentication Handler Factories
# ============================================================================


def get_login_user_handler(
    repository: "AuthRepository",
    store: "AuthStateStore | None" = None,
    gate: "AuthOperationGate | None" = None,
) -> "LoginUserHandler":
    """Get LoginUserHandler.

    Usage:
        handler = get_login_user_handler(repository)
        result = await handler.handle(LoginUser(email=email, password=password))
    """
    from authcore.application.commands.handlers import LoginUserHandler

    return LoginUserHandler(
        repository=repository,
        store=store or get_auth_state_store(),
        gate=gate or get_auth_operation_gate(),
        logger=get_logger(),
    )


def get_register_user_handler(
    repository: "AuthRepository",
    store: "AuthStateStore | None" = None,
    gate: "AuthOperationGate | None" = None,
) -> "RegisterUserHandler":
    from authcore.application.commands.handlers import RegisterUserHandler

    return RegisterUserHandler(
        repository=repository,
        store=store or get_auth_state_store(),
        gate=gate or get_auth_operation_gate(),
        logger=get_logger(),
    )


def get_logout_user_handler(
    repository: "AuthRepository",
    store: "AuthStateStore | None" = None,
) -> "LogoutUserHandler":
    """Get LogoutUserHandler (not gated)."""
    from authcore.application.commands.handlers import LogoutUserHandler

    return LogoutUserHandler(
        repository=repository,
        store=store or get_auth_state_store(),
        logger=get_logger(),
    )


def get_request_password_reset_handler(
    repository: "AuthRepository",
    store: "AuthStateStore | None" = None,
    gate: "AuthOperationGate | None" = None,
) -> "RequestPasswordResetHandler":
    from authcore.application.commands.handlers import RequestPasswordResetHandler

    return RequestPasswordResetHandler(
        repository=repository,
        store=store or get_auth_state_store(),
        gate=gate or get_auth_operation_gate(),
        logger=get_logger(),
    )


def get_verify_mfa_challenge_handler(
    repository: "AuthRepository",
    store: "AuthStateStore | None" = None,
    gate: "AuthOperationGate | None" = None,
) -> "VerifyMFAChallengeHandler":
    from authcore.application.commands.handlers import VerifyMFAChallengeHandler

    return VerifyMFAChallengeHandler(
        repository=repository,
        store=store or get_auth_state_store(),
        gate=gate or get_auth_operation_gate(),
        logger=get_logger(),
    )


def get_authenticate_with_biometric_handler(
    repository: "AuthRepository",
    store: "AuthStateStore | None" = None,
    gate: "AuthOperationGate | None" = None,
) -> "AuthenticateWithBiometricHandler":
    from authcore.application.commands.handlers import AuthenticateWithBiometricHandler

    return AuthenticateWithBiometricHandler(
        repository=repository,
        store=store or get_auth_state_store(),
        gate=gate or get_auth_operation_gate(),
        logger=get_logger(),
    )


def get_oauth_login_handler(
    repository: "AuthRepository",
    store: "AuthStateStore | None" = None,
    gate: "AuthOperationGate | None" = None,
) -> "OAuthLoginHandler":
    from authcore.application.commands.handlers import OAuthLoginHandler

    return OAuthLoginHandler(
        repository=repository,
        store=store or get_auth_state_store(),
        gate=gate or get_auth_operation_gate(),
        logger=get_logger(),
    )


def get_update_password_handler(
    repository: "AuthRepository",
    store: "AuthStateStore | None" = None,
    gate: "AuthOperationGate | None" = None,
) -> "UpdatePasswordHandler":
    from authcore.application.commands.handlers import UpdatePasswordHandler

    return UpdatePasswordHandler(
        repository=repository,
        store=store or get_auth_state_store(),
        gate=gate or get_auth_operation_gate(),
        logger=get_logger(),
    )


def get_verify_email_handler(
    repository: "AuthRepository",
    store: "AuthStateStore | None" = None,
    gate: "AuthOperationGate | None" = None,
) -> "VerifyEmailHandler":
    from authcore.application.commands.handlers import VerifyEmailHandler

    return VerifyEmailHandler(
        repository=repository,
        store=store or get_auth_state_store(),
        gate=gate or get_auth_operation_gate(),
        logger=get_logger(),
    )


def get_restore_session_handler(
    repository: "AuthRepository",
    store: "AuthStateStore | None" = None,
    gate: "AuthOperationGate | None" = None,
) -> "RestoreSessionHandler":
    from authcore.application.commands.handlers import RestoreSessionHandler

    return RestoreSessionHandler(
        repository=repository,
        store=store or get_auth_state_store(),
        gate=gate or get_auth_operation_gate(),
        logger=get_logger(),
    )


def get_auth_session_observer(
    repository: "AuthRepository",
    store: "AuthStateStore | None" = None,
) -> "AuthSessionObserver":
    """Get an (unstarted) AuthSessionObserver."""
    from authcore.application.services import AuthSessionObserver

    return AuthSessionObserver(
        repository=repository,
        store=store or get_auth_state_store(),
        logger=get_logger(),
    )
