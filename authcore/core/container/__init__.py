"""Container module - centralized dependency injection.

Re-exports the factory functions from the submodules:
- infrastructure: logger, auth state store, orchestration gate
- repositories: auth repository wiring
- auth_handlers: intent handler and session observer factories

Usage:
    from authcore.core.container import get_logger, get_login_user_handler
"""

from authcore.core.container.auth_handlers import (
    get_auth_session_observer,
    get_authenticate_with_biometric_handler,
    get_login_user_handler,
    get_logout_user_handler,
    get_oauth_login_handler,
    get_register_user_handler,
    get_request_password_reset_handler,
    get_restore_session_handler,
    get_update_password_handler,
    get_verify_email_handler,
    get_verify_mfa_challenge_handler,
)
from authcore.core.container.infrastructure import (
    get_auth_operation_gate,
    get_auth_state_store,
    get_logger,
)
from authcore.core.container.repositories import (
    build_auth_repository,
    build_in_memory_auth_repository,
)

__all__ = [
    "build_auth_repository",
    "build_in_memory_auth_repository",
    "get_auth_operation_gate",
    "get_auth_session_observer",
    "get_auth_state_store",
    "get_authenticate_with_biometric_handler",
    "get_logger",
    "get_login_user_handler",
    "get_logout_user_handler",
    "get_oauth_login_handler",
    "get_register_user_handler",
    "get_request_password_reset_handler",
    "get_restore_session_handler",
    "get_update_password_handler",
    "get_verify_email_handler",
    "get_verify_mfa_challenge_handler",
]
