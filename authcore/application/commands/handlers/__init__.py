"""Auth intent handlers (one per intent)."""

from authcore.application.commands.handlers.auth_flow import (
    AuthFlowRunner,
    AuthOperationGate,
)
from authcore.application.commands.handlers.authenticate_with_biometric_handler import (
    AuthenticateWithBiometricHandler,
)
from authcore.application.commands.handlers.login_user_handler import LoginUserHandler
from authcore.application.commands.handlers.logout_user_handler import LogoutUserHandler
from authcore.application.commands.handlers.oauth_login_handler import OAuthLoginHandler
from authcore.application.commands.handlers.register_user_handler import (
    RegisterUserHandler,
)
from authcore.application.commands.handlers.request_password_reset_handler import (
    RequestPasswordResetHandler,
)
from authcore.application.commands.handlers.restore_session_handler import (
    RestoreSessionHandler,
)
from authcore.application.commands.handlers.update_password_handler import (
    UpdatePasswordHandler,
)
from authcore.application.commands.handlers.verify_email_handler import VerifyEmailHandler
from authcore.application.commands.handlers.verify_mfa_challenge_handler import (
    VerifyMFAChallengeHandler,
)

__all__ = [
    "AuthFlowRunner",
    "AuthOperationGate",
    "AuthenticateWithBiometricHandler",
    "LoginUserHandler",
    "LogoutUserHandler",
    "OAuthLoginHandler",
    "RegisterUserHandler",
    "RequestPasswordResetHandler",
    "RestoreSessionHandler",
    "UpdatePasswordHandler",
    "VerifyEmailHandler",
    "VerifyMFAChallengeHandler",
]
