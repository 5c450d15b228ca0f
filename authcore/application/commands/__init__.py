"""Auth commands (intents) and their handlers."""

from authcore.application.commands.auth_commands import (
    AuthenticateWithBiometric,
    LoginResponse,
    LoginUser,
    LogoutUser,
    OAuthLogin,
    RegisterUser,
    RequestPasswordReset,
    RestoreSession,
    UpdatePassword,
    VerifyEmail,
    VerifyMFAChallenge,
)

__all__ = [
    "AuthenticateWithBiometric",
    "LoginResponse",
    "LoginUser",
    "LogoutUser",
    "OAuthLogin",
    "RegisterUser",
    "RequestPasswordReset",
    "RestoreSession",
    "UpdatePassword",
    "VerifyEmail",
    "VerifyMFAChallenge",
]
