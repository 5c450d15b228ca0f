"""OAuth login handler (Google, Apple, Microsoft)."""

from collections.abc import Awaitable, Callable

from authcore.application.commands.auth_commands import OAuthLogin
from authcore.application.commands.handlers.auth_flow import (
    AuthFlowRunner,
    AuthOperationGate,
)
from authcore.application.state import AuthStateStore
from authcore.core.result import Result
from authcore.domain.entities import AuthUser
from authcore.domain.enums import OAuthProvider
from authcore.domain.errors import AuthError
from authcore.domain.protocols import AuthRepository, LoggerProtocol


class OAuthLoginHandler:
    """Handler for the social sign-in intent."""

    def __init__(
        self,
        repository: AuthRepository,
        store: AuthStateStore,
        gate: AuthOperationGate,
        logger: LoggerProtocol,
    ) -> None:
        self._repository = repository
        self._gate = gate
        self._logger = logger.bind(handler="OAuthLoginHandler")
        self._runner = AuthFlowRunner(store=store, logger=self._logger)
        self._logins: dict[
            OAuthProvider, Callable[[], Awaitable[Result[AuthUser, AuthError]]]
        ] = {
            OAuthProvider.GOOGLE: repository.login_with_google,
            OAuthProvider.APPLE: repository.login_with_apple,
            OAuthProvider.MICROSOFT: repository.login_with_microsoft,
        }

    async def handle(self, cmd: OAuthLogin) -> Result[AuthUser, AuthError]:
        self._logger.info("auth_oauth_login_started", provider=cmd.provider.value)
        return await self._gate.run(
            cmd,
            lambda: self._runner.run_user_operation(
                f"login_with_{cmd.provider.value}", self._logins[cmd.provider]
            ),
        )
