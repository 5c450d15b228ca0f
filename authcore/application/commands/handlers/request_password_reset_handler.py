"""Request password reset handler."""

from authcore.application.commands.auth_commands import RequestPasswordReset
from authcore.application.commands.handlers.auth_flow import (
    AuthFlowRunner,
    AuthOperationGate,
)
from authcore.application.state import AuthStateStore
from authcore.core.masking import mask_email
from authcore.core.result import Result
from authcore.domain.errors import AuthError
from authcore.domain.protocols import AuthRepository, LoggerProtocol


class RequestPasswordResetHandler:
    """Handler for the password reset intent.

    Success says nothing about whether the account exists.
    """

    def __init__(
        self,
        repository: AuthRepository,
        store: AuthStateStore,
        gate: AuthOperationGate,
        logger: LoggerProtocol,
    ) -> None:
        self._repository = repository
        self._gate = gate
        self._logger = logger.bind(handler="RequestPasswordResetHandler")
        self._runner = AuthFlowRunner(store=store, logger=self._logger)

    async def handle(self, cmd: RequestPasswordReset) -> Result[None, AuthError]:
        self._logger.info("auth_password_reset_requested", email=mask_email(cmd.email))
        return await self._gate.run(
            cmd,
            lambda: self._runner.run(
                "reset_password", lambda: self._repository.reset_password(cmd.email)
            ),
        )
