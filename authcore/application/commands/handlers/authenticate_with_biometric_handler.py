"""Biometric sign-in handler."""

from authcore.application.commands.auth_commands import AuthenticateWithBiometric
from authcore.application.commands.handlers.auth_flow import (
    AuthFlowRunner,
    AuthOperationGate,
)
from authcore.application.state import AuthStateStore
from authcore.core.result import Result
from authcore.domain.entities import AuthUser
from authcore.domain.errors import AuthError
from authcore.domain.protocols import AuthRepository, LoggerProtocol


class AuthenticateWithBiometricHandler:
    """Handler for the biometric sign-in intent.

    BiometricNotAvailableError lands in state.error like any other failure;
    the UI offers password sign-in as the fallback.
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
        self._logger = logger.bind(handler="AuthenticateWithBiometricHandler")
        self._runner = AuthFlowRunner(store=store, logger=self._logger)

    async def handle(self, cmd: AuthenticateWithBiometric) -> Result[AuthUser, AuthError]:
        return await self._gate.run(
            cmd,
            lambda: self._runner.run_user_operation(
                "authenticate_with_biometric",
                lambda: self._repository.authenticate_with_biometric(cmd.prompt),
            ),
        )
