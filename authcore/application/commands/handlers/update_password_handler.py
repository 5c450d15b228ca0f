"""Update password handler.

PasswordPolicyViolationError from the repository carries violations and
suggestions that are safe to show; it is stored in state.error.
"""

from authcore.application.commands.auth_commands import UpdatePassword
from authcore.application.commands.handlers.auth_flow import (
    AuthFlowRunner,
    AuthOperationGate,
)
from authcore.application.state import AuthStateStore
from authcore.core.result import Result
from authcore.domain.errors import AuthError
from authcore.domain.protocols import AuthRepository, LoggerProtocol


class UpdatePasswordHandler:
    """Handler for the change-password intent."""

    def __init__(
        self,
        repository: AuthRepository,
        store: AuthStateStore,
        gate: AuthOperationGate,
        logger: LoggerProtocol,
    ) -> None:
        self._repository = repository
        self._gate = gate
        self._logger = logger.bind(handler="UpdatePasswordHandler")
        self._runner = AuthFlowRunner(store=store, logger=self._logger)

    async def handle(self, cmd: UpdatePassword) -> Result[None, AuthError]:
        return await self._gate.run(
            cmd,
            lambda: self._runner.run(
                "update_password",
                lambda: self._repository.update_password(
                    cmd.current_password, cmd.new_password
                ),
            ),
        )
