"""Restore session handler (app start).

Loads the provider's current user into the store. No current user is a
normal outcome: the store ends unauthenticated with no error.
"""

from authcore.application.commands.auth_commands import RestoreSession
from authcore.application.commands.handlers.auth_flow import (
    AuthFlowRunner,
    AuthOperationGate,
)
from authcore.application.state import AuthStateStore
from authcore.core.result import Result
from authcore.domain.entities import AuthUser
from authcore.domain.errors import AuthError
from authcore.domain.protocols import AuthRepository, LoggerProtocol


class RestoreSessionHandler:
    """Handler for the session restore intent."""

    def __init__(
        self,
        repository: AuthRepository,
        store: AuthStateStore,
        gate: AuthOperationGate,
        logger: LoggerProtocol,
    ) -> None:
        self._repository = repository
        self._store = store
        self._gate = gate
        self._logger = logger.bind(handler="RestoreSessionHandler")
        self._runner = AuthFlowRunner(store=store, logger=self._logger)

    async def handle(self, cmd: RestoreSession) -> Result[AuthUser | None, AuthError]:
        return await self._gate.run(
            cmd,
            lambda: self._runner.run(
                "restore_session",
                self._repository.get_current_user,
                on_success=lambda user, token: self._store.set_user(user, token=token),
            ),
        )
