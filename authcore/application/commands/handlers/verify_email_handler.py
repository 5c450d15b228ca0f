"""Verify email handler.

The link may be opened on a device where nobody is signed in; the store
only picks up the verified user when it already holds that same user.
"""

from authcore.application.commands.auth_commands import VerifyEmail
from authcore.application.commands.handlers.auth_flow import (
    AuthFlowRunner,
    AuthOperationGate,
)
from authcore.application.state import AuthStateStore
from authcore.core.result import Result
from authcore.domain.entities import AuthUser
from authcore.domain.errors import AuthError
from authcore.domain.protocols import AuthRepository, LoggerProtocol


class VerifyEmailHandler:
    """Handler for the email verification intent."""

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
        self._logger = logger.bind(handler="VerifyEmailHandler")
        self._runner = AuthFlowRunner(store=store, logger=self._logger)

    async def handle(self, cmd: VerifyEmail) -> Result[AuthUser, AuthError]:
        return await self._gate.run(
            cmd,
            lambda: self._runner.run(
                "verify_email",
                lambda: self._repository.verify_email(cmd.token),
                on_success=self._refresh_signed_in_user,
            ),
        )

    def _refresh_signed_in_user(self, user: AuthUser, token: int) -> None:
        current = self._store.state.user
        if current is not None and current.id == user.id:
            self._store.set_user(user, token=token)
