"""Register user handler.

A successful registration signs the returned user into the store even when
email_verified is False: "authenticated but unverified" is the pending
confirmation state, and no error is set.
"""

from authcore.application.commands.auth_commands import RegisterUser
from authcore.application.commands.handlers.auth_flow import (
    AuthFlowRunner,
    AuthOperationGate,
)
from authcore.application.state import AuthStateStore
from authcore.core.masking import mask_email
from authcore.core.result import Result, Success
from authcore.domain.entities import AuthUser
from authcore.domain.errors import AuthError
from authcore.domain.protocols import AuthRepository, LoggerProtocol


class RegisterUserHandler:
    """Handler for the registration intent."""

    def __init__(
        self,
        repository: AuthRepository,
        store: AuthStateStore,
        gate: AuthOperationGate,
        logger: LoggerProtocol,
    ) -> None:
        self._repository = repository
        self._gate = gate
        self._logger = logger.bind(handler="RegisterUserHandler")
        self._runner = AuthFlowRunner(store=store, logger=self._logger)

    async def handle(self, cmd: RegisterUser) -> Result[AuthUser, AuthError]:
        return await self._gate.run(cmd, lambda: self._register(cmd))

    async def _register(self, cmd: RegisterUser) -> Result[AuthUser, AuthError]:
        self._logger.info("auth_register_started", email=mask_email(cmd.email))
        result = await self._runner.run_user_operation(
            "register",
            lambda: self._repository.register(
                cmd.email,
                cmd.password,
                first_name=cmd.first_name,
                last_name=cmd.last_name,
            ),
        )
        if isinstance(result, Success) and not result.value.email_verified:
            self._logger.info(
                "auth_register_confirmation_pending", user_id=result.value.id
            )
        return result
