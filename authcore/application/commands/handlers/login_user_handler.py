"""Login user handler.

Flow:
1. Join an identical in-flight login, or queue on the orchestration gate
2. set_loading(True) -> repository.login
3. Success: set_user, set_loading(False), LoginResponse(user=...)
4. MFARequiredError: set_loading(False), no error,
   LoginResponse(mfa_challenge=...) (continue with VerifyMFAChallenge)
5. Other failure: set_error, Failure(error)
"""

from authcore.application.commands.auth_commands import LoginResponse, LoginUser
from authcore.application.commands.handlers.auth_flow import (
    AuthFlowRunner,
    AuthOperationGate,
)
from authcore.application.state import AuthStateStore
from authcore.core.masking import mask_email
from authcore.core.result import Failure, Result, Success
from authcore.domain.errors import AuthError, MFARequiredError
from authcore.domain.protocols import AuthRepository, LoggerProtocol


class LoginUserHandler:
    """Handler for the login intent."""

    def __init__(
        self,
        repository: AuthRepository,
        store: AuthStateStore,
        gate: AuthOperationGate,
        logger: LoggerProtocol,
    ) -> None:
        self._repository = repository
        self._gate = gate
        self._logger = logger.bind(handler="LoginUserHandler")
        self._runner = AuthFlowRunner(store=store, logger=self._logger)

    async def handle(self, cmd: LoginUser) -> Result[LoginResponse, AuthError]:
        """Handle the login command.

        Returns:
            Success(LoginResponse) with either a user or an MFA challenge.
            Failure(AuthError) otherwise (also stored in state.error).
        """
        return await self._gate.run(cmd, lambda: self._login(cmd))

    async def _login(self, cmd: LoginUser) -> Result[LoginResponse, AuthError]:
        self._logger.info("auth_login_started", email=mask_email(cmd.email))
        result = await self._runner.run_user_operation(
            "login", lambda: self._repository.login(cmd.email, cmd.password)
        )
        match result:
            case Success(value=user):
                return Success(value=LoginResponse(user=user))
            case Failure(error=MFARequiredError() as mfa):
                return Success(value=LoginResponse(mfa_challenge=mfa.challenge))
            case Failure(error=error):
                return Failure(error=error)
