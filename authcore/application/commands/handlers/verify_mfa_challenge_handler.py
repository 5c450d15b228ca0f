"""Verify MFA challenge handler.

Second half of an MFA login: a valid code signs the user into the store.
"""

from authcore.application.commands.auth_commands import VerifyMFAChallenge
from authcore.application.commands.handlers.auth_flow import (
    AuthFlowRunner,
    AuthOperationGate,
)
from authcore.application.state import AuthStateStore
from authcore.core.result import Result
from authcore.domain.entities import AuthUser
from authcore.domain.errors import AuthError
from authcore.domain.protocols import AuthRepository, LoggerProtocol


class VerifyMFAChallengeHandler:
    """Handler for the MFA verification intent."""

    def __init__(
        self,
        repository: AuthRepository,
        store: AuthStateStore,
        gate: AuthOperationGate,
        logger: LoggerProtocol,
    ) -> None:
        self._repository = repository
        self._gate = gate
        self._logger = logger.bind(handler="VerifyMFAChallengeHandler")
        self._runner = AuthFlowRunner(store=store, logger=self._logger)

    async def handle(self, cmd: VerifyMFAChallenge) -> Result[AuthUser, AuthError]:
        return await self._gate.run(
            cmd,
            lambda: self._runner.run_user_operation(
                "verify_mfa_challenge",
                lambda: self._repository.verify_mfa_challenge(
                    cmd.challenge_id, cmd.code, factor_id=cmd.factor_id
                ),
            ),
        )
