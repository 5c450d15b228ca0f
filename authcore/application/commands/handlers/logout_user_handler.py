"""Logout user handler.

Logout is locally authoritative:
1. Reset the store immediately (before any await), which also invalidates
   every in-flight operation's pending writes
2. Sign out remotely
3. Log a remote failure; the result is Success either way

Logout bypasses the orchestration gate so it never waits behind a
pending login.
"""

from authcore.application.commands.auth_commands import LogoutUser
from authcore.application.state import AuthStateStore
from authcore.core.result import Failure, Result, Success
from authcore.domain.errors import AuthError, GenericAuthError
from authcore.domain.protocols import AuthRepository, LoggerProtocol


class LogoutUserHandler:
    """Handler for the logout intent."""

    def __init__(
        self,
        repository: AuthRepository,
        store: AuthStateStore,
        logger: LoggerProtocol,
    ) -> None:
        self._repository = repository
        self._store = store
        self._logger = logger.bind(handler="LogoutUserHandler")

    async def handle(self, cmd: LogoutUser) -> Result[None, AuthError]:
        """Handle the logout command.

        Returns:
            Success(None): Always. Remote failures are logged only.
        """
        # Step 1: Local teardown
        self._store.reset()

        # Step 2: Remote sign-out
        try:
            result = await self._repository.logout()
        except Exception as e:
            self._logger.error("auth_logout_unexpected_error", error=e)
            result = Failure(error=GenericAuthError(raw_message=str(e)))

        # Step 3: Remote failure does not resurrect the session
        if isinstance(result, Failure):
            self._logger.warning(
                "auth_logout_remote_failed",
                error_code=result.error.code.value,
            )
        else:
            self._logger.info("auth_logout_completed")
        return Success(value=None)
