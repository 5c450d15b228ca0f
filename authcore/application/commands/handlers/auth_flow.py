"""Shared orchestration for auth intent handlers.

AuthOperationGate:
    Serializes intents and coalesces duplicates. An intent equal to one
    already in flight awaits the same execution (one provider call); any
    other intent waits its turn. Logout does not use the gate.

AuthFlowRunner:
    The canonical use-case shape against the state store:
        set_loading(True) -> repository call
          success           -> apply success transition, set_loading(False)
          MFARequiredError  -> set_loading(False), no error (non-terminal)
          other AuthError   -> set_error(error)
    Every transition carries the token issued on entry, so a completion
    that arrives after a reset is discarded. Anything escaping the
    repository that is not a Result of an AuthError becomes
    GenericAuthError.
"""

import asyncio
from collections.abc import Awaitable, Callable, Hashable
from typing import Any

from authcore.application.state import AuthStateStore
from authcore.core.result import Failure, Result, Success
from authcore.domain.entities import AuthUser
from authcore.domain.errors import AuthError, GenericAuthError, MFARequiredError
from authcore.domain.protocols import LoggerProtocol


class AuthOperationGate:
    """Orchestration gate shared by all gated handlers."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._in_flight: dict[Hashable, asyncio.Future[Any]] = {}

    async def run[T](self, key: Hashable, operation: Callable[[], Awaitable[T]]) -> T:
        """Run operation under the gate, sharing an identical in-flight run.

        Args:
            key: Identity of the intent (the command itself).
            operation: Zero-argument coroutine factory.

        Returns:
            T: Result of the (possibly shared) execution.
        """
        future = self._in_flight.get(key)
        if future is None:
            future = asyncio.ensure_future(self._serialized(operation))
            self._in_flight[key] = future

            def release(done: asyncio.Future[Any]) -> None:
                if self._in_flight.get(key) is done:
                    del self._in_flight[key]

            future.add_done_callback(release)
        # Cancelling one waiter must not cancel the shared execution
        return await asyncio.shield(future)

    def is_in_flight(self, key: Hashable) -> bool:
        return key in self._in_flight

    async def _serialized[T](self, operation: Callable[[], Awaitable[T]]) -> T:
        async with self._lock:
            return await operation()


class AuthFlowRunner:
    """Applies the canonical loading/success/error transitions.

    Args:
        store: Auth state store.
        logger: Logger (bound by the owning handler).
    """

    def __init__(self, *, store: AuthStateStore, logger: LoggerProtocol) -> None:
        self._store = store
        self._logger = logger

    async def run_user_operation(
        self,
        operation: str,
        call: Callable[[], Awaitable[Result[AuthUser, AuthError]]],
    ) -> Result[AuthUser, AuthError]:
        """Run an operation whose success signs a user in (set_user)."""
        return await self.run(
            operation,
            call,
            on_success=lambda user, token: self._store.set_user(user, token=token),
        )

    async def run[T](
        self,
        operation: str,
        call: Callable[[], Awaitable[Result[T, AuthError]]],
        *,
        on_success: Callable[[T, int], object] | None = None,
    ) -> Result[T, AuthError]:
        """Run an operation with loading/error bookkeeping.

        Args:
            operation: Name used in logs.
            call: Repository call.
            on_success: Extra transition applied with the value and token.

        Returns:
            Result[T, AuthError]: The repository result, or
            Failure(GenericAuthError) for an unexpected exception.
        """
        token = self._store.issue_token()
        self._store.set_loading(True, token=token)
        try:
            result = await call()
        except asyncio.CancelledError:
            self._store.set_loading(False, token=token)
            raise
        except Exception as e:
            self._logger.error("auth_operation_unexpected_error", error=e, operation=operation)
            result = Failure(error=GenericAuthError(raw_message=str(e)))

        match result:
            case Success(value=value):
                if on_success is not None:
                    on_success(value, token)
                self._store.set_loading(False, token=token)
            case Failure(error=MFARequiredError()):
                # A challenge is progress: drop any error left by an earlier attempt
                self._store.clear_error(token=token)
                self._store.set_loading(False, token=token)
            case Failure(error=AuthError() as error):
                self._logger.info(
                    "auth_operation_failed", operation=operation, error_code=error.code.value
                )
                self._store.set_error(error, token=token)
            case _:
                self._logger.error(
                    "auth_operation_invalid_result",
                    operation=operation,
                    result_type=type(result).__name__,
                )
                result = Failure(error=GenericAuthError(raw_message=repr(result)))
                self._store.set_error(result.error, token=token)

        if self._store.is_stale(token):
            self._logger.info("auth_operation_superseded", operation=operation)
        return result
