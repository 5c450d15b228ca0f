"""Unit tests for AuthOperationGate and AuthFlowRunner.

Tests cover:
- Coalescing of equal keys, release after completion
- Serialization of different keys
- Cancelling one waiter does not cancel the shared execution
- Runner: loading bookkeeping, invalid results, cancellation
"""

import asyncio

import pytest

from authcore.application.commands.handlers import AuthFlowRunner, AuthOperationGate
from authcore.core.result import Failure, Success
from authcore.domain.errors import GenericAuthError


@pytest.mark.unit
class TestAuthOperationGate:
    @pytest.mark.asyncio
    async def test_equal_keys_share_execution(self, gate):
        calls = 0
        release = asyncio.Event()

        async def operation():
            nonlocal calls
            calls += 1
            await release.wait()
            return calls

        first = asyncio.create_task(gate.run("login", operation))
        second = asyncio.create_task(gate.run("login", operation))
        await asyncio.sleep(0)
        assert gate.is_in_flight("login") is True

        release.set()

        assert await asyncio.gather(first, second) == [1, 1]
        assert calls == 1

    @pytest.mark.asyncio
    async def test_key_released_after_completion(self, gate):
        async def operation():
            return "done"

        assert await gate.run("reset", operation) == "done"
        assert await gate.run("reset", operation) == "done"
        assert gate.is_in_flight("reset") is False

    @pytest.mark.asyncio
    async def test_different_keys_are_serialized(self, gate):
        order = []
        release = asyncio.Event()

        async def slow():
            order.append("slow-start")
            await release.wait()
            order.append("slow-end")

        async def fast():
            order.append("fast")

        slow_task = asyncio.create_task(gate.run("a", slow))
        await asyncio.sleep(0)
        fast_task = asyncio.create_task(gate.run("b", fast))
        await asyncio.sleep(0)
        release.set()
        await asyncio.gather(slow_task, fast_task)

        assert order == ["slow-start", "slow-end", "fast"]

    @pytest.mark.asyncio
    async def test_cancelling_one_waiter_keeps_shared_execution(self, gate):
        release = asyncio.Event()

        async def operation():
            await release.wait()
            return "ok"

        first = asyncio.create_task(gate.run("login", operation))
        second = asyncio.create_task(gate.run("login", operation))
        await asyncio.sleep(0)

        first.cancel()
        release.set()

        assert await second == "ok"
        with pytest.raises(asyncio.CancelledError):
            await first

    @pytest.mark.asyncio
    async def test_exception_propagates_to_all_waiters(self, gate):
        async def operation():
            raise RuntimeError("boom")

        results = await asyncio.gather(
            gate.run("x", operation), gate.run("x", operation), return_exceptions=True
        )

        assert all(isinstance(r, RuntimeError) for r in results)
        assert gate.is_in_flight("x") is False


@pytest.mark.unit
class TestAuthFlowRunner:
    @pytest.mark.asyncio
    async def test_success_runs_on_success_with_token(self, store, mock_logger):
        runner = AuthFlowRunner(store=store, logger=mock_logger)
        seen = []

        async def call():
            return Success(value="value")

        result = await runner.run(
            "op", call, on_success=lambda value, token: seen.append((value, token))
        )

        assert result == Success(value="value")
        assert seen == [("value", 0)]
        assert store.state.is_loading is False

    @pytest.mark.asyncio
    async def test_non_result_return_becomes_generic_error(self, store, mock_logger):
        runner = AuthFlowRunner(store=store, logger=mock_logger)

        async def call():
            return "not a result"

        result = await runner.run("op", call)

        assert isinstance(result, Failure)
        assert isinstance(result.error, GenericAuthError)
        assert store.state.error is result.error

    @pytest.mark.asyncio
    async def test_failure_with_foreign_error_becomes_generic(self, store, mock_logger):
        runner = AuthFlowRunner(store=store, logger=mock_logger)

        async def call():
            return Failure(error="provider exploded")

        result = await runner.run("op", call)

        assert isinstance(result.error, GenericAuthError)
        assert store.state.error is result.error

    @pytest.mark.asyncio
    async def test_cancellation_clears_loading_and_propagates(self, store, mock_logger):
        runner = AuthFlowRunner(store=store, logger=mock_logger)
        entered = asyncio.Event()

        async def call():
            entered.set()
            await asyncio.Event().wait()

        task = asyncio.create_task(runner.run("op", call))
        await entered.wait()
        assert store.state.is_loading is True

        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert store.state.is_loading is False
