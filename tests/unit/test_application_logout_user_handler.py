"""Unit tests for LogoutUserHandler.

Tests cover:
- Local state is reset before the remote sign-out settles
- Remote failure still yields Success and an unauthenticated store
- Unexpected exception from the repository is logged, not raised
- Logout does not wait behind a pending login
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from authcore.application.commands import LoginUser, LogoutUser
from authcore.application.commands.handlers import LoginUserHandler, LogoutUserHandler
from authcore.application.state import INITIAL_AUTH_STATE
from authcore.core.result import Failure, Success
from authcore.domain.errors import GenericAuthError
from tests.conftest import create_auth_user


@pytest.fixture
def mock_repository():
    return AsyncMock()


@pytest.fixture
def handler(mock_repository, store, mock_logger):
    return LogoutUserHandler(repository=mock_repository, store=store, logger=mock_logger)


@pytest.mark.unit
class TestLogoutUserHandler:
    @pytest.mark.asyncio
    async def test_state_reset_before_remote_sign_out_settles(
        self, handler, mock_repository, store
    ):
        """Test the store is initial while the remote call is still pending."""
        # Arrange
        store.set_user(create_auth_user())
        entered = asyncio.Event()
        release = asyncio.Event()

        async def logout():
            entered.set()
            await release.wait()
            return Success(value=None)

        mock_repository.logout.side_effect = logout

        # Act
        task = asyncio.create_task(handler.handle(LogoutUser()))
        await entered.wait()

        # Assert
        assert store.state == INITIAL_AUTH_STATE
        release.set()
        assert await task == Success(value=None)
        assert store.state == INITIAL_AUTH_STATE

    @pytest.mark.asyncio
    async def test_remote_failure_still_succeeds(
        self, handler, mock_repository, store, mock_logger
    ):
        store.set_user(create_auth_user())
        mock_repository.logout.return_value = Failure(
            error=GenericAuthError(raw_message="network down")
        )

        result = await handler.handle(LogoutUser())

        assert result == Success(value=None)
        assert store.state.is_authenticated is False
        assert store.state.error is None
        mock_logger.warning.assert_called_once_with(
            "auth_logout_remote_failed",
            error_code="authentication_failed",
        )

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_logged(
        self, handler, mock_repository, store, mock_logger
    ):
        store.set_user(create_auth_user())
        mock_repository.logout.side_effect = RuntimeError("boom")

        result = await handler.handle(LogoutUser())

        assert result == Success(value=None)
        assert store.state == INITIAL_AUTH_STATE
        mock_logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_logout_is_not_blocked_by_pending_login(
        self, handler, mock_repository, store, gate, mock_logger
    ):
        """Test logout completes while a login holds the gate, and wins."""
        entered = asyncio.Event()
        release = asyncio.Event()

        async def login(email, password):
            entered.set()
            await release.wait()
            return Success(value=create_auth_user())

        mock_repository.login.side_effect = login
        mock_repository.logout.return_value = Success(value=None)
        login_handler = LoginUserHandler(
            repository=mock_repository, store=store, gate=gate, logger=mock_logger
        )

        login_task = asyncio.create_task(
            login_handler.handle(LoginUser(email="test@example.com", password="pw"))
        )
        await entered.wait()

        assert await handler.handle(LogoutUser()) == Success(value=None)

        release.set()
        await login_task
        assert store.state.is_authenticated is False
        assert store.state.user is None
