"""Unit tests for RegisterUserHandler.

Tests cover:
- Registration with an unverified user: authenticated, no error (pending confirmation)
- Weak passwords are not rejected locally ("pw" reaches the repository)
- Provider rejection is stored as the error
"""

from unittest.mock import AsyncMock

import pytest

from authcore.application.commands import RegisterUser
from authcore.application.commands.handlers import RegisterUserHandler
from authcore.core.result import Failure, Success
from authcore.domain.errors import EmailAlreadyInUseError, WeakPasswordError
from tests.conftest import create_auth_user


@pytest.fixture
def mock_repository():
    return AsyncMock()


@pytest.fixture
def handler(mock_repository, store, gate, mock_logger):
    return RegisterUserHandler(
        repository=mock_repository, store=store, gate=gate, logger=mock_logger
    )


@pytest.mark.unit
class TestRegisterUserHandler:
    @pytest.mark.asyncio
    async def test_unverified_user_is_pending_confirmation(
        self, handler, mock_repository, store, mock_logger
    ):
        """Test authenticated-but-unverified is a success state without error."""
        # Arrange
        user = create_auth_user(email="new@example.com", email_verified=False)
        mock_repository.register.return_value = Success(value=user)

        # Act
        result = await handler.handle(RegisterUser(email="new@example.com", password="pw"))

        # Assert
        assert result == Success(value=user)
        assert store.state.user is user
        assert store.state.is_authenticated is True
        assert store.state.error is None
        assert store.state.is_loading is False
        mock_repository.register.assert_awaited_once_with(
            "new@example.com", "pw", first_name=None, last_name=None
        )
        mock_logger.info.assert_any_call(
            "auth_register_confirmation_pending", user_id=user.id
        )

    @pytest.mark.asyncio
    async def test_names_are_forwarded(self, handler, mock_repository):
        mock_repository.register.return_value = Success(value=create_auth_user())

        await handler.handle(
            RegisterUser(
                email="ada@example.com",
                password="Str0ng!Passw0rd",
                first_name="Ada",
                last_name="Lovelace",
            )
        )

        mock_repository.register.assert_awaited_once_with(
            "ada@example.com", "Str0ng!Passw0rd", first_name="Ada", last_name="Lovelace"
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error", [EmailAlreadyInUseError(), WeakPasswordError(rules=("min_length",))]
    )
    async def test_provider_rejection_is_stored(self, handler, mock_repository, store, error):
        mock_repository.register.return_value = Failure(error=error)

        result = await handler.handle(RegisterUser(email="new@example.com", password="pw"))

        assert result == Failure(error=error)
        assert store.state.error is error
        assert store.state.is_authenticated is False
