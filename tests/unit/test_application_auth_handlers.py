"""Unit tests for the remaining auth intent handlers.

Tests cover:
- RequestPasswordResetHandler (no user change, error on failure)
- VerifyMFAChallengeHandler (signs user in, wrong code stored as error)
- AuthenticateWithBiometricHandler (not-available error stored)
- OAuthLoginHandler (dispatch per provider)
- UpdatePasswordHandler (policy violation stored)
- VerifyEmailHandler (refreshes only the same signed-in user)
- RestoreSessionHandler (no current user is not an error)

Architecture:
- Mocked repository (AsyncMock), real store and gate
"""

from unittest.mock import AsyncMock

import pytest

from authcore.application.commands import (
    AuthenticateWithBiometric,
    OAuthLogin,
    RequestPasswordReset,
    RestoreSession,
    UpdatePassword,
    VerifyEmail,
    VerifyMFAChallenge,
)
from authcore.application.commands.handlers import (
    AuthenticateWithBiometricHandler,
    OAuthLoginHandler,
    RequestPasswordResetHandler,
    RestoreSessionHandler,
    UpdatePasswordHandler,
    VerifyEmailHandler,
    VerifyMFAChallengeHandler,
)
from authcore.core.result import Failure, Success
from authcore.domain.enums import OAuthProvider
from authcore.domain.errors import (
    BiometricNotAvailableError,
    GenericAuthError,
    InvalidTokenError,
    PasswordPolicyViolationError,
)
from tests.conftest import create_auth_user

VERIFICATION_TOKEN = "abcdefghijklmnopqrstuvwx"


@pytest.fixture
def mock_repository():
    return AsyncMock()


def build(handler_class, mock_repository, store, gate, mock_logger):
    return handler_class(
        repository=mock_repository, store=store, gate=gate, logger=mock_logger
    )


@pytest.mark.unit
class TestRequestPasswordResetHandler:
    @pytest.mark.asyncio
    async def test_success_leaves_user_untouched(
        self, mock_repository, store, gate, mock_logger
    ):
        handler = build(RequestPasswordResetHandler, mock_repository, store, gate, mock_logger)
        mock_repository.reset_password.return_value = Success(value=None)

        result = await handler.handle(RequestPasswordReset(email="ada@example.com"))

        assert result == Success(value=None)
        assert store.state.is_authenticated is False
        assert store.state.is_loading is False
        assert store.state.error is None
        mock_repository.reset_password.assert_awaited_once_with("ada@example.com")

    @pytest.mark.asyncio
    async def test_failure_is_stored(self, mock_repository, store, gate, mock_logger):
        handler = build(RequestPasswordResetHandler, mock_repository, store, gate, mock_logger)
        error = GenericAuthError(raw_message="rate limited")
        mock_repository.reset_password.return_value = Failure(error=error)

        await handler.handle(RequestPasswordReset(email="ada@example.com"))

        assert store.state.error is error


@pytest.mark.unit
class TestVerifyMFAChallengeHandler:
    @pytest.mark.asyncio
    async def test_valid_code_signs_user_in(self, mock_repository, store, gate, mock_logger):
        handler = build(VerifyMFAChallengeHandler, mock_repository, store, gate, mock_logger)
        user = create_auth_user(mfa_enabled=True)
        mock_repository.verify_mfa_challenge.return_value = Success(value=user)

        result = await handler.handle(
            VerifyMFAChallenge(challenge_id="challenge-1", code="123456", factor_id="factor-1")
        )

        assert result == Success(value=user)
        assert store.state.user is user
        assert store.state.is_authenticated is True
        mock_repository.verify_mfa_challenge.assert_awaited_once_with(
            "challenge-1", "123456", factor_id="factor-1"
        )

    @pytest.mark.asyncio
    async def test_wrong_code_stores_error(self, mock_repository, store, gate, mock_logger):
        handler = build(VerifyMFAChallengeHandler, mock_repository, store, gate, mock_logger)
        error = InvalidTokenError()
        mock_repository.verify_mfa_challenge.return_value = Failure(error=error)

        await handler.handle(VerifyMFAChallenge(challenge_id="challenge-1", code="000000"))

        assert store.state.error is error
        assert store.state.is_authenticated is False


@pytest.mark.unit
class TestAuthenticateWithBiometricHandler:
    @pytest.mark.asyncio
    async def test_not_available_is_stored(self, mock_repository, store, gate, mock_logger):
        handler = build(
            AuthenticateWithBiometricHandler, mock_repository, store, gate, mock_logger
        )
        error = BiometricNotAvailableError()
        mock_repository.authenticate_with_biometric.return_value = Failure(error=error)

        result = await handler.handle(AuthenticateWithBiometric())

        assert result == Failure(error=error)
        assert store.state.error is error
        mock_repository.authenticate_with_biometric.assert_awaited_once_with(
            "Authenticate to continue"
        )

    @pytest.mark.asyncio
    async def test_success_signs_user_in(self, mock_repository, store, gate, mock_logger):
        handler = build(
            AuthenticateWithBiometricHandler, mock_repository, store, gate, mock_logger
        )
        user = create_auth_user()
        mock_repository.authenticate_with_biometric.return_value = Success(value=user)

        await handler.handle(AuthenticateWithBiometric(prompt="Unlock"))

        assert store.state.user is user


@pytest.mark.unit
class TestOAuthLoginHandler:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "provider,method",
        [
            (OAuthProvider.GOOGLE, "login_with_google"),
            (OAuthProvider.APPLE, "login_with_apple"),
            (OAuthProvider.MICROSOFT, "login_with_microsoft"),
        ],
    )
    async def test_dispatches_to_provider_method(
        self, mock_repository, store, gate, mock_logger, provider, method
    ):
        user = create_auth_user()
        getattr(mock_repository, method).return_value = Success(value=user)
        handler = build(OAuthLoginHandler, mock_repository, store, gate, mock_logger)

        result = await handler.handle(OAuthLogin(provider=provider))

        assert result == Success(value=user)
        getattr(mock_repository, method).assert_awaited_once_with()
        assert store.state.is_authenticated is True


@pytest.mark.unit
class TestUpdatePasswordHandler:
    @pytest.mark.asyncio
    async def test_policy_violation_is_stored(self, mock_repository, store, gate, mock_logger):
        handler = build(UpdatePasswordHandler, mock_repository, store, gate, mock_logger)
        user = create_auth_user()
        store.set_user(user)
        error = PasswordPolicyViolationError(violations=("uppercase",))
        mock_repository.update_password.return_value = Failure(error=error)

        result = await handler.handle(
            UpdatePassword(current_password="old", new_password="weakpass")
        )

        assert result == Failure(error=error)
        assert store.state.error is error
        assert store.state.user is user

    @pytest.mark.asyncio
    async def test_success_keeps_session(self, mock_repository, store, gate, mock_logger):
        handler = build(UpdatePasswordHandler, mock_repository, store, gate, mock_logger)
        user = create_auth_user()
        store.set_user(user)
        mock_repository.update_password.return_value = Success(value=None)

        result = await handler.handle(
            UpdatePassword(current_password="old", new_password="N3w!Password")
        )

        assert result == Success(value=None)
        assert store.state.user is user
        mock_repository.update_password.assert_awaited_once_with("old", "N3w!Password")


@pytest.mark.unit
class TestVerifyEmailHandler:
    @pytest.mark.asyncio
    async def test_refreshes_same_signed_in_user(
        self, mock_repository, store, gate, mock_logger
    ):
        handler = build(VerifyEmailHandler, mock_repository, store, gate, mock_logger)
        store.set_user(create_auth_user(email_verified=False))
        verified = create_auth_user(email_verified=True)
        mock_repository.verify_email.return_value = Success(value=verified)

        await handler.handle(VerifyEmail(token=VERIFICATION_TOKEN))

        assert store.state.user is verified
        mock_repository.verify_email.assert_awaited_once_with(VERIFICATION_TOKEN)

    @pytest.mark.asyncio
    async def test_does_not_sign_in_when_signed_out(
        self, mock_repository, store, gate, mock_logger
    ):
        handler = build(VerifyEmailHandler, mock_repository, store, gate, mock_logger)
        mock_repository.verify_email.return_value = Success(value=create_auth_user())

        result = await handler.handle(VerifyEmail(token=VERIFICATION_TOKEN))

        assert isinstance(result, Success)
        assert store.state.user is None
        assert store.state.is_authenticated is False

    @pytest.mark.asyncio
    async def test_does_not_replace_other_user(self, mock_repository, store, gate, mock_logger):
        handler = build(VerifyEmailHandler, mock_repository, store, gate, mock_logger)
        current = create_auth_user(user_id="user-1")
        store.set_user(current)
        mock_repository.verify_email.return_value = Success(
            value=create_auth_user(user_id="user-2")
        )

        await handler.handle(VerifyEmail(token=VERIFICATION_TOKEN))

        assert store.state.user is current


@pytest.mark.unit
class TestRestoreSessionHandler:
    @pytest.mark.asyncio
    async def test_restores_current_user(self, mock_repository, store, gate, mock_logger):
        handler = build(RestoreSessionHandler, mock_repository, store, gate, mock_logger)
        user = create_auth_user()
        mock_repository.get_current_user.return_value = Success(value=user)

        await handler.handle(RestoreSession())

        assert store.state.user is user
        assert store.state.is_authenticated is True

    @pytest.mark.asyncio
    async def test_no_current_user_is_not_an_error(
        self, mock_repository, store, gate, mock_logger
    ):
        handler = build(RestoreSessionHandler, mock_repository, store, gate, mock_logger)
        mock_repository.get_current_user.return_value = Success(value=None)

        result = await handler.handle(RestoreSession())

        assert result == Success(value=None)
        assert store.state.is_authenticated is False
        assert store.state.error is None
        assert store.state.is_loading is False
