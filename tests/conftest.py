"""Pytest configuration and shared fixtures.

Provides:
1. A mock logger whose bind() returns itself (assert on one object)
2. A fresh AuthStateStore per test
3. In-memory provider adapters and a repository wired over them
4. Helper for building AuthUser entities
"""

import inspect
from unittest.mock import MagicMock

import pytest

from authcore.application.commands.handlers import AuthOperationGate
from authcore.application.state import AuthStateStore
from authcore.core.config import Settings
from authcore.domain.entities import AuthUser
from authcore.domain.enums import UserRole
from authcore.infrastructure.auth import (
    InMemoryAuthDataSource,
    InMemoryBiometricDevice,
    InMemoryMFAProvider,
    InMemoryOAuthProvider,
    InMemorySecurityEventSink,
    ProviderAuthRepository,
)

pytest_plugins = ("pytest_asyncio",)

TEST_PASSWORD = "Str0ng!Passw0rd"


def create_auth_user(
    user_id: str = "user-1",
    email: str = "test@example.com",
    email_verified: bool = True,
    role: UserRole = UserRole.USER,
    mfa_enabled: bool = False,
) -> AuthUser:
    """Helper to create an AuthUser for testing."""
    return AuthUser(
        id=user_id,
        email=email,
        email_verified=email_verified,
        role=role,
        mfa_enabled=mfa_enabled,
    )


@pytest.fixture
def mock_logger():
    """Logger double; bound loggers are the same mock."""
    logger = MagicMock()
    logger.bind.return_value = logger
    return logger


@pytest.fixture
def store(mock_logger):
    return AuthStateStore(logger=mock_logger)


@pytest.fixture
def gate():
    return AuthOperationGate()


@pytest.fixture
def test_settings():
    """Settings with defaults only (environment ignored)."""
    return Settings(_env_file=None)


@pytest.fixture
def data_source():
    return InMemoryAuthDataSource()


@pytest.fixture
def mfa_provider():
    return InMemoryMFAProvider()


@pytest.fixture
def biometric_device():
    return InMemoryBiometricDevice()


@pytest.fixture
def oauth_provider(data_source):
    return InMemoryOAuthProvider(data_source)


@pytest.fixture
def security_sink():
    return InMemorySecurityEventSink()


@pytest.fixture
def repository(
    data_source,
    mfa_provider,
    biometric_device,
    oauth_provider,
    security_sink,
    mock_logger,
    test_settings,
):
    """ProviderAuthRepository over the in-memory adapters."""
    return ProviderAuthRepository(
        data_source=data_source,
        mfa=mfa_provider,
        biometric=biometric_device,
        oauth=oauth_provider,
        security_sink=security_sink,
        logger=mock_logger,
        settings=test_settings,
    )


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)
