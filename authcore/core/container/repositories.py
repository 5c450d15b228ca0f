"""Repository factories.

build_auth_repository wires provider ports into ProviderAuthRepository.
Hosts pass their provider adapters; tests and local development use
build_in_memory_auth_repository.
"""

from typing import TYPE_CHECKING

from authcore.core.container.infrastructure import get_logger

if TYPE_CHECKING:
    from authcore.core.config import Settings
    from authcore.domain.protocols import (
        AuthDataSource,
        BiometricProtocol,
        LoggerProtocol,
        MFAProtocol,
        OAuthProtocol,
        SecurityEventSinkProtocol,
    )
    from authcore.infrastructure.auth import (
        InMemoryAuthDataSource,
        ProviderAuthRepository,
    )


def build_auth_repository(
    *,
    data_source: "AuthDataSource",
    mfa: "MFAProtocol",
    biometric: "BiometricProtocol",
    oauth: "OAuthProtocol",
    security_sink: "SecurityEventSinkProtocol",
    logger: "LoggerProtocol | None" = None,
    settings: "Settings | None" = None,
) -> "ProviderAuthRepository":
    """Create the auth repository over the given provider ports.

    Args:
        data_source: Identity provider boundary.
        mfa: Second-factor provider.
        biometric: Device biometric capability.
        oauth: Social sign-in provider.
        security_sink: Security event storage.
        logger: Logger override (defaults to get_logger()).
        settings: Settings override (defaults to the cached settings).

    Returns:
        ProviderAuthRepository: Repository implementing AuthRepository.
    """
    from authcore.infrastructure.auth import ProviderAuthRepository

    return ProviderAuthRepository(
        data_source=data_source,
        mfa=mfa,
        biometric=biometric,
        oauth=oauth,
        security_sink=security_sink,
        logger=logger or get_logger(),
        settings=settings,
    )


def build_in_memory_auth_repository(
    data_source: "InMemoryAuthDataSource | None" = None,
    *,
    logger: "LoggerProtocol | None" = None,
    settings: "Settings | None" = None,
) -> "ProviderAuthRepository":
    """Create a repository over the in-memory reference adapters.

    Usage:
        source = InMemoryAuthDataSource()
        repository = build_in_memory_auth_repository(source)
    """
    from authcore.infrastructure.auth import (
        InMemoryAuthDataSource,
        InMemoryBiometricDevice,
        InMemoryMFAProvider,
        InMemoryOAuthProvider,
        InMemorySecurityEventSink,
    )

    source = data_source or InMemoryAuthDataSource()
    return build_auth_repository(
        data_source=source,
        mfa=InMemoryMFAProvider(),
        biometric=InMemoryBiometricDevice(),
        oauth=InMemoryOAuthProvider(source),
        security_sink=InMemorySecurityEventSink(),
        logger=logger,
        settings=settings,
    )
