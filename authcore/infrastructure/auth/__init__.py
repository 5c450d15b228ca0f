"""Identity provider adapters.

ProviderAuthRepository is the repository implementation; the in-memory
adapters are reference implementations of every provider port.
"""

from authcore.infrastructure.auth.auth_repository import ProviderAuthRepository
from authcore.infrastructure.auth.auth_user_mapper import AuthUserMapper
from authcore.infrastructure.auth.error_mapper import (
    PROVIDER_CODE_MAP,
    PROVIDER_MESSAGE_PATTERNS,
    ProviderErrorMapper,
)
from authcore.infrastructure.auth.in_memory_biometric import InMemoryBiometricDevice
from authcore.infrastructure.auth.in_memory_data_source import InMemoryAuthDataSource
from authcore.infrastructure.auth.in_memory_mfa import InMemoryMFAProvider
from authcore.infrastructure.auth.in_memory_oauth import InMemoryOAuthProvider
from authcore.infrastructure.auth.in_memory_security_event_sink import (
    InMemorySecurityEventSink,
)

__all__ = [
    "AuthUserMapper",
    "InMemoryAuthDataSource",
    "InMemoryBiometricDevice",
    "InMemoryMFAProvider",
    "InMemoryOAuthProvider",
    "InMemorySecurityEventSink",
    "PROVIDER_CODE_MAP",
    "PROVIDER_MESSAGE_PATTERNS",
    "ProviderAuthRepository",
    "ProviderErrorMapper",
]
