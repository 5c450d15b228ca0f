"""Domain protocols (ports).

Structural interfaces (typing.Protocol) implemented by infrastructure
adapters and test doubles.
"""

from authcore.domain.protocols.auth_data_source import (
    AuthDataSource,
    AuthProviderException,
    AuthStateCallback,
    Unsubscribe,
    UserDTO,
)
from authcore.domain.protocols.auth_repository import AuthRepository, AuthUserListener
from authcore.domain.protocols.biometric_protocol import (
    BiometricAvailability,
    BiometricProtocol,
    BiometricResult,
)
from authcore.domain.protocols.logger_protocol import LoggerProtocol
from authcore.domain.protocols.mfa_protocol import MFAProtocol
from authcore.domain.protocols.oauth_protocol import OAuthCredential, OAuthProtocol
from authcore.domain.protocols.security_event_sink import SecurityEventSinkProtocol

__all__ = [
    "AuthDataSource",
    "AuthProviderException",
    "AuthRepository",
    "AuthStateCallback",
    "AuthUserListener",
    "BiometricAvailability",
    "BiometricProtocol",
    "BiometricResult",
    "LoggerProtocol",
    "MFAProtocol",
    "OAuthCredential",
    "OAuthProtocol",
    "SecurityEventSinkProtocol",
    "Unsubscribe",
    "UserDTO",
]
