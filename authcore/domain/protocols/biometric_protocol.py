"""BiometricProtocol - device biometric capability port.

How the sensor is accessed is outside this package; the port only
describes what the repository needs from it.
"""

from dataclasses import dataclass
from typing import Protocol

from authcore.domain.enums import BiometricType


@dataclass(frozen=True, slots=True, kw_only=True)
class BiometricAvailability:
    """Sensor availability report."""

    available: bool
    biometric_type: BiometricType = BiometricType.NONE


@dataclass(frozen=True, slots=True, kw_only=True)
class BiometricResult:
    """Outcome of a biometric prompt.

    Attributes:
        success: True if the user passed the prompt.
        error: Device-reported reason on failure (cancelled, lockout...).
    """

    success: bool
    error: str | None = None


class BiometricProtocol(Protocol):
    """Biometric device capability (port)."""

    async def check_availability(self) -> BiometricAvailability:
        """Report whether a usable sensor is enrolled on the device."""
        ...

    async def create_keys(self) -> str:
        """Create the device key pair and return the public key."""
        ...

    async def keys_exist(self) -> bool:
        """True if biometric keys were created on this device."""
        ...

    async def authenticate(self, prompt: str) -> BiometricResult:
        """Prompt the user for biometric confirmation."""
        ...

    async def delete_keys(self) -> None:
        """Remove the device key pair."""
        ...
