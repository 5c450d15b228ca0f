"""In-memory biometric device (reference BiometricProtocol adapter)."""

import secrets

from authcore.domain.enums import BiometricType
from authcore.domain.protocols import BiometricAvailability, BiometricResult


class InMemoryBiometricDevice:
    """Simulated biometric sensor.

    Args:
        available: Whether a usable sensor is enrolled.
        biometric_type: Sensor kind reported when available.
        accept: Whether prompts succeed.
    """

    def __init__(
        self,
        *,
        available: bool = True,
        biometric_type: BiometricType = BiometricType.FINGERPRINT,
        accept: bool = True,
    ) -> None:
        self.available = available
        self.biometric_type = biometric_type
        self.accept = accept
        self._public_key: str | None = None

    async def check_availability(self) -> BiometricAvailability:
        if not self.available:
            return BiometricAvailability(available=False)
        return BiometricAvailability(available=True, biometric_type=self.biometric_type)

    async def create_keys(self) -> str:
        self._public_key = secrets.token_hex(32)
        return self._public_key

    async def keys_exist(self) -> bool:
        return self._public_key is not None

    async def authenticate(self, prompt: str) -> BiometricResult:
        if self.accept:
            return BiometricResult(success=True)
        return BiometricResult(success=False, error="user_cancel")

    async def delete_keys(self) -> None:
        self._public_key = None
