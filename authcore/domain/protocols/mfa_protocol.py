"""MFAProtocol - second-factor provider port.

Enrollment and challenge operations of the identity provider's MFA API.
Raises AuthProviderException on failure, like every provider port.
"""

from typing import Protocol

from authcore.domain.entities import MFAEnrollment, MFAFactor
from authcore.domain.enums import MFAType


class MFAProtocol(Protocol):
    """Multi-factor authentication provider (port).

    Methods:
        enroll: Register a new (unverified) factor
        verify_enrollment: Confirm a new factor with its first code
        create_challenge: Issue a challenge for an enrolled factor
        verify_challenge: Complete a challenge with a code
        list_factors: List the current user's factors
        unenroll: Remove a factor
    """

    async def enroll(
        self,
        factor_type: MFAType,
        *,
        friendly_name: str | None = None,
        phone: str | None = None,
    ) -> MFAEnrollment:
        """Enroll a factor.

        Args:
            factor_type: TOTP, SMS or EMAIL.
            friendly_name: Optional label shown in factor listings.
            phone: Destination for SMS factors.

        Returns:
            MFAEnrollment: TOTP enrollments include secret and qr_code.
        """
        ...

    async def verify_enrollment(self, factor_id: str, code: str) -> None:
        """Verify a freshly enrolled factor."""
        ...

    async def create_challenge(self, factor_id: str) -> str:
        """Issue a challenge and return its id."""
        ...

    async def verify_challenge(self, factor_id: str, challenge_id: str, code: str) -> None:
        """Verify a challenge code.

        Raises:
            AuthProviderException: Wrong or expired code.
        """
        ...

    async def list_factors(self) -> list[MFAFactor]:
        """List enrolled factors for the current user."""
        ...

    async def unenroll(self, factor_id: str) -> None:
        """Remove a factor."""
        ...
