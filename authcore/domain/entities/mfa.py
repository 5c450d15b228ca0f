"""Multi-factor authentication entities."""

from dataclasses import dataclass
from datetime import datetime

from authcore.domain.enums import MFAFactorStatus, MFAType


@dataclass(frozen=True, slots=True, kw_only=True)
class MFAChallenge:
    """Pending second-factor verification issued mid-login.

    Transient: created when the provider signals MFA is required and
    dropped once verified or abandoned. Never persisted. Carries only the
    masked destination, never the full phone number or email.

    Attributes:
        challenge_id: Provider challenge identifier.
        type: Delivery method of the code.
        masked_target: Partially redacted destination (e.g. "***-***-1234").
        factor_id: Enrolled factor the challenge belongs to, if known.
    """

    challenge_id: str
    type: MFAType
    masked_target: str | None = None
    factor_id: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class MFAFactor:
    """Registered second factor.

    Lifecycle: created UNVERIFIED on enrollment, VERIFIED after the first
    successful code, deleted on disable.
    """

    id: str
    type: MFAType
    friendly_name: str
    status: MFAFactorStatus
    created_at: datetime

    @property
    def is_verified(self) -> bool:
        """True once the factor completed its setup challenge."""
        return self.status == MFAFactorStatus.VERIFIED


@dataclass(frozen=True, slots=True, kw_only=True)
class MFAEnrollment:
    """Result of enabling MFA.

    TOTP enrollments carry the shared secret and QR code the user scans;
    SMS and EMAIL enrollments carry neither.
    """

    factor_id: str
    type: MFAType
    secret: str | None = None
    qr_code: str | None = None
