"""In-memory MFA provider (reference MFAProtocol adapter).

Every factor accepts one configurable code so tests can drive both the
happy path and wrong-code failures deterministically.
"""

import base64
import secrets
from dataclasses import replace
from datetime import UTC, datetime

from authcore.domain.entities import MFAEnrollment, MFAFactor
from authcore.domain.enums import MFAFactorStatus, MFAType
from authcore.domain.protocols import AuthProviderException


class InMemoryMFAProvider:
    """Reference MFA adapter.

    Args:
        valid_code: The only code accepted for enrollment and challenges.
        issuer: Issuer label embedded in TOTP provisioning URIs.
    """

    def __init__(self, *, valid_code: str = "123456", issuer: str = "authcore") -> None:
        self._valid_code = valid_code
        self._issuer = issuer
        self._factors: dict[str, MFAFactor] = {}
        self._challenges: dict[str, str] = {}

    async def enroll(
        self,
        factor_type: MFAType,
        *,
        friendly_name: str | None = None,
        phone: str | None = None,
    ) -> MFAEnrollment:
        if factor_type == MFAType.SMS and not phone:
            raise AuthProviderException(
                "Phone number is required for SMS factors", code="validation_failed", status=422
            )
        factor = MFAFactor(
            id=f"factor-{secrets.token_hex(6)}",
            type=factor_type,
            friendly_name=friendly_name or factor_type.value.upper(),
            status=MFAFactorStatus.UNVERIFIED,
            created_at=datetime.now(UTC),
        )
        self._factors[factor.id] = factor
        if factor_type != MFAType.TOTP:
            return MFAEnrollment(factor_id=factor.id, type=factor_type)

        secret = base64.b32encode(secrets.token_bytes(20)).decode("ascii").rstrip("=")
        return MFAEnrollment(
            factor_id=factor.id,
            type=factor_type,
            secret=secret,
            qr_code=f"otpauth://totp/{self._issuer}:{factor.id}?secret={secret}&issuer={self._issuer}",
        )

    async def verify_enrollment(self, factor_id: str, code: str) -> None:
        factor = self._factor(factor_id)
        self._check_code(code)
        self._factors[factor_id] = replace(factor, status=MFAFactorStatus.VERIFIED)

    async def create_challenge(self, factor_id: str) -> str:
        self._factor(factor_id)
        challenge_id = f"challenge-{secrets.token_hex(6)}"
        self._challenges[challenge_id] = factor_id
        return challenge_id

    async def verify_challenge(self, factor_id: str, challenge_id: str, code: str) -> None:
        if self._challenges.get(challenge_id) != factor_id:
            raise AuthProviderException(
                "MFA challenge has expired", code="mfa_challenge_expired", status=422
            )
        self._check_code(code)
        del self._challenges[challenge_id]

    async def list_factors(self) -> list[MFAFactor]:
        return sorted(self._factors.values(), key=lambda f: f.created_at)

    async def unenroll(self, factor_id: str) -> None:
        self._factor(factor_id)
        del self._factors[factor_id]

    def _factor(self, factor_id: str) -> MFAFactor:
        factor = self._factors.get(factor_id)
        if factor is None:
            raise AuthProviderException("Factor not found", code="mfa_factor_not_found", status=404)
        return factor

    def _check_code(self, code: str) -> None:
        if not secrets.compare_digest(code, self._valid_code):
            raise AuthProviderException(
                "Invalid MFA code", code="mfa_verification_failed", status=422
            )
