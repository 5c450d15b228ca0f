"""Multi-factor authentication enums."""

from enum import Enum


class MFAType(str, Enum):
    """Second-factor delivery method."""

    TOTP = "totp"
    SMS = "sms"
    EMAIL = "email"


class MFAFactorStatus(str, Enum):
    """Enrollment status of a registered factor.

    A factor starts UNVERIFIED on enrollment and becomes VERIFIED after the
    first successful code check.
    """

    UNVERIFIED = "unverified"
    VERIFIED = "verified"
