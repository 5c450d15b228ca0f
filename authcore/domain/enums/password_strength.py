"""Password strength buckets produced by validate_password."""

from enum import Enum


class PasswordStrength(str, Enum):
    """Password strength, derived from the policy score (0-100)."""

    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"
    VERY_STRONG = "very_strong"

    @classmethod
    def from_score(cls, score: int) -> "PasswordStrength":
        """Bucket a policy score.

        Args:
            score: Policy score, 20 points per satisfied rule.

        Returns:
            PasswordStrength: WEAK below 40, MEDIUM from 40, STRONG from 60,
            VERY_STRONG from 80.
        """
        if score >= 80:
            return cls.VERY_STRONG
        if score >= 60:
            return cls.STRONG
        if score >= 40:
            return cls.MEDIUM
        return cls.WEAK
