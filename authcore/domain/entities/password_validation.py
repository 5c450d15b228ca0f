"""Password policy evaluation result."""

from dataclasses import dataclass, field

from authcore.domain.enums import PasswordStrength


@dataclass(frozen=True, slots=True, kw_only=True)
class PasswordValidationResult:
    """Outcome of validate_password.

    Attributes:
        is_valid: True if every policy rule is satisfied.
        errors: Human-readable messages for violated rules (safe to show).
        violations: Machine-readable rule names that failed.
        strength: Strength bucket derived from score.
        score: 0-100, 20 points per satisfied rule.
    """

    is_valid: bool
    strength: PasswordStrength
    score: int
    errors: list[str] = field(default_factory=list)
    violations: list[str] = field(default_factory=list)
