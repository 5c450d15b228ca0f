"""AuthUser domain entity.

Immutable identity snapshot of the signed-in user. A new login produces a
new instance; nothing mutates an existing one. Once handed to the state
store, the store owns it; other layers only pass it through.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from authcore.domain.enums import UserRole, UserStatus, role_grants

# Id used for the placeholder user returned by register while the provider
# waits for email confirmation and exposes no session yet.
PENDING_CONFIRMATION_USER_ID = "pending-confirmation"


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthUser:
    """Authenticated user identity.

    Business Rules:
        - Immutable value (frozen); replace, never mutate
        - email_verified=False with no error after register means
          "pending confirmation"
        - Permissions are derived from role (see domain.enums.permission)

    Attributes:
        id: Stable opaque provider identifier.
        email: Normalized email address.
        email_verified: Whether the provider confirmed the email.
        role: Role used for permission checks.
        status: Account lifecycle status.
        first_name: Optional given name.
        last_name: Optional family name.
        display_name: Optional provider display name.
        photo_url: Optional HTTPS avatar URL.
        created_at: Account creation timestamp.
        last_sign_in_at: Most recent sign-in timestamp.
        mfa_enabled: Whether a second factor is enrolled.
        biometric_enabled: Whether biometric sign-in is enabled.

    Example:
        >>> user = AuthUser(id="u-1", email="ada@example.com", email_verified=True)
        >>> user.is_authenticatable()
        True
        >>> user.full_name
        'ada'
    """

    id: str
    email: str
    email_verified: bool
    role: UserRole = UserRole.USER
    status: UserStatus = UserStatus.ACTIVE
    first_name: str | None = None
    last_name: str | None = None
    display_name: str | None = None
    photo_url: str | None = None
    created_at: datetime | None = None
    last_sign_in_at: datetime | None = None
    mfa_enabled: bool = False
    biometric_enabled: bool = False

    @classmethod
    def pending_confirmation(cls, email: str) -> "AuthUser":
        """Build the placeholder returned while email confirmation is pending.

        Args:
            email: Email address used for registration.

        Returns:
            AuthUser: Unverified user with PENDING_VERIFICATION status.
        """
        now = datetime.now(UTC)
        return cls(
            id=PENDING_CONFIRMATION_USER_ID,
            email=email,
            email_verified=False,
            status=UserStatus.PENDING_VERIFICATION,
            created_at=now,
            last_sign_in_at=now,
        )

    @property
    def full_name(self) -> str:
        """Best available human name.

        Falls back to display name, then the email local part.
        """
        parts = [p for p in (self.first_name, self.last_name) if p]
        if parts:
            return " ".join(parts)
        if self.display_name:
            return self.display_name
        return self.email.split("@")[0]

    def is_active(self) -> bool:
        """True if the account status is ACTIVE."""
        return self.status == UserStatus.ACTIVE

    def is_verified(self) -> bool:
        """True if the provider confirmed the email address."""
        return self.email_verified

    def is_authenticatable(self) -> bool:
        """True if the account is allowed to hold a session."""
        return self.status not in {
            UserStatus.SUSPENDED,
            UserStatus.LOCKED,
            UserStatus.DISABLED,
        }

    def has_security_setup(self) -> bool:
        """True if MFA or biometric sign-in is enabled."""
        return self.mfa_enabled or self.biometric_enabled

    def security_level(self) -> str:
        """Coarse security level.

        Returns:
            str: 'maximum' with MFA and biometrics, 'enhanced' with either,
            'basic' otherwise.
        """
        if self.mfa_enabled and self.biometric_enabled:
            return "maximum"
        if self.has_security_setup():
            return "enhanced"
        return "basic"

    def can_perform(self, permission: str) -> bool:
        """Check a permission against this user's role.

        Args:
            permission: Permission name.

        Returns:
            bool: True if the role grants it.
        """
        return role_grants(self.role, permission)
