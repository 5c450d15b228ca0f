"""OAuthProtocol - social sign-in provider port."""

from dataclasses import dataclass
from typing import Protocol

from authcore.domain.enums import OAuthProvider
from authcore.domain.protocols.auth_data_source import UserDTO


@dataclass(frozen=True, slots=True, kw_only=True)
class OAuthCredential:
    """Result of a completed OAuth sign-in.

    Attributes:
        provider: Social provider used.
        user: Provider user signed in through it.
        is_new_user: True when the sign-in created the account.
    """

    provider: OAuthProvider
    user: UserDTO
    is_new_user: bool = False


class OAuthProtocol(Protocol):
    """OAuth sign-in and identity linking (port).

    Raises AuthProviderException on failure (cancelled flow, identity
    already linked elsewhere, etc.).
    """

    async def sign_in(self, provider: OAuthProvider) -> OAuthCredential:
        """Run the provider sign-in flow."""
        ...

    async def link(self, provider: OAuthProvider) -> None:
        """Link a provider identity to the current user."""
        ...

    async def unlink(self, provider: OAuthProvider) -> None:
        """Unlink a provider identity from the current user."""
        ...
