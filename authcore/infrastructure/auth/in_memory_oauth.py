"""In-memory OAuth provider (reference OAuthProtocol adapter).

Federated sign-ins land in the same InMemoryAuthDataSource, so a user who
signs in with Google is the data source's current user afterwards.
"""

from authcore.domain.enums import OAuthProvider
from authcore.domain.protocols import AuthProviderException, OAuthCredential
from authcore.infrastructure.auth.in_memory_data_source import InMemoryAuthDataSource


class InMemoryOAuthProvider:
    """Simulated social sign-in.

    Args:
        data_source: Provider whose accounts OAuth sign-ins use.
        identities: Email returned by each social provider.
    """

    def __init__(
        self,
        data_source: InMemoryAuthDataSource,
        *,
        identities: dict[OAuthProvider, str] | None = None,
    ) -> None:
        self._data_source = data_source
        self._identities = dict(identities or {})
        self._linked: set[OAuthProvider] = set()

    async def sign_in(self, provider: OAuthProvider) -> OAuthCredential:
        email = self._identities.get(provider)
        if email is None:
            raise AuthProviderException(
                f"{provider.value} sign-in was cancelled", code="oauth_cancelled", status=400
            )
        user, created = self._data_source.sign_in_external(email)
        self._linked.add(provider)
        return OAuthCredential(provider=provider, user=user, is_new_user=created)

    async def link(self, provider: OAuthProvider) -> None:
        if provider in self._linked:
            raise AuthProviderException(
                "Identity is already linked", code="identity_already_exists", status=422
            )
        self._linked.add(provider)

    async def unlink(self, provider: OAuthProvider) -> None:
        if provider not in self._linked:
            raise AuthProviderException(
                "Identity not found", code="identity_not_found", status=404
            )
        self._linked.discard(provider)

    @property
    def linked_providers(self) -> frozenset[OAuthProvider]:
        return frozenset(self._linked)
