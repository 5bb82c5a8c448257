"""Identity provider infrastructure providers."""

from dishka import Scope, provide

from pairnotes.adapter.identity import FirebaseIdentityClient
from pairnotes.config import Settings
from pairnotes.domain.service import IdentityClient
from pairnotes.util.di.base import ProviderBase


class IdentityProvider(ProviderBase):
    """Identity component base."""

    __mock_component__ = "identity"


class ProdIdentityProvider(IdentityProvider):
    """Production identity provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_identity_client(self, settings: Settings) -> IdentityClient:
        """Provide Identity Toolkit client.

        Raises:
            ValueError: If the identity API key is not configured
        """
        identity = settings.auth.identity
        if not identity.api_key:
            raise ValueError("Identity provider API key must be configured")
        return FirebaseIdentityClient(
            base_url=identity.base_url,
            api_key=identity.api_key,
            timeout_seconds=identity.timeout_seconds,
        )
