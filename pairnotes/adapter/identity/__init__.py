"""Identity provider adapter."""

from .client import FirebaseIdentityClient, MockIdentityClient, map_provider_error

__all__ = ["FirebaseIdentityClient", "MockIdentityClient", "map_provider_error"]
