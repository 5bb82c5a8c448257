"""Principal - an authenticated identity owned by the identity provider."""

from pairnotes.domain.model.common import DomainModel
from pairnotes.domain.value import PrincipalId


class Principal(DomainModel):
    """Authenticated user identity. Read-only to this service."""

    id: PrincipalId
    email: str | None = None
    display_name: str | None = None
