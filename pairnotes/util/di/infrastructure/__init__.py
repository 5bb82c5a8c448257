"""Infrastructure providers."""

# Import bases
from .identity import IdentityProvider
from .persistence import PersistenceProvider
from .summarizer import SummarizerProvider

# Import implementations (needed for __subclasses__())
from .identity import ProdIdentityProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .summarizer import ProdSummarizerProvider  # noqa: F401

__all__ = [
    "IdentityProvider",
    "PersistenceProvider",
    "ProdIdentityProvider",
    "ProdPersistenceProvider",
    "ProdSummarizerProvider",
    "SummarizerProvider",
]
