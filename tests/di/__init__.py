"""Mock providers for testing."""

from .identity import MockIdentityProvider
from .persistence import MockPersistenceProvider
from .summarizer import MockSummarizerProvider
from .container import build_test_container

__all__ = [
    "MockIdentityProvider",
    "MockPersistenceProvider",
    "MockSummarizerProvider",
    "build_test_container",
]
