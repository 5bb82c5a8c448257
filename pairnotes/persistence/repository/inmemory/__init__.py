"""In-memory repository implementations for testing."""

from .directory import InMemoryDirectoryRepository
from .invite import InMemoryInviteRepository
from .note import InMemoryNoteRepository
from .pair import InMemoryPairRepository
from .profile import InMemoryProfileRepository
from .report import InMemoryReportRepository
from .store import InMemoryDocumentStore
from .transaction import InMemoryTransactionRunner

__all__ = [
    "InMemoryDirectoryRepository",
    "InMemoryDocumentStore",
    "InMemoryInviteRepository",
    "InMemoryNoteRepository",
    "InMemoryPairRepository",
    "InMemoryProfileRepository",
    "InMemoryReportRepository",
    "InMemoryTransactionRunner",
]
