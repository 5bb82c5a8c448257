"""Repository interfaces for the pairnotes domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from pairnotes.domain.repository.directory import DirectoryRepository
from pairnotes.domain.repository.invite import InviteRepository
from pairnotes.domain.repository.note import NoteRepository
from pairnotes.domain.repository.pair import PairRepository
from pairnotes.domain.repository.profile import ProfileRepository
from pairnotes.domain.repository.report import ReportRepository
from pairnotes.domain.repository.transaction import Transaction, TransactionRunner

__all__ = [
    "DirectoryRepository",
    "InviteRepository",
    "NoteRepository",
    "PairRepository",
    "ProfileRepository",
    "ReportRepository",
    "Transaction",
    "TransactionRunner",
]
