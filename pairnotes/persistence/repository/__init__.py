"""PostgreSQL repository implementations."""

from pairnotes.persistence.repository.directory import PostgresDirectoryRepository
from pairnotes.persistence.repository.invite import PostgresInviteRepository
from pairnotes.persistence.repository.note import PostgresNoteRepository
from pairnotes.persistence.repository.pair import PostgresPairRepository
from pairnotes.persistence.repository.profile import PostgresProfileRepository
from pairnotes.persistence.repository.report import PostgresReportRepository
from pairnotes.persistence.repository.transaction import PostgresTransactionRunner

__all__ = [
    "PostgresDirectoryRepository",
    "PostgresInviteRepository",
    "PostgresNoteRepository",
    "PostgresPairRepository",
    "PostgresProfileRepository",
    "PostgresReportRepository",
    "PostgresTransactionRunner",
]
