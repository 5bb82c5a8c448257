"""Persistence infrastructure providers."""

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from pairnotes.config import Settings
from pairnotes.domain.repository import (
    DirectoryRepository,
    InviteRepository,
    NoteRepository,
    PairRepository,
    ProfileRepository,
    ReportRepository,
    TransactionRunner,
)
from pairnotes.persistence.database import create_engine, create_session_factory
from pairnotes.persistence.repository import (
    PostgresDirectoryRepository,
    PostgresInviteRepository,
    PostgresNoteRepository,
    PostgresPairRepository,
    PostgresProfileRepository,
    PostgresReportRepository,
    PostgresTransactionRunner,
)
from pairnotes.util.di.base import ProviderBase
from pairnotes.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL.

    Repositories open a session per operation, so everything here is
    APP-scoped and shared by requests and background pair sessions.
    """

    __is_mock__ = False

    scope = Scope.APP

    @provide
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide
    def get_transaction_runner(
        self, session_factory: async_sessionmaker[AsyncSession], settings: Settings
    ) -> TransactionRunner:
        """Provide SERIALIZABLE transaction runner."""
        return PostgresTransactionRunner(
            session_factory, max_attempts=settings.transactions.max_attempts
        )

    @provide
    def get_profile_repository(
        self, session_factory: async_sessionmaker[AsyncSession], settings: Settings
    ) -> ProfileRepository:
        return PostgresProfileRepository(
            session_factory, settings.live_query.poll_interval_seconds
        )

    @provide
    def get_directory_repository(
        self, session_factory: async_sessionmaker[AsyncSession], settings: Settings
    ) -> DirectoryRepository:
        return PostgresDirectoryRepository(
            session_factory, settings.live_query.poll_interval_seconds
        )

    @provide
    def get_pair_repository(
        self, session_factory: async_sessionmaker[AsyncSession], settings: Settings
    ) -> PairRepository:
        return PostgresPairRepository(
            session_factory, settings.live_query.poll_interval_seconds
        )

    @provide
    def get_invite_repository(
        self, session_factory: async_sessionmaker[AsyncSession], settings: Settings
    ) -> InviteRepository:
        return PostgresInviteRepository(
            session_factory, settings.live_query.poll_interval_seconds
        )

    @provide
    def get_note_repository(
        self, session_factory: async_sessionmaker[AsyncSession], settings: Settings
    ) -> NoteRepository:
        return PostgresNoteRepository(
            session_factory, settings.live_query.poll_interval_seconds
        )

    @provide
    def get_report_repository(
        self, session_factory: async_sessionmaker[AsyncSession], settings: Settings
    ) -> ReportRepository:
        return PostgresReportRepository(
            session_factory, settings.live_query.poll_interval_seconds
        )
