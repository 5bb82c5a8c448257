"""Domain layer DI providers."""

from dishka import Scope, provide

from pairnotes.config import AuthSettings, ReportSettings, Settings
from pairnotes.domain.repository import (
    DirectoryRepository,
    InviteRepository,
    NoteRepository,
    PairRepository,
    ProfileRepository,
    ReportRepository,
    TransactionRunner,
)
from pairnotes.domain.service import (
    AuthService,
    IdentityClient,
    InviteService,
    JWTService,
    NoteService,
    PairService,
    ProfileReconciler,
    ProfileService,
    ReportScheduler,
    ReportService,
    Summarizer,
)
from pairnotes.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are APP-scoped: repositories open their own short-lived
    sessions, and the same services drive the background pair sessions that
    outlive any single request.
    """

    scope = Scope.APP

    @provide
    def get_auth_service(self, identity_client: IdentityClient) -> AuthService:
        return AuthService(identity_client=identity_client)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide session token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_profile_service(
        self,
        profile_repository: ProfileRepository,
        directory_repository: DirectoryRepository,
    ) -> ProfileService:
        """Provide profile domain service."""
        return ProfileService(
            profile_repository=profile_repository,
            directory_repository=directory_repository,
        )

    @provide
    def get_pair_service(
        self,
        pair_repository: PairRepository,
        profile_repository: ProfileRepository,
        transactions: TransactionRunner,
    ) -> PairService:
        """Provide pair domain service."""
        return PairService(
            pair_repository=pair_repository,
            profile_repository=profile_repository,
            transactions=transactions,
        )

    @provide
    def get_invite_service(
        self,
        invite_repository: InviteRepository,
        directory_repository: DirectoryRepository,
        transactions: TransactionRunner,
        pair_service: PairService,
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(
            invite_repository=invite_repository,
            directory_repository=directory_repository,
            transactions=transactions,
            pair_service=pair_service,
        )

    @provide
    def get_profile_reconciler(
        self,
        profile_repository: ProfileRepository,
        pair_repository: PairRepository,
        directory_repository: DirectoryRepository,
    ) -> ProfileReconciler:
        return ProfileReconciler(
            profile_repository=profile_repository,
            pair_repository=pair_repository,
            directory_repository=directory_repository,
        )

    @provide
    def get_note_service(
        self,
        note_repository: NoteRepository,
        profile_repository: ProfileRepository,
        pair_repository: PairRepository,
    ) -> NoteService:
        """Provide note domain service."""
        return NoteService(
            note_repository=note_repository,
            profile_repository=profile_repository,
            pair_repository=pair_repository,
        )

    @provide
    def get_report_scheduler(
        self, report_settings: ReportSettings, pair_repository: PairRepository
    ) -> ReportScheduler:
        """Provide report scheduler."""
        return ReportScheduler(
            report_settings=report_settings, pair_repository=pair_repository
        )

    @provide
    def get_report_service(
        self,
        report_repository: ReportRepository,
        note_repository: NoteRepository,
        transactions: TransactionRunner,
        summarizer: Summarizer,
        settings: Settings,
    ) -> ReportService:
        """Provide report domain service."""
        return ReportService(
            report_repository=report_repository,
            note_repository=note_repository,
            transactions=transactions,
            summarizer=summarizer,
            summarizer_timeout_seconds=settings.summarizer.timeout_seconds,
        )
