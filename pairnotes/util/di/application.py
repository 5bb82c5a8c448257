"""Application layer DI providers."""

from dishka import Scope, provide

from pairnotes.application.session import SessionRegistry
from pairnotes.application.usecase.auth import (
    GetCurrentUserUseCase,
    SignInUseCase,
    SignOutUseCase,
    SignUpUseCase,
)
from pairnotes.application.usecase.note import (
    AddNoteUseCase,
    ListNotesUseCase,
    RemoveNoteUseCase,
    UpdateNoteUseCase,
)
from pairnotes.application.usecase.pair import (
    AcceptInviteUseCase,
    BreakPairUseCase,
    CreateInviteUseCase,
    DeclineInviteUseCase,
    GetPairStatusUseCase,
    ListInvitesUseCase,
    SyncPairUseCase,
)
from pairnotes.application.usecase.profile import UpdateProfileUseCase
from pairnotes.application.usecase.report import (
    GenerateReportUseCase,
    GetCurrentReportUseCase,
    GetScheduleUseCase,
)
from pairnotes.config import ReportSettings
from pairnotes.domain.service import (
    AuthService,
    InviteService,
    JWTService,
    NoteService,
    PairService,
    ProfileReconciler,
    ProfileService,
    ReportScheduler,
    ReportService,
)
from pairnotes.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.APP)
    def get_session_registry(
        self,
        profile_reconciler: ProfileReconciler,
        invite_service: InviteService,
        report_scheduler: ReportScheduler,
        report_service: ReportService,
        report_settings: ReportSettings,
    ) -> SessionRegistry:
        """Provide the process-wide pair session registry."""
        return SessionRegistry(
            profile_reconciler=profile_reconciler,
            invite_service=invite_service,
            report_scheduler=report_scheduler,
            report_service=report_service,
            report_settings=report_settings,
        )

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_sign_up_use_case(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        profile_service: ProfileService,
        session_registry: SessionRegistry,
    ) -> SignUpUseCase:
        """Provide sign-up use case."""
        return SignUpUseCase(
            auth_service=auth_service,
            jwt_service=jwt_service,
            profile_service=profile_service,
            session_registry=session_registry,
        )

    @provide(scope=Scope.REQUEST)
    def get_sign_in_use_case(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        profile_service: ProfileService,
        session_registry: SessionRegistry,
    ) -> SignInUseCase:
        """Provide sign-in use case."""
        return SignInUseCase(
            auth_service=auth_service,
            jwt_service=jwt_service,
            profile_service=profile_service,
            session_registry=session_registry,
        )

    @provide(scope=Scope.REQUEST)
    def get_sign_out_use_case(
        self, auth_service: AuthService, session_registry: SessionRegistry
    ) -> SignOutUseCase:
        """Provide sign-out use case."""
        return SignOutUseCase(
            auth_service=auth_service, session_registry=session_registry
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, jwt_service: JWTService, profile_service: ProfileService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(
            jwt_service=jwt_service, profile_service=profile_service
        )

    # Profile use cases
    @provide(scope=Scope.REQUEST)
    def get_update_profile_use_case(
        self, profile_service: ProfileService
    ) -> UpdateProfileUseCase:
        return UpdateProfileUseCase(profile_service=profile_service)

    # Pair use cases
    @provide(scope=Scope.REQUEST)
    def get_create_invite_use_case(
        self, invite_service: InviteService
    ) -> CreateInviteUseCase:
        return CreateInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_list_invites_use_case(
        self, invite_service: InviteService
    ) -> ListInvitesUseCase:
        return ListInvitesUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_accept_invite_use_case(
        self, invite_service: InviteService
    ) -> AcceptInviteUseCase:
        return AcceptInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_decline_invite_use_case(
        self, invite_service: InviteService
    ) -> DeclineInviteUseCase:
        return DeclineInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_break_pair_use_case(self, pair_service: PairService) -> BreakPairUseCase:
        return BreakPairUseCase(pair_service=pair_service)

    @provide(scope=Scope.REQUEST)
    def get_pair_status_use_case(
        self, profile_service: ProfileService, pair_service: PairService
    ) -> GetPairStatusUseCase:
        return GetPairStatusUseCase(
            profile_service=profile_service, pair_service=pair_service
        )

    @provide(scope=Scope.REQUEST)
    def get_sync_pair_use_case(
        self,
        invite_service: InviteService,
        pair_service: PairService,
        profile_service: ProfileService,
        profile_reconciler: ProfileReconciler,
    ) -> SyncPairUseCase:
        """Provide one-shot pairing sync use case."""
        return SyncPairUseCase(
            invite_service=invite_service,
            pair_service=pair_service,
            profile_service=profile_service,
            profile_reconciler=profile_reconciler,
        )

    # Note use cases
    @provide(scope=Scope.REQUEST)
    def get_add_note_use_case(self, note_service: NoteService) -> AddNoteUseCase:
        return AddNoteUseCase(note_service=note_service)

    @provide(scope=Scope.REQUEST)
    def get_list_notes_use_case(self, note_service: NoteService) -> ListNotesUseCase:
        return ListNotesUseCase(note_service=note_service)

    @provide(scope=Scope.REQUEST)
    def get_update_note_use_case(
        self, note_service: NoteService
    ) -> UpdateNoteUseCase:
        return UpdateNoteUseCase(note_service=note_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_note_use_case(
        self, note_service: NoteService
    ) -> RemoveNoteUseCase:
        return RemoveNoteUseCase(note_service=note_service)

    # Report use cases
    @provide(scope=Scope.REQUEST)
    def get_schedule_use_case(
        self, report_scheduler: ReportScheduler
    ) -> GetScheduleUseCase:
        return GetScheduleUseCase(report_scheduler=report_scheduler)

    @provide(scope=Scope.REQUEST)
    def get_current_report_use_case(
        self, report_scheduler: ReportScheduler, report_service: ReportService
    ) -> GetCurrentReportUseCase:
        return GetCurrentReportUseCase(
            report_scheduler=report_scheduler, report_service=report_service
        )

    @provide(scope=Scope.REQUEST)
    def get_generate_report_use_case(
        self, report_scheduler: ReportScheduler, report_service: ReportService
    ) -> GenerateReportUseCase:
        """Provide generate report use case."""
        return GenerateReportUseCase(
            report_scheduler=report_scheduler, report_service=report_service
        )
