"""Domain services."""

from .auth_service import AuthService, IdentityClient
from .base import Service
from .invite_service import InviteService
from .jwt_service import JWTService
from .note_service import NoteService
from .pair_service import PairService
from .profile_reconciler import (
    ProfileReconciler,
    ReconcileAction,
    ReconcileDecision,
    reconcile_profile,
)
from .profile_service import ProfileService
from .report_schedule import ReportScheduler, compute_period, report_id_from_period
from .report_service import ReportService
from .summarizer import Summarizer, build_summary_prompt

__all__ = [
    "AuthService",
    "IdentityClient",
    "InviteService",
    "JWTService",
    "NoteService",
    "PairService",
    "ProfileReconciler",
    "ProfileService",
    "ReconcileAction",
    "ReconcileDecision",
    "ReportScheduler",
    "ReportService",
    "Service",
    "Summarizer",
    "build_summary_prompt",
    "compute_period",
    "reconcile_profile",
    "report_id_from_period",
]
