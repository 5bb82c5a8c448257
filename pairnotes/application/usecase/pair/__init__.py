"""Pairing use cases."""

from .accept_invite import AcceptInviteUseCase
from .break_pair import BreakPairUseCase
from .create_invite import CreateInviteUseCase
from .decline_invite import DeclineInviteUseCase
from .get_pair_status import GetPairStatusUseCase
from .list_invites import ListInvitesUseCase
from .sync_pair import SyncPairUseCase

__all__ = [
    "AcceptInviteUseCase",
    "BreakPairUseCase",
    "CreateInviteUseCase",
    "DeclineInviteUseCase",
    "GetPairStatusUseCase",
    "ListInvitesUseCase",
    "SyncPairUseCase",
]
