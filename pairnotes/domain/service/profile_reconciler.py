"""Profile reconciliation.

A profile's ``pair_id``/``partner_id``/``partner_email`` are a cache of the
canonical pair record. ``reconcile_profile`` is a pure reducer from
(profile, active pair) to the patch that brings the cache back in line;
``ProfileReconciler`` applies it once (``evaluate``) or continuously
(``run``).
"""

from enum import Enum
from typing import Any

import logfire

from pairnotes.domain.model import Pair, Profile
from pairnotes.domain.model.common import utcnow
from pairnotes.domain.repository import (
    DirectoryRepository,
    PairRepository,
    ProfileRepository,
)
from pairnotes.domain.value import PairId, PrincipalId
from pairnotes.domain.value.common import ValueObject
from pairnotes.util.streams import combine_latest

from .base import Service

_UNSET: Any = object()


class ReconcileAction(str, Enum):
    NONE = "none"
    CLEAR = "clear"
    SET_PAIR = "set_pair"


class ReconcileDecision(ValueObject):
    """What the profile needs. ``partner_id`` is None while undeterminable."""

    action: ReconcileAction
    pair_id: PairId | None = None
    partner_id: PrincipalId | None = None


def reconcile_profile(
    me: PrincipalId, profile: Profile | None, active_pair: Pair | None
) -> ReconcileDecision:
    """Decide the corrective patch for ``me``'s profile.

    Args:
        me: Profile owner
        profile: Current profile (None if not created yet)
        active_pair: The active pair containing ``me``, or None

    Returns:
        ``none`` when the cache already matches, ``clear`` when there is no
        active pair but the profile still names one, otherwise ``set_pair``
    """
    current_pair_id = profile.pair_id if profile else None
    current_partner_id = profile.partner_id if profile else None

    if active_pair is None:
        if current_pair_id:
            return ReconcileDecision(action=ReconcileAction.CLEAR)
        return ReconcileDecision(action=ReconcileAction.NONE)

    partner_id = active_pair.partner_of(me)
    if current_pair_id == active_pair.id and current_partner_id == partner_id:
        return ReconcileDecision(action=ReconcileAction.NONE)
    return ReconcileDecision(
        action=ReconcileAction.SET_PAIR, pair_id=active_pair.id, partner_id=partner_id
    )


class ProfileReconciler(Service):
    """Keeps one principal's profile consistent with its active pair."""

    def __init__(
        self,
        profile_repository: ProfileRepository,
        pair_repository: PairRepository,
        directory_repository: DirectoryRepository,
    ) -> None:
        self.profile_repository = profile_repository
        self.pair_repository = pair_repository
        self.directory_repository = directory_repository

    async def apply(
        self, me: PrincipalId, profile: Profile | None, active_pair: Pair | None
    ) -> ReconcileDecision:
        """Apply the reducer's decision with at most one profile write.

        Returns:
            The decision that was taken
        """
        decision = reconcile_profile(me, profile, active_pair)
        if decision.action == ReconcileAction.NONE:
            return decision
        if profile is None:
            # Profiles are created at sign-in; nothing to patch yet
            logfire.warn("Cannot reconcile missing profile", principal_id=me)
            return ReconcileDecision(action=ReconcileAction.NONE)

        now = utcnow()
        if decision.action == ReconcileAction.CLEAR:
            await self.profile_repository.save(profile.cleared(now))
            logfire.info(
                "Profile pairing cleared",
                principal_id=me,
                stale_pair_id=profile.pair_id,
            )
            return decision

        partner_email = None
        if decision.partner_id is not None:
            entry = await self.directory_repository.find_by_id(decision.partner_id)
            partner_email = entry.email if entry else None
        await self.profile_repository.save(
            profile.with_pairing(
                decision.pair_id, decision.partner_id, partner_email, now
            )
        )
        logfire.info(
            "Profile pairing updated",
            principal_id=me,
            pair_id=decision.pair_id,
            partner_id=decision.partner_id,
        )
        return decision

    async def evaluate(self, me: PrincipalId) -> ReconcileDecision:
        """Run one convergence step from freshly read state."""
        with logfire.span("profile_reconciler.evaluate", principal_id=me):
            profile = await self.profile_repository.find_by_id(me)
            active_pair = await self.pair_repository.find_active_for_member(me)
            return await self.apply(me, profile, active_pair)

    async def run(self, me: PrincipalId) -> None:
        """Reconcile continuously until cancelled.

        Combines the live profile and active-pair feeds and skips snapshots
        whose ``(profile.pair_id, profile.partner_id, active_pair.id)`` did
        not change, so the reconciler's own write does not trigger another.
        A failed step is logged and retried on the next snapshot.
        """
        last: Any = _UNSET
        feeds = combine_latest(
            self.profile_repository.watch(me),
            self.pair_repository.watch_active_for_member(me),
        )
        async for profile, active_pair in feeds:
            state = (
                profile.pair_id if profile else None,
                profile.partner_id if profile else None,
                active_pair.id if active_pair else None,
            )
            if state == last:
                continue
            last = state
            try:
                await self.apply(me, profile, active_pair)
            except Exception as e:
                logfire.error(
                    "Profile reconciliation failed",
                    principal_id=me,
                    error=str(e),
                    _exc_info=e,
                )
                last = _UNSET
