"""Pair lifecycle domain service."""

from collections.abc import AsyncIterator
from datetime import datetime

import logfire

from pairnotes.domain.error import ForbiddenError, NotInPairError
from pairnotes.domain.model import Pair, PairInvite, Profile
from pairnotes.domain.model.common import utcnow
from pairnotes.domain.repository import (
    PairRepository,
    ProfileRepository,
    Transaction,
    TransactionRunner,
)
from pairnotes.domain.value import PairId, PairStatus, PrincipalId

from .base import Service


class PairService(Service):
    """Domain service for the pair record: activation, ending, lookups."""

    def __init__(
        self,
        pair_repository: PairRepository,
        profile_repository: ProfileRepository,
        transactions: TransactionRunner,
    ) -> None:
        """Initialize pair service.

        Args:
            pair_repository: Pair read side
            profile_repository: Profile repository
            transactions: Runner for atomic multi-document changes
        """
        self.pair_repository = pair_repository
        self.profile_repository = profile_repository
        self.transactions = transactions

    def activate_pair(
        self, tx: Transaction, invite: PairInvite, now: datetime
    ) -> Pair:
        """Buffer the upsert that makes the invite's pair active.

        Creates the pair on first acceptance and reactivates an ended one.
        Either way the record ends up with sorted members, ``active`` status
        and no ``ended_at``/``ended_by``.

        Args:
            tx: Transaction the accept runs in
            invite: Invite being accepted
            now: Commit-time timestamp

        Returns:
            The pair as it will be written
        """
        pair = Pair(
            id=invite.pair_id,
            members=[invite.from_uid, invite.to_uid],
            status=PairStatus.ACTIVE,
            created_at=now,
            reactivated_at=now,
            ended_at=None,
            ended_by=None,
        )
        tx.put_pair(pair)
        return pair

    async def break_pair(self, me: PrincipalId) -> Pair | None:
        """End the caller's current pair.

        Only the caller's own profile is cleared. The partner's profile is
        corrected later by their profile reconciler when it sees the pair
        is no longer active.

        Args:
            me: Acting principal

        Returns:
            The ended pair, or None if the pair record no longer existed

        Raises:
            NotInPairError: If the caller's profile has no pair
            ForbiddenError: If the caller is not a member of that pair
        """
        with logfire.span("pair_service.break_pair", principal_id=me):
            profile = await self.profile_repository.find_by_id(me)
            if profile is None or not profile.pair_id:
                raise NotInPairError("You are not in a pair")
            pair_id = profile.pair_id

            async def body(tx: Transaction) -> Pair | None:
                now = utcnow()
                pair = await tx.get_pair(pair_id)
                current = await tx.get_profile(me) or Profile(id=me)
                if pair is None:
                    tx.put_profile(current.cleared(now))
                    return None
                if not pair.has_member(me):
                    raise ForbiddenError("Pair", pair_id, me)
                ended = pair.model_copy(
                    update={
                        "status": PairStatus.ENDED,
                        "ended_at": now,
                        "ended_by": me,
                    }
                )
                tx.put_pair(ended)
                tx.put_profile(current.cleared(now))
                return ended

            ended = await self.transactions.run(body)
            if ended is None:
                logfire.warn(
                    "Pair record missing, cleared profile only",
                    principal_id=me,
                    pair_id=pair_id,
                )
            else:
                logfire.info("Pair ended", principal_id=me, pair_id=pair_id)
            return ended

    async def sync_ended_pair_on_open(self, me: PrincipalId, pair_id: PairId) -> bool:
        """Clear the caller's profile if ``pair_id`` is missing or ended.

        An on-demand check independent of the continuous reconciler, run when
        the caller opens a pair-scoped view.

        Args:
            me: Acting principal
            pair_id: Pair the caller believes it is in

        Returns:
            True if the pair is gone (and the profile was cleared)
        """
        with logfire.span(
            "pair_service.sync_ended_pair_on_open", principal_id=me, pair_id=pair_id
        ):
            pair = await self.pair_repository.find_by_id(pair_id)
            if pair is not None and not pair.is_ended:
                return False

            profile = await self.profile_repository.find_by_id(me) or Profile(id=me)
            await self.profile_repository.save(profile.cleared(utcnow()))
            logfire.info(
                "Cleared profile for ended pair",
                principal_id=me,
                pair_id=pair_id,
                pair_missing=pair is None,
            )
            return True

    async def get_active_pair(self, me: PrincipalId) -> Pair | None:
        """Return the active pair containing ``me``, if any."""
        return await self.pair_repository.find_active_for_member(me)

    def watch_active_pair(self, me: PrincipalId) -> AsyncIterator[Pair | None]:
        """Live feed of the active pair containing ``me``."""
        return self.pair_repository.watch_active_for_member(me)
