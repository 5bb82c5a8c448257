"""Pair invite domain service.

Invites move ``pending -> accepted`` or ``pending -> declined``, by the
recipient only. Accepting pairs the recipient inside the accept transaction.
The sender cannot be written by the recipient, so it pairs itself later by
observing its accepted invites (``attach_accepted_loop``).
"""

from collections.abc import AsyncIterator

import logfire
from pydantic import ValidationError

from pairnotes.domain.error import (
    AlreadyPairedError,
    AlreadyProcessedError,
    DomainError,
    DuplicateInviteError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from pairnotes.domain.model import Pair, PairInvite, Principal
from pairnotes.domain.model.common import utcnow
from pairnotes.domain.repository import (
    DirectoryRepository,
    InviteRepository,
    Transaction,
    TransactionRunner,
)
from pairnotes.domain.value import (
    Email,
    InviteId,
    InviteStatus,
    PrincipalId,
    canonical_pair_id,
    new_invite_id,
)

from .base import Service
from .pair_service import PairService


async def _load_for_recipient(
    tx: Transaction, me: PrincipalId, invite_id: InviteId
) -> PairInvite:
    invite = await tx.get_invite(invite_id)
    if invite is None:
        raise NotFoundError("Invite", invite_id)
    if invite.to_uid != me:
        raise ForbiddenError("Invite", invite_id, me)
    if not invite.is_pending:
        raise AlreadyProcessedError(invite_id, invite.status.value)
    return invite


class InviteService(Service):
    """Domain service for the invite handshake."""

    def __init__(
        self,
        invite_repository: InviteRepository,
        directory_repository: DirectoryRepository,
        transactions: TransactionRunner,
        pair_service: PairService,
    ) -> None:
        """Initialize invite service.

        Args:
            invite_repository: Invite repository
            directory_repository: Public directory, to resolve emails
            transactions: Runner for atomic multi-document changes
            pair_service: Pair lifecycle service (pair upsert on accept)
        """
        self.invite_repository = invite_repository
        self.directory_repository = directory_repository
        self.transactions = transactions
        self.pair_service = pair_service

    async def create_invite(self, me: Principal, partner_email_raw: str) -> PairInvite:
        """Invite the principal registered under ``partner_email_raw``.

        The duplicate check is two plain queries, not a transaction: two
        principals inviting each other at the same moment can both succeed.
        Accepting either invite still enforces one active pair per profile.

        Args:
            me: Acting principal
            partner_email_raw: Partner email as typed

        Returns:
            Created pending invite

        Raises:
            InvalidInputError: If the email is empty, malformed or the caller's own
            NotFoundError: If no principal is registered under that email
            DuplicateInviteError: If a pending invite exists in either direction
        """
        with logfire.span("invite_service.create_invite", principal_id=me.id):
            partner_email = partner_email_raw.strip().lower()
            if not partner_email:
                raise InvalidInputError("Partner email is required")
            my_email = (me.email or "").strip().lower()
            if not my_email:
                raise InvalidInputError("Your account has no email address")
            if partner_email == my_email:
                raise InvalidInputError("You cannot pair with yourself")
            try:
                email = Email(partner_email)
            except ValidationError as e:
                raise InvalidInputError("Partner email is not valid") from e

            entry = await self.directory_repository.find_by_email(email)
            if entry is None:
                logfire.warn("Invite target not found", principal_id=me.id)
                raise NotFoundError("Principal", partner_email)
            partner_id = entry.id
            if partner_id == me.id:
                raise InvalidInputError("You cannot pair with yourself")

            if await self.invite_repository.exists_pending(me.id, partner_id):
                raise DuplicateInviteError(me.id, partner_id, incoming=False)
            if await self.invite_repository.exists_pending(partner_id, me.id):
                raise DuplicateInviteError(partner_id, me.id, incoming=True)

            invite = PairInvite(
                id=new_invite_id(),
                pair_id=canonical_pair_id(me.id, partner_id),
                from_uid=me.id,
                to_uid=partner_id,
                from_email=my_email,
                to_email=partner_email,
                status=InviteStatus.PENDING,
                created_at=utcnow(),
            )
            saved = await self.invite_repository.save(invite)
            logfire.info(
                "Invite created",
                invite_id=saved.id,
                from_uid=saved.from_uid,
                to_uid=saved.to_uid,
                pair_id=saved.pair_id,
            )
            return saved

    async def accept_invite(self, me: PrincipalId, invite_id: InviteId) -> Pair:
        """Accept an invite addressed to the caller.

        Atomically over the invite, the caller's profile and the pair:
        upserts the pair as active, points the caller's profile at it and
        marks the invite accepted.

        Args:
            me: Acting principal (must be the recipient)
            invite_id: Invite to accept

        Returns:
            The activated pair

        Raises:
            NotFoundError: If the invite or the caller's profile is missing
            ForbiddenError: If the invite is not addressed to the caller
            AlreadyProcessedError: If the invite is no longer pending
            AlreadyPairedError: If the caller's profile already has a pair
        """
        with logfire.span(
            "invite_service.accept_invite", principal_id=me, invite_id=invite_id
        ):

            async def body(tx: Transaction) -> Pair:
                invite = await _load_for_recipient(tx, me, invite_id)
                profile = await tx.get_profile(me)
                if profile is None:
                    raise NotFoundError("Profile", me)
                if profile.pair_id:
                    raise AlreadyPairedError(me, profile.pair_id)

                now = utcnow()
                pair = self.pair_service.activate_pair(tx, invite, now)
                tx.put_profile(
                    profile.with_pairing(
                        invite.pair_id, invite.from_uid, invite.from_email, now
                    )
                )
                tx.put_invite(
                    invite.model_copy(
                        update={"status": InviteStatus.ACCEPTED, "accepted_at": now}
                    )
                )
                return pair

            pair = await self.transactions.run(body)
            logfire.info(
                "Invite accepted", invite_id=invite_id, pair_id=pair.id, principal_id=me
            )
            return pair

    async def decline_invite(self, me: PrincipalId, invite_id: InviteId) -> PairInvite:
        """Decline an invite addressed to the caller. No other side effects.

        Raises:
            NotFoundError: If the invite is missing
            ForbiddenError: If the invite is not addressed to the caller
            AlreadyProcessedError: If the invite is no longer pending
        """
        with logfire.span(
            "invite_service.decline_invite", principal_id=me, invite_id=invite_id
        ):

            async def body(tx: Transaction) -> PairInvite:
                invite = await _load_for_recipient(tx, me, invite_id)
                declined = invite.model_copy(update={"status": InviteStatus.DECLINED})
                tx.put_invite(declined)
                return declined

            declined = await self.transactions.run(body)
            logfire.info("Invite declined", invite_id=invite_id, principal_id=me)
            return declined

    async def attach_accepted_invite_as_sender(
        self, me: PrincipalId, invite_id: InviteId
    ) -> bool:
        """Point the sender's profile at the pair its accepted invite created.

        Idempotent, and a silent no-op when there is nothing to attach: the
        invite is missing, not sent by the caller or not accepted; the
        caller's profile is missing or already paired; the pair is missing
        or ended.

        Args:
            me: Acting principal (the invite's sender)
            invite_id: Accepted invite

        Returns:
            True if the caller's profile was written
        """
        with logfire.span(
            "invite_service.attach_accepted_invite_as_sender",
            principal_id=me,
            invite_id=invite_id,
        ):

            async def body(tx: Transaction) -> bool:
                invite = await tx.get_invite(invite_id)
                if invite is None or invite.from_uid != me:
                    return False
                if invite.status != InviteStatus.ACCEPTED:
                    return False
                profile = await tx.get_profile(me)
                if profile is None or profile.pair_id:
                    return False
                pair = await tx.get_pair(invite.pair_id)
                if pair is None or pair.is_ended:
                    return False
                tx.put_profile(
                    profile.with_pairing(
                        invite.pair_id, invite.to_uid, invite.to_email, utcnow()
                    )
                )
                return True

            attached = await self.transactions.run(body)
            if attached:
                logfire.info(
                    "Sender attached to pair", invite_id=invite_id, principal_id=me
                )
            return attached

    async def list_incoming(
        self, me: PrincipalId, status: InviteStatus | None = InviteStatus.PENDING
    ) -> list[PairInvite]:
        """Invites addressed to the caller, newest first."""
        return await self.invite_repository.find_by_recipient(me, status)

    async def list_outgoing(
        self, me: PrincipalId, status: InviteStatus | None = InviteStatus.PENDING
    ) -> list[PairInvite]:
        """Invites the caller sent, newest first."""
        return await self.invite_repository.find_by_sender(me, status)

    def watch_accepted_sent(self, me: PrincipalId) -> AsyncIterator[list[PairInvite]]:
        """Live feed of the caller's sent invites that are accepted."""
        return self.invite_repository.watch_by_sender(me, InviteStatus.ACCEPTED)

    async def attach_accepted_loop(self, me: PrincipalId) -> None:
        """Attach the caller to every sent invite that becomes accepted.

        Runs until cancelled. Each invite is attempted once per loop; a
        failed attempt is logged and the loop carries on.
        """
        processed: set[InviteId] = set()
        async for invites in self.watch_accepted_sent(me):
            for invite in invites:
                if invite.id in processed:
                    continue
                processed.add(invite.id)
                try:
                    await self.attach_accepted_invite_as_sender(me, invite.id)
                except DomainError as e:
                    logfire.error(
                        "Failed to attach accepted invite",
                        invite_id=invite.id,
                        principal_id=me,
                        error=str(e),
                    )
