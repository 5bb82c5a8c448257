"""In-memory transaction runner for testing."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import logfire
from pydantic import BaseModel

from pairnotes.domain.error import TransactionConflictError
from pairnotes.domain.model import Pair, PairInvite, Profile, Report
from pairnotes.domain.repository.transaction import Transaction, TransactionRunner
from pairnotes.domain.value import InviteId, PairId, PrincipalId, ReportId

from .store import (
    InMemoryDocumentStore,
    invite_path,
    pair_path,
    profile_path,
    reports_collection,
)

T = TypeVar("T")


class InMemoryTransaction(Transaction):
    """One attempt: records read versions and buffers writes."""

    def __init__(self, store: InMemoryDocumentStore) -> None:
        self._store = store
        self.reads: dict[str, int] = {}
        self.writes: dict[str, BaseModel | None] = {}

    async def _read(self, path: str) -> Any:
        # Yield so concurrent transactions interleave like real round trips
        await asyncio.sleep(0)
        if path in self.writes:
            return self.writes[path]
        self.reads.setdefault(path, self._store.version(path))
        return self._store.get(path)

    async def get_profile(self, principal_id: PrincipalId) -> Profile | None:
        return await self._read(profile_path(principal_id))

    async def get_pair(self, pair_id: PairId) -> Pair | None:
        return await self._read(pair_path(pair_id))

    async def get_invite(self, invite_id: InviteId) -> PairInvite | None:
        return await self._read(invite_path(invite_id))

    async def get_report(self, pair_id: PairId, report_id: ReportId) -> Report | None:
        return await self._read(f"{reports_collection(pair_id)}/{report_id}")

    def put_profile(self, profile: Profile) -> None:
        self.writes[profile_path(profile.id)] = profile

    def put_pair(self, pair: Pair) -> None:
        self.writes[pair_path(pair.id)] = pair

    def put_invite(self, invite: PairInvite) -> None:
        self.writes[invite_path(invite.id)] = invite

    def put_report(self, report: Report) -> None:
        self.writes[f"{reports_collection(report.pair_id)}/{report.id}"] = report


class InMemoryTransactionRunner(TransactionRunner):
    """Optimistic compare-and-retry over the in-memory store."""

    def __init__(self, store: InMemoryDocumentStore, max_attempts: int = 5) -> None:
        self._store = store
        self.max_attempts = max_attempts

    async def run(self, body: Callable[[Transaction], Awaitable[T]]) -> T:
        for attempt in range(1, self.max_attempts + 1):
            tx = InMemoryTransaction(self._store)
            result = await body(tx)
            if await self._store.commit(tx.reads, tx.writes):
                return result
            logfire.debug("Transaction conflict, retrying", attempt=attempt)
        raise TransactionConflictError(self.max_attempts)
