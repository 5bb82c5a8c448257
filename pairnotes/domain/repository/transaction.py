"""Atomic multi-document transactions.

A transaction reads a bounded set of documents, then writes based on what it
read. If any document it read changed before commit, the store discards the
buffered writes and runs the body again. Bodies must therefore have no side
effects other than the writes they buffer on the transaction.

Raising from the body aborts the transaction: nothing it buffered is written.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TypeVar

from pairnotes.domain.model.invite import PairInvite
from pairnotes.domain.model.pair import Pair
from pairnotes.domain.model.profile import Profile
from pairnotes.domain.model.report import Report
from pairnotes.domain.value import InviteId, PairId, PrincipalId, ReportId

T = TypeVar("T")


class Transaction(ABC):
    """Read-then-write view of the store inside one attempt."""

    @abstractmethod
    async def get_profile(self, principal_id: PrincipalId) -> Profile | None:
        pass

    @abstractmethod
    async def get_pair(self, pair_id: PairId) -> Pair | None:
        pass

    @abstractmethod
    async def get_invite(self, invite_id: InviteId) -> PairInvite | None:
        pass

    @abstractmethod
    async def get_report(self, pair_id: PairId, report_id: ReportId) -> Report | None:
        pass

    @abstractmethod
    def put_profile(self, profile: Profile) -> None:
        """Buffer a profile write, applied at commit."""
        pass

    @abstractmethod
    def put_pair(self, pair: Pair) -> None:
        """Buffer a pair write, applied at commit."""
        pass

    @abstractmethod
    def put_invite(self, invite: PairInvite) -> None:
        """Buffer an invite write, applied at commit."""
        pass

    @abstractmethod
    def put_report(self, report: Report) -> None:
        """Buffer a report write, applied at commit."""
        pass


class TransactionRunner(ABC):
    """Runs transaction bodies with compare-and-retry semantics."""

    @abstractmethod
    async def run(self, body: Callable[[Transaction], Awaitable[T]]) -> T:
        """Run ``body`` atomically and return its result.

        Raises:
            TransactionConflictError: If every attempt conflicted
            DomainError: Whatever the body raised (nothing is written)
        """
        pass
