"""Pair repository interface."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from pairnotes.domain.model.pair import Pair
from pairnotes.domain.value import PairId, PrincipalId


class PairRepository(ABC):
    """Read side of the canonical pair records (``pairs/{pairId}``).

    Pairs are only ever written inside transactions.
    """

    @abstractmethod
    async def find_by_id(self, pair_id: PairId) -> Pair | None:
        """Find a pair by its canonical ID."""
        pass

    @abstractmethod
    async def find_active_for_member(self, principal_id: PrincipalId) -> Pair | None:
        """Find the active pair containing a principal (at most one is expected).

        Query: members contains ``principal_id`` AND status == active, limit 1.
        """
        pass

    @abstractmethod
    def watch_active_for_member(
        self, principal_id: PrincipalId
    ) -> AsyncIterator[Pair | None]:
        """Live feed of ``find_active_for_member``."""
        pass
