"""In-memory pair repository for testing."""

from collections.abc import AsyncIterator
from typing import Optional

from pairnotes.domain.model.pair import Pair
from pairnotes.domain.repository.pair import PairRepository
from pairnotes.domain.value import PairId, PairStatus, PrincipalId

from .store import PAIRS, InMemoryDocumentStore, pair_path


class InMemoryPairRepository(PairRepository):
    """In-memory implementation of PairRepository for testing."""

    def __init__(self, store: InMemoryDocumentStore) -> None:
        self._store = store

    def _active_for(self, principal_id: PrincipalId) -> Optional[Pair]:
        for pair in self._store.list(PAIRS):
            if pair.status == PairStatus.ACTIVE and pair.has_member(principal_id):
                return pair
        return None

    async def find_by_id(self, pair_id: PairId) -> Optional[Pair]:
        """Find a pair by its canonical ID."""
        return self._store.get(pair_path(pair_id))

    async def find_active_for_member(self, principal_id: PrincipalId) -> Optional[Pair]:
        """Find the active pair containing a principal."""
        return self._active_for(principal_id)

    async def watch_active_for_member(
        self, principal_id: PrincipalId
    ) -> AsyncIterator[Optional[Pair]]:
        """Live feed of the principal's active pair."""
        async for pair in self._store.watch(lambda: self._active_for(principal_id)):
            yield pair
