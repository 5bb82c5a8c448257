"""In-memory document store for testing.

Documents live under slash-separated paths mirroring the persisted layout
(``pairs/{pairId}/reports/{reportId}`` and so on). Every write bumps the
document's version; transactions commit only if every document they read is
still at the version they saw, which gives the same compare-and-retry
behaviour as the production store.
"""

import asyncio
from collections.abc import AsyncIterator, Callable
from typing import Any, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

PROFILES = "profiles"
PUBLIC_DIRECTORY = "publicDirectory"
PAIRS = "pairs"
PAIR_INVITES = "pairInvites"
NOTES = "notes"
REPORTS = "reports"

_UNSET: Any = object()


def profile_path(principal_id: str) -> str:
    return f"{PROFILES}/{principal_id}"


def directory_path(principal_id: str) -> str:
    return f"{PUBLIC_DIRECTORY}/{principal_id}"


def pair_path(pair_id: str) -> str:
    return f"{PAIRS}/{pair_id}"


def invite_path(invite_id: str) -> str:
    return f"{PAIR_INVITES}/{invite_id}"


def notes_collection(pair_id: str) -> str:
    return f"{PAIRS}/{pair_id}/{NOTES}"


def reports_collection(pair_id: str) -> str:
    return f"{PAIRS}/{pair_id}/{REPORTS}"


class InMemoryDocumentStore:
    """Versioned documents with live-query notifications."""

    def __init__(self) -> None:
        self._documents: dict[str, BaseModel] = {}
        # Versions survive deletes so a delete still invalidates readers
        self._versions: dict[str, int] = {}
        self._revision = 0
        self._changed = asyncio.Condition()

    def get(self, path: str) -> Any:
        """Return the document at ``path`` or None."""
        return self._documents.get(path)

    def version(self, path: str) -> int:
        """Return the document's write counter (0 if never written)."""
        return self._versions.get(path, 0)

    def list(self, collection: str) -> list[Any]:
        """Return the direct children of a collection path."""
        prefix = f"{collection}/"
        return [
            doc
            for path, doc in self._documents.items()
            if path.startswith(prefix) and "/" not in path[len(prefix) :]
        ]

    async def write(self, path: str, document: BaseModel | None) -> None:
        """Plain write (or delete when ``document`` is None)."""
        self._apply({path: document})
        await self._notify()

    async def commit(
        self, reads: dict[str, int], writes: dict[str, BaseModel | None]
    ) -> bool:
        """Apply ``writes`` if every path in ``reads`` is still at its version.

        Returns:
            True if committed, False on conflict (nothing written)
        """
        # Check and apply without yielding to the loop
        for path, seen_version in reads.items():
            if self.version(path) != seen_version:
                return False
        if writes:
            self._apply(writes)
            await self._notify()
        return True

    async def watch(self, query: Callable[[], T]) -> AsyncIterator[T]:
        """Re-run ``query`` after every change, yielding only new results."""
        last: Any = _UNSET
        seen = -1
        while True:
            async with self._changed:
                await self._changed.wait_for(lambda: self._revision != seen)
                seen = self._revision
            value = query()
            if value != last:
                last = value
                yield value

    def _apply(self, writes: dict[str, BaseModel | None]) -> None:
        for path, document in writes.items():
            self._versions[path] = self.version(path) + 1
            if document is None:
                self._documents.pop(path, None)
            else:
                self._documents[path] = document

    async def _notify(self) -> None:
        async with self._changed:
            self._revision += 1
            self._changed.notify_all()

