"""In-memory report repository for testing."""

from collections.abc import AsyncIterator
from typing import Optional

from pairnotes.domain.model.report import Report
from pairnotes.domain.repository.report import ReportRepository
from pairnotes.domain.value import PairId, ReportId

from .store import InMemoryDocumentStore, reports_collection


class InMemoryReportRepository(ReportRepository):
    """In-memory implementation of ReportRepository for testing."""

    def __init__(self, store: InMemoryDocumentStore) -> None:
        self._store = store

    async def find_by_id(
        self, pair_id: PairId, report_id: ReportId
    ) -> Optional[Report]:
        """Find a report by pair and report ID."""
        return self._store.get(f"{reports_collection(pair_id)}/{report_id}")

    async def save(self, report: Report) -> Report:
        """Save or replace a report."""
        await self._store.write(
            f"{reports_collection(report.pair_id)}/{report.id}", report
        )
        return report

    async def watch(
        self, pair_id: PairId, report_id: ReportId
    ) -> AsyncIterator[Optional[Report]]:
        """Live feed of one report."""
        path = f"{reports_collection(pair_id)}/{report_id}"
        async for report in self._store.watch(lambda: self._store.get(path)):
            yield report
