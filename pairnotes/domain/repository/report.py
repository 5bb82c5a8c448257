"""Report repository interface."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from pairnotes.domain.model.report import Report
from pairnotes.domain.value import PairId, ReportId


class ReportRepository(ABC):
    """Repository for report documents (``pairs/{pairId}/reports/{reportId}``).

    The claim step goes through a Transaction; only the terminal status
    write after a successful claim uses ``save`` directly.
    """

    @abstractmethod
    async def find_by_id(self, pair_id: PairId, report_id: ReportId) -> Report | None:
        """Find a report by pair and report ID."""
        pass

    @abstractmethod
    async def save(self, report: Report) -> Report:
        """Save a report (create or replace)."""
        pass

    @abstractmethod
    def watch(self, pair_id: PairId, report_id: ReportId) -> AsyncIterator[Report | None]:
        """Live feed of one report document."""
        pass
