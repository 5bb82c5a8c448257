"""PostgreSQL implementation of Report repository."""

from collections.abc import AsyncIterator
from typing import Optional

from sqlalchemy import and_, select

from pairnotes.domain.model import Report
from pairnotes.domain.repository import ReportRepository
from pairnotes.domain.value import PairId, ReportId
from pairnotes.persistence.database import poll, upsert
from pairnotes.persistence.mappers import row_to_report, to_row
from pairnotes.persistence.repository.base import PostgresRepository
from pairnotes.persistence.tables import reports_table


class PostgresReportRepository(PostgresRepository, ReportRepository):
    """PostgreSQL implementation of ReportRepository."""

    async def find_by_id(
        self, pair_id: PairId, report_id: ReportId
    ) -> Optional[Report]:
        """Find a report by pair and report ID."""
        stmt = select(reports_table).where(
            and_(reports_table.c.pair_id == pair_id, reports_table.c.id == report_id)
        )
        return await self._fetch_one(stmt, row_to_report)

    async def save(self, report: Report) -> Report:
        """Save a report (create or replace)."""
        await self._execute(upsert(reports_table, to_row(report)))
        return report

    def watch(
        self, pair_id: PairId, report_id: ReportId
    ) -> AsyncIterator[Optional[Report]]:
        """Poll one report document."""
        return poll(
            lambda: self.find_by_id(pair_id, report_id), self.poll_interval_seconds
        )
