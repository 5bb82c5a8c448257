"""Report generation domain service.

At most one report per pair per window. Generation is a claim transaction
followed by a non-transactional summarizer call:

1. Claim: re-read the report. If it is ``ready`` or ``generating`` someone
   else owns or finished the window and we stop. Otherwise write
   ``generating``.
2. Generate: read the window's notes, call the summarizer, write ``ready``
   or ``error``. Cancellation also writes ``error`` before propagating.

Only the caller whose claim observed a non-terminal state reaches step 2,
so concurrent callers never call the summarizer twice for one window.
"""

import asyncio
from collections.abc import AsyncIterator

import logfire

from pairnotes.domain.error import (
    DomainError,
    ExternalServiceError,
    NotDueYetError,
    NotInPairError,
)
from pairnotes.domain.model import Note, Report, ReportSourceNote, Schedule
from pairnotes.domain.model.common import utcnow
from pairnotes.domain.model.report import MAX_ERROR_CHARS, MAX_SOURCE_NOTES
from pairnotes.domain.repository import (
    NoteRepository,
    ReportRepository,
    Transaction,
    TransactionRunner,
)
from pairnotes.domain.value import ReportStatus

from .base import Service
from .summarizer import Summarizer

CANCELLED_MESSAGE = "CANCELLED: Report generation was interrupted"


def _error_message(error: Exception) -> str:
    if isinstance(error, DomainError):
        message = error.message
    else:
        message = str(error)
    return (message or "LLM_ERROR")[:MAX_ERROR_CHARS]


class ReportService(Service):
    """Domain service for report documents."""

    def __init__(
        self,
        report_repository: ReportRepository,
        note_repository: NoteRepository,
        transactions: TransactionRunner,
        summarizer: Summarizer,
        summarizer_timeout_seconds: float = 90.0,
    ) -> None:
        """Initialize report service.

        Args:
            report_repository: Report repository
            note_repository: Note repository (generation input)
            transactions: Runner for the claim transaction
            summarizer: External summarizer
            summarizer_timeout_seconds: Upper bound on one summarizer call
        """
        self.report_repository = report_repository
        self.note_repository = note_repository
        self.transactions = transactions
        self.summarizer = summarizer
        self.summarizer_timeout_seconds = summarizer_timeout_seconds

    async def generate(self, schedule: Schedule) -> Report | None:
        """Generate the report for the schedule's window.

        Args:
            schedule: The caller's current schedule

        Returns:
            The terminal report, or None if another caller already claimed
            or finished this window

        Raises:
            NotInPairError: If the schedule has no active pair or window
            NotDueYetError: If the window has not closed yet
            ExternalServiceError: If the summarizer failed (report is ``error``)
        """
        if not schedule.is_resolved:
            raise NotInPairError("You are not in a pair")
        if not schedule.due:
            raise NotDueYetError("The reporting window has not closed yet")

        with logfire.span(
            "report_service.generate",
            pair_id=schedule.pair_id,
            report_id=schedule.report_id,
            principal_id=schedule.uid,
        ):
            claimed = await self._claim(schedule)
            if claimed is None:
                logfire.info(
                    "Report already claimed, skipping",
                    pair_id=schedule.pair_id,
                    report_id=schedule.report_id,
                )
                return None

            try:
                notes = await self.note_repository.find_created_between(
                    claimed.pair_id, claimed.period_start, claimed.period_end
                )
                source_notes = [
                    ReportSourceNote.from_note(n) for n in notes[:MAX_SOURCE_NOTES]
                ]
                summary = await self._summarize(notes)
            except asyncio.CancelledError:
                # The claim must not stay ``generating`` after this call
                await asyncio.shield(
                    self._save_failed(claimed, CANCELLED_MESSAGE)
                )
                logfire.warn(
                    "Report generation cancelled",
                    pair_id=claimed.pair_id,
                    report_id=claimed.id,
                )
                raise
            except Exception as e:
                failed = await self._save_failed(claimed, _error_message(e))
                logfire.error(
                    "Report generation failed",
                    pair_id=claimed.pair_id,
                    report_id=claimed.id,
                    error=failed.error,
                )
                raise

            ready = claimed.model_copy(
                update={
                    "status": ReportStatus.READY,
                    "summary": summary,
                    "error": None,
                    "notes_count": len(notes),
                    "source_notes": source_notes,
                    "updated_at": utcnow(),
                }
            )
            await self.report_repository.save(ready)
            logfire.info(
                "Report ready",
                pair_id=ready.pair_id,
                report_id=ready.id,
                notes_count=ready.notes_count,
            )
            return ready

    async def _claim(self, schedule: Schedule) -> Report | None:
        async def body(tx: Transaction) -> Report | None:
            existing = await tx.get_report(schedule.pair_id, schedule.report_id)
            if existing is not None and existing.blocks_generation:
                return None
            now = utcnow()
            claimed = Report(
                id=schedule.report_id,
                pair_id=schedule.pair_id,
                status=ReportStatus.GENERATING,
                created_at=now,
                created_by=schedule.uid,
                period_start=schedule.slot_start,
                period_end=schedule.slot_end,
                notes_count=existing.notes_count if existing else None,
                summary=None,
                error=None,
                source_notes=[],
                updated_at=now,
            )
            tx.put_report(claimed)
            return claimed

        return await self.transactions.run(body)

    async def _save_failed(self, claimed: Report, message: str) -> Report:
        failed = claimed.model_copy(
            update={
                "status": ReportStatus.ERROR,
                "error": message,
                "updated_at": utcnow(),
            }
        )
        await self.report_repository.save(failed)
        return failed

    async def _summarize(self, notes: list[Note]) -> str:
        try:
            return await asyncio.wait_for(
                self.summarizer.summarize(notes),
                timeout=self.summarizer_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise ExternalServiceError(
                f"TIMEOUT: Summarizer did not respond within "
                f"{self.summarizer_timeout_seconds:g}s"
            ) from e

    async def get_report(self, schedule: Schedule) -> Report | None:
        """Current window's report for the schedule, if any."""
        if not schedule.is_resolved:
            return None
        return await self.report_repository.find_by_id(
            schedule.pair_id, schedule.report_id
        )

    async def watch_report(self, schedule: Schedule) -> AsyncIterator[Report | None]:
        """Live feed of the schedule's report document."""
        if not schedule.is_resolved:
            yield None
            return
        async for report in self.report_repository.watch(
            schedule.pair_id, schedule.report_id
        ):
            yield report
