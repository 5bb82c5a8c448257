"""Background pair sessions.

A pair session is what keeps one signed-in principal's documents converged
while nobody is calling the API: the profile reconciler, the sender-side
attach loop and, when enabled, automatic report generation. Sessions run as
asyncio tasks inside the API process.
"""

import asyncio
from collections.abc import Coroutine
from typing import Any

import logfire

from pairnotes.config import ReportSettings
from pairnotes.domain.error import DomainError
from pairnotes.domain.model import Principal
from pairnotes.domain.service import (
    InviteService,
    ProfileReconciler,
    ReportScheduler,
    ReportService,
)
from pairnotes.domain.value import PrincipalId, ReportId


class PairSession:
    """Background loops for one principal."""

    def __init__(
        self,
        principal: Principal,
        profile_reconciler: ProfileReconciler,
        invite_service: InviteService,
        report_scheduler: ReportScheduler,
        report_service: ReportService,
        auto_generate: bool = False,
    ) -> None:
        """Initialize pair session.

        Args:
            principal: Signed-in principal the session acts for
            profile_reconciler: Keeps the profile in line with the active pair
            invite_service: Attaches the principal to accepted sent invites
            report_scheduler: Live schedule feed
            report_service: Report generation
            auto_generate: Generate reports as soon as a window is due
        """
        self.principal = principal
        self.profile_reconciler = profile_reconciler
        self.invite_service = invite_service
        self.report_scheduler = report_scheduler
        self.report_service = report_service
        self.auto_generate = auto_generate
        self._tasks: list[asyncio.Task] = []

    @property
    def me(self) -> PrincipalId:
        return self.principal.id

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    def start(self) -> None:
        """Start the session's loops. No-op if already running."""
        if self.running:
            return
        self._tasks = [
            self._spawn("reconciler", self.profile_reconciler.run(self.me)),
            self._spawn("attach", self.invite_service.attach_accepted_loop(self.me)),
        ]
        if self.auto_generate:
            self._tasks.append(self._spawn("auto_generate", self._auto_generate()))
        logfire.info(
            "Pair session started",
            principal_id=self.me,
            auto_generate=self.auto_generate,
        )

    async def stop(self) -> None:
        """Cancel the session's loops and wait for them to finish."""
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        if tasks:
            logfire.info("Pair session stopped", principal_id=self.me)

    def _spawn(self, name: str, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.create_task(coro, name=f"pair-session:{self.me}:{name}")
        task.add_done_callback(self._log_failure)
        return task

    def _log_failure(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logfire.error(
                "Pair session loop failed",
                principal_id=self.me,
                task=task.get_name(),
                error=str(error),
                _exc_info=error,
            )

    async def _auto_generate(self) -> None:
        # One attempt per window; a failed window is retried only through
        # an explicit generate call
        attempted: set[ReportId] = set()
        async for schedule in self.report_scheduler.watch(self.me):
            if not schedule.due or not schedule.is_resolved:
                continue
            if schedule.report_id in attempted:
                continue
            attempted.add(schedule.report_id)
            try:
                await self.report_service.generate(schedule)
            except DomainError as e:
                logfire.warn(
                    "Automatic report generation failed",
                    principal_id=self.me,
                    report_id=schedule.report_id,
                    error_kind=e.kind.value,
                    error=e.message,
                )
            except Exception as e:
                logfire.error(
                    "Automatic report generation failed",
                    principal_id=self.me,
                    report_id=schedule.report_id,
                    error=str(e),
                    _exc_info=e,
                )


class SessionRegistry:
    """Pair sessions of every signed-in principal in this process."""

    def __init__(
        self,
        profile_reconciler: ProfileReconciler,
        invite_service: InviteService,
        report_scheduler: ReportScheduler,
        report_service: ReportService,
        report_settings: ReportSettings,
    ) -> None:
        self.profile_reconciler = profile_reconciler
        self.invite_service = invite_service
        self.report_scheduler = report_scheduler
        self.report_service = report_service
        self.report_settings = report_settings
        self._sessions: dict[PrincipalId, PairSession] = {}

    def get(self, principal_id: PrincipalId) -> PairSession | None:
        return self._sessions.get(principal_id)

    async def start(self, principal: Principal) -> PairSession:
        """Start (or keep) the principal's session."""
        session = self._sessions.get(principal.id)
        if session is None:
            session = PairSession(
                principal,
                profile_reconciler=self.profile_reconciler,
                invite_service=self.invite_service,
                report_scheduler=self.report_scheduler,
                report_service=self.report_service,
                auto_generate=self.report_settings.auto_generate,
            )
            self._sessions[principal.id] = session
        session.start()
        return session

    async def stop(self, principal_id: PrincipalId) -> None:
        """Stop the principal's session, if it has one."""
        session = self._sessions.pop(principal_id, None)
        if session is not None:
            await session.stop()

    async def stop_all(self) -> None:
        """Stop every session. Called on application shutdown."""
        sessions = list(self._sessions.values())
        self._sessions.clear()
        for session in sessions:
            await session.stop()
        logfire.info("All pair sessions stopped", count=len(sessions))
