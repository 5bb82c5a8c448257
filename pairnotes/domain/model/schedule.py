"""Reporting window and per-principal schedule views."""

from datetime import datetime
from typing import Optional

from pairnotes.domain.value import PairId, PrincipalId, ReportId
from pairnotes.domain.value.common import ValueObject


class ReportPeriod(ValueObject):
    """The current reporting window relative to some instant ``now``."""

    slot_start: datetime
    slot_end: datetime
    next_at: datetime
    ms_to_next: int
    due: bool


class Schedule(ValueObject):
    """Reporting schedule as seen by one principal.

    Outside a pair only ``next_at``/``ms_to_next`` are populated and ``due`` is
    always False.
    """

    in_pair: bool
    pair_id: Optional[PairId] = None
    uid: Optional[PrincipalId] = None
    slot_start: Optional[datetime] = None
    slot_end: Optional[datetime] = None
    report_id: Optional[ReportId] = None
    next_at: Optional[datetime] = None
    ms_to_next: Optional[int] = None
    due: bool = False

    @property
    def is_resolved(self) -> bool:
        """True when the schedule names a pair, a principal and a window."""
        return bool(
            self.in_pair
            and self.pair_id
            and self.uid
            and self.slot_start
            and self.slot_end
            and self.report_id
        )
