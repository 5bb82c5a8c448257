"""Domain model entities for pairnotes."""

from pairnotes.domain.model.directory import DirectoryEntry
from pairnotes.domain.model.invite import PairInvite
from pairnotes.domain.model.note import Note
from pairnotes.domain.model.pair import Pair
from pairnotes.domain.model.principal import Principal
from pairnotes.domain.model.profile import Profile
from pairnotes.domain.model.report import Report, ReportSourceNote
from pairnotes.domain.model.schedule import ReportPeriod, Schedule

__all__ = [
    "DirectoryEntry",
    "Note",
    "Pair",
    "PairInvite",
    "Principal",
    "Profile",
    "Report",
    "ReportPeriod",
    "ReportSourceNote",
    "Schedule",
]
