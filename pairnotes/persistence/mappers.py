"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand
rather than through SQLAlchemy's ORM.
"""

from typing import Any, Dict

from pairnotes.domain.model import (
    DirectoryEntry,
    Note,
    Pair,
    PairInvite,
    Profile,
    Report,
    ReportSourceNote,
)
from pairnotes.domain.value import (
    InviteId,
    InviteStatus,
    NoteId,
    PairId,
    PairStatus,
    PrincipalId,
    ReportId,
    ReportStatus,
)


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert database row to Profile domain model."""
    return Profile(
        id=PrincipalId(row["id"]),
        email=row.get("email"),
        name=row.get("name"),
        pair_id=PairId(row["pair_id"]) if row.get("pair_id") else None,
        partner_id=PrincipalId(row["partner_id"]) if row.get("partner_id") else None,
        partner_email=row.get("partner_email"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_directory_entry(row: Dict[str, Any]) -> DirectoryEntry:
    """Convert database row to DirectoryEntry domain model."""
    return DirectoryEntry(
        id=PrincipalId(row["id"]),
        email=row["email"],
        name=row.get("name"),
        updated_at=row["updated_at"],
    )


def row_to_pair(row: Dict[str, Any]) -> Pair:
    """Convert database row to Pair domain model."""
    return Pair(
        id=PairId(row["id"]),
        members=[PrincipalId(m) for m in row["members"]],
        status=PairStatus(row["status"]),
        created_at=row["created_at"],
        reactivated_at=row.get("reactivated_at"),
        ended_at=row.get("ended_at"),
        ended_by=PrincipalId(row["ended_by"]) if row.get("ended_by") else None,
    )


def row_to_invite(row: Dict[str, Any]) -> PairInvite:
    """Convert database row to PairInvite domain model."""
    return PairInvite(
        id=InviteId(row["id"]),
        pair_id=PairId(row["pair_id"]),
        from_uid=PrincipalId(row["from_uid"]),
        to_uid=PrincipalId(row["to_uid"]),
        from_email=row["from_email"],
        to_email=row["to_email"],
        status=InviteStatus(row["status"]),
        created_at=row["created_at"],
        accepted_at=row.get("accepted_at"),
    )


def row_to_note(row: Dict[str, Any]) -> Note:
    """Convert database row to Note domain model."""
    return Note(
        id=NoteId(row["id"]),
        pair_id=PairId(row["pair_id"]),
        text=row["text"],
        owner_uid=PrincipalId(row["owner_uid"]),
        owner_name=row.get("owner_name"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_report(row: Dict[str, Any]) -> Report:
    """Convert database row to Report domain model.

    ``source_notes`` is stored as JSONB and validated back into models.
    """
    return Report(
        id=ReportId(row["id"]),
        pair_id=PairId(row["pair_id"]),
        status=ReportStatus(row["status"]),
        created_at=row["created_at"],
        created_by=PrincipalId(row["created_by"]),
        period_start=row["period_start"],
        period_end=row["period_end"],
        notes_count=row.get("notes_count"),
        summary=row.get("summary"),
        error=row.get("error"),
        source_notes=[
            ReportSourceNote.model_validate(n) for n in row.get("source_notes") or []
        ],
        updated_at=row["updated_at"],
    )


def to_row(
    model: Profile | DirectoryEntry | Pair | PairInvite | Note | Report,
) -> Dict[str, Any]:
    """Convert a domain model to a database dict.

    Enums become their string values. Report source notes are dumped in JSON
    mode for the JSONB column.
    """
    row = model.model_dump(mode="python")
    for key, value in row.items():
        if isinstance(value, (InviteStatus, PairStatus, ReportStatus)):
            row[key] = value.value
    if isinstance(model, Report):
        row["source_notes"] = [n.model_dump(mode="json") for n in model.source_notes]
    return row
