"""Strongly typed identifiers for pairnotes domain entities.

Principal IDs come from the external identity provider and are opaque
strings. Pair IDs are derived from two principal IDs, never generated.
"""

from typing import NewType
from uuid import uuid4

PrincipalId = NewType("PrincipalId", str)
PairId = NewType("PairId", str)
InviteId = NewType("InviteId", str)
NoteId = NewType("NoteId", str)
ReportId = NewType("ReportId", str)


def canonical_pair_id(a: PrincipalId, b: PrincipalId) -> PairId:
    """Derive the order-independent pair ID for two principals.

    Both principals always resolve to the same pair document, whoever
    initiates the invite.

    Example:
        >>> canonical_pair_id(PrincipalId("bob"), PrincipalId("alice"))
        'alice_bob'
    """
    if a < b:
        return PairId(f"{a}_{b}")
    return PairId(f"{b}_{a}")


def new_invite_id() -> InviteId:
    """Generate a fresh invite ID. Terminal invites are never reused."""
    return InviteId(uuid4().hex)


def new_note_id() -> NoteId:
    """Generate a fresh note ID."""
    return NoteId(uuid4().hex)
