"""Unit tests for Pair, Profile and Report models."""

import pytest
from pydantic import ValidationError

from pairnotes.domain.model import Note, Pair, Profile, ReportSourceNote
from pairnotes.domain.model.report import MAX_SOURCE_NOTE_CHARS
from pairnotes.domain.value import NoteId, PairId, PairStatus, PrincipalId
from tests.conftest import utc


class TestPair:
    """Tests for the Pair model."""

    def test_members_are_sorted(self):
        """Members are stored sorted whatever order they are given in."""
        pair = Pair(
            id=PairId("alice_bob"),
            members=[PrincipalId("bob"), PrincipalId("alice")],
        )

        assert pair.members == ["alice", "bob"]

    def test_more_than_two_members_rejected(self):
        with pytest.raises(ValidationError):
            Pair(
                id=PairId("a_b"),
                members=[PrincipalId("a"), PrincipalId("b"), PrincipalId("c")],
            )

    def test_partner_of_returns_other_member(self):
        pair = Pair(id=PairId("a_b"), members=[PrincipalId("a"), PrincipalId("b")])

        assert pair.partner_of(PrincipalId("a")) == "b"
        assert pair.partner_of(PrincipalId("b")) == "a"

    def test_partner_of_undeterminable_with_one_member(self):
        """A malformed single-member pair has no determinable partner."""
        pair = Pair(id=PairId("a_b"), members=[PrincipalId("a")])

        assert pair.partner_of(PrincipalId("a")) is None

    def test_is_ended_by_status(self):
        pair = Pair(
            id=PairId("a_b"),
            members=[PrincipalId("a"), PrincipalId("b")],
            status=PairStatus.ENDED,
        )

        assert pair.is_ended

    def test_is_ended_by_ended_at_only(self):
        """An ``ended_at`` without the status flip still counts as ended."""
        pair = Pair(
            id=PairId("a_b"),
            members=[PrincipalId("a"), PrincipalId("b")],
            status=PairStatus.ACTIVE,
            ended_at=utc(2026, 2, 1),
        )

        assert pair.is_ended


class TestProfile:
    """Tests for the Profile pairing helpers."""

    def test_with_pairing_sets_all_fields(self):
        profile = Profile(id=PrincipalId("a"))
        now = utc(2026, 2, 1)

        updated = profile.with_pairing(
            PairId("a_b"), PrincipalId("b"), "b@example.com", now
        )

        assert updated.pair_id == "a_b"
        assert updated.partner_id == "b"
        assert updated.partner_email == "b@example.com"
        assert updated.updated_at == now
        assert profile.pair_id is None

    def test_cleared_resets_all_pairing_fields(self):
        profile = Profile(
            id=PrincipalId("a"),
            pair_id=PairId("a_b"),
            partner_id=PrincipalId("b"),
            partner_email="b@example.com",
        )

        cleared = profile.cleared(utc(2026, 2, 1))

        assert cleared.pair_id is None
        assert cleared.partner_id is None
        assert cleared.partner_email is None


class TestReportSourceNote:
    """Tests for ReportSourceNote.from_note."""

    def test_text_truncated(self):
        note = Note(
            id=NoteId("n1"),
            pair_id=PairId("a_b"),
            text="x" * (MAX_SOURCE_NOTE_CHARS + 50),
            owner_uid=PrincipalId("a"),
        )

        source = ReportSourceNote.from_note(note)

        assert len(source.text) == MAX_SOURCE_NOTE_CHARS
        assert source.owner_uid == "a"
        assert source.updated_at == note.updated_at
