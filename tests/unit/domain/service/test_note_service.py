"""Unit tests for NoteService."""

import pytest

from pairnotes.domain.error import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    NotInPairError,
)
from pairnotes.domain.repository import NoteRepository
from pairnotes.domain.service import NoteService, PairService
from pairnotes.domain.value import NoteId
from tests.conftest import make_principal, pair_up, register
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ALICE = make_principal("alice", name="Alice A.")
BOB = make_principal("bob")


class TestAddNote:
    """Tests for NoteService.add."""

    @pytest.mark.asyncio
    async def test_add_note_in_pair(self, unit_env):
        # Arrange
        note_service = await unit_env.get(NoteService)
        note_repo = await unit_env.get(NoteRepository)
        pair = await pair_up(unit_env, ALICE, BOB)

        # Act
        note = await note_service.add(ALICE.id, "Picnic on Sunday")

        # Assert
        assert note.pair_id == pair.id
        assert note.owner_uid == ALICE.id
        assert note.owner_name == "Alice A."
        assert note.text == "Picnic on Sunday"
        assert await note_repo.find_by_id(pair.id, note.id) == note

    @pytest.mark.asyncio
    async def test_add_note_without_pair(self, unit_env):
        note_service = await unit_env.get(NoteService)
        await register(unit_env, ALICE)

        with pytest.raises(NotInPairError):
            await note_service.add(ALICE.id, "Hello")

    @pytest.mark.asyncio
    async def test_add_note_after_partner_broke_up(self, unit_env):
        """A profile still naming an ended pair cannot add notes."""
        note_service = await unit_env.get(NoteService)
        pair_service = await unit_env.get(PairService)
        await pair_up(unit_env, ALICE, BOB)
        await pair_service.break_pair(BOB.id)

        with pytest.raises(NotInPairError):
            await note_service.add(ALICE.id, "Hello")

    @pytest.mark.asyncio
    async def test_blank_note_rejected(self, unit_env):
        note_service = await unit_env.get(NoteService)
        await pair_up(unit_env, ALICE, BOB)

        with pytest.raises(InvalidInputError):
            await note_service.add(ALICE.id, "   ")


class TestEditNotes:
    """Tests for update, remove and list_mine."""

    @pytest.mark.asyncio
    async def test_update_own_note(self, unit_env):
        note_service = await unit_env.get(NoteService)
        await pair_up(unit_env, ALICE, BOB)
        note = await note_service.add(ALICE.id, "Draft")

        updated = await note_service.update(ALICE.id, note.id, "Final")

        assert updated.text == "Final"
        assert updated.created_at == note.created_at
        assert updated.updated_at >= note.updated_at

    @pytest.mark.asyncio
    async def test_partner_cannot_update_note(self, unit_env):
        note_service = await unit_env.get(NoteService)
        await pair_up(unit_env, ALICE, BOB)
        note = await note_service.add(ALICE.id, "Mine")

        with pytest.raises(ForbiddenError):
            await note_service.update(BOB.id, note.id, "Yours now")

    @pytest.mark.asyncio
    async def test_update_missing_note(self, unit_env):
        note_service = await unit_env.get(NoteService)
        await pair_up(unit_env, ALICE, BOB)

        with pytest.raises(NotFoundError):
            await note_service.update(ALICE.id, NoteId("missing"), "Text")

    @pytest.mark.asyncio
    async def test_remove_own_note(self, unit_env):
        note_service = await unit_env.get(NoteService)
        note_repo = await unit_env.get(NoteRepository)
        pair = await pair_up(unit_env, ALICE, BOB)
        note = await note_service.add(ALICE.id, "Temporary")

        await note_service.remove(ALICE.id, note.id)

        assert await note_repo.find_by_id(pair.id, note.id) is None

    @pytest.mark.asyncio
    async def test_partner_cannot_remove_note(self, unit_env):
        note_service = await unit_env.get(NoteService)
        await pair_up(unit_env, ALICE, BOB)
        note = await note_service.add(ALICE.id, "Mine")

        with pytest.raises(ForbiddenError):
            await note_service.remove(BOB.id, note.id)

    @pytest.mark.asyncio
    async def test_list_mine_only_returns_own_notes(self, unit_env):
        note_service = await unit_env.get(NoteService)
        await pair_up(unit_env, ALICE, BOB)
        first = await note_service.add(ALICE.id, "First")
        second = await note_service.add(ALICE.id, "Second")
        await note_service.add(BOB.id, "Bob's")

        notes = await note_service.list_mine(ALICE.id)

        assert {n.id for n in notes} == {first.id, second.id}
