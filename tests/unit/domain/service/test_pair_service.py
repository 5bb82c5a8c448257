"""Unit tests for PairService."""

import pytest

from pairnotes.domain.error import ForbiddenError, NotInPairError
from pairnotes.domain.model import Pair
from pairnotes.domain.repository import PairRepository, ProfileRepository
from pairnotes.domain.service import PairService
from pairnotes.domain.value import PairId, PairStatus, PrincipalId
from pairnotes.persistence.repository.inmemory import InMemoryDocumentStore
from pairnotes.persistence.repository.inmemory.store import pair_path
from tests.conftest import make_principal, pair_up, register
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ALICE = make_principal("alice")
BOB = make_principal("bob")


class TestBreakPair:
    """Tests for break_pair method."""

    @pytest.mark.asyncio
    async def test_break_pair_ends_pair_and_clears_caller(self, unit_env):
        """Breaking should end the pair and clear only the caller's profile."""
        # Arrange
        pair_service = await unit_env.get(PairService)
        profile_repo = await unit_env.get(ProfileRepository)
        pair_repo = await unit_env.get(PairRepository)
        pair = await pair_up(unit_env, ALICE, BOB)

        # Act
        ended = await pair_service.break_pair(ALICE.id)

        # Assert
        assert ended.status == PairStatus.ENDED
        assert ended.ended_by == ALICE.id
        assert ended.ended_at is not None

        stored = await pair_repo.find_by_id(pair.id)
        assert stored.status == PairStatus.ENDED

        alice_profile = await profile_repo.find_by_id(ALICE.id)
        assert alice_profile.pair_id is None
        assert alice_profile.partner_id is None
        assert alice_profile.partner_email is None

        # The partner is corrected later by its own reconciler
        bob_profile = await profile_repo.find_by_id(BOB.id)
        assert bob_profile.pair_id == pair.id

    @pytest.mark.asyncio
    async def test_break_pair_without_pair_raises(self, unit_env):
        pair_service = await unit_env.get(PairService)
        await register(unit_env, ALICE)

        with pytest.raises(NotInPairError):
            await pair_service.break_pair(ALICE.id)

    @pytest.mark.asyncio
    async def test_break_pair_not_member_forbidden(self, unit_env):
        """A profile pointing at someone else's pair cannot end it."""
        # Arrange
        pair_service = await unit_env.get(PairService)
        profile_repo = await unit_env.get(ProfileRepository)
        store = await unit_env.get(InMemoryDocumentStore)
        profile = await register(unit_env, ALICE)

        other = Pair(
            id=PairId("bob_carol"),
            members=[PrincipalId("bob"), PrincipalId("carol")],
        )
        await store.write(pair_path(other.id), other)
        await profile_repo.save(profile.model_copy(update={"pair_id": other.id}))
        before = await profile_repo.find_by_id(ALICE.id)
        pair_version = store.version(pair_path(other.id))

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await pair_service.break_pair(ALICE.id)

        stored = store.get(pair_path(other.id))
        assert stored.status == PairStatus.ACTIVE
        assert store.version(pair_path(other.id)) == pair_version
        assert await profile_repo.find_by_id(ALICE.id) == before

    @pytest.mark.asyncio
    async def test_break_pair_missing_record_clears_profile(self, unit_env):
        """A dangling pair reference is cleared and reported as None."""
        # Arrange
        pair_service = await unit_env.get(PairService)
        profile_repo = await unit_env.get(ProfileRepository)
        profile = await register(unit_env, ALICE)
        await profile_repo.save(
            profile.with_pairing(
                PairId("alice_ghost"), PrincipalId("ghost"), None, profile.updated_at
            )
        )

        # Act
        result = await pair_service.break_pair(ALICE.id)

        # Assert
        assert result is None
        assert (await profile_repo.find_by_id(ALICE.id)).pair_id is None


class TestSyncEndedPairOnOpen:
    """Tests for sync_ended_pair_on_open method."""

    @pytest.mark.asyncio
    async def test_active_pair_left_alone(self, unit_env):
        pair_service = await unit_env.get(PairService)
        profile_repo = await unit_env.get(ProfileRepository)
        pair = await pair_up(unit_env, ALICE, BOB)

        cleared = await pair_service.sync_ended_pair_on_open(BOB.id, pair.id)

        assert cleared is False
        assert (await profile_repo.find_by_id(BOB.id)).pair_id == pair.id

    @pytest.mark.asyncio
    async def test_ended_pair_clears_partner(self, unit_env):
        """After one side breaks, the other side is cleared on open."""
        # Arrange
        pair_service = await unit_env.get(PairService)
        profile_repo = await unit_env.get(ProfileRepository)
        pair = await pair_up(unit_env, ALICE, BOB)
        await pair_service.break_pair(ALICE.id)

        # Act
        cleared = await pair_service.sync_ended_pair_on_open(BOB.id, pair.id)

        # Assert
        assert cleared is True
        bob_profile = await profile_repo.find_by_id(BOB.id)
        assert bob_profile.pair_id is None
        assert bob_profile.partner_id is None

    @pytest.mark.asyncio
    async def test_missing_pair_clears_profile(self, unit_env):
        pair_service = await unit_env.get(PairService)
        await register(unit_env, ALICE)

        assert await pair_service.sync_ended_pair_on_open(
            ALICE.id, PairId("alice_ghost")
        )


class TestActivePair:
    """Tests for get_active_pair method."""

    @pytest.mark.asyncio
    async def test_active_pair_found_for_both_members(self, unit_env):
        pair_service = await unit_env.get(PairService)
        pair = await pair_up(unit_env, ALICE, BOB)

        assert (await pair_service.get_active_pair(ALICE.id)).id == pair.id
        assert (await pair_service.get_active_pair(BOB.id)).id == pair.id

    @pytest.mark.asyncio
    async def test_no_active_pair_after_break(self, unit_env):
        pair_service = await unit_env.get(PairService)
        await pair_up(unit_env, ALICE, BOB)
        await pair_service.break_pair(BOB.id)

        assert await pair_service.get_active_pair(ALICE.id) is None

    @pytest.mark.asyncio
    async def test_watch_active_pair_sees_pairing_and_break(self, unit_env):
        # Arrange
        pair_service = await unit_env.get(PairService)
        feed = pair_service.watch_active_pair(ALICE.id)
        assert await anext(feed) is None

        # Act
        pair = await pair_up(unit_env, ALICE, BOB)
        paired = await anext(feed)
        await pair_service.break_pair(BOB.id)
        broken = await anext(feed)
        await feed.aclose()

        # Assert
        assert paired.id == pair.id
        assert broken is None
