"""Unit tests for ProfileService."""

import pytest

from pairnotes.domain.error import InvalidInputError, NotFoundError
from pairnotes.domain.repository import DirectoryRepository
from pairnotes.domain.service import ProfileService
from pairnotes.domain.value import Email, PrincipalId
from tests.conftest import make_principal
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestEnsureProfile:
    """Tests for ensure_profile."""

    @pytest.mark.asyncio
    async def test_creates_profile_and_directory_entry(self, unit_env):
        # Arrange
        profile_service = await unit_env.get(ProfileService)
        directory_repo = await unit_env.get(DirectoryRepository)
        principal = make_principal("alice", email="Alice@Example.com", name="Alice")

        # Act
        profile = await profile_service.ensure_profile(principal)

        # Assert
        assert profile.id == "alice"
        assert profile.email == "alice@example.com"
        assert profile.name == "Alice"
        assert profile.pair_id is None

        entry = await directory_repo.find_by_email(Email("ALICE@example.com"))
        assert entry is not None
        assert entry.id == "alice"
        assert entry.name == "Alice"

    @pytest.mark.asyncio
    async def test_existing_profile_returned_untouched(self, unit_env):
        """Signing in again does not overwrite a renamed profile."""
        profile_service = await unit_env.get(ProfileService)
        principal = make_principal("alice", name="Alice")
        await profile_service.ensure_profile(principal)
        renamed = await profile_service.update_own_profile(principal.id, name="Ally")

        again = await profile_service.ensure_profile(principal)

        assert again.name == "Ally"
        assert again == renamed


class TestUpdateOwnProfile:
    """Tests for update_own_profile."""

    @pytest.mark.asyncio
    async def test_update_name_and_email_mirrors_directory(self, unit_env):
        # Arrange
        profile_service = await unit_env.get(ProfileService)
        directory_repo = await unit_env.get(DirectoryRepository)
        await profile_service.ensure_profile(make_principal("alice"))

        # Act
        updated = await profile_service.update_own_profile(
            PrincipalId("alice"), name=" Ally ", email="ALLY@example.com"
        )

        # Assert
        assert updated.name == "Ally"
        assert updated.email == "ally@example.com"
        entry = await directory_repo.find_by_id(PrincipalId("alice"))
        assert entry.email == "ally@example.com"
        assert entry.name == "Ally"

    @pytest.mark.asyncio
    async def test_update_missing_profile(self, unit_env):
        profile_service = await unit_env.get(ProfileService)

        with pytest.raises(NotFoundError):
            await profile_service.update_own_profile(PrincipalId("ghost"), name="X")

    @pytest.mark.asyncio
    async def test_update_with_blank_email_rejected(self, unit_env):
        profile_service = await unit_env.get(ProfileService)
        await profile_service.ensure_profile(make_principal("alice"))

        with pytest.raises(InvalidInputError):
            await profile_service.update_own_profile(PrincipalId("alice"), email="  ")
