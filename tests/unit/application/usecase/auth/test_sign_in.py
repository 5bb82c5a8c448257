"""Unit tests for the auth use cases."""

import pytest
from dishka import AsyncContainer

from pairnotes.application.session import SessionRegistry
from pairnotes.application.usecase.auth import (
    GetCurrentUserUseCase,
    SignInUseCase,
    SignOutUseCase,
    SignUpUseCase,
)
from pairnotes.application.usecase.auth.get_current_user import GetCurrentUserRequest
from pairnotes.application.usecase.auth.sign_in import SignInRequest
from pairnotes.application.usecase.auth.sign_out import SignOutRequest
from pairnotes.application.usecase.auth.sign_up import SignUpRequest
from pairnotes.domain.error import AuthenticationError, AuthErrorKind
from pairnotes.domain.repository import DirectoryRepository, ProfileRepository
from pairnotes.domain.service import IdentityClient, JWTService
from pairnotes.domain.value import PrincipalId
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestSignUpUseCase:
    """Tests for SignUpUseCase."""

    @pytest.mark.asyncio
    async def test_sign_up_creates_profile_and_session(self, unit_env: AsyncContainer):
        """Sign-up should register, create the profile and start a session."""
        # Arrange
        sign_up = await unit_env.get(SignUpUseCase)
        profile_repo = await unit_env.get(ProfileRepository)
        directory_repo = await unit_env.get(DirectoryRepository)
        registry = await unit_env.get(SessionRegistry)
        jwt_service = await unit_env.get(JWTService)

        # Act
        response = await sign_up.execute(
            SignUpRequest(email="alice@example.com", password="secret1", name="Alice")
        )

        # Assert
        user_id = PrincipalId(response.user_id)
        profile = await profile_repo.find_by_id(user_id)
        assert profile.email == "alice@example.com"
        assert profile.name == "Alice"
        assert await directory_repo.find_by_id(user_id) is not None
        assert registry.get(user_id).running

        principal = jwt_service.principal_from_token(response.token)
        assert principal.id == user_id

    @pytest.mark.asyncio
    async def test_sign_up_duplicate_email(self, unit_env: AsyncContainer):
        sign_up = await unit_env.get(SignUpUseCase)
        request = SignUpRequest(email="alice@example.com", password="secret1")
        await sign_up.execute(request)

        with pytest.raises(AuthenticationError) as exc_info:
            await sign_up.execute(request)
        assert exc_info.value.auth_kind == AuthErrorKind.EMAIL_IN_USE


class TestSignInUseCase:
    """Tests for SignInUseCase."""

    @pytest.mark.asyncio
    async def test_sign_in_recreates_missing_profile(self, unit_env: AsyncContainer):
        """An account without a profile gets one on sign-in."""
        # Arrange
        identity_client = await unit_env.get(IdentityClient)
        principal = await identity_client.sign_up("bob@example.com", "secret1", "Bob")
        sign_in = await unit_env.get(SignInUseCase)
        profile_repo = await unit_env.get(ProfileRepository)

        # Act
        response = await sign_in.execute(
            SignInRequest(email="bob@example.com", password="secret1")
        )

        # Assert
        assert response.user_id == principal.id
        assert response.display_name == "Bob"
        assert await profile_repo.find_by_id(principal.id) is not None

    @pytest.mark.asyncio
    async def test_sign_in_unknown_user(self, unit_env: AsyncContainer):
        sign_in = await unit_env.get(SignInUseCase)

        with pytest.raises(AuthenticationError) as exc_info:
            await sign_in.execute(
                SignInRequest(email="ghost@example.com", password="secret1")
            )
        assert exc_info.value.auth_kind == AuthErrorKind.USER_NOT_FOUND


class TestSignOutUseCase:
    """Tests for SignOutUseCase."""

    @pytest.mark.asyncio
    async def test_sign_out_stops_session(self, unit_env: AsyncContainer):
        # Arrange
        sign_up = await unit_env.get(SignUpUseCase)
        sign_out = await unit_env.get(SignOutUseCase)
        registry = await unit_env.get(SessionRegistry)
        identity_client = await unit_env.get(IdentityClient)
        response = await sign_up.execute(
            SignUpRequest(email="alice@example.com", password="secret1")
        )
        session = registry.get(PrincipalId(response.user_id))

        # Act
        result = await sign_out.execute(
            SignOutRequest(user_id=response.user_id, email=response.email)
        )

        # Assert
        assert result.success is True
        assert not session.running
        assert registry.get(PrincipalId(response.user_id)) is None
        assert identity_client.signed_out == [response.user_id]


class TestGetCurrentUserUseCase:
    """Tests for GetCurrentUserUseCase."""

    @pytest.mark.asyncio
    async def test_returns_profile_for_token(self, unit_env: AsyncContainer):
        sign_up = await unit_env.get(SignUpUseCase)
        get_current_user = await unit_env.get(GetCurrentUserUseCase)
        response = await sign_up.execute(
            SignUpRequest(email="alice@example.com", password="secret1", name="Alice")
        )

        current = await get_current_user.execute(
            GetCurrentUserRequest(token=response.token)
        )

        assert current.user_id == response.user_id
        assert current.email == "alice@example.com"
        assert current.name == "Alice"
        assert current.pair_id is None
