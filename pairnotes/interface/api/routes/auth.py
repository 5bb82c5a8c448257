"""Authentication routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response
from pydantic import BaseModel

from pairnotes.application.usecase.auth import (
    GetCurrentUserUseCase,
    SignInUseCase,
    SignOutUseCase,
    SignUpUseCase,
)
from pairnotes.application.usecase.auth.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
)
from pairnotes.application.usecase.auth.sign_in import AuthResponse, SignInRequest
from pairnotes.application.usecase.auth.sign_out import (
    SignOutRequest,
    SignOutResponse,
)
from pairnotes.application.usecase.auth.sign_up import SignUpRequest
from pairnotes.config import Settings
from pairnotes.domain.error import NotFoundError
from pairnotes.domain.service import JWTService
from pairnotes.interface.api.dependencies import clear_auth_cookie, set_auth_cookie
from pairnotes.util.jwt import JWTError
from pairnotes.util.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class AuthStatusResponse(BaseModel):
    """Response for checking authentication status.

    ``/auth/me`` answers ``authenticated=false`` instead of failing, so
    clients can check the session without generating errors.
    """

    authenticated: bool
    user: GetCurrentUserResponse | None = None


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def sign_up(
    request: SignUpRequest,
    response: Response,
    sign_up_use_case: FromDishka[SignUpUseCase],
    settings: FromDishka[Settings],
) -> AuthResponse:
    """Register with email and password, then sign in.

    Example:
        POST /auth/signup
        {"email": "alice@example.com", "password": "secret1", "name": "Alice"}

        Sets cookie: auth_token
    """
    result = await sign_up_use_case.execute(request)
    set_auth_cookie(response, result.token, settings)
    logger.info("Sign-up complete for user %s", result.user_id)
    return result


@router.post("/signin", response_model=AuthResponse)
async def sign_in(
    request: SignInRequest,
    response: Response,
    sign_in_use_case: FromDishka[SignInUseCase],
    settings: FromDishka[Settings],
) -> AuthResponse:
    """Sign in with email and password and start the pair session."""
    result = await sign_in_use_case.execute(request)
    set_auth_cookie(response, result.token, settings)
    return result


@router.post("/signout", response_model=SignOutResponse)
async def sign_out(
    response: Response,
    sign_out_use_case: FromDishka[SignOutUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> SignOutResponse:
    """Stop the pair session and clear the session cookie.

    Always succeeds; without a valid cookie there is no session to stop.
    """
    principal = jwt_service.principal_from_token(auth_token)
    clear_auth_cookie(response)
    if principal is None:
        return SignOutResponse(success=True, message="Not signed in")
    return await sign_out_use_case.execute(
        SignOutRequest(
            user_id=principal.id,
            email=principal.email,
            name=principal.display_name,
        )
    )


@router.get("/me", response_model=AuthStatusResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AuthStatusResponse:
    """Get current user if authenticated, or return unauthenticated status."""
    if not auth_token:
        return AuthStatusResponse(authenticated=False)

    try:
        user = await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=auth_token)
        )
        return AuthStatusResponse(authenticated=True, user=user)

    except JWTError:
        # Invalid or expired token - expected, not an error
        return AuthStatusResponse(authenticated=False)
    except NotFoundError:
        # Valid token but no profile (orphaned token)
        return AuthStatusResponse(authenticated=False)

