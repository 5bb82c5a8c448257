"""Authentication use cases."""

from .get_current_user import GetCurrentUserUseCase
from .sign_in import SignInUseCase
from .sign_out import SignOutUseCase
from .sign_up import SignUpUseCase

__all__ = [
    "GetCurrentUserUseCase",
    "SignInUseCase",
    "SignOutUseCase",
    "SignUpUseCase",
]
