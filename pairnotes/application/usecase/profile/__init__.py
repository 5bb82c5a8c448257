"""Profile use cases."""

from .update_profile import UpdateProfileUseCase

__all__ = ["UpdateProfileUseCase"]
