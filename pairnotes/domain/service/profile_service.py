"""Profile domain service."""

import logfire
from pydantic import ValidationError

from pairnotes.domain.error import InvalidInputError, NotFoundError
from pairnotes.domain.model import DirectoryEntry, Principal, Profile
from pairnotes.domain.model.common import utcnow
from pairnotes.domain.repository import DirectoryRepository, ProfileRepository
from pairnotes.domain.value import Email, PrincipalId

from .base import Service


def _normalize_email(raw: str) -> str:
    try:
        return Email(raw).root
    except ValidationError as e:
        raise InvalidInputError("Email is not valid") from e


class ProfileService(Service):
    """Domain service for a principal's own profile and directory entry.

    A principal only ever writes its own profile and its own directory entry.
    """

    def __init__(
        self,
        profile_repository: ProfileRepository,
        directory_repository: DirectoryRepository,
    ) -> None:
        """Initialize profile service.

        Args:
            profile_repository: Profile repository
            directory_repository: Public directory repository
        """
        self.profile_repository = profile_repository
        self.directory_repository = directory_repository

    async def ensure_profile(self, principal: Principal) -> Profile:
        """Create the principal's profile and directory entry if missing.

        Called after every sign-in and sign-up. Existing profiles are
        returned untouched; a missing directory entry is recreated from
        the profile.

        Args:
            principal: Authenticated principal

        Returns:
            The principal's profile
        """
        with logfire.span("profile_service.ensure_profile", principal_id=principal.id):
            profile = await self.profile_repository.find_by_id(principal.id)
            if profile is None:
                now = utcnow()
                email = principal.email
                profile = Profile(
                    id=principal.id,
                    email=_normalize_email(email) if email else None,
                    name=principal.display_name,
                    created_at=now,
                    updated_at=now,
                )
                await self.profile_repository.save(profile)
                logfire.info("Profile created", principal_id=principal.id)

            if profile.email:
                entry = await self.directory_repository.find_by_id(principal.id)
                if entry is None:
                    await self._publish(profile)
            return profile

    async def get_profile(self, me: PrincipalId) -> Profile:
        """Get the caller's profile.

        Raises:
            NotFoundError: If the profile was never created
        """
        profile = await self.profile_repository.find_by_id(me)
        if profile is None:
            raise NotFoundError("Profile", me)
        return profile

    async def update_own_profile(
        self, me: PrincipalId, name: str | None = None, email: str | None = None
    ) -> Profile:
        """Update the caller's name and/or email and mirror them publicly.

        Args:
            me: Acting principal
            name: New display name (None leaves it unchanged)
            email: New email, normalised (None leaves it unchanged)

        Returns:
            Updated profile

        Raises:
            NotFoundError: If the profile does not exist
            InvalidInputError: If the email is not valid
        """
        with logfire.span("profile_service.update_own_profile", principal_id=me):
            profile = await self.get_profile(me)
            update: dict[str, object] = {"updated_at": utcnow()}
            if name is not None:
                update["name"] = name.strip() or None
            if email is not None:
                update["email"] = _normalize_email(email)
            updated = profile.model_copy(update=update)
            await self.profile_repository.save(updated)
            if updated.email:
                await self._publish(updated)
            logfire.info("Profile updated", principal_id=me)
            return updated

    async def _publish(self, profile: Profile) -> DirectoryEntry:
        entry = DirectoryEntry(
            id=profile.id,
            email=profile.email,
            name=profile.name,
            updated_at=utcnow(),
        )
        return await self.directory_repository.save(entry)
