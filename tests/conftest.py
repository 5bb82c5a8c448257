"""Test configuration and shared helpers."""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from dishka import AsyncContainer

from pairnotes.domain.model import Pair, Principal, Profile
from pairnotes.domain.service import InviteService, ProfileService
from pairnotes.domain.value import PrincipalId

UTC = timezone.utc


def make_principal(
    uid: str, email: str | None = None, name: str | None = None
) -> Principal:
    """Build a principal with a predictable email.

    Args:
        uid: Principal ID
        email: Defaults to ``<uid>@example.com``
        name: Display name, defaults to ``uid`` capitalised

    Returns:
        Principal
    """
    return Principal(
        id=PrincipalId(uid),
        email=email or f"{uid}@example.com",
        display_name=name or uid.capitalize(),
    )


async def register(env: AsyncContainer, principal: Principal) -> Profile:
    """Create the principal's profile and public directory entry."""
    profile_service = await env.get(ProfileService)
    return await profile_service.ensure_profile(principal)


async def pair_up(env: AsyncContainer, a: Principal, b: Principal) -> Pair:
    """Register both principals and pair them through the invite handshake.

    ``a`` invites ``b``, ``b`` accepts and ``a`` attaches as the sender, so
    both profiles point at the returned pair.
    """
    invite_service = await env.get(InviteService)
    await register(env, a)
    await register(env, b)
    invite = await invite_service.create_invite(a, b.email)
    pair = await invite_service.accept_invite(b.id, invite.id)
    await invite_service.attach_accepted_invite_as_sender(a.id, invite.id)
    return pair


async def eventually(
    check: Callable[[], Awaitable[bool]], timeout: float = 2.0, interval: float = 0.01
) -> None:
    """Wait until ``check`` returns True.

    Raises:
        AssertionError: If it is still False after ``timeout`` seconds
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not await check():
        if loop.time() >= deadline:
            raise AssertionError(f"Condition not met within {timeout}s")
        await asyncio.sleep(interval)


def utc(*args: int) -> datetime:
    """Shorthand for an aware UTC datetime."""
    return datetime(*args, tzinfo=UTC)
