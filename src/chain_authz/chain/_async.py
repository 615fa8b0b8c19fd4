"""Asynchronous provider chains for offline (identity-keyed) subjects."""

from __future__ import annotations

import asyncio
import uuid
from typing import ClassVar

from chain_authz._types import ProviderKind, TriState
from chain_authz.chain._base import ProviderList

__all__ = ["AsyncOptionChain", "AsyncPermissionChain"]


class AsyncPermissionChain(ProviderList):
    """Resolves permission checks for identities that may be offline.

    Each provider returns an awaitable (a coroutine, future or task).
    Providers run strictly one after another: provider N is only called
    once provider N-1's awaitable has completed without a definite answer,
    and nothing after the first definite answer is called at all.
    Results are converted like the synchronous chain's, so a value other
    than ``TriState``, ``bool`` or ``None`` raises ``TypeError``.

    Provider awaitables are shielded: cancelling the resolution stops the
    chain but leaves the provider's in-flight work running to completion.

    Example::

        chain = AsyncPermissionChain()
        state = await chain.resolve(player_uuid, "world.fly")
    """

    kind: ClassVar[ProviderKind] = "offline_permission"

    async def resolve(self, identity: uuid.UUID, key: str) -> TriState:
        consulted = 0
        for registration in self._providers:
            consulted += 1
            state = await asyncio.shield(registration.fn(identity, key))
            state = self._to_state(registration, state)
            if state is not TriState.UNDEFINED:
                self._log(identity, key, state, registration, consulted)
                return state
        self._log(identity, key, TriState.UNDEFINED, None, consulted)
        return TriState.UNDEFINED


class AsyncOptionChain(ProviderList):
    """Resolves option lookups for identities that may be offline."""

    kind: ClassVar[ProviderKind] = "offline_option"

    async def resolve(self, identity: uuid.UUID, key: str) -> str | None:
        consulted = 0
        for registration in self._providers:
            consulted += 1
            value = await asyncio.shield(registration.fn(identity, key))
            if value is not None:
                self._log(identity, key, value, registration, consulted)
                return value
        self._log(identity, key, None, None, consulted)
        return None
