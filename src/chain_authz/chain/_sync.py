"""Synchronous provider chains for online subjects."""

from __future__ import annotations

from typing import ClassVar

from chain_authz._types import OnlineSubject, ProviderKind, TriState
from chain_authz.chain._base import ProviderList

__all__ = ["OptionChain", "PermissionChain"]


class PermissionChain(ProviderList):
    """Resolves permission checks against online subjects.

    Providers are called in registration order with ``(subject, key)``
    and return a ``TriState`` (plain ``bool``/``None`` is accepted and
    converted; any other result raises ``TypeError``). The first answer
    other than ``UNDEFINED`` wins and no later provider is called. A
    provider that raises aborts the resolution; the exception reaches the
    caller unchanged.

    Example::

        chain = PermissionChain()
        chain.append(ProviderRegistration("permission", my_fn, "mine", ""))
        chain.resolve(player, "world.fly")  # TriState.TRUE / FALSE / UNDEFINED
    """

    kind: ClassVar[ProviderKind] = "permission"

    def resolve(self, subject: OnlineSubject, key: str) -> TriState:
        consulted = 0
        for registration in self._providers:
            consulted += 1
            state = registration.fn(subject, key)
            state = self._to_state(registration, state)
            if state is not TriState.UNDEFINED:
                self._log(subject, key, state, registration, consulted)
                return state
        self._log(subject, key, TriState.UNDEFINED, None, consulted)
        return TriState.UNDEFINED


class OptionChain(ProviderList):
    """Resolves option (metadata) lookups against online subjects.

    Providers return the option value as a string, or ``None`` when they
    have no value. The first non-``None`` value wins.
    """

    kind: ClassVar[ProviderKind] = "option"

    def resolve(self, subject: OnlineSubject, key: str) -> str | None:
        consulted = 0
        for registration in self._providers:
            consulted += 1
            value = registration.fn(subject, key)
            if value is not None:
                self._log(subject, key, value, registration, consulted)
                return value
        self._log(subject, key, None, None, consulted)
        return None
