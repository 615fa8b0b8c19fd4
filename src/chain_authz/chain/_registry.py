"""ProviderRegistry — the four provider chains and their resolution entry points."""

from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable
from typing import Any

from chain_authz._subjects import as_identity, validate_key, validate_subject
from chain_authz._types import IdentityLike, OnlineSubject, ProviderKind, TriState
from chain_authz.chain._async import AsyncOptionChain, AsyncPermissionChain
from chain_authz.chain._base import ProviderList, ProviderRegistration
from chain_authz.chain._sync import OptionChain, PermissionChain

__all__ = ["ProviderRegistry", "get_default_registry"]

_VALID_KINDS: tuple[ProviderKind, ...] = (
    "permission",
    "option",
    "offline_permission",
    "offline_option",
)


class ProviderRegistry:
    """Holds one append-only provider chain per query kind.

    Query kinds:

    - ``"permission"``: ``(online subject, key) -> TriState``
    - ``"option"``: ``(online subject, key) -> str | None``
    - ``"offline_permission"``: ``(UUID, key) -> Awaitable[TriState]``
    - ``"offline_option"``: ``(UUID, key) -> Awaitable[str | None]``

    Providers are meant to be added during startup. Adding one while
    resolutions are running is safe: resolutions started afterwards see
    it, resolutions already in flight do not.

    Example::

        registry = ProviderRegistry()
        registry.add_provider("permission", lambda subject, key: TriState.TRUE)
        registry.resolve_permission(player, "world.fly")  # TriState.TRUE
    """

    def __init__(self) -> None:
        self.permission = PermissionChain()
        self.option = OptionChain()
        self.offline_permission = AsyncPermissionChain()
        self.offline_option = AsyncOptionChain()

    def chain(self, kind: ProviderKind) -> ProviderList:
        """Return the chain for *kind*.

        Raises:
            ValueError: If *kind* is not a known query kind.
        """
        if kind not in _VALID_KINDS:
            raise ValueError(f"kind must be one of {_VALID_KINDS!r}, got {kind!r}")
        chain: ProviderList = getattr(self, kind)
        return chain

    def add_provider(
        self,
        kind: ProviderKind,
        fn: Callable[..., Any],
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> ProviderRegistration:
        """Append a provider to the chain for *kind*.

        Args:
            kind: One of ``"permission"``, ``"option"``,
                ``"offline_permission"``, ``"offline_option"``.
            fn: The provider callable, invoked as ``fn(subject, key)``.
            name: Name used in logs. Defaults to ``fn.__name__``.
            description: Defaults to the callable's docstring.

        Returns:
            The stored ``ProviderRegistration``.

        Example::

            registry.add_provider("option", lambda subject, key: None, name="noop")
        """
        chain = self.chain(kind)
        if not callable(fn):
            raise TypeError(f"provider must be callable, got {fn!r}")
        registration = ProviderRegistration(
            kind=kind,
            fn=fn,
            name=name if name is not None else getattr(fn, "__name__", repr(fn)),
            description=description if description is not None else (fn.__doc__ or ""),
        )
        chain.append(registration)
        return registration

    def providers(self, kind: ProviderKind) -> tuple[ProviderRegistration, ...]:
        """Snapshot of the providers registered for *kind*, in order."""
        return self.chain(kind).providers

    def resolve_permission(self, subject: OnlineSubject, key: str) -> TriState:
        """Ask the permission providers about *key* for an online subject."""
        validate_subject(subject)
        validate_key(key)
        return self.permission.resolve(subject, key)

    def resolve_option(self, subject: OnlineSubject, key: str) -> str | None:
        """Ask the option providers for the value of *key*."""
        validate_subject(subject)
        validate_key(key)
        return self.option.resolve(subject, key)

    def resolve_offline_permission(
        self, identity: uuid.UUID | IdentityLike, key: str
    ) -> Awaitable[TriState]:
        """Start an offline permission resolution.

        Validation happens immediately, before the returned awaitable is
        awaited and before any provider runs.
        """
        uid = as_identity(identity)
        validate_key(key)
        return self.offline_permission.resolve(uid, key)

    def resolve_offline_option(
        self, identity: uuid.UUID | IdentityLike, key: str
    ) -> Awaitable[str | None]:
        """Start an offline option resolution. Validates eagerly."""
        uid = as_identity(identity)
        validate_key(key)
        return self.offline_option.resolve(uid, key)

    def clear(self) -> None:
        """Remove all registered providers from every chain.

        Primarily useful in test teardown.
        """
        for kind in _VALID_KINDS:
            self.chain(kind).clear()


# Module-level default registry (singleton).
_default_registry = ProviderRegistry()


def get_default_registry() -> ProviderRegistry:
    """Return the global default (singleton) provider registry.

    This is the registry used by ``@provider``, ``check``, ``get_option``
    and the other module-level APIs when no explicit registry is given.
    """
    return _default_registry
