"""@provider decorator — register provider functions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from chain_authz._types import ProviderKind
from chain_authz.chain._registry import ProviderRegistry, get_default_registry

__all__ = ["provider"]

F = TypeVar("F", bound=Callable[..., Any])


def provider(
    kind: ProviderKind,
    *,
    registry: ProviderRegistry | None = None,
) -> Callable[[F], F]:
    """Decorator that appends a provider function to the chain for *kind*.

    Registration order follows decoration order, so the first decorated
    provider is consulted first.

    Args:
        kind: The query kind the function answers.
        registry: Optional custom registry. Defaults to the global registry.

    Returns:
        A decorator that registers the function and returns it unchanged.

    Example::

        @provider("permission")
        def operators(subject: Player, key: str) -> TriState:
            return TriState.TRUE if subject.is_op else TriState.UNDEFINED

        @provider("offline_option")
        async def stored_prefix(identity: UUID, key: str) -> str | None:
            return await store.get_option(identity, key)
    """

    def decorator(fn: F) -> F:
        target = registry if registry is not None else get_default_registry()
        target.add_provider(kind, fn, name=fn.__name__, description=fn.__doc__ or "")
        return fn

    return decorator
