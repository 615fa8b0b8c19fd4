"""Option lookups — resolve an option value, coerce it, apply a default."""

from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable
from typing import Any

from chain_authz._coercion import coerce_value
from chain_authz._subjects import as_identity, reduce_subject, validate_key, validate_subject
from chain_authz._types import IdentityLike
from chain_authz.chain._registry import ProviderRegistry, get_default_registry
from chain_authz.config._config import get_global_config

__all__ = ["get_offline_option", "get_option"]


def _finish(
    subject: object,
    key: str,
    value: str | None,
    default: Any,
    transform: Callable[[str], Any] | None,
) -> Any:
    result = value
    if value is not None and transform is not None:
        result = coerce_value(value, transform)
    if result is None:
        if default is not None and get_global_config().log_decisions:
            from chain_authz._audit import log_fallback

            log_fallback(shape="option", subject=subject, key=key, result=default)
        return default
    return result


def get_option(
    subject: object,
    key: str,
    default: Any = None,
    *,
    transform: Callable[[str], Any] | None = None,
    registry: ProviderRegistry | None = None,
) -> Any:
    """Look up option *key* for *subject*.

    Without *transform* the raw string is returned. With *transform*, the
    resolved string is passed through it; a ``ValueError`` or a ``None``
    result counts as "no value". *default* is returned whenever there is
    no value.

    Args:
        subject: An online subject, or anything the subject reducer accepts.
        key: The option key.
        default: Returned when no provider (or the transform) yields a value.
        transform: Optional ``str -> T`` conversion, e.g. ``int``.
        registry: Optional custom registry. Defaults to the global registry.

    Example::

        prefix = get_option(player, "prefix", "")
        weight = get_option(player, "group-weight", 0, transform=int)
    """
    validate_subject(subject)
    validate_key(key)
    online = reduce_subject(subject)
    target = registry if registry is not None else get_default_registry()
    value = target.resolve_option(online, key)
    return _finish(subject, key, value, default, transform)


def get_offline_option(
    identity: uuid.UUID | IdentityLike,
    key: str,
    default: Any = None,
    *,
    transform: Callable[[str], Any] | None = None,
    registry: ProviderRegistry | None = None,
) -> Awaitable[Any]:
    """Offline counterpart of :func:`get_option`.

    Arguments are validated immediately, before the returned awaitable
    is awaited.

    Example::

        home = await get_offline_option(player_uuid, "home-world", "overworld")
    """
    validate_key(key)
    target = registry if registry is not None else get_default_registry()
    pending = target.resolve_offline_option(as_identity(identity), key)

    async def _resolve() -> Any:
        value = await pending
        return _finish(identity, key, value, default, transform)

    return _resolve()
