"""Permission checks — resolve a permission and apply a fallback policy."""

from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable

from chain_authz._subjects import (
    as_identity,
    clamp_level,
    reduce_subject,
    validate_key,
    validate_subject,
)
from chain_authz._types import IdentityLike, LevelSource, OnlineSubject, TriState
from chain_authz.chain._registry import ProviderRegistry, get_default_registry
from chain_authz.config._config import get_global_config
from chain_authz.exceptions import AuthorizationDenied, InvalidQueryError

__all__ = [
    "authorize",
    "check",
    "check_level",
    "check_offline",
    "check_offline_level",
    "check_or_else",
    "get_offline_permission_value",
    "get_permission_value",
    "require",
]


def _target(registry: ProviderRegistry | None) -> ProviderRegistry:
    return registry if registry is not None else get_default_registry()


def _fallback(shape: str, subject: object, key: str, value: bool) -> bool:
    if get_global_config().log_decisions:
        from chain_authz._audit import log_fallback

        log_fallback(shape=shape, subject=subject, key=key, result=value)
    return value


def _resolve_online(
    subject: object, key: str, registry: ProviderRegistry | None
) -> tuple[OnlineSubject, TriState]:
    validate_subject(subject)
    validate_key(key, field="permission")
    online = reduce_subject(subject)
    return online, _target(registry).resolve_permission(online, key)


# ---------------------------------------------------------------------------
# Online subjects
# ---------------------------------------------------------------------------


def get_permission_value(
    subject: object,
    key: str,
    *,
    registry: ProviderRegistry | None = None,
) -> TriState:
    """Resolve the raw ``TriState`` for *key* on *subject*.

    Non-online subjects are reduced through the configured subject
    reducer first.

    Raises:
        InvalidQueryError: If *subject* is ``None`` or *key* is empty.
        UnsupportedSubjectError: If *subject* cannot be reduced.

    Example::

        state = get_permission_value(player, "world.fly")
        if state is TriState.UNDEFINED:
            ...
    """
    _online, state = _resolve_online(subject, key, registry)
    return state


def check(
    subject: object,
    key: str,
    default: bool | None = None,
    *,
    registry: ProviderRegistry | None = None,
) -> bool:
    """Check *key* on *subject*, using *default* when no provider answers.

    Args:
        subject: An online subject, or anything the subject reducer accepts.
        key: The permission key.
        default: Literal fallback. ``None`` uses the configured
            ``default_permission`` (``False`` unless changed).
        registry: Optional custom registry. Defaults to the global registry.

    Example::

        if check(player, "world.fly", True):
            enable_flight(player)
    """
    state = get_permission_value(subject, key, registry=registry)
    if state is TriState.UNDEFINED:
        fallback = default if default is not None else get_global_config().default_permission
        return _fallback("default", subject, key, fallback)
    return state.get()


def check_or_else(
    subject: object,
    key: str,
    fallback: Callable[[], bool],
    *,
    registry: ProviderRegistry | None = None,
) -> bool:
    """Check *key*, calling *fallback* only when no provider answers.

    Example::

        check_or_else(player, "shop.discount", lambda: player.is_vip)
    """
    state = get_permission_value(subject, key, registry=registry)
    return state.or_else_get(lambda: _fallback("predicate", subject, key, fallback()))


def check_level(
    subject: object,
    key: str,
    level: int,
    *,
    registry: ProviderRegistry | None = None,
) -> bool:
    """Check *key*, falling back to the subject's own permission level.

    *level* is clamped into ``[0, max_permission_level]`` before the
    subject's ``has_permission_level`` is consulted, and that call is
    only made when no provider answered.

    Example::

        check_level(source, "server.stop", 4)
    """
    online, state = _resolve_online(subject, key, registry)
    required = clamp_level(level)
    return state.or_else_get(
        lambda: _fallback("level", subject, key, online.has_permission_level(required))
    )


def require(
    key: str,
    default: bool | None = None,
    *,
    level: int | None = None,
    registry: ProviderRegistry | None = None,
) -> Callable[[object], bool]:
    """Build a predicate that checks *key* on whatever subject it is given.

    With *level* set, the predicate falls back to the subject's permission
    level; otherwise to *default*.

    Example::

        can_fly = require("world.fly", level=2)
        command.requires(can_fly)
    """
    validate_key(key, field="permission")
    if level is not None:
        required_level = level

        def _require_level(subject: object) -> bool:
            return check_level(subject, key, required_level, registry=registry)

        return _require_level

    def _require(subject: object) -> bool:
        return check(subject, key, default, registry=registry)

    return _require


def authorize(
    subject: object,
    key: str,
    default: bool | None = None,
    *,
    level: int | None = None,
    message: str | None = None,
    registry: ProviderRegistry | None = None,
) -> None:
    """Assert that *subject* holds *key*.

    Raises:
        AuthorizationDenied: If the check (with its fallback) is ``False``.

    Example::

        authorize(player, "admin.ban")  # raises if denied
    """
    if level is not None:
        allowed = check_level(subject, key, level, registry=registry)
    else:
        allowed = check(subject, key, default, registry=registry)
    if not allowed:
        raise AuthorizationDenied(subject=subject, key=key, message=message)


# ---------------------------------------------------------------------------
# Offline identities
# ---------------------------------------------------------------------------


def get_offline_permission_value(
    identity: uuid.UUID | IdentityLike,
    key: str,
    *,
    registry: ProviderRegistry | None = None,
) -> Awaitable[TriState]:
    """Resolve *key* for an identity that may not be online.

    Arguments are validated immediately; the returned awaitable runs the
    offline providers one at a time.

    Example::

        state = await get_offline_permission_value(player_uuid, "world.fly")
    """
    validate_key(key, field="permission")
    return _target(registry).resolve_offline_permission(as_identity(identity), key)


def check_offline(
    identity: uuid.UUID | IdentityLike,
    key: str,
    default: bool | None = None,
    *,
    registry: ProviderRegistry | None = None,
) -> Awaitable[bool]:
    """Offline counterpart of :func:`check`.

    Example::

        allowed = await check_offline(profile, "world.fly", True)
    """
    pending = get_offline_permission_value(identity, key, registry=registry)
    fallback = default if default is not None else get_global_config().default_permission

    async def _finish() -> bool:
        state = await pending
        if state is TriState.UNDEFINED:
            return _fallback("default", identity, key, fallback)
        return state.get()

    return _finish()


def check_offline_level(
    identity: uuid.UUID | IdentityLike,
    key: str,
    level: int,
    *,
    levels: LevelSource,
    registry: ProviderRegistry | None = None,
) -> Awaitable[bool]:
    """Offline check falling back to a host-supplied permission level.

    When no offline provider answers, ``levels.get_permission_level``
    is asked for the identity's level, which must reach the requested
    level after clamping into ``[0, max_permission_level]``.

    Example::

        allowed = await check_offline_level(profile, "server.stop", 4, levels=server)
    """
    if levels is None:
        raise InvalidQueryError(field="levels")
    uid = as_identity(identity)
    pending = get_offline_permission_value(uid, key, registry=registry)
    required = clamp_level(level)

    async def _finish() -> bool:
        state = await pending
        return state.or_else_get(
            lambda: _fallback(
                "level", identity, key, levels.get_permission_level(uid) >= required
            )
        )

    return _finish()
