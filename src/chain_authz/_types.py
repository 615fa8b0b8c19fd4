"""Shared protocols, type aliases and the TriState decision type."""

from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Literal, Protocol, runtime_checkable

__all__ = [
    "AsyncOptionProvider",
    "AsyncPermissionProvider",
    "IdentityLike",
    "LevelSource",
    "OnlineSubject",
    "OptionProvider",
    "PermissionProvider",
    "ProviderKind",
    "TriState",
]

# Valid values for ProviderRegistry.add_provider(kind, ...).
ProviderKind = Literal["permission", "option", "offline_permission", "offline_option"]


class TriState(str, Enum):
    """Three-valued decision returned by permission providers.

    ``UNDEFINED`` means "no opinion": the chain moves on to the next
    provider, and the caller's fallback applies if nobody answers.

    Example::

        state = TriState.of(None)
        assert state is TriState.UNDEFINED
        assert state.or_else(True) is True
    """

    TRUE = "true"
    FALSE = "false"
    UNDEFINED = "undefined"

    @classmethod
    def of(cls, value: bool | None) -> TriState:
        """Convert a boolean (or ``None``) into a ``TriState``.

        A ``TriState`` is returned unchanged.

        Raises:
            TypeError: If *value* is of any other type.
        """
        if isinstance(value, TriState):
            return value
        if value is None:
            return cls.UNDEFINED
        if isinstance(value, bool):
            return cls.TRUE if value else cls.FALSE
        raise TypeError(f"expected TriState, bool or None, got {type(value).__name__}")

    @property
    def is_defined(self) -> bool:
        return self is not TriState.UNDEFINED

    def get(self) -> bool:
        """Return ``True`` only for ``TRUE``."""
        return self is TriState.TRUE

    def as_bool(self) -> bool | None:
        """Return ``True``/``False``, or ``None`` when undefined."""
        if self is TriState.UNDEFINED:
            return None
        return self is TriState.TRUE

    def or_else(self, default: bool) -> bool:
        """Return the decision, or *default* when undefined.

        Example::

            TriState.FALSE.or_else(True)      # False
            TriState.UNDEFINED.or_else(True)  # True
        """
        if self is TriState.UNDEFINED:
            return default
        return self is TriState.TRUE

    def or_else_get(self, supplier: Callable[[], bool]) -> bool:
        """Return the decision, or call *supplier* when undefined.

        The supplier is invoked at most once, and never when the
        decision is already ``TRUE`` or ``FALSE``.

        Example::

            state.or_else_get(lambda: subject.has_permission_level(2))
        """
        if self is TriState.UNDEFINED:
            return supplier()
        return self is TriState.TRUE

    def __str__(self) -> str:
        return self.value


@runtime_checkable
class OnlineSubject(Protocol):
    """Structural type for subjects that can be evaluated immediately.

    Any object exposing ``has_permission_level`` qualifies: a connected
    player, a console, a request principal. No inheritance required.

    Example::

        @dataclass
        class Console:
            def has_permission_level(self, level: int) -> bool:
                return True

        assert isinstance(Console(), OnlineSubject)
    """

    def has_permission_level(self, level: int) -> bool: ...


@runtime_checkable
class IdentityLike(Protocol):
    """Structural type for profile-style identities.

    Any object with an ``id`` attribute holding a ``uuid.UUID`` works.
    """

    @property
    def id(self) -> uuid.UUID: ...


class LevelSource(Protocol):
    """Host capability that reports the coarse permission level of an identity."""

    def get_permission_level(self, identity: uuid.UUID) -> int: ...


PermissionProvider = Callable[[OnlineSubject, str], TriState]
OptionProvider = Callable[[OnlineSubject, str], "str | None"]
AsyncPermissionProvider = Callable[[uuid.UUID, str], Awaitable[TriState]]
AsyncOptionProvider = Callable[[uuid.UUID, str], "Awaitable[str | None]"]
