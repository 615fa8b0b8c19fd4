"""ProviderRegistration and the append-only provider list shared by all chains."""

from __future__ import annotations

import inspect
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar

from chain_authz._types import ProviderKind, TriState
from chain_authz.config._config import get_global_config

__all__ = ["ProviderList", "ProviderRegistration"]


@dataclass(frozen=True, slots=True)
class ProviderRegistration:
    """A single registered provider with its metadata.

    Attributes:
        kind: The query kind this provider answers.
        fn: The provider callable, invoked as ``fn(subject, key)``.
        name: The provider name (for debugging/logging).
        description: Human-readable description (from docstring).
    """

    kind: ProviderKind
    fn: Callable[..., Any]
    name: str
    description: str


class ProviderList:
    """Ordered, append-only list of providers for one query kind.

    The list is stored as an immutable tuple and replaced on every append
    (copy-on-append). Writers serialize on a lock; readers take no lock and
    iterate whichever snapshot they read, so a resolution already in flight
    never sees a provider appended after it started.
    """

    kind: ClassVar[ProviderKind]

    def __init__(self) -> None:
        self._providers: tuple[ProviderRegistration, ...] = ()
        self._lock = threading.Lock()

    def append(self, registration: ProviderRegistration) -> None:
        kind = getattr(type(self), "kind", None)
        if kind is None:
            raise TypeError(
                f"{type(self).__name__} has no query kind; use one of the concrete chains"
            )
        if registration.kind != kind:
            raise ValueError(
                f"Cannot add a {registration.kind!r} provider to a {kind!r} chain"
            )
        with self._lock:
            self._providers = (*self._providers, registration)

    @property
    def providers(self) -> tuple[ProviderRegistration, ...]:
        """Snapshot of the registered providers in registration order."""
        return self._providers

    def clear(self) -> None:
        """Remove all providers. Intended for test teardown."""
        with self._lock:
            self._providers = ()

    def _to_state(self, registration: ProviderRegistration, result: object) -> TriState:
        if inspect.iscoroutine(result):
            result.close()
            raise TypeError(
                f"Provider {registration.name!r} returned a coroutine; async providers "
                "belong in the 'offline_permission' chain"
            )
        try:
            return TriState.of(result)  # type: ignore[arg-type]
        except TypeError:
            raise TypeError(
                f"Provider {registration.name!r} returned {result!r}; "
                "expected TriState, bool or None"
            ) from None

    def _log(
        self,
        subject: object,
        key: str,
        result: object,
        answered_by: ProviderRegistration | None,
        consulted: int,
    ) -> None:
        if not get_global_config().log_decisions:
            return
        from chain_authz._audit import log_resolution

        log_resolution(
            kind=self.kind,
            subject=subject,
            key=key,
            result=result,
            answered_by=answered_by,
            consulted=consulted,
        )

    def __len__(self) -> int:
        return len(self._providers)

    def __repr__(self) -> str:
        names = [p.name for p in self._providers]
        return f"{type(self).__name__}({names!r})"
