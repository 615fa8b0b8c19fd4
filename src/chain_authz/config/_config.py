"""Layered configuration for chain-authz."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from chain_authz._types import OnlineSubject

__all__ = [
    "AuthzConfig",
    "configure",
    "get_global_config",
    "_reset_global_config",
    "_set_global_config",
]

SubjectReducer = Callable[[object], OnlineSubject]


@dataclass(frozen=True, slots=True)
class AuthzConfig:
    """Immutable configuration with merge semantics.

    Attributes:
        max_permission_level: Upper bound of the host's permission levels.
            Requested levels are clamped into ``[0, max_permission_level]``
            before any level-based fallback runs.
        default_permission: Literal fallback used by ``check()`` when the
            caller passes no default.
        log_decisions: Log every resolution via the ``chain_authz`` logger.
        subject_reducer: Callable turning a non-online subject (an entity)
            into an online subject. ``None`` means only online subjects
            are accepted.

    Example::

        config = AuthzConfig(max_permission_level=4)
        merged = config.merge(log_decisions=True)
    """

    max_permission_level: int = 4
    default_permission: bool = False
    log_decisions: bool = False
    subject_reducer: SubjectReducer | None = None

    def __post_init__(self) -> None:
        if self.max_permission_level < 0:
            raise ValueError(
                f"max_permission_level must be >= 0, got {self.max_permission_level!r}"
            )

    def merge(
        self,
        *,
        max_permission_level: int | None = None,
        default_permission: bool | None = None,
        log_decisions: bool | None = None,
        subject_reducer: SubjectReducer | None = None,
    ) -> AuthzConfig:
        """Return a new config with non-None overrides applied.

        Args:
            max_permission_level: Override for max_permission_level (ignored if None).
            default_permission: Override for default_permission (ignored if None).
            log_decisions: Override for log_decisions (ignored if None).
            subject_reducer: Override for subject_reducer (ignored if None).

        Returns:
            A new ``AuthzConfig`` with overrides merged.
        """
        return AuthzConfig(
            max_permission_level=(
                max_permission_level
                if max_permission_level is not None
                else self.max_permission_level
            ),
            default_permission=(
                default_permission if default_permission is not None else self.default_permission
            ),
            log_decisions=(log_decisions if log_decisions is not None else self.log_decisions),
            subject_reducer=(
                subject_reducer if subject_reducer is not None else self.subject_reducer
            ),
        )


# ---------------------------------------------------------------------------
# Global configuration singleton
# ---------------------------------------------------------------------------

_global_config = AuthzConfig()


def get_global_config() -> AuthzConfig:
    """Return the current global configuration."""
    return _global_config


def configure(
    *,
    max_permission_level: int | None = None,
    default_permission: bool | None = None,
    log_decisions: bool | None = None,
    subject_reducer: SubjectReducer | None = None,
) -> AuthzConfig:
    """Update the global configuration by merging overrides.

    Only non-None values are applied. Returns the new global config.

    Example::

        configure(max_permission_level=4, subject_reducer=entity_to_source)
    """
    global _global_config
    _global_config = _global_config.merge(
        max_permission_level=max_permission_level,
        default_permission=default_permission,
        log_decisions=log_decisions,
        subject_reducer=subject_reducer,
    )
    return _global_config


def _set_global_config(cfg: AuthzConfig) -> None:
    """Replace global config with an exact snapshot. For testing only."""
    global _global_config
    _global_config = cfg


def _reset_global_config() -> None:
    """Reset global config to defaults. For testing only."""
    global _global_config
    _global_config = AuthzConfig()
