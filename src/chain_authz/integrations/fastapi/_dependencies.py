"""FastAPI dependencies for chain-authz permission checks and options."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi import Depends, Request

from chain_authz._options import get_option
from chain_authz._permissions import authorize
from chain_authz.chain._registry import ProviderRegistry

__all__ = ["OptionDep", "RequirePermission", "get_subject"]


# ---------------------------------------------------------------------------
# Sentinel dependency for DI-based configuration
# ---------------------------------------------------------------------------


def get_subject(request: Request) -> Any:
    """Sentinel dependency; override via ``app.dependency_overrides[get_subject]``.

    Raises ``NotImplementedError`` if not overridden, ensuring users
    configure how the current subject is found before using
    ``RequirePermission`` or ``OptionDep``.

    Example::

        from chain_authz.integrations.fastapi import get_subject

        app.dependency_overrides[get_subject] = my_current_player
    """
    raise NotImplementedError(
        "Override get_subject via app.dependency_overrides[get_subject]. "
        "See chain-authz docs for configuration guide."
    )


# ---------------------------------------------------------------------------
# Dependency builders
# ---------------------------------------------------------------------------


def RequirePermission(  # noqa: N802
    key: str,
    default: bool | None = None,
    *,
    level: int | None = None,
    registry: ProviderRegistry | None = None,
) -> Any:
    """FastAPI dependency that requires the current subject to hold *key*.

    Resolves the subject through :func:`get_subject`, runs
    :func:`chain_authz.authorize` and returns the subject. Denials raise
    ``AuthorizationDenied``; install :func:`install_error_handlers` to map
    them to 403 responses.

    Args:
        key: The permission key.
        default: Literal fallback when no provider answers.
        level: Fall back to the subject's permission level instead.
        registry: Optional per-dependency registry override.

    Returns:
        A FastAPI ``Depends`` instance.

    Example::

        @app.post("/server/stop")
        def stop(subject: Player = RequirePermission("server.stop", level=4)) -> dict:
            return {"stopped_by": subject.name}
    """

    def _require(subject: Any = Depends(get_subject)) -> Any:
        authorize(subject, key, default, level=level, registry=registry)
        return subject

    return Depends(_require)


def OptionDep(  # noqa: N802
    key: str,
    default: Any = None,
    *,
    transform: Callable[[str], Any] | None = None,
    registry: ProviderRegistry | None = None,
) -> Any:
    """FastAPI dependency that resolves option *key* for the current subject.

    Example::

        @app.get("/me/homes")
        def homes(limit: int = OptionDep("max-homes", 1, transform=int)) -> dict:
            return {"limit": limit}
    """

    def _option(subject: Any = Depends(get_subject)) -> Any:
        return get_option(subject, key, default, transform=transform, registry=registry)

    return Depends(_option)
