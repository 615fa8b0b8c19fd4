"""FastAPI integration for chain-authz."""

from __future__ import annotations

try:
    import fastapi as _fastapi_check  # noqa: F401  # pyright: ignore[reportUnusedImport]

    del _fastapi_check
except ImportError as exc:
    raise ImportError(
        "FastAPI integration requires fastapi. Install it with: pip install chain-authz[fastapi]"
    ) from exc

from chain_authz.integrations.fastapi._dependencies import (
    OptionDep,
    RequirePermission,
    get_subject,
)
from chain_authz.integrations.fastapi._errors import install_error_handlers

__all__ = [
    "OptionDep",
    "RequirePermission",
    "get_subject",
    "install_error_handlers",
]
