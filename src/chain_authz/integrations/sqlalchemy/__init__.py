"""SQLAlchemy integration for chain-authz: table-backed providers."""

from __future__ import annotations

try:
    import sqlalchemy as _sqlalchemy_check  # noqa: F401  # pyright: ignore[reportUnusedImport]

    del _sqlalchemy_check
except ImportError as exc:
    raise ImportError(
        "SQLAlchemy integration requires sqlalchemy. "
        "Install it with: pip install chain-authz[sqlalchemy]"
    ) from exc

from chain_authz.integrations.sqlalchemy._providers import (
    AsyncSqlOptionProvider,
    AsyncSqlPermissionProvider,
    SqlOptionProvider,
    SqlPermissionProvider,
)
from chain_authz.integrations.sqlalchemy._tables import (
    option_values_table,
    permission_grants_table,
)

__all__ = [
    "AsyncSqlOptionProvider",
    "AsyncSqlPermissionProvider",
    "SqlOptionProvider",
    "SqlPermissionProvider",
    "option_values_table",
    "permission_grants_table",
]
