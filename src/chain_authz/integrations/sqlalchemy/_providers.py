"""Providers that answer from SQLAlchemy tables.

The synchronous providers run on an ``Engine`` and serve online
subjects; the async ones run on an ``AsyncEngine`` and serve offline
identities, which is where a database round-trip is expected.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from typing import Any

from sqlalchemy import Select, Table, select
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncEngine

from chain_authz._types import TriState
from chain_authz.exceptions import UnsupportedSubjectError

__all__ = [
    "AsyncSqlOptionProvider",
    "AsyncSqlPermissionProvider",
    "SqlOptionProvider",
    "SqlPermissionProvider",
]

SubjectId = Callable[[Any], str]


def _default_subject_id(subject: Any) -> str:
    subject_id = getattr(subject, "id", None)
    if subject_id is None:
        raise UnsupportedSubjectError(
            subject=subject,
            message=f"Subject {subject!r} has no 'id'; pass subject_id= to the provider",
        )
    return str(subject_id)


def _value_query(table: Table, subject_id: str, key: str) -> Select[Any]:
    return select(table.c.value).where(table.c.subject_id == subject_id, table.c.key == key)


class _SqlProvider:
    def __init__(self, engine: Any, table: Table, *, subject_id: SubjectId | None = None) -> None:
        self._engine = engine
        self._table = table
        self._subject_id = subject_id if subject_id is not None else _default_subject_id
        self.__name__ = f"{type(self).__name__}[{table.name}]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(table={self._table.name!r})"


class SqlPermissionProvider(_SqlProvider):
    """Permission provider backed by a grants table.

    Args:
        engine: A synchronous SQLAlchemy ``Engine``.
        table: A table shaped like :func:`permission_grants_table`.
        subject_id: Maps an online subject to its ``subject_id`` column
            value. Defaults to ``str(subject.id)``.

    Example::

        registry.add_provider("permission", SqlPermissionProvider(engine, grants))
    """

    def __init__(
        self, engine: Engine, table: Table, *, subject_id: SubjectId | None = None
    ) -> None:
        super().__init__(engine, table, subject_id=subject_id)

    def __call__(self, subject: Any, key: str) -> TriState:
        stmt = _value_query(self._table, self._subject_id(subject), key)
        with self._engine.connect() as conn:
            value = conn.execute(stmt).scalar_one_or_none()
        return TriState.of(value)


class SqlOptionProvider(_SqlProvider):
    """Option provider backed by an option values table."""

    def __init__(
        self, engine: Engine, table: Table, *, subject_id: SubjectId | None = None
    ) -> None:
        super().__init__(engine, table, subject_id=subject_id)

    def __call__(self, subject: Any, key: str) -> str | None:
        stmt = _value_query(self._table, self._subject_id(subject), key)
        with self._engine.connect() as conn:
            return conn.execute(stmt).scalar_one_or_none()


class AsyncSqlPermissionProvider(_SqlProvider):
    """Offline permission provider backed by a grants table.

    Identities are matched on ``str(uuid)``.

    Example::

        registry.add_provider(
            "offline_permission", AsyncSqlPermissionProvider(async_engine, grants)
        )
    """

    def __init__(self, engine: AsyncEngine, table: Table) -> None:
        super().__init__(engine, table, subject_id=str)

    async def __call__(self, identity: uuid.UUID, key: str) -> TriState:
        stmt = _value_query(self._table, self._subject_id(identity), key)
        async with self._engine.connect() as conn:
            value = (await conn.execute(stmt)).scalar_one_or_none()
        return TriState.of(value)


class AsyncSqlOptionProvider(_SqlProvider):
    """Offline option provider backed by an option values table."""

    def __init__(self, engine: AsyncEngine, table: Table) -> None:
        super().__init__(engine, table, subject_id=str)

    async def __call__(self, identity: uuid.UUID, key: str) -> str | None:
        stmt = _value_query(self._table, self._subject_id(identity), key)
        async with self._engine.connect() as conn:
            return (await conn.execute(stmt)).scalar_one_or_none()
