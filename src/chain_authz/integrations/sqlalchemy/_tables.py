"""Table definitions for SQL-backed permission grants and option values."""

from __future__ import annotations

from sqlalchemy import Boolean, Column, MetaData, String, Table

__all__ = ["option_values_table", "permission_grants_table"]


def permission_grants_table(metadata: MetaData, name: str = "permission_grants") -> Table:
    """Define the permission grants table on *metadata*.

    One row per (subject, key). ``value`` holds an explicit grant (``True``)
    or denial (``False``); a missing row means "no opinion".

    Example::

        metadata = MetaData()
        grants = permission_grants_table(metadata)
        metadata.create_all(engine)
    """
    return Table(
        name,
        metadata,
        Column("subject_id", String(64), primary_key=True),
        Column("key", String(255), primary_key=True),
        Column("value", Boolean, nullable=False),
    )


def option_values_table(metadata: MetaData, name: str = "option_values") -> Table:
    """Define the option values table on *metadata*."""
    return Table(
        name,
        metadata,
        Column("subject_id", String(64), primary_key=True),
        Column("key", String(255), primary_key=True),
        Column("value", String(1024), nullable=False),
    )
