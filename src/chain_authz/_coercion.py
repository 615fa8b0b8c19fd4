"""Conversion of resolved option strings into typed values."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

__all__ = ["coerce_value"]

T = TypeVar("T")


def coerce_value(value: str, transform: Callable[[str], T | None]) -> T | None:
    """Apply *transform* to a resolved option value.

    A ``ValueError`` from the transform, or a ``None`` result, means
    "no value" and yields ``None``. Any other exception propagates, so
    transforms should only raise ``ValueError`` for unparseable input.

    Example::

        coerce_value("42", int)   # 42
        coerce_value("abc", int)  # None
    """
    try:
        return transform(value)
    except ValueError:
        return None
