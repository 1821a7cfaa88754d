"""Row and query-operator types shared by the database helpers."""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from enum import IntEnum
from typing import Any


class Ops(IntEnum):
    """Operation used in a generated where query."""

    INIT = 0
    EQUAL = 1
    IN = 2
    GREATER = 3
    SMALLER = 4
    RANGE = 5

    @property
    def symbol(self) -> str:
        """SQL spelling of the operation."""
        return _SYMBOLS[self]


_SYMBOLS = {
    Ops.INIT: "",
    Ops.EQUAL: "=",
    Ops.IN: "in",
    Ops.GREATER: ">",
    Ops.SMALLER: "<",
    Ops.RANGE: "< ? <",
}


def _field_names(row: Any) -> list[str]:
    if not is_dataclass(row):
        raise TypeError(f"{type(row).__name__} is not a dataclass row")
    return [f.name for f in fields(row)]


class RowStruct:
    """Mixin for dataclass rows: exposes column names and values in field order."""

    def column_names(self) -> str:
        """Backtick-quoted, comma-separated column names."""
        return ",".join(f"`{name}`" for name in _field_names(self))

    def values(self) -> tuple[Any, ...]:
        """Field values in column order."""
        return tuple(getattr(self, name) for name in _field_names(self))