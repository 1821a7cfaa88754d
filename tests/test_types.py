from dataclasses import dataclass

import pytest

from gola.types import Ops, RowStruct


@dataclass
class Song(RowStruct):
    id: int
    title: str


class NotARow(RowStruct):
    pass


def test_ops_order_follows_declaration():
    assert [Ops(value) for value in range(6)] == list(Ops)
    assert Ops(0) is Ops.INIT


@pytest.mark.parametrize(
    "op,symbol",
    [(Ops.EQUAL, "="), (Ops.IN, "in"), (Ops.GREATER, ">"), (Ops.SMALLER, "<"), (Ops.RANGE, "< ? <")],
)
def test_ops_symbol(op, symbol):
    assert Ops(op.value).symbol == symbol


def test_row_column_names():
    assert RowStruct.column_names(Song(1, "x")) == "`id`,`title`"


def test_row_values_follow_field_order():
    assert RowStruct.values(Song(7, "blue")) == (7, "blue")


def test_column_names_and_values_have_same_length():
    row = Song(3, "z")
    names = RowStruct.column_names(row)
    values = RowStruct.values(row)
    assert len(names.split(",")) == len(values)


def test_non_dataclass_row_rejected():
    with pytest.raises(TypeError):
        RowStruct.values(NotARow())