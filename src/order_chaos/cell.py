"""Defines what a single cell of the board can hold"""

from enum import StrEnum

from src.core.shared_types import Symbol


class Cell(StrEnum):
    """Tri-state cell. The values are the characters used in the wire format of the board."""

    EMPTY = " "
    X = Symbol.X.value
    O = Symbol.O.value  # noqa: E741


PLACEABLE_SYMBOLS: tuple[Cell, ...] = (Cell.X, Cell.O)
