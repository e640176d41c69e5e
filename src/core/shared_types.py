"""
Type definitions used across layers
"""

from enum import IntEnum, StrEnum


class Symbol(StrEnum):
    """The two marks a player may place. Either player may place either mark."""

    X = "X"
    O = "O"  # noqa: E741


# --- The domain has its own tri-state Cell (src/order_chaos/cell.py) that adds the empty cell.
# --- NOTE the values are shared, so a Symbol converts into a Cell with Cell(symbol)


class Side(IntEnum):
    """Values double as the player numbers used on the wire."""

    ORDER = 1
    CHAOS = 2

    @property
    def opponent(self) -> "Side":
        return Side.CHAOS if self == Side.ORDER else Side.ORDER


class Winner(StrEnum):
    PLAYER_1 = "Player 1"
    PLAYER_2 = "Player 2"
    DRAW = "Draw"
