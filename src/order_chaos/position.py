"""
A position on the board, and the directions in which lines are scanned

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Order and Chaos is always played on 6x6. Kept adjustable like the rest of the grid logic.
BOARD_DIMENSIONS = (6, 6)

Direction = tuple[int, int]

# Right, Down, Diagonal (down-right), Anti-diagonal (up-right).
# The opposite directions are covered by starting the scan from the other end of the line.
DIRECTIONS: tuple[Direction, ...] = ((0, 1), (1, 0), (1, 1), (-1, 1))


@dataclass(frozen=True)
class Position:
    row: int
    col: int

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def step(self, direction: Direction, distance: int = 1) -> Position:
        """The position `distance` cells away along `direction`. May fall outside the board."""
        return Position(
            self.row + distance * direction[0], self.col + distance * direction[1]
        )


def all_positions() -> list[Position]:
    """Every position on the board, row by row."""
    return [
        Position(row, col)
        for row in range(BOARD_DIMENSIONS[0])
        for col in range(BOARD_DIMENSIONS[1])
    ]
