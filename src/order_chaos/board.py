"""The Game board implements all rules that only depend on the grid: placing symbols and finding lines of equal symbols."""

from dataclasses import dataclass
from typing import Self

from src.core.exceptions import GameStateError
from src.order_chaos.cell import Cell
from src.order_chaos.position import (
    BOARD_DIMENSIONS,
    DIRECTIONS,
    Direction,
    Position,
    all_positions,
)

# Order's goal
WIN_LENGTH = 5
# Tie-break: lines of this length are counted when a round ends
TIE_BREAK_LENGTH = 4


@dataclass
class Board:
    grid: list[list[Cell]]

    @classmethod
    def empty(cls) -> Self:
        return cls(cls._empty_grid())

    @classmethod
    def from_rows(cls, rows: list[list[str]]) -> Self:
        """Construct a board from the wire format: a list of rows, each a list of single characters ("X", "O" or " ")."""
        n_rows, n_cols = BOARD_DIMENSIONS
        if len(rows) != n_rows or any(len(row) != n_cols for row in rows):
            raise GameStateError(f"Board must be {n_rows}x{n_cols}.")

        grid: list[list[Cell]] = []
        for row in rows:
            try:
                grid.append([Cell(value) for value in row])
            except ValueError as exc:
                raise GameStateError(
                    f"Unknown cell value in row {row!r}. Pick one from {[c.value for c in Cell]}"
                ) from exc
        return cls(grid)

    def to_rows(self) -> list[list[str]]:
        return [[cell.value for cell in row] for row in self.grid]

    def cell(self, position: Position) -> Cell:
        return self.grid[position.row][position.col]

    def is_occupied(self, position: Position) -> bool:
        return self.cell(position) != Cell.EMPTY

    def place(self, position: Position, symbol: Cell) -> None:
        """Update the board. Legality of the move is checked by the Game."""
        self.grid[position.row][position.col] = symbol

    def occupied_positions(self) -> list[Position]:
        return [position for position in all_positions() if self.is_occupied(position)]

    def is_full(self) -> bool:
        return all(cell != Cell.EMPTY for row in self.grid for cell in row)

    def clear(self) -> None:
        self.grid = self._empty_grid()

    def run_length(self, start: Position, direction: Direction, limit: int) -> int:
        """
        Number of consecutive cells, beginning at `start`, holding the same symbol as `start`.
        ----

        Counting stops at the first cell that is off the board or holds a different symbol, or once `limit` is reached.
        """
        symbol = self.cell(start)
        count = 0
        for distance in range(limit):
            position = start.step(direction, distance)
            if not position.is_within_bounds() or self.cell(position) != symbol:
                break
            count += 1
        return count

    def has_five_in_a_row(self) -> bool:
        """Any line of WIN_LENGTH equal symbols, horizontally, vertically or diagonally."""
        return any(
            self.run_length(start, direction, WIN_LENGTH) == WIN_LENGTH
            for start in self.occupied_positions()
            for direction in DIRECTIONS
        )

    def count_four_in_a_row(self) -> int:
        """
        Tie-break metric: number of (possibly overlapping) windows of TIE_BREAK_LENGTH equal symbols.
        ----

        Every occupied cell is tried as the start of a window in each direction,
        so a line of 5 equal symbols holds 2 windows and a full line of 6 holds 3.
        """
        return sum(
            1
            for start in self.occupied_positions()
            for direction in DIRECTIONS
            if self.run_length(start, direction, TIE_BREAK_LENGTH) == TIE_BREAK_LENGTH
        )

    @staticmethod
    def _empty_grid() -> list[list[Cell]]:
        return [[Cell.EMPTY] * BOARD_DIMENSIONS[1] for _ in range(BOARD_DIMENSIONS[0])]
