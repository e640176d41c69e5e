"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a move of Order and Chaos -->
validating it, placing it, ending rounds, and deciding the winner once both rounds are played.
The service layer converts the result to a GameModel and passes it onwards to the API layer.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self

from src.core.exceptions import (
    CellOccupiedError,
    GameOverError,
    GameStateError,
    IllegalMoveError,
    InvalidPositionError,
)
from src.core.models import GameModel
from src.core.shared_types import Side, Winner
from src.order_chaos.board import Board
from src.order_chaos.cell import PLACEABLE_SYMBOLS, Cell
from src.order_chaos.position import Position
from src.order_chaos.scoring import resolve_winner

NUM_ROUNDS = 2
# Wire value for a round that has not been decided yet
UNDECIDED = 0


class RoundEnd(Enum):
    """Which condition ended a round."""

    FIVE_IN_A_ROW = auto()
    FULL_BOARD = auto()


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    round: int
    moves: list[int]
    four_in_a_row: list[int]
    round_outcomes: list[Optional[Side]]
    current_side: Side
    game_over: bool
    winner: Optional[Winner]

    @classmethod
    def new_game(cls) -> Self:
        return cls(
            board=Board.empty(),
            round=1,
            moves=[0] * NUM_ROUNDS,
            four_in_a_row=[0] * NUM_ROUNDS,
            round_outcomes=[None] * NUM_ROUNDS,
            current_side=Side.ORDER,
            game_over=False,
            winner=None,
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.round not in range(1, NUM_ROUNDS + 1):
            raise GameStateError(f"Invalid round: {model.round!r}.")

        for name in ("moves", "victory", "number_of_4"):
            if len(getattr(model, name)) != NUM_ROUNDS:
                raise GameStateError(
                    f"{name} must hold one entry per round, got {getattr(model, name)!r}."
                )

        try:
            current_side = Side(model.current_player)
            round_outcomes = [
                Side(value) if value != UNDECIDED else None for value in model.victory
            ]
            winner = Winner(model.winner) if model.winner is not None else None
        except ValueError as exc:
            raise GameStateError(f"Invalid player or winner value: {exc}") from exc

        # create the Game
        return cls(
            board=Board.from_rows(model.board),
            round=model.round,
            moves=list(model.moves),
            four_in_a_row=list(model.number_of_4),
            round_outcomes=round_outcomes,
            current_side=current_side,
            game_over=model.game_over,
            winner=winner,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            board=self.board.to_rows(),
            round=self.round,
            moves=list(self.moves),
            victory=[
                side.value if side is not None else UNDECIDED
                for side in self.round_outcomes
            ],
            number_of_4=list(self.four_in_a_row),
            current_player=self.current_side.value,
            game_over=self.game_over,
            winner=self.winner.value if self.winner is not None else None,
        )

    def apply_move(self, position: Position, symbol: Cell) -> Optional[RoundEnd]:
        """
        Attempt to place a symbol
        -----

        1. make sure the move is allowed (game still running, position on the board, cell still empty)
        2. update the board and the move counter of the active round
        3. check if the round has ended
            a. No: the other side is to move
            b. Yes: count the four-in-a-rows, record who achieved their goal and move on to round 2 / end the game

        Returns the condition that ended the round, or None if play continues.
        """
        self._assert_move_allowed(position, symbol)

        self.board.place(position, symbol)
        self.moves[self._round_index] += 1

        round_end = self._check_round_end()
        if round_end is None:
            self.current_side = self.current_side.opponent
            return None

        self._conclude_round(round_end)
        return round_end

    def reset(self) -> None:
        """Back to the state right after creation."""
        fresh = self.new_game()
        self.board = fresh.board
        self.round = fresh.round
        self.moves = fresh.moves
        self.four_in_a_row = fresh.four_in_a_row
        self.round_outcomes = fresh.round_outcomes
        self.current_side = fresh.current_side
        self.game_over = fresh.game_over
        self.winner = fresh.winner

    # -- PRIVATE HELPERS ---
    @property
    def _round_index(self) -> int:
        return self.round - 1

    def _assert_move_allowed(self, position: Position, symbol: Cell) -> None:
        if self.game_over:
            raise GameOverError(f"Game is over. Winner: {self.winner}")

        if not position.is_within_bounds():
            raise InvalidPositionError(
                f"Position ({position.row}, {position.col}) is not on the board."
            )

        if self.board.is_occupied(position):
            raise CellOccupiedError(
                f"Cell ({position.row}, {position.col}) already holds {self.board.cell(position).value!r}."
            )

        # boundary validation already makes sure of this
        if symbol not in PLACEABLE_SYMBOLS:
            raise IllegalMoveError(f"Cannot place {symbol!r}, only X or O.")

    def _check_round_end(self) -> Optional[RoundEnd]:
        """Five-in-a-row takes precedence over a full board."""
        if self.board.has_five_in_a_row():
            return RoundEnd.FIVE_IN_A_ROW
        if self.board.is_full():
            return RoundEnd.FULL_BOARD
        return None

    def _conclude_round(self, round_end: RoundEnd) -> None:
        """
        Record the result of the round that just ended.
        ----

        NOTE five-in-a-row is credited to the side that just moved, a full board to the other side.
        """
        self.four_in_a_row[self._round_index] += self.board.count_four_in_a_row()
        self.round_outcomes[self._round_index] = (
            self.current_side
            if round_end == RoundEnd.FIVE_IN_A_ROW
            else self.current_side.opponent
        )

        if self.round < NUM_ROUNDS:
            self._start_next_round()
        else:
            self._end_game()

    def _start_next_round(self) -> None:
        self.board.clear()
        self.round += 1
        self.current_side = Side.ORDER

    def _end_game(self) -> None:
        # both rounds are decided at this point
        outcomes = [side for side in self.round_outcomes if side is not None]
        self.game_over = True
        self.winner = resolve_winner(outcomes, self.moves, self.four_in_a_row)
