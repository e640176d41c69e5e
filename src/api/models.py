"""Requests and Response models"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from src.core.exceptions import GameNotFoundError, InvalidRequestError
from src.core.shared_types import Symbol
from src.order_chaos.position import BOARD_DIMENSIONS

CellValue = str
PlayerNumber = int


class CamelModel(BaseModel):
    """The wire format uses camelCase keys. Python code keeps using the snake_case field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- REQUEST MODELS ---
class MovePayload(BaseModel):
    """Body of a move request. Values are validated here, before anything reaches the game."""

    row: int
    col: int
    symbol: str

    @field_validator("row")
    @classmethod
    def validate_row(cls, value: int) -> int:
        if not 0 <= value < BOARD_DIMENSIONS[0]:
            raise InvalidRequestError(
                f"row must be between 0 and {BOARD_DIMENSIONS[0] - 1}, got {value}."
            )
        return value

    @field_validator("col")
    @classmethod
    def validate_col(cls, value: int) -> int:
        if not 0 <= value < BOARD_DIMENSIONS[1]:
            raise InvalidRequestError(
                f"col must be between 0 and {BOARD_DIMENSIONS[1] - 1}, got {value}."
            )
        return value

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, value: str) -> str:
        if value not in {symbol.value for symbol in Symbol}:
            raise InvalidRequestError(
                f"Symbol must be one of {', '.join(repr(s.value) for s in Symbol)}, got {value!r}."
            )
        return value


class GameReference(BaseModel):
    """Identifies one game. IDs are opaque to clients: anything that is not a UUID cannot name a game."""

    game_id: UUID

    @field_validator("game_id", mode="before")
    @classmethod
    def validate_game_id(cls, value: UUID | str) -> UUID:
        if isinstance(value, UUID):
            return value
        try:
            return UUID(str(value))
        except ValueError:
            raise GameNotFoundError(value) from None


class MoveRequest(MovePayload, GameReference):
    pass


class GetGameRequest(GameReference):
    pass


class ResetGameRequest(GameReference):
    pass


class DeleteGameRequest(GameReference):
    pass


# --- RESPONSE MODELS ---
class GameState(CamelModel):
    """Full state of a game, as rendered by the front-end."""

    id: UUID
    board: list[list[CellValue]]
    round: int
    moves: list[int]
    current_player: PlayerNumber
    game_over: bool
    winner: Optional[str]
    victory: list[PlayerNumber]
    number_of_4: list[int]
    created_at: datetime


class GameSummary(CamelModel):
    """Listing view: no board."""

    id: UUID
    round: int
    game_over: bool
    winner: Optional[str]
    created_at: datetime


class CreateGameResponse(CamelModel):
    success: bool = True
    game_id: UUID
    game: GameState


class GameResponse(CamelModel):
    success: bool = True
    game: GameState


class GameListResponse(CamelModel):
    success: bool = True
    games: list[GameSummary]


class DeleteGameResponse(CamelModel):
    success: bool = True
    message: str = "Game deleted"


class HealthResponse(CamelModel):
    success: bool = True
    message: str
    timestamp: datetime
    active_games: int


class ErrorResponse(CamelModel):
    success: bool = False
    error: str
    message: str
