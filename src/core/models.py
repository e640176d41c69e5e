"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

# Type aliases to make GameModel easier to read
CellValue = str
PlayerNumber = int


@dataclass
class GameModel:
    """Transport-safe representation of an Order and Chaos game used between API, Service, DB, and Game layers.

    Per-round lists always hold two entries: index 0 for round 1, index 1 for round 2.
    A `victory` entry of 0 means the round has not been decided yet.
    """

    board: list[list[CellValue]]
    round: int
    moves: list[int]
    victory: list[PlayerNumber]
    number_of_4: list[int]
    current_player: PlayerNumber
    game_over: bool
    winner: Optional[str]


@dataclass
class GameRecord:
    """A GameModel as the repository knows it: with its identifier and creation time."""

    game_id: UUID
    game: GameModel
    created_at: datetime
