"""Protocol repository (implemented with SQL Alchemy, tests use a dictionary)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel, GameRecord


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> GameRecord | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> GameRecord:
        """Store new game and return the stored record, including the newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameRecord | None:
        """Replace the game state of an existing record."""
        ...

    def delete_game(self, game_id: UUID) -> GameRecord | None:
        """Remove a game's record."""
        ...

    def list_games(self) -> list[GameRecord]:
        """All records, oldest first."""
        ...
