"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from uuid import UUID

from src.api.models import (
    CreateGameResponse,
    DeleteGameRequest,
    DeleteGameResponse,
    GameListResponse,
    GameResponse,
    GameState,
    GameSummary,
    GetGameRequest,
    MoveRequest,
    ResetGameRequest,
)
from src.core.exceptions import GameNotFoundError
from src.core.models import GameModel, GameRecord
from src.order_chaos.cell import Cell
from src.order_chaos.game import Game
from src.order_chaos.position import Position
from src.services.registry import GameRegistry

logger = logging.getLogger(__name__)


class GameService:
    """Orchestration of layers for Order and Chaos."""

    def __init__(self, registry: GameRegistry) -> None:
        self.registry = registry

    # -- API routes logic ---
    def create_new_game(self) -> CreateGameResponse:
        """Start a new game in its initial state and register it."""

        new_game = Game.new_game()
        record = self.registry.create_game(new_game.to_model())
        logger.info(f"Created game {record.game_id}")

        return CreateGameResponse(
            game_id=record.game_id, game=self._create_game_state(record)
        )

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend, and to reload a game by its ID.
        """
        record = self._fetch_game(request.game_id)
        return self._create_game_response(record)

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Place a symbol. The game itself decides if the move is legal."""

        with self.registry.lock(request.game_id):
            # Retrieve persisted GameModel from repository
            record = self._fetch_game(request.game_id)

            # Create a new Game instance from the retrieved GameModel
            game = Game.from_model(record.game)

            # Attempt the move
            round_played = game.round
            round_end = game.apply_move(
                Position(request.row, request.col), Cell(request.symbol)
            )
            logger.debug(
                f"Game {request.game_id}: {request.symbol} placed at ({request.row}, {request.col})"
            )
            if round_end is not None:
                logger.info(
                    f"Game {request.game_id}: round {round_played} ended by {round_end.name.lower()}"
                )
            if game.game_over:
                logger.info(f"Game {request.game_id} is over. Winner: {game.winner}")

            # Capture updated state in GameModel and store it
            updated = self._store(request.game_id, game.to_model())

        return self._create_game_response(updated)

    def reset_game(self, request: ResetGameRequest) -> GameResponse:
        """Back to the state right after creation, keeping the same ID."""

        with self.registry.lock(request.game_id):
            record = self._fetch_game(request.game_id)
            game = Game.from_model(record.game)
            game.reset()
            updated = self._store(request.game_id, game.to_model())

        logger.info(f"Reset game {request.game_id}")
        return self._create_game_response(updated)

    def list_games(self) -> GameListResponse:
        """Show all recorded games (without their boards)."""
        return GameListResponse(
            games=[
                GameSummary(
                    id=record.game_id,
                    round=record.game.round,
                    game_over=record.game.game_over,
                    winner=record.game.winner,
                    created_at=record.created_at,
                )
                for record in self.registry.list_games()
            ]
        )

    def delete_game(self, request: DeleteGameRequest) -> DeleteGameResponse:
        """Handle a request to delete a Game record."""

        with self.registry.lock(request.game_id):
            deleted = self.registry.delete_game(request.game_id)
            if deleted is None:
                raise GameNotFoundError(request.game_id)

        logger.info(f"Deleted game {request.game_id}")
        return DeleteGameResponse()

    def require_game(self, request: GetGameRequest) -> UUID:
        """ID of a registered game, or GameNotFoundError."""
        return self._fetch_game(request.game_id).game_id

    def active_game_count(self) -> int:
        return len(self.registry.list_games())

    # -- Internal helpers --
    def _create_game_state(self, record: GameRecord) -> GameState:
        """Convert info in a GameRecord to the GameState shown to clients."""
        model = record.game
        return GameState(
            id=record.game_id,
            board=model.board,
            round=model.round,
            moves=model.moves,
            current_player=model.current_player,
            game_over=model.game_over,
            winner=model.winner,
            victory=model.victory,
            number_of_4=model.number_of_4,
            created_at=record.created_at,
        )

    def _create_game_response(self, record: GameRecord) -> GameResponse:
        return GameResponse(game=self._create_game_state(record))

    def _fetch_game(self, game_id: UUID) -> GameRecord:
        """Attempt to find the game in the repository and raise error if it fails."""
        record = self.registry.get_game(game_id)
        if record is None:
            raise GameNotFoundError(game_id)
        return record

    def _store(self, game_id: UUID, model: GameModel) -> GameRecord:
        """Only called while holding the game's lock, so the record cannot have disappeared in between."""
        record = self.registry.update_game(game_id, model)
        if record is None:
            raise GameNotFoundError(game_id)
        return record
