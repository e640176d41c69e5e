"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import RepositoryError
from src.core.models import GameModel, GameRecord
from src.db.schema import DBGame

logger = logging.getLogger(__name__)


def as_utc(moment: datetime) -> datetime:
    """SQLite drops the offset on the way back. Stored times are always UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameRecord | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_record(game_db)
        return None

    def create_game(self, game: GameModel) -> GameRecord:
        """Store new game and return the stored record, including the newly created game ID."""

        game_db = DBGame(id=uuid4())
        self._copy_into(game_db, game)
        self.db.add(game_db)
        self._commit()
        self.db.refresh(game_db)
        return self._to_record(game_db)

    def update_game(self, game_id: UUID, game: GameModel) -> GameRecord | None:
        """Replace the game state of an existing record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        self._copy_into(game_db, game)
        self._commit()
        self.db.refresh(game_db)
        return self._to_record(game_db)

    def delete_game(self, game_id: UUID) -> GameRecord | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        record = self._to_record(game_db)
        self.db.delete(game_db)
        self._commit()
        return record

    def list_games(self) -> list[GameRecord]:
        """All records, oldest first."""
        query = select(DBGame).order_by(DBGame.created_at)
        return [self._to_record(game_db) for game_db in self.db.scalars(query)]

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _commit(self) -> None:
        """Commit, or roll back and report the failure to the service layer."""
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            logger.error(f"Commit failed: {exc}", exc_info=True)
            self.db.rollback()
            raise RepositoryError("Could not store the game.") from exc

    def _copy_into(self, game_db: DBGame, game: GameModel) -> None:
        """Copies of the lists, so the JSON columns register the assignment as a change."""
        game_db.board = [list(row) for row in game.board]
        game_db.round = game.round
        game_db.moves = list(game.moves)
        game_db.victory = list(game.victory)
        game_db.number_of_4 = list(game.number_of_4)
        game_db.current_player = game.current_player
        game_db.game_over = game.game_over
        game_db.winner = game.winner

    def _to_record(self, game_db: DBGame) -> GameRecord:
        """Convert SQLAlchemy model to data transfer model."""
        return GameRecord(
            game_id=game_db.id,
            game=GameModel(
                board=[list(row) for row in game_db.board],
                round=game_db.round,
                moves=list(game_db.moves),
                victory=list(game_db.victory),
                number_of_4=list(game_db.number_of_4),
                current_player=game_db.current_player,
                game_over=game_db.game_over,
                winner=game_db.winner,
            ),
            created_at=as_utc(game_db.created_at),
        )
