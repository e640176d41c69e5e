"""
The registry of live games.

Wraps a GameRepository with the locking needed when requests are served concurrently:
* one registry-wide mutex around every repository call, so the shared store is never used by two threads at once
* one mutex per game, held for a whole read-modify-write cycle (move / reset / delete), so updates of the same game never interleave

Games are independent: holding the lock of one game never blocks another game.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator
from uuid import UUID

from src.core.models import GameModel, GameRecord
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


class GameRegistry:
    """Maps game identifiers to stored games. Created once at application start-up."""

    def __init__(self, repository: GameRepository) -> None:
        self._repo = repository
        self._guard = threading.Lock()
        self._game_locks: dict[UUID, threading.Lock] = {}

    @contextmanager
    def lock(self, game_id: UUID) -> Iterator[None]:
        """
        Hold the lock of a single game.
        ----

        NOTE always taken BEFORE the registry-wide mutex (repository calls inside the block take that one), never the other way around.
        """
        with self._guard:
            game_lock = self._game_locks.setdefault(game_id, threading.Lock())
        try:
            with game_lock:
                yield
        finally:
            self._discard_lock_if_unknown(game_id)

    # -- Repository access ---
    def get_game(self, game_id: UUID) -> GameRecord | None:
        with self._guard:
            return self._repo.get_game(game_id)

    def create_game(self, game: GameModel) -> GameRecord:
        with self._guard:
            return self._repo.create_game(game)

    def update_game(self, game_id: UUID, game: GameModel) -> GameRecord | None:
        with self._guard:
            return self._repo.update_game(game_id, game)

    def delete_game(self, game_id: UUID) -> GameRecord | None:
        with self._guard:
            return self._repo.delete_game(game_id)

    def list_games(self) -> list[GameRecord]:
        with self._guard:
            return self._repo.list_games()

    def _discard_lock_if_unknown(self, game_id: UUID) -> None:
        """Deleted (or never existing) games should not keep a lock around."""
        with self._guard:
            if self._repo.get_game(game_id) is None:
                self._game_locks.pop(game_id, None)
                logger.debug(f"Discarded lock of unknown game {game_id}")
