"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from datetime import datetime, timezone
from typing import Generator
from uuid import UUID, uuid4

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.models import GameModel, GameRecord
from src.db.schema import Base

# (row, col, symbol)
MoveTuple = tuple[int, int, str]

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


# --- MOCK DEPENDENCIES ----
class MockRepository:
    """Mock the GameRepository using a dictionary of game records."""

    def __init__(self) -> None:
        self._games: dict[UUID, GameRecord] = {}

    def create_game(self, game: GameModel) -> GameRecord:
        record = GameRecord(
            game_id=uuid4(), game=game, created_at=datetime.now(timezone.utc)
        )
        self._games[record.game_id] = record
        return record

    def get_game(self, game_id: UUID) -> GameRecord | None:
        return self._games.get(game_id)

    def update_game(self, game_id: UUID, game: GameModel) -> GameRecord | None:
        if game_id not in self._games:
            return None
        self._games[game_id].game = game
        return self._games[game_id]

    def delete_game(self, game_id: UUID) -> GameRecord | None:
        return self._games.pop(game_id, None)

    def list_games(self) -> list[GameRecord]:
        return list(self._games.values())

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._games.clear()


@pytest.fixture
def mock_repository() -> Generator[MockRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = MockRepository()
    try:
        yield repo
    finally:
        repo.clear()


# --- MOVE SEQUENCES ----
@pytest.fixture
def five_in_a_row_moves() -> list[MoveTuple]:
    """Five X's on the top row. The fifth move is made by Order (moves alternate, Order starts)."""
    return [(0, col, "X") for col in range(5)]


@pytest.fixture
def full_board_moves() -> list[MoveTuple]:
    """
    Fill all 36 cells without ever creating five (or even three) equal symbols in a line.

    Pattern: X where (col + 2 * row) % 4 < 2. Along every direction the symbols come in pairs at most.
    """
    return [
        (row, col, "X" if (col + 2 * row) % 4 < 2 else "O")
        for row in range(6)
        for col in range(6)
    ]
