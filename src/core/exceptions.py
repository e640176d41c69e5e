"""
Custom exceptions.

All of them derive from GameError, so the API layer can map the whole family onto structured error responses.
Each class carries a machine-readable `code` that ends up in the response body.
"""


class GameError(Exception):
    """Base class for every error raised by the application."""

    code: str = "GAME_ERROR"

    def __init__(self, message: str = "") -> None:
        self.message = message or self.__class__.__doc__ or self.code
        super().__init__(self.message)


# --- Boundary validation ---
class InvalidRequestError(GameError):
    """Request is malformed or contains out-of-range values."""

    code = "INVALID_REQUEST"


# --- Persistence / registry ---
class RepositoryError(GameError):
    """The game store failed to complete an operation."""

    code = "REPOSITORY_ERROR"


class GameNotFoundError(RepositoryError):
    """No game is registered under the given identifier."""

    code = "GAME_NOT_FOUND"

    def __init__(self, game_id: object) -> None:
        self.game_id = game_id
        super().__init__(f"Game with {game_id=!s} not found.")


# --- Game rules ---
class IllegalMoveError(GameError):
    """Move is not allowed in the current state of the game."""

    code = "INVALID_MOVE"


class GameOverError(IllegalMoveError):
    """Game is over. No more moves can be made."""

    code = "GAME_OVER"


class InvalidPositionError(IllegalMoveError):
    """Position lies outside of the board."""

    code = "INVALID_POSITION"


class CellOccupiedError(IllegalMoveError):
    """Target cell already holds a symbol."""

    code = "CELL_OCCUPIED"


# --- Internal consistency ---
class GameStateError(GameError):
    """Stored game data cannot be turned into a valid game."""

    code = "INVALID_GAME_STATE"
