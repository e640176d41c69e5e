"""
Game API endpoints

All game logic lives in the domain layer, the service orchestrates. The routes only translate HTTP to service calls.
Errors raised further down are turned into responses by the exception handlers registered in src/main.py.
"""

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, Request

from src.api.models import (
    CreateGameResponse,
    DeleteGameRequest,
    DeleteGameResponse,
    GameListResponse,
    GameResponse,
    GetGameRequest,
    HealthResponse,
    MovePayload,
    MoveRequest,
    ResetGameRequest,
)
from src.services.game_service import GameService

router = APIRouter(prefix="/api", tags=["games"])


def get_game_service(request: Request) -> GameService:
    """The service (and the registry it owns) is created at start-up, see lifespan in src/main.py"""
    return request.app.state.game_service


def get_existing_game_id(
    game_id: str, service: GameService = Depends(get_game_service)
) -> UUID:
    """Dependencies are solved before the body is validated, so an unknown game is reported ahead of a bad move."""
    return service.require_game(GetGameRequest(game_id=game_id))


@router.post("/games", response_model=CreateGameResponse)
def create_game(service: GameService = Depends(get_game_service)):
    return service.create_new_game()


@router.get("/games", response_model=GameListResponse)
def list_games(service: GameService = Depends(get_game_service)):
    return service.list_games()


@router.get("/games/{game_id}", response_model=GameResponse)
def get_game(game_id: str, service: GameService = Depends(get_game_service)):
    return service.get_game_state(GetGameRequest(game_id=game_id))


@router.post("/games/{game_id}/move", response_model=GameResponse)
def make_move(
    payload: MovePayload,
    game_id: UUID = Depends(get_existing_game_id),
    service: GameService = Depends(get_game_service),
):
    """Body: {"row": 0-5, "col": 0-5, "symbol": "X" | "O"}"""
    request = MoveRequest(game_id=game_id, **payload.model_dump())
    return service.make_move(request)


@router.post("/games/{game_id}/reset", response_model=GameResponse)
def reset_game(game_id: str, service: GameService = Depends(get_game_service)):
    return service.reset_game(ResetGameRequest(game_id=game_id))


@router.delete("/games/{game_id}", response_model=DeleteGameResponse)
def delete_game(game_id: str, service: GameService = Depends(get_game_service)):
    return service.delete_game(DeleteGameRequest(game_id=game_id))


@router.get("/health", response_model=HealthResponse)
def health(request: Request, service: GameService = Depends(get_game_service)):
    return HealthResponse(
        message=f"{request.app.title} is running",
        timestamp=datetime.now(timezone.utc),
        active_games=service.active_game_count(),
    )
