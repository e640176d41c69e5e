"""HTTP tests for src/api/routes.py and the error handling set up in src/main.py"""

from datetime import datetime, timedelta
from typing import Generator
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from src.core.config import Settings
from src.main import create_app

EMPTY_ROWS = [[" "] * 6 for _ in range(6)]


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Fresh application (and so a fresh in-memory registry) per test. The context manager runs the lifespan."""
    app = create_app(Settings(database_url="sqlite:///:memory:"))
    with TestClient(app) as test_client:
        yield test_client


def create_game(client: TestClient) -> str:
    response = client.post("/api/games")
    assert response.status_code == 200
    return response.json()["gameId"]


def post_move(client: TestClient, game_id: str, row, col, symbol):
    return client.post(
        f"/api/games/{game_id}/move", json={"row": row, "col": col, "symbol": symbol}
    )


# --- CREATE / GET ---
def test_create_game(client: TestClient) -> None:
    response = client.post("/api/games")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["game"]["id"] == body["gameId"]

    game = body["game"]
    assert game["board"] == EMPTY_ROWS
    assert game["round"] == 1
    assert game["moves"] == [0, 0]
    assert game["currentPlayer"] == 1
    assert game["gameOver"] is False
    assert game["winner"] is None
    assert game["victory"] == [0, 0]
    assert game["numberOf4"] == [0, 0]
    assert "createdAt" in game


def test_get_game(client: TestClient) -> None:
    game_id = create_game(client)
    response = client.get(f"/api/games/{game_id}")
    assert response.status_code == 200
    assert response.json()["game"]["id"] == game_id


def test_get_unknown_game(client: TestClient) -> None:
    response = client.get(f"/api/games/{uuid4()}")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "GAME_NOT_FOUND"


@pytest.mark.parametrize(
    "method, path",
    [
        ("GET", "/api/games/not-a-uuid"),
        ("POST", "/api/games/abc/reset"),
        ("DELETE", "/api/games/abc"),
    ],
)
def test_malformed_game_id(client: TestClient, method: str, path: str) -> None:
    """IDs are opaque: one that could never have been issued is simply not found"""
    response = client.request(method, path)
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "GAME_NOT_FOUND"


def test_created_at_carries_utc_offset(client: TestClient) -> None:
    game_id = create_game(client)
    created_at = client.get(f"/api/games/{game_id}").json()["game"]["createdAt"]
    assert datetime.fromisoformat(created_at).utcoffset() == timedelta(0)


def test_two_games_have_distinct_ids(client: TestClient) -> None:
    first = create_game(client)
    second = create_game(client)
    assert first != second

    post_move(client, first, 0, 0, "X")
    assert client.get(f"/api/games/{second}").json()["game"]["board"] == EMPTY_ROWS


# --- MOVES ---
def test_make_move(client: TestClient) -> None:
    game_id = create_game(client)
    response = post_move(client, game_id, 1, 2, "O")
    assert response.status_code == 200

    game = response.json()["game"]
    assert game["board"][1][2] == "O"
    assert game["moves"] == [1, 0]
    assert game["currentPlayer"] == 2


def test_numeric_strings_are_accepted(client: TestClient) -> None:
    game_id = create_game(client)
    response = post_move(client, game_id, "3", "4", "X")
    assert response.status_code == 200
    assert response.json()["game"]["board"][3][4] == "X"


@pytest.mark.parametrize(
    "row, col, symbol",
    [
        (6, 0, "X"),  # out of range
        (0, -1, "X"),
        (0, 0, "Z"),  # not one of the two marks
        (0, 0, "x"),
    ],
)
def test_invalid_move_request(client: TestClient, row, col, symbol) -> None:
    """Rejected at the boundary: 400, the game is untouched"""
    game_id = create_game(client)
    response = post_move(client, game_id, row, col, symbol)
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "INVALID_REQUEST"
    assert client.get(f"/api/games/{game_id}").json()["game"]["moves"] == [0, 0]


@pytest.mark.parametrize(
    "payload",
    [
        {"row": 0, "col": 0},  # missing symbol
        {"row": "a", "col": 0, "symbol": "X"},  # not an integer
        {"row": 1.5, "col": 0, "symbol": "X"},
    ],
)
def test_malformed_move_request(client: TestClient, payload: dict) -> None:
    game_id = create_game(client)
    response = client.post(f"/api/games/{game_id}/move", json=payload)
    assert response.status_code == 422
    assert response.json()["success"] is False


def test_move_on_occupied_cell(client: TestClient) -> None:
    """Game logic error: structured 409, distinct from request validation errors"""
    game_id = create_game(client)
    post_move(client, game_id, 0, 0, "X")

    response = post_move(client, game_id, 0, 0, "O")
    assert response.status_code == 409
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "CELL_OCCUPIED"

    game = client.get(f"/api/games/{game_id}").json()["game"]
    assert game["board"][0][0] == "X"
    assert game["moves"] == [1, 0]


def test_move_unknown_game(client: TestClient) -> None:
    response = post_move(client, str(uuid4()), 0, 0, "X")
    assert response.status_code == 404

    response = post_move(client, "abc", 0, 0, "X")
    assert response.status_code == 404


def test_unknown_game_reported_before_bad_move(client: TestClient) -> None:
    response = post_move(client, str(uuid4()), 9, 0, "Z")
    assert response.status_code == 404
    assert response.json()["error"] == "GAME_NOT_FOUND"


def test_play_full_game(client: TestClient) -> None:
    game_id = create_game(client)
    for col in range(5):
        response = post_move(client, game_id, 0, col, "X")
    game = response.json()["game"]
    assert game["round"] == 2
    assert game["board"] == EMPTY_ROWS
    assert game["victory"] == [1, 0]
    assert game["numberOf4"] == [2, 0]

    for col in range(5):
        response = post_move(client, game_id, 5, col, "O")
    game = response.json()["game"]
    assert game["gameOver"] is True
    assert game["round"] == 2
    assert game["moves"] == [5, 5]
    assert game["winner"] == "Player 1"

    response = post_move(client, game_id, 3, 3, "X")
    assert response.status_code == 409
    assert response.json()["error"] == "GAME_OVER"


# --- RESET / LIST / DELETE ---
def test_reset_game(client: TestClient) -> None:
    game_id = create_game(client)
    post_move(client, game_id, 0, 0, "X")

    response = client.post(f"/api/games/{game_id}/reset")
    assert response.status_code == 200
    game = response.json()["game"]
    assert game["id"] == game_id
    assert game["board"] == EMPTY_ROWS
    assert game["moves"] == [0, 0]


def test_list_games(client: TestClient) -> None:
    assert client.get("/api/games").json()["games"] == []

    ids = {create_game(client) for _ in range(2)}
    body = client.get("/api/games").json()
    assert body["success"] is True
    assert {summary["id"] for summary in body["games"]} == ids
    for summary in body["games"]:
        assert set(summary) == {"id", "round", "gameOver", "winner", "createdAt"}


def test_delete_game(client: TestClient) -> None:
    game_id = create_game(client)
    response = client.delete(f"/api/games/{game_id}")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Game deleted"}

    assert client.get(f"/api/games/{game_id}").status_code == 404
    assert client.delete(f"/api/games/{game_id}").status_code == 404


# --- MISC ---
def test_health(client: TestClient) -> None:
    create_game(client)
    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["activeGames"] == 1
    assert "timestamp" in body


def test_root_lists_endpoints(client: TestClient) -> None:
    body = client.get("/").json()
    assert "POST /api/games/{game_id}/move" in body["endpoints"]


def test_unknown_endpoint(client: TestClient) -> None:
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json()["message"] == "Endpoint not found"
