"""Application factory: wires settings, database, registry, service and routes together."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api import routes
from src.api.models import ErrorResponse
from src.core.config import Settings, configure_logging, get_settings
from src.core.exceptions import (
    GameError,
    GameNotFoundError,
    IllegalMoveError,
    InvalidRequestError,
)
from src.db.database import create_db_engine, create_session
from src.db.sql_repository import SQLGameRepository
from src.services.game_service import GameService
from src.services.registry import GameRegistry

logger = logging.getLogger(__name__)

# Anything else deriving from GameError is an internal fault (500)
ERROR_STATUS_CODES: dict[type[GameError], int] = {
    InvalidRequestError: 400,
    GameNotFoundError: 404,
    IllegalMoveError: 409,
}


def _status_code(exc: GameError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status_code
    return 500


def _error_response(status_code: int, error: str, message: str, **extra) -> JSONResponse:
    body = ErrorResponse(error=error, message=message).model_dump(by_alias=True)
    body.update(extra)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(GameError)
    async def handle_game_error(request: Request, exc: GameError) -> JSONResponse:
        status_code = _status_code(exc)
        if status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
        else:
            logger.info(f"{request.method} {request.url.path} rejected: {exc}")
        return _error_response(status_code, exc.code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(
            422, InvalidRequestError.code, "Invalid request.", details=exc.errors()
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        message = "Endpoint not found" if exc.status_code == 404 else str(exc.detail)
        return _error_response(exc.status_code, "HTTP_ERROR", message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unexpected error on {request.method} {request.url.path}", exc_info=exc)
        return _error_response(500, "INTERNAL_ERROR", "Something went wrong!")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: the registry of live games exists for as long as the application runs
        engine = create_db_engine(settings)
        session = create_session(engine)
        app.state.game_service = GameService(GameRegistry(SQLGameRepository(session)))
        logger.info(f"{settings.app_name} started (database: {engine.url.render_as_string()})")
        yield
        # Shutdown
        session.close()
        engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Backend API for the two-round Order and Chaos board game",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(routes.router)

    @app.get("/")
    def root():
        return {
            "message": f"Welcome to the {settings.app_name}!",
            "endpoints": [
                f"{', '.join(sorted(route.methods))} {route.path}"
                for route in routes.router.routes
            ],
        }

    return app


def run() -> None:
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
