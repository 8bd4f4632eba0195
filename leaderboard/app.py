from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from leaderboard.api.health import health as _health_handler
from leaderboard.api.routers.games import router as games_router
from leaderboard.api.routers.tournaments import router as tournaments_router
from leaderboard.config import get_settings


def create_app() -> FastAPI:
    app = FastAPI(title="leaderboard")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(games_router)
    app.include_router(tournaments_router)
    app.add_api_route(
        "/health",
        _health_handler,
        methods=["GET"],
        response_model=None,
        tags=["health"],
    )
    return app


app = create_app()
