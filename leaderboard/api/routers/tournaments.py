from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, ConfigDict, Field

from leaderboard.events import publish, subscribe, unsubscribe
from leaderboard.scoring.matchups import Player
from leaderboard.security import require_api_key
from leaderboard.tournament.aggregate import (
    LeaderboardView,
    build_leaderboard,
    score_games,
)
from leaderboard.tournament.models import GameFailure, ProgressEntry, Tournament
from leaderboard.tournament.progress import (
    TournamentUpdate,
    bucket_progress_by_day,
    update_tournament_scores,
)
from leaderboard.tournament.stats import Highlight, tournament_highlights

router = APIRouter(
    prefix="/api/tournaments",
    tags=["tournaments"],
    dependencies=[Depends(require_api_key)],
)

logger = logging.getLogger(__name__)


class TournamentScoresIn(BaseModel):
    tournament: Tournament
    games: List[Dict[str, Any]] = Field(default_factory=list)


class LeaderboardIn(BaseModel):
    games: List[Dict[str, Any]] = Field(default_factory=list)
    use_handicaps: bool = Field(default=False, alias="useHandicaps")

    model_config = ConfigDict(populate_by_name=True)


class HighlightsIn(BaseModel):
    games: List[Dict[str, Any]] = Field(default_factory=list)
    use_handicaps: bool = Field(default=False, alias="useHandicaps")
    players: List[Player] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class HighlightsOut(BaseModel):
    highlights: List[Highlight]
    failures: List[GameFailure] = Field(default_factory=list)


class ProgressIn(BaseModel):
    progress: List[ProgressEntry] = Field(default_factory=list)


@router.post("/scores", response_model=TournamentUpdate)
def post_tournament_scores(payload: TournamentScoresIn) -> TournamentUpdate:
    result = update_tournament_scores(payload.tournament, payload.games)
    if result.scores.failures:
        logger.warning(
            "tournament %s scored with %d failing games",
            payload.tournament.id,
            len(result.scores.failures),
        )
    publish(
        payload.tournament.id,
        {
            "type": "tournament.scored",
            "tournament": result.tournament.model_dump(mode="json", by_alias=True),
        },
    )
    return result


@router.post("/leaderboard", response_model=LeaderboardView)
def post_leaderboard(payload: LeaderboardIn) -> LeaderboardView:
    return build_leaderboard(payload.games, use_handicaps=payload.use_handicaps)


@router.post("/highlights", response_model=HighlightsOut)
def post_highlights(payload: HighlightsIn) -> HighlightsOut:
    scored, failures = score_games(payload.games)
    highlights = tournament_highlights(
        scored, use_handicaps=payload.use_handicaps, players=payload.players
    )
    return HighlightsOut(highlights=highlights, failures=failures)


@router.post("/progress/daily", response_model=List[ProgressEntry])
def post_daily_progress(payload: ProgressIn) -> List[ProgressEntry]:
    return bucket_progress_by_day(payload.progress)


@router.get("/{tournament_id}/stream")
async def stream_tournament(tournament_id: str) -> StreamingResponse:
    async def event_generator():
        loop = asyncio.get_running_loop()
        queue: "asyncio.Queue[dict]" = asyncio.Queue()

        def callback(data: dict) -> None:
            loop.call_soon_threadsafe(queue.put_nowait, data)

        subscribe(tournament_id, callback)

        try:
            hello = {"type": "subscribed", "tournamentId": tournament_id}
            yield f"data: {json.dumps(hello)}\n\n".encode("utf-8")
            while True:
                payload = await queue.get()
                yield f"data: {json.dumps(payload)}\n\n".encode("utf-8")
        finally:
            unsubscribe(tournament_id, callback)

    return StreamingResponse(event_generator(), media_type="text/event-stream")
