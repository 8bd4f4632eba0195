from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from leaderboard.events import publish
from leaderboard.scoring.errors import (
    GameIncomplete,
    GameLocked,
    HoleNotFound,
    InvalidHoleConfiguration,
    InvalidMatchup,
    InvalidStatusTransition,
    ScoringError,
)
from leaderboard.scoring.game import score_game
from leaderboard.scoring.lifecycle import change_status, record_hole_scores
from leaderboard.scoring.matchups import Player, new_game
from leaderboard.scoring.models import Game, GameStatus, TeamConfig
from leaderboard.scoring.snapshot import ScoreSnapshot, build_snapshot
from leaderboard.security import require_api_key

router = APIRouter(
    prefix="/api/games", tags=["games"], dependencies=[Depends(require_api_key)]
)

logger = logging.getLogger(__name__)


def _http_error(exc: ScoringError) -> HTTPException:
    if isinstance(exc, HoleNotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="hole_not_found")
    if isinstance(exc, InvalidHoleConfiguration):
        return HTTPException(status_code=422, detail="invalid_hole_configuration")
    if isinstance(exc, InvalidMatchup):
        return HTTPException(status_code=422, detail="invalid_matchup")
    if isinstance(exc, GameIncomplete):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail="game_incomplete")
    if isinstance(exc, GameLocked):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail="game_locked")
    if isinstance(exc, InvalidStatusTransition):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="invalid_status_transition"
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid_game")


def _publish(event_type: str, game: Game) -> None:
    publish(
        game.tournament_id,
        {"type": event_type, "game": game.model_dump(mode="json", by_alias=True)},
    )


class HoleScoresIn(BaseModel):
    game: Game
    hole_number: int = Field(alias="holeNumber")
    usa_player_score: Optional[int] = Field(default=None, alias="usaPlayerScore")
    europe_player_score: Optional[int] = Field(default=None, alias="europePlayerScore")

    model_config = ConfigDict(populate_by_name=True)


class StatusIn(BaseModel):
    game: Game
    status: GameStatus


class SnapshotIn(BaseModel):
    game: Game
    use_handicaps: bool = Field(default=False, alias="useHandicaps")

    model_config = ConfigDict(populate_by_name=True)


class NewGameIn(BaseModel):
    tournament_id: str = Field(alias="tournamentId")
    usa_player: Player = Field(alias="usaPlayer")
    europe_player: Player = Field(alias="europePlayer")
    team_config: TeamConfig = Field(default="USA_VS_EUROPE", alias="teamConfig")
    use_handicaps: bool = Field(default=False, alias="useHandicaps")
    stroke_indices: Optional[List[int]] = Field(default=None, alias="strokeIndices")
    par_scores: Optional[List[int]] = Field(default=None, alias="parScores")

    model_config = ConfigDict(populate_by_name=True)


@router.post("/score", response_model=Game)
def rescore_game(game: Game) -> Game:
    try:
        scored = score_game(game)
    except ScoringError as exc:
        logger.warning("rejecting game %s: %s", game.id, exc)
        raise _http_error(exc)
    _publish("game.scored", scored)
    return scored


@router.post("/holes", response_model=Game)
def post_hole_scores(payload: HoleScoresIn) -> Game:
    if payload.usa_player_score is None and payload.europe_player_score is None:
        raise HTTPException(status_code=400, detail="no_scores")
    try:
        scored = record_hole_scores(
            payload.game,
            payload.hole_number,
            usa=payload.usa_player_score,
            europe=payload.europe_player_score,
        )
    except ScoringError as exc:
        logger.info("hole score rejected for game %s: %s", payload.game.id, exc)
        raise _http_error(exc)
    except ValueError:
        raise HTTPException(status_code=400, detail="invalid_score_entries")
    _publish("game.scored", scored)
    return scored


@router.post("/status", response_model=Game)
def post_status(payload: StatusIn) -> Game:
    try:
        updated = change_status(payload.game, payload.status)
    except ScoringError as exc:
        logger.info("status change rejected for game %s: %s", payload.game.id, exc)
        raise _http_error(exc)
    _publish("game.status", updated)
    return updated


@router.post("/snapshot", response_model=ScoreSnapshot)
def post_snapshot(payload: SnapshotIn) -> ScoreSnapshot:
    try:
        return build_snapshot(payload.game, use_handicaps=payload.use_handicaps)
    except ScoringError as exc:
        raise _http_error(exc)


@router.post("/new", response_model=Game, status_code=status.HTTP_201_CREATED)
def post_new_game(payload: NewGameIn) -> Game:
    try:
        return new_game(
            tournament_id=payload.tournament_id,
            usa_player=payload.usa_player,
            europe_player=payload.europe_player,
            team_config=payload.team_config,
            use_handicaps=payload.use_handicaps,
            stroke_indices=payload.stroke_indices,
            par_scores=payload.par_scores,
        )
    except ScoringError as exc:
        raise _http_error(exc)
