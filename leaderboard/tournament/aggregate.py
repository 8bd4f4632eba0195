"""Roll game points up into tournament totals."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from leaderboard.scoring.errors import ScoringError
from leaderboard.scoring.game import score_game
from leaderboard.scoring.models import Game, PointsBreakdown, SidePoints
from leaderboard.scoring.snapshot import ScoreSnapshot, build_snapshot

from .models import GameFailure, TournamentScores

logger = logging.getLogger(__name__)

GameInput = Union[Game, Mapping[str, Any]]


def _game_id(candidate: GameInput) -> str | None:
    if isinstance(candidate, Game):
        return candidate.id
    value = candidate.get("id") if isinstance(candidate, Mapping) else None
    return str(value) if value is not None else None


def score_games(games: Iterable[GameInput]) -> Tuple[List[Game], List[GameFailure]]:
    """Rescore every game, collecting the ones that cannot be scored."""

    scored: List[Game] = []
    failures: List[GameFailure] = []
    for candidate in games:
        try:
            game = (
                candidate
                if isinstance(candidate, Game)
                else Game.model_validate(candidate)
            )
            scored.append(score_game(game))
        except (ScoringError, ValidationError) as exc:
            game_id = _game_id(candidate)
            logger.warning("excluding game %s from tournament totals: %s", game_id, exc)
            failures.append(GameFailure(game_id=game_id, reason=str(exc)))
    return scored, failures


def aggregate_games(games: Iterable[GameInput]) -> TournamentScores:
    """Current and projected tournament totals for a set of games.

    Completed games count towards both totals; in-progress games only towards
    the projection. Games that fail validation are reported, not counted.
    """

    scored, failures = score_games(games)

    total = PointsBreakdown()
    projected = PointsBreakdown()
    completed = 0
    for game in scored:
        projected = projected + game.points
        if game.is_complete:
            total = total + game.points
            completed += 1

    return TournamentScores(
        total_score=total,
        projected_score=projected,
        completed_games=completed,
        games_counted=len(scored),
        failures=failures,
    )


class LeaderboardView(BaseModel):
    use_handicaps: bool = Field(alias="useHandicaps")
    current: SidePoints
    projected: SidePoints
    completed_games: int = Field(alias="completedGames")
    total_games: int = Field(alias="totalGames")
    games: List[ScoreSnapshot] = Field(default_factory=list)
    failures: List[GameFailure] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


def build_leaderboard(
    games: Iterable[GameInput], *, use_handicaps: bool
) -> LeaderboardView:
    scored, failures = score_games(games)
    scores = aggregate_games(scored)
    return LeaderboardView(
        use_handicaps=use_handicaps,
        current=scores.current(use_handicaps),
        projected=scores.projected(use_handicaps),
        completed_games=scores.completed_games,
        total_games=len(scored) + len(failures),
        games=[build_snapshot(game, use_handicaps=use_handicaps) for game in scored],
        failures=failures,
    )


__all__ = [
    "GameInput",
    "LeaderboardView",
    "aggregate_games",
    "build_leaderboard",
    "score_games",
]
