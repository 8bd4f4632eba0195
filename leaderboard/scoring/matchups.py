from __future__ import annotations

import math
import uuid
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from leaderboard.config import get_settings

from .errors import InvalidHoleConfiguration, InvalidMatchup
from .game import score_game
from .handicap import validate_holes
from .models import Game, Hole, Side, TeamConfig


class HistoricalScore(BaseModel):
    year: int
    score: int


class Player(BaseModel):
    id: str
    name: str
    team: Side
    tier: Optional[int] = None
    historical_scores: List[HistoricalScore] = Field(
        default_factory=list, alias="historicalScores"
    )
    average_score: Optional[int] = Field(default=None, alias="averageScore")

    model_config = ConfigDict(populate_by_name=True)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def average_score(
    scores: Sequence[HistoricalScore], window: Optional[int] = None
) -> Optional[int]:
    """Rounded mean of the most recent ``window`` yearly scores."""

    if not scores:
        return None
    size = window or get_settings().historical_rounds_window
    recent = sorted(scores, key=lambda s: s.year, reverse=True)[:size]
    return round_half_up(sum(s.score for s in recent) / len(recent))


def player_average(player: Player) -> Optional[int]:
    if player.average_score is not None:
        return player.average_score
    return average_score(player.historical_scores)


def matchup_handicap(
    usa_average: Optional[float], europe_average: Optional[float]
) -> Tuple[int, Optional[Side]]:
    """Return ``(handicap_strokes, higher_handicap_team)`` for two averages.

    The side with the worse (higher) average is the higher handicap team; equal
    or unknown averages give no strokes and no higher team.
    """

    if usa_average is None or europe_average is None:
        return 0, None
    difference = round_half_up(abs(usa_average - europe_average))
    if difference == 0:
        return 0, None
    return difference, "USA" if usa_average > europe_average else "EUROPE"


def roster_for_side(team_config: TeamConfig, side: Side) -> Side:
    if team_config == "USA_VS_USA":
        return "USA"
    if team_config == "EUROPE_VS_EUROPE":
        return "EUROPE"
    return side


def check_roster(team_config: TeamConfig, usa_player: Player, europe_player: Player) -> None:
    if usa_player.id == europe_player.id:
        raise InvalidMatchup(f"player {usa_player.id} cannot play against themselves")
    for side, player in (("USA", usa_player), ("EUROPE", europe_player)):
        expected = roster_for_side(team_config, side)
        if player.team != expected:
            raise InvalidMatchup(
                f"{team_config}: {side} side must be drawn from the {expected} "
                f"roster, got {player.name} ({player.team})"
            )


def build_holes(
    stroke_indices: Optional[Sequence[int]] = None,
    par_scores: Optional[Sequence[int]] = None,
) -> List[Hole]:
    settings = get_settings()
    indices = list(stroke_indices or settings.stroke_indices)
    if par_scores is not None and len(par_scores) != len(indices):
        raise InvalidHoleConfiguration(
            f"{len(par_scores)} par scores for {len(indices)} holes"
        )
    holes = [
        Hole(
            hole_number=number,
            stroke_index=index,
            par_score=par_scores[number - 1] if par_scores else settings.default_par,
        )
        for number, index in enumerate(indices, start=1)
    ]
    validate_holes(holes)
    return holes


def new_game(
    *,
    tournament_id: str,
    usa_player: Player,
    europe_player: Player,
    team_config: TeamConfig = "USA_VS_EUROPE",
    use_handicaps: bool = False,
    stroke_indices: Optional[Sequence[int]] = None,
    par_scores: Optional[Sequence[int]] = None,
    game_id: Optional[str] = None,
) -> Game:
    """Create an unscored game for a matchup."""

    check_roster(team_config, usa_player, europe_player)
    usa_avg = player_average(usa_player)
    europe_avg = player_average(europe_player)

    handicap_strokes, higher_team = (0, None)
    if use_handicaps:
        handicap_strokes, higher_team = matchup_handicap(usa_avg, europe_avg)

    game = Game(
        id=game_id or uuid.uuid4().hex,
        tournament_id=tournament_id,
        usa_player_id=usa_player.id,
        usa_player_name=usa_player.name,
        usa_player_handicap=usa_avg,
        europe_player_id=europe_player.id,
        europe_player_name=europe_player.name,
        europe_player_handicap=europe_avg,
        handicap_strokes=handicap_strokes,
        higher_handicap_team=higher_team,
        holes=build_holes(stroke_indices, par_scores),
    )
    return score_game(game)


__all__ = [
    "HistoricalScore",
    "Player",
    "average_score",
    "build_holes",
    "check_roster",
    "matchup_handicap",
    "new_game",
    "player_average",
    "round_half_up",
    "roster_for_side",
]
