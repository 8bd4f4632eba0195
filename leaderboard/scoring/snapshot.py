"""Read model handed to presentation layers.

Everything here is derived from :func:`score_game`; consumers must not compare
stored totals themselves.
"""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .game import score_game
from .models import Game, GameStatus, Side, SidePoints, opponent

Leader = Optional[Union[Side, Literal["draw"]]]


def leader(usa: float, europe: float, *, lower_wins: bool, has_data: bool) -> Leader:
    if not has_data:
        return None
    if usa == europe:
        return "draw"
    usa_ahead = usa < europe if lower_wins else usa > europe
    return "USA" if usa_ahead else "EUROPE"


class ModeScore(BaseModel):
    usa: float = Field(alias="USA")
    europe: float = Field(alias="EUROPE")
    leader: Leader = None

    model_config = ConfigDict(populate_by_name=True)


class ScoreSnapshot(BaseModel):
    game_id: str = Field(alias="gameId")
    status: GameStatus
    use_handicaps: bool = Field(alias="useHandicaps")
    holes_played: int = Field(alias="holesPlayed")
    stroke_play: ModeScore = Field(alias="strokePlay")
    match_play: ModeScore = Field(alias="matchPlay")
    points: SidePoints
    points_leader: Leader = Field(default=None, alias="pointsLeader")
    strokes_received: int = Field(default=0, alias="strokesReceived")
    receiving_side: Optional[Side] = Field(default=None, alias="receivingSide")

    model_config = ConfigDict(populate_by_name=True)


def build_snapshot(game: Game, *, use_handicaps: bool) -> ScoreSnapshot:
    scored = score_game(game)
    adjusted = use_handicaps
    holes_played = sum(1 for hole in scored.holes if hole.is_scored)
    usa_recorded = any(h.usa_player_score is not None for h in scored.holes)
    europe_recorded = any(h.europe_player_score is not None for h in scored.holes)
    started = scored.is_started

    stroke = scored.stroke_play_score
    match = scored.match_play_score
    points = scored.points.select(use_handicaps)

    receiving: Optional[Side] = None
    if use_handicaps and scored.higher_handicap_team and scored.handicap_strokes:
        receiving = opponent(scored.higher_handicap_team)

    return ScoreSnapshot(
        game_id=scored.id,
        status=scored.derived_status,
        use_handicaps=use_handicaps,
        holes_played=holes_played,
        stroke_play=ModeScore(
            usa=stroke.get("USA", adjusted=adjusted),
            europe=stroke.get("EUROPE", adjusted=adjusted),
            leader=leader(
                stroke.get("USA", adjusted=adjusted),
                stroke.get("EUROPE", adjusted=adjusted),
                lower_wins=True,
                has_data=started and usa_recorded and europe_recorded,
            ),
        ),
        match_play=ModeScore(
            usa=match.get("USA", adjusted=adjusted),
            europe=match.get("EUROPE", adjusted=adjusted),
            leader=leader(
                match.get("USA", adjusted=adjusted),
                match.get("EUROPE", adjusted=adjusted),
                lower_wins=False,
                has_data=started and holes_played > 0,
            ),
        ),
        points=points,
        points_leader=leader(
            points.usa,
            points.europe,
            lower_wins=False,
            has_data=started and (points.usa > 0 or points.europe > 0),
        ),
        strokes_received=scored.handicap_strokes if receiving else 0,
        receiving_side=receiving,
    )


__all__ = ["Leader", "ModeScore", "ScoreSnapshot", "build_snapshot", "leader"]
