from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

Side = Literal["USA", "EUROPE"]
GameStatus = Literal["not_started", "in_progress", "complete"]
TeamConfig = Literal["USA_VS_EUROPE", "USA_VS_USA", "EUROPE_VS_EUROPE"]

SIDES: tuple[Side, Side] = ("USA", "EUROPE")


def opponent(side: Side) -> Side:
    return "EUROPE" if side == "USA" else "USA"


class Hole(BaseModel):
    hole_number: int = Field(alias="holeNumber", ge=1)
    stroke_index: int = Field(alias="strokeIndex")
    par_score: int = Field(default=4, alias="parScore", ge=1)

    usa_player_score: Optional[int] = Field(
        default=None, alias="usaPlayerScore", ge=1
    )
    europe_player_score: Optional[int] = Field(
        default=None, alias="europePlayerScore", ge=1
    )

    usa_player_adjusted_score: Optional[int] = Field(
        default=None, alias="usaPlayerAdjustedScore"
    )
    europe_player_adjusted_score: Optional[int] = Field(
        default=None, alias="europePlayerAdjustedScore"
    )

    usa_player_match_play_score: int = Field(
        default=0, alias="usaPlayerMatchPlayScore"
    )
    europe_player_match_play_score: int = Field(
        default=0, alias="europePlayerMatchPlayScore"
    )
    usa_player_match_play_adjusted_score: int = Field(
        default=0, alias="usaPlayerMatchPlayAdjustedScore"
    )
    europe_player_match_play_adjusted_score: int = Field(
        default=0, alias="europePlayerMatchPlayAdjustedScore"
    )

    model_config = ConfigDict(populate_by_name=True)

    def score(self, side: Side, *, adjusted: bool = False) -> Optional[int]:
        if side == "USA":
            return self.usa_player_adjusted_score if adjusted else self.usa_player_score
        return (
            self.europe_player_adjusted_score if adjusted else self.europe_player_score
        )

    def match_play(self, side: Side, *, adjusted: bool = False) -> int:
        if side == "USA":
            return (
                self.usa_player_match_play_adjusted_score
                if adjusted
                else self.usa_player_match_play_score
            )
        return (
            self.europe_player_match_play_adjusted_score
            if adjusted
            else self.europe_player_match_play_score
        )

    @property
    def is_scored(self) -> bool:
        return self.usa_player_score is not None and self.europe_player_score is not None


class TeamScore(BaseModel):
    """Stroke-play or match-play totals for both sides, raw and adjusted."""

    usa: int = Field(default=0, alias="USA")
    europe: int = Field(default=0, alias="EUROPE")
    adjusted_usa: int = Field(default=0, alias="adjustedUSA")
    adjusted_europe: int = Field(default=0, alias="adjustedEUROPE")

    model_config = ConfigDict(populate_by_name=True)

    def get(self, side: Side, *, adjusted: bool = False) -> int:
        if side == "USA":
            return self.adjusted_usa if adjusted else self.usa
        return self.adjusted_europe if adjusted else self.europe


class SidePoints(BaseModel):
    usa: float = Field(default=0.0, alias="USA")
    europe: float = Field(default=0.0, alias="EUROPE")

    model_config = ConfigDict(populate_by_name=True)

    def get(self, side: Side) -> float:
        return self.usa if side == "USA" else self.europe

    def __add__(self, other: "SidePoints") -> "SidePoints":
        return SidePoints(usa=self.usa + other.usa, europe=self.europe + other.europe)


class PointsBreakdown(BaseModel):
    raw: SidePoints = Field(default_factory=SidePoints)
    adjusted: SidePoints = Field(default_factory=SidePoints)

    model_config = ConfigDict(populate_by_name=True)

    def select(self, use_handicaps: bool) -> SidePoints:
        return self.adjusted if use_handicaps else self.raw

    def __add__(self, other: "PointsBreakdown") -> "PointsBreakdown":
        return PointsBreakdown(
            raw=self.raw + other.raw, adjusted=self.adjusted + other.adjusted
        )


class Game(BaseModel):
    id: str
    tournament_id: str = Field(alias="tournamentId")

    usa_player_id: str = Field(alias="usaPlayerId")
    usa_player_name: str = Field(default="", alias="usaPlayerName")
    usa_player_handicap: Optional[float] = Field(
        default=None, alias="usaPlayerHandicap"
    )
    europe_player_id: str = Field(alias="europePlayerId")
    europe_player_name: str = Field(default="", alias="europePlayerName")
    europe_player_handicap: Optional[float] = Field(
        default=None, alias="europePlayerHandicap"
    )

    handicap_strokes: int = Field(default=0, alias="handicapStrokes", ge=0)
    higher_handicap_team: Optional[Side] = Field(
        default=None, alias="higherHandicapTeam"
    )

    holes: List[Hole] = Field(default_factory=list)

    stroke_play_score: TeamScore = Field(
        default_factory=TeamScore, alias="strokePlayScore"
    )
    match_play_score: TeamScore = Field(
        default_factory=TeamScore, alias="matchPlayScore"
    )
    points: PointsBreakdown = Field(default_factory=PointsBreakdown)

    is_started: bool = Field(default=False, alias="isStarted")
    is_complete: bool = Field(default=False, alias="isComplete")
    status: Optional[GameStatus] = None

    start_time: Optional[datetime] = Field(default=None, alias="startTime")
    end_time: Optional[datetime] = Field(default=None, alias="endTime")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="after")
    def _reconcile_status(self) -> "Game":
        flags_given = {"is_started", "is_complete"} & self.model_fields_set
        if self.status is not None and not flags_given:
            self.is_started = self.status != "not_started"
            self.is_complete = self.status == "complete"
        if self.is_complete:
            self.is_started = True
        if self.status is None:
            self.status = self.derived_status
        return self

    @property
    def derived_status(self) -> GameStatus:
        if self.is_complete:
            return "complete"
        if self.is_started:
            return "in_progress"
        return "not_started"

    @property
    def status_in_sync(self) -> bool:
        return self.status == self.derived_status

    def player_id(self, side: Side) -> str:
        return self.usa_player_id if side == "USA" else self.europe_player_id

    def player_name(self, side: Side) -> str:
        return self.usa_player_name if side == "USA" else self.europe_player_name

    def player_handicap(self, side: Side) -> Optional[float]:
        return (
            self.usa_player_handicap if side == "USA" else self.europe_player_handicap
        )

    def hole(self, hole_number: int) -> Optional[Hole]:
        for hole in self.holes:
            if hole.hole_number == hole_number:
                return hole
        return None


__all__ = [
    "Side",
    "GameStatus",
    "TeamConfig",
    "SIDES",
    "opponent",
    "Hole",
    "TeamScore",
    "SidePoints",
    "PointsBreakdown",
    "Game",
]
