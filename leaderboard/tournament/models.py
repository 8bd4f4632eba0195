from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from leaderboard.scoring.models import PointsBreakdown, SidePoints, TeamConfig


class ProgressEntry(BaseModel):
    timestamp: datetime
    score: PointsBreakdown = Field(default_factory=PointsBreakdown)
    projected_score: PointsBreakdown = Field(
        default_factory=PointsBreakdown, alias="projectedScore"
    )
    completed_games: int = Field(default=0, alias="completedGames", ge=0)

    model_config = ConfigDict(populate_by_name=True)


class Tournament(BaseModel):
    id: str
    name: str = ""
    year: Optional[int] = None
    is_active: bool = Field(default=False, alias="isActive")
    is_complete: bool = Field(default=False, alias="isComplete")
    use_handicaps: bool = Field(default=False, alias="useHandicaps")
    team_config: TeamConfig = Field(default="USA_VS_EUROPE", alias="teamConfig")

    total_score: PointsBreakdown = Field(
        default_factory=PointsBreakdown, alias="totalScore"
    )
    projected_score: PointsBreakdown = Field(
        default_factory=PointsBreakdown, alias="projectedScore"
    )
    progress: List[ProgressEntry] = Field(default_factory=list)

    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)


class GameFailure(BaseModel):
    game_id: Optional[str] = Field(default=None, alias="gameId")
    reason: str

    model_config = ConfigDict(populate_by_name=True)


class TournamentScores(BaseModel):
    total_score: PointsBreakdown = Field(
        default_factory=PointsBreakdown, alias="totalScore"
    )
    projected_score: PointsBreakdown = Field(
        default_factory=PointsBreakdown, alias="projectedScore"
    )
    completed_games: int = Field(default=0, alias="completedGames")
    games_counted: int = Field(default=0, alias="gamesCounted")
    failures: List[GameFailure] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    def current(self, use_handicaps: bool) -> SidePoints:
        return self.total_score.select(use_handicaps)

    def projected(self, use_handicaps: bool) -> SidePoints:
        return self.projected_score.select(use_handicaps)


__all__ = ["GameFailure", "ProgressEntry", "Tournament", "TournamentScores"]
