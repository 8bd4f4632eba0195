"""Game scoring: handicap allocation, stroke/match play totals and points."""

from .errors import (
    GameIncomplete,
    GameLocked,
    HoleNotFound,
    InvalidHoleConfiguration,
    InvalidMatchup,
    InvalidStatusTransition,
    ScoringError,
)
from .game import calculate_game_points, points_for_scores, score_game
from .handicap import HandicapAdjustment, apply_handicap
from .lifecycle import change_status, record_hole_scores
from .models import Game, Hole, PointsBreakdown, SidePoints, TeamScore
from .snapshot import ScoreSnapshot, build_snapshot

__all__ = [
    "Game",
    "Hole",
    "TeamScore",
    "SidePoints",
    "PointsBreakdown",
    "HandicapAdjustment",
    "apply_handicap",
    "score_game",
    "calculate_game_points",
    "points_for_scores",
    "change_status",
    "record_hole_scores",
    "ScoreSnapshot",
    "build_snapshot",
    "ScoringError",
    "InvalidHoleConfiguration",
    "InvalidMatchup",
    "InvalidStatusTransition",
    "GameIncomplete",
    "GameLocked",
    "HoleNotFound",
]
