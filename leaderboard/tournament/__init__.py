"""Tournament-level rollups of game points."""

from .aggregate import LeaderboardView, aggregate_games, build_leaderboard, score_games
from .models import GameFailure, ProgressEntry, Tournament, TournamentScores
from .progress import (
    TournamentUpdate,
    append_progress,
    bucket_progress_by_day,
    update_tournament_scores,
)

__all__ = [
    "Tournament",
    "TournamentScores",
    "TournamentUpdate",
    "ProgressEntry",
    "GameFailure",
    "LeaderboardView",
    "aggregate_games",
    "build_leaderboard",
    "score_games",
    "append_progress",
    "bucket_progress_by_day",
    "update_tournament_scores",
]
