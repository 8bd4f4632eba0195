"""Golf tournament leaderboard: handicap-adjusted game scoring and rollups."""

__version__ = "0.1.0"
