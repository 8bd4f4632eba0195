from __future__ import annotations


class ScoringError(ValueError):
    pass


class InvalidHoleConfiguration(ScoringError):
    """Stroke-index table or hole numbering of a game is not usable."""


class InvalidMatchup(ScoringError):
    pass


class InvalidStatusTransition(ScoringError):
    def __init__(self, current: str, requested: str):
        super().__init__(f"cannot move game from {current} to {requested}")
        self.current = current
        self.requested = requested


class GameIncomplete(ScoringError):
    """Raised when completing a game that still has unscored holes."""

    def __init__(self, game_id: str, missing_holes: list[int]):
        super().__init__(
            f"game {game_id} has unscored holes: "
            + ", ".join(str(n) for n in missing_holes)
        )
        self.game_id = game_id
        self.missing_holes = missing_holes


class GameLocked(ScoringError):
    pass


class HoleNotFound(ScoringError):
    pass


__all__ = [
    "ScoringError",
    "InvalidHoleConfiguration",
    "InvalidMatchup",
    "InvalidStatusTransition",
    "GameIncomplete",
    "GameLocked",
    "HoleNotFound",
]
