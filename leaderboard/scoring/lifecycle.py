"""Game status transitions and hole score entry."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, FrozenSet, Optional

from .errors import (
    GameIncomplete,
    GameLocked,
    HoleNotFound,
    InvalidHoleConfiguration,
    InvalidStatusTransition,
)
from .game import score_game
from .models import Game, GameStatus

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[GameStatus, FrozenSet[GameStatus]] = {
    "not_started": frozenset({"in_progress"}),
    "in_progress": frozenset({"complete", "not_started"}),
    "complete": frozenset({"in_progress"}),
}

_FLAGS: Dict[GameStatus, tuple[bool, bool]] = {
    "not_started": (False, False),
    "in_progress": (True, False),
    "complete": (True, True),
}


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


def change_status(
    game: Game, new_status: GameStatus, *, now: Optional[datetime] = None
) -> Game:
    """Move ``game`` to ``new_status`` and rescore it.

    Completing requires every hole to carry both raw scores. Reverting keeps
    the recorded hole scores; only the flags and therefore the points change.
    """

    current = game.derived_status
    if new_status == current:
        return score_game(game.model_copy(update={"status": current}))
    if new_status not in ALLOWED_TRANSITIONS[current]:
        raise InvalidStatusTransition(current, new_status)

    if new_status == "complete":
        if not game.holes:
            raise InvalidHoleConfiguration(f"game {game.id} has no holes to complete")
        missing = [hole.hole_number for hole in game.holes if not hole.is_scored]
        if missing:
            raise GameIncomplete(game.id, missing)

    ts = _now(now)
    is_started, is_complete = _FLAGS[new_status]
    update = {
        "is_started": is_started,
        "is_complete": is_complete,
        "status": new_status,
        "updated_at": ts,
    }
    if new_status == "in_progress" and game.start_time is None:
        update["start_time"] = ts
    if new_status == "complete":
        update["end_time"] = ts
    elif current == "complete":
        update["end_time"] = None

    logger.info("game %s status %s -> %s", game.id, current, new_status)
    return score_game(game.model_copy(update=update))


def record_hole_scores(
    game: Game,
    hole_number: int,
    *,
    usa: Optional[int] = None,
    europe: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Game:
    """Set or correct raw scores on one hole and rescore the game.

    ``None`` leaves a side's existing score untouched. The first score on a
    not-started game starts it.
    """

    if game.is_complete:
        raise GameLocked(f"game {game.id} is complete; revert it before editing")
    target = game.hole(hole_number)
    if target is None:
        raise HoleNotFound(f"game {game.id} has no hole {hole_number}")
    for value in (usa, europe):
        if value is not None and value < 1:
            raise ValueError(f"hole score must be positive, got {value}")

    update = {}
    if usa is not None:
        update["usa_player_score"] = usa
    if europe is not None:
        update["europe_player_score"] = europe
    updated_hole = target.model_copy(update=update)
    holes = [
        updated_hole if hole.hole_number == hole_number else hole
        for hole in game.holes
    ]

    ts = _now(now)
    game_update = {"holes": holes, "updated_at": ts}
    if not game.is_started and update:
        game_update.update(
            {"is_started": True, "status": "in_progress", "start_time": ts}
        )
        logger.debug("game %s started by first score on hole %s", game.id, hole_number)
    return score_game(game.model_copy(update=game_update))


__all__ = ["ALLOWED_TRANSITIONS", "change_status", "record_hole_scores"]
