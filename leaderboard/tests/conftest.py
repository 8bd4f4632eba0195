"""Shared pytest fixtures for leaderboard tests."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

import pytest

from leaderboard import events
from leaderboard.config import reset_settings_cache
from leaderboard.scoring.models import Game, Hole

Scores = Optional[Sequence[Optional[int]]]


def _pad(scores: Scores, count: int) -> list:
    values = list(scores or [])
    return values + [None] * (count - len(values))


@pytest.fixture(autouse=True)
def _fresh_state():
    reset_settings_cache()
    events._SUBSCRIBERS.clear()  # type: ignore[attr-defined]
    yield
    reset_settings_cache()
    events._SUBSCRIBERS.clear()  # type: ignore[attr-defined]


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def make_game() -> Callable[..., Game]:
    """Build a game whose hole ``n`` has stroke index ``n`` unless overridden."""

    def _make(
        usa: Scores = None,
        europe: Scores = None,
        *,
        holes: int = 18,
        stroke_indices: Optional[Sequence[int]] = None,
        pars: Optional[Sequence[int]] = None,
        handicap_strokes: int = 0,
        higher_handicap_team: Optional[str] = None,
        is_started: Optional[bool] = None,
        is_complete: bool = False,
        game_id: str = "game1",
        tournament_id: str = "t1",
        **extra,
    ) -> Game:
        usa_scores = _pad(usa, holes)
        europe_scores = _pad(europe, holes)
        indices = list(stroke_indices or range(1, holes + 1))
        hole_list = [
            Hole(
                hole_number=n,
                stroke_index=indices[n - 1],
                par_score=pars[n - 1] if pars else 4,
                usa_player_score=usa_scores[n - 1],
                europe_player_score=europe_scores[n - 1],
            )
            for n in range(1, holes + 1)
        ]
        if is_started is None:
            is_started = is_complete or any(
                s is not None for s in usa_scores + europe_scores
            )
        return Game(
            id=game_id,
            tournament_id=tournament_id,
            usa_player_id="p1",
            usa_player_name="Jordi",
            europe_player_id="p2",
            europe_player_name="Gilo",
            handicap_strokes=handicap_strokes,
            higher_handicap_team=higher_handicap_team,
            holes=hole_list,
            is_started=is_started,
            is_complete=is_complete,
            **extra,
        )

    return _make
