from datetime import datetime, timezone

import pytest

from leaderboard.scoring.errors import (
    GameIncomplete,
    GameLocked,
    HoleNotFound,
    InvalidHoleConfiguration,
    InvalidStatusTransition,
)
from leaderboard.scoring.lifecycle import change_status, record_hole_scores
from leaderboard.scoring.models import Game

NOW = datetime(2024, 6, 1, 9, 30, tzinfo=timezone.utc)


def _fully_scored(make_game, **kwargs):
    return make_game(usa=[4] * 18, europe=[5] * 18, is_started=True, **kwargs)


def test_first_score_starts_the_game(make_game):
    game = make_game()
    assert game.status == "not_started"

    updated = record_hole_scores(game, 1, usa=4, now=NOW)

    assert updated.is_started is True
    assert updated.status == "in_progress"
    assert updated.start_time == NOW
    assert updated.hole(1).usa_player_score == 4
    assert updated.hole(1).europe_player_score is None
    assert game.is_started is False


def test_correcting_a_score_rescores_the_game(make_game):
    game = record_hole_scores(make_game(), 1, usa=4, europe=5, now=NOW)
    assert game.match_play_score.usa == 1

    corrected = record_hole_scores(game, 1, usa=6, now=NOW)

    assert corrected.hole(1).usa_player_score == 6
    assert corrected.hole(1).europe_player_score == 5
    assert corrected.match_play_score.usa == 0
    assert corrected.match_play_score.europe == 1


def test_unknown_hole_is_rejected(make_game):
    with pytest.raises(HoleNotFound):
        record_hole_scores(make_game(), 19, usa=4)


def test_non_positive_score_is_rejected(make_game):
    with pytest.raises(ValueError):
        record_hole_scores(make_game(), 1, usa=0)


def test_complete_requires_every_hole(make_game):
    game = make_game(usa=[4, 4], europe=[5, 5])

    with pytest.raises(GameIncomplete) as excinfo:
        change_status(game, "complete")

    assert excinfo.value.missing_holes == list(range(3, 19))


def test_complete_then_locked(make_game):
    game = change_status(_fully_scored(make_game), "complete", now=NOW)

    assert game.is_complete and game.status == "complete"
    assert game.end_time == NOW
    assert (game.points.raw.usa, game.points.raw.europe) == (2, 0)
    with pytest.raises(GameLocked):
        record_hole_scores(game, 1, usa=3)


def test_revert_complete_reopens_scoring(make_game):
    game = change_status(_fully_scored(make_game), "complete", now=NOW)

    reopened = change_status(game, "in_progress", now=NOW)

    assert reopened.is_complete is False
    assert reopened.status == "in_progress"
    assert reopened.end_time is None
    edited = record_hole_scores(reopened, 1, usa=3)
    assert edited.hole(1).usa_player_score == 3


def test_revert_to_not_started_keeps_scores(make_game):
    game = make_game(usa=[4, 4], europe=[5, 5])

    reverted = change_status(game, "not_started")

    assert reverted.status == "not_started"
    assert reverted.hole(1).usa_player_score == 4
    assert (reverted.points.raw.usa, reverted.points.raw.europe) == (0, 0)


@pytest.mark.parametrize(
    "start, target",
    [("not_started", "complete"), ("complete", "not_started")],
)
def test_transitions_cannot_skip_states(make_game, start, target):
    if start == "complete":
        game = change_status(_fully_scored(make_game), "complete")
    else:
        game = make_game()

    with pytest.raises(InvalidStatusTransition):
        change_status(game, target)


def test_same_status_is_a_no_op(make_game):
    game = make_game(usa=[4], europe=[5])

    again = change_status(game, "in_progress")

    assert again.status == "in_progress"
    assert again.start_time == game.start_time


def test_status_is_reconciled_from_flags():
    base = {
        "id": "g",
        "tournamentId": "t",
        "usaPlayerId": "a",
        "europePlayerId": "b",
    }

    complete = Game.model_validate({**base, "isComplete": True})
    assert complete.is_started is True
    assert complete.status == "complete"

    from_status = Game.model_validate({**base, "status": "in_progress"})
    assert from_status.is_started is True
    assert from_status.is_complete is False

    diverged = Game.model_validate({**base, "isStarted": False, "status": "complete"})
    assert diverged.status == "complete"
    assert diverged.derived_status == "not_started"
    assert diverged.status_in_sync is False


def test_game_without_holes_cannot_complete(make_game):
    game = make_game(holes=0, is_started=True)

    with pytest.raises(InvalidHoleConfiguration):
        change_status(game, "complete")
