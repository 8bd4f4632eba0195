"""Tournament progress series: append-only snapshots of the running score."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel

from leaderboard.scoring.models import Game

from .aggregate import GameInput, aggregate_games, score_games
from .models import ProgressEntry, Tournament, TournamentScores

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def make_progress_entry(scores: TournamentScores, *, now: datetime) -> ProgressEntry:
    return ProgressEntry(
        timestamp=_as_utc(now),
        score=scores.total_score,
        projected_score=scores.projected_score,
        completed_games=scores.completed_games,
    )


def append_progress(
    progress: Sequence[ProgressEntry], entry: ProgressEntry
) -> List[ProgressEntry]:
    """Return a new series with ``entry`` appended.

    The series never goes back in time or in completed games: an entry stamped
    before the last one is moved up to the last timestamp, and an entry with
    fewer completed games than the last one (a reverted game) is not recorded.
    """

    series = list(progress)
    if not series:
        return [entry]

    last = series[-1]
    if entry.completed_games < last.completed_games:
        logger.info(
            "skipping progress entry: completed games dropped from %s to %s",
            last.completed_games,
            entry.completed_games,
        )
        return series

    last_ts = _as_utc(last.timestamp)
    if _as_utc(entry.timestamp) < last_ts:
        entry = entry.model_copy(update={"timestamp": last_ts})
    series.append(entry)
    return series


def _has_scored_hole(games: Iterable[Game]) -> bool:
    return any(
        game.is_started and any(hole.is_scored for hole in game.holes)
        for game in games
    )


def has_recordable_change(
    tournament: Tournament, scores: TournamentScores, games: Iterable[Game]
) -> bool:
    if _has_scored_hole(games):
        return True
    return (
        tournament.total_score != scores.total_score
        or tournament.projected_score != scores.projected_score
    )


class TournamentUpdate(BaseModel):
    tournament: Tournament
    scores: TournamentScores
    recorded: bool = False


def update_tournament_scores(
    tournament: Tournament,
    games: Iterable[GameInput],
    *,
    now: Optional[datetime] = None,
) -> TournamentUpdate:
    """Recompute a tournament's totals from its games and log progress.

    The input tournament is not modified; the returned one carries the new
    totals and, when anything changed, one more progress entry.
    """

    ts = _as_utc(now or datetime.now(timezone.utc))
    scored, failures = score_games(games)
    scores = aggregate_games(scored).model_copy(
        update={"failures": failures}
    )

    recorded = False
    progress = list(tournament.progress)
    if has_recordable_change(tournament, scores, scored):
        updated = append_progress(progress, make_progress_entry(scores, now=ts))
        recorded = len(updated) > len(progress)
        progress = updated

    updated_tournament = tournament.model_copy(
        update={
            "total_score": scores.total_score,
            "projected_score": scores.projected_score,
            "progress": progress,
            "updated_at": ts,
        }
    )
    return TournamentUpdate(tournament=updated_tournament, scores=scores, recorded=recorded)


def bucket_progress_by_day(progress: Sequence[ProgressEntry]) -> List[ProgressEntry]:
    """Keep the last entry of each calendar day when the series spans days."""

    ordered = sorted(progress, key=lambda e: _as_utc(e.timestamp))
    days: Dict[date, ProgressEntry] = {}
    for entry in ordered:
        days[_as_utc(entry.timestamp).date()] = entry
    if len(days) <= 1:
        return ordered
    return list(days.values())


__all__ = [
    "TournamentUpdate",
    "append_progress",
    "bucket_progress_by_day",
    "has_recordable_change",
    "make_progress_entry",
    "update_tournament_scores",
]
