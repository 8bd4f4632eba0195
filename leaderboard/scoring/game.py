"""Stroke-play, match-play and point computation for a single game."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .handicap import apply_handicap
from .models import Game, Hole, PointsBreakdown, SidePoints, TeamScore


def _hole_winner(usa: Optional[int], europe: Optional[int]) -> tuple[int, int]:
    if usa is None or europe is None or usa == europe:
        return 0, 0
    return (1, 0) if usa < europe else (0, 1)


def score_hole_match_play(hole: Hole) -> Hole:
    """Set the per-hole match-play flags from the raw and adjusted scores."""

    if not hole.is_scored:
        usa_raw = europe_raw = usa_adj = europe_adj = 0
    else:
        usa_raw, europe_raw = _hole_winner(
            hole.usa_player_score, hole.europe_player_score
        )
        usa_adj, europe_adj = _hole_winner(
            hole.usa_player_adjusted_score, hole.europe_player_adjusted_score
        )
    return hole.model_copy(
        update={
            "usa_player_match_play_score": usa_raw,
            "europe_player_match_play_score": europe_raw,
            "usa_player_match_play_adjusted_score": usa_adj,
            "europe_player_match_play_adjusted_score": europe_adj,
        }
    )


def stroke_play_totals(holes: Sequence[Hole]) -> TeamScore:
    def total(side, adjusted):
        return sum(
            score
            for score in (hole.score(side, adjusted=adjusted) for hole in holes)
            if score is not None
        )

    return TeamScore(
        usa=total("USA", False),
        europe=total("EUROPE", False),
        adjusted_usa=total("USA", True),
        adjusted_europe=total("EUROPE", True),
    )


def match_play_totals(holes: Sequence[Hole]) -> TeamScore:
    scored = [hole for hole in holes if hole.is_scored]
    return TeamScore(
        usa=sum(h.usa_player_match_play_score for h in scored),
        europe=sum(h.europe_player_match_play_score for h in scored),
        adjusted_usa=sum(h.usa_player_match_play_adjusted_score for h in scored),
        adjusted_europe=sum(h.europe_player_match_play_adjusted_score for h in scored),
    )


def _mode_points(
    usa: float, europe: float, *, lower_wins: bool, counts: bool
) -> SidePoints:
    if not counts:
        return SidePoints()
    if usa == europe:
        return SidePoints(usa=0.5, europe=0.5)
    usa_wins = usa < europe if lower_wins else usa > europe
    return SidePoints(usa=1.0, europe=0.0) if usa_wins else SidePoints(usa=0.0, europe=1.0)


def points_for_scores(
    stroke_play: TeamScore,
    match_play: TeamScore,
    *,
    is_started: bool,
    is_complete: bool,
    usa_holes_recorded: Optional[int] = None,
    europe_holes_recorded: Optional[int] = None,
    match_play_holes: Optional[int] = None,
) -> PointsBreakdown:
    """Apply the point rule to stroke-play and match-play totals.

    Complete games always award the full point per mode (0.5 each on a tie).
    Started games award projected points, except for a mode in which either
    side has nothing recorded yet. When hole counts are not supplied, a
    stroke-play total of zero stands for "no holes recorded" and a 0-0 match
    play for "no holes contested".
    """

    if not is_started and not is_complete:
        return PointsBreakdown()

    def split(adjusted: bool) -> SidePoints:
        if is_complete:
            stroke_counts = match_counts = True
        else:
            if usa_holes_recorded is None or europe_holes_recorded is None:
                stroke_counts = (
                    stroke_play.get("USA", adjusted=adjusted) > 0
                    and stroke_play.get("EUROPE", adjusted=adjusted) > 0
                )
            else:
                stroke_counts = usa_holes_recorded > 0 and europe_holes_recorded > 0
            if match_play_holes is None:
                match_counts = (
                    match_play.get("USA", adjusted=adjusted) > 0
                    or match_play.get("EUROPE", adjusted=adjusted) > 0
                )
            else:
                match_counts = match_play_holes > 0

        stroke = _mode_points(
            stroke_play.get("USA", adjusted=adjusted),
            stroke_play.get("EUROPE", adjusted=adjusted),
            lower_wins=True,
            counts=stroke_counts,
        )
        match = _mode_points(
            match_play.get("USA", adjusted=adjusted),
            match_play.get("EUROPE", adjusted=adjusted),
            lower_wins=False,
            counts=match_counts,
        )
        return stroke + match

    return PointsBreakdown(raw=split(False), adjusted=split(True))


def score_game(game: Game) -> Game:
    """Recompute every derived field of ``game`` from its holes.

    Raises ``InvalidHoleConfiguration`` when the stroke-index table is broken.
    """

    adjustment = apply_handicap(
        game.holes,
        handicap_strokes=game.handicap_strokes,
        higher_handicap_team=game.higher_handicap_team,
    )
    holes: List[Hole] = [score_hole_match_play(h) for h in adjustment.holes]

    stroke_play = stroke_play_totals(holes)
    match_play = match_play_totals(holes)
    points = points_for_scores(
        stroke_play,
        match_play,
        is_started=game.is_started,
        is_complete=game.is_complete,
        usa_holes_recorded=sum(1 for h in holes if h.usa_player_score is not None),
        europe_holes_recorded=sum(
            1 for h in holes if h.europe_player_score is not None
        ),
        match_play_holes=sum(1 for h in holes if h.is_scored),
    )
    return game.model_copy(
        update={
            "holes": holes,
            "stroke_play_score": stroke_play,
            "match_play_score": match_play,
            "points": points,
        }
    )


def calculate_game_points(game: Game) -> PointsBreakdown:
    return score_game(game).points


__all__ = [
    "calculate_game_points",
    "match_play_totals",
    "points_for_scores",
    "score_game",
    "score_hole_match_play",
    "stroke_play_totals",
]
