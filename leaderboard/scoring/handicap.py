"""Handicap stroke allocation and adjusted stroke-play totals.

The side that is *not* ``higher_handicap_team`` receives strokes off its raw
score. With ``N`` holes, every hole gets ``handicap_strokes // N`` strokes and
the holes whose stroke index is at most ``handicap_strokes % N`` get one more,
so allowances larger than the course wrap around onto the hardest holes again.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from .errors import InvalidHoleConfiguration
from .models import Hole, Side, opponent


@dataclass(frozen=True)
class HandicapAdjustment:
    holes: List[Hole]
    adjusted_usa: int = 0
    adjusted_europe: int = 0
    strokes_received: Dict[int, int] = field(default_factory=dict)
    receiving_side: Optional[Side] = None


def validate_holes(holes: Sequence[Hole]) -> None:
    """Reject hole tables whose stroke indices are not a permutation of 1..N."""

    count = len(holes)

    numbers = Counter(hole.hole_number for hole in holes)
    duplicate_numbers = sorted(n for n, seen in numbers.items() if seen > 1)
    if duplicate_numbers:
        raise InvalidHoleConfiguration(
            f"duplicate hole numbers: {duplicate_numbers}"
        )

    indices = Counter(hole.stroke_index for hole in holes)
    duplicates = sorted(i for i, seen in indices.items() if seen > 1)
    if duplicates:
        raise InvalidHoleConfiguration(f"duplicate stroke indices: {duplicates}")

    expected = set(range(1, count + 1))
    missing = sorted(expected - set(indices))
    if missing:
        raise InvalidHoleConfiguration(
            f"stroke indices must cover 1..{count}; missing {missing}"
        )


def receiving_side(
    handicap_strokes: int, higher_handicap_team: Optional[Side]
) -> Optional[Side]:
    if higher_handicap_team is None or handicap_strokes <= 0:
        return None
    return opponent(higher_handicap_team)


def strokes_for_hole(stroke_index: int, handicap_strokes: int, hole_count: int) -> int:
    if handicap_strokes <= 0 or hole_count <= 0:
        return 0
    base, extra = divmod(handicap_strokes, hole_count)
    return base + (1 if stroke_index <= extra else 0)


def allocate_strokes(
    holes: Sequence[Hole], handicap_strokes: int
) -> Dict[int, int]:
    """Map hole number to the strokes the receiving side gets on that hole."""

    if handicap_strokes < 0:
        raise InvalidHoleConfiguration(
            f"handicap strokes must be non-negative, got {handicap_strokes}"
        )
    validate_holes(holes)
    count = len(holes)
    return {
        hole.hole_number: strokes_for_hole(hole.stroke_index, handicap_strokes, count)
        for hole in holes
    }


def _adjust(raw: Optional[int], strokes: int) -> Optional[int]:
    if raw is None:
        return None
    return raw - strokes


def _recorded_total(scores: Iterable[Optional[int]]) -> int:
    return sum(score for score in scores if score is not None)


def apply_handicap(
    holes: Sequence[Hole],
    *,
    handicap_strokes: int,
    higher_handicap_team: Optional[Side],
) -> HandicapAdjustment:
    """Fill in adjusted per-hole scores and the adjusted stroke-play totals."""

    allocation = allocate_strokes(holes, handicap_strokes)
    side = receiving_side(handicap_strokes, higher_handicap_team)

    adjusted: List[Hole] = []
    for hole in holes:
        strokes = allocation[hole.hole_number] if side is not None else 0
        usa_strokes = strokes if side == "USA" else 0
        europe_strokes = strokes if side == "EUROPE" else 0
        adjusted.append(
            hole.model_copy(
                update={
                    "usa_player_adjusted_score": _adjust(
                        hole.usa_player_score, usa_strokes
                    ),
                    "europe_player_adjusted_score": _adjust(
                        hole.europe_player_score, europe_strokes
                    ),
                }
            )
        )

    received = allocation if side is not None else {n: 0 for n in allocation}
    return HandicapAdjustment(
        holes=adjusted,
        adjusted_usa=_recorded_total(h.usa_player_adjusted_score for h in adjusted),
        adjusted_europe=_recorded_total(
            h.europe_player_adjusted_score for h in adjusted
        ),
        strokes_received=received,
        receiving_side=side,
    )


__all__ = [
    "HandicapAdjustment",
    "allocate_strokes",
    "apply_handicap",
    "receiving_side",
    "strokes_for_hole",
    "validate_holes",
]
