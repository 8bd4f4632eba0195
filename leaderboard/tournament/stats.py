from __future__ import annotations

from typing import Iterable, List, Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from leaderboard.config import get_settings
from leaderboard.scoring.matchups import Player
from leaderboard.scoring.models import SIDES, Game, opponent

HighlightKind = Literal[
    "blow_up", "hole_in_one", "birdie", "tier3_par", "grind", "upset"
]


class Highlight(BaseModel):
    kind: HighlightKind
    game_id: str = Field(alias="gameId")
    player_id: Optional[str] = Field(default=None, alias="playerId")
    player_name: Optional[str] = Field(default=None, alias="playerName")
    hole_number: Optional[int] = Field(default=None, alias="holeNumber")
    value: Optional[float] = None
    message: str

    model_config = ConfigDict(populate_by_name=True)


def find_blow_up_hole(
    games: Iterable[Game], threshold: Optional[int] = None
) -> Optional[Highlight]:
    """Most strokes taken on a single hole, if at or above ``threshold``."""

    limit = threshold if threshold is not None else get_settings().blow_up_strokes
    worst: Optional[Highlight] = None
    for game in games:
        for hole in game.holes:
            for side in SIDES:
                strokes = hole.score(side)
                if strokes is None or (worst is not None and strokes <= worst.value):
                    continue
                worst = Highlight(
                    kind="blow_up",
                    game_id=game.id,
                    player_id=game.player_id(side),
                    player_name=game.player_name(side),
                    hole_number=hole.hole_number,
                    value=strokes,
                    message=(
                        f"{game.player_name(side)} took {strokes} strokes "
                        f"on hole {hole.hole_number}"
                    ),
                )
    if worst is None or worst.value < limit:
        return None
    return worst


def find_holes_in_one(games: Iterable[Game]) -> List[Highlight]:
    found: List[Highlight] = []
    for game in games:
        for hole in game.holes:
            for side in SIDES:
                if hole.score(side) == 1 and hole.par_score > 1:
                    found.append(
                        Highlight(
                            kind="hole_in_one",
                            game_id=game.id,
                            player_id=game.player_id(side),
                            player_name=game.player_name(side),
                            hole_number=hole.hole_number,
                            value=1,
                            message=(
                                f"{game.player_name(side)} made an ace "
                                f"on hole {hole.hole_number}"
                            ),
                        )
                    )
    return found


def find_birdies(games: Iterable[Game]) -> List[Highlight]:
    found: List[Highlight] = []
    for game in games:
        for hole in game.holes:
            for side in SIDES:
                strokes = hole.score(side)
                if strokes is not None and 1 < strokes == hole.par_score - 1:
                    found.append(
                        Highlight(
                            kind="birdie",
                            game_id=game.id,
                            player_id=game.player_id(side),
                            player_name=game.player_name(side),
                            hole_number=hole.hole_number,
                            value=strokes,
                            message=(
                                f"{game.player_name(side)} birdied "
                                f"hole {hole.hole_number}"
                            ),
                        )
                    )
    return found


def longest_halved_streak(game: Game) -> int:
    longest = current = 0
    for hole in sorted(game.holes, key=lambda h: h.hole_number):
        if hole.is_scored and hole.usa_player_score == hole.europe_player_score:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def find_grind_matches(
    games: Iterable[Game], threshold: Optional[int] = None
) -> List[Highlight]:
    limit = threshold if threshold is not None else get_settings().grind_streak_threshold
    found: List[Highlight] = []
    for game in games:
        streak = longest_halved_streak(game)
        if streak >= limit:
            found.append(
                Highlight(
                    kind="grind",
                    game_id=game.id,
                    value=streak,
                    message=(
                        f"{game.usa_player_name} vs {game.europe_player_name} "
                        f"halved {streak} holes in a row"
                    ),
                )
            )
    return found


def find_upsets(
    games: Iterable[Game], *, use_handicaps: bool, margin: Optional[float] = None
) -> List[Highlight]:
    """Complete games won on adjusted points by the clearly weaker player.

    Only handicapped tournaments have upsets; without handicaps nothing is
    reported.
    """

    if not use_handicaps:
        return []
    limit = margin if margin is not None else get_settings().upset_handicap_margin
    found: List[Highlight] = []
    for game in games:
        if not game.is_complete:
            continue
        for side in SIDES:
            other = opponent(side)
            mine = game.player_handicap(side)
            theirs = game.player_handicap(other)
            if mine is None or theirs is None or mine <= theirs + limit:
                continue
            if game.points.adjusted.get(side) > game.points.adjusted.get(other):
                found.append(
                    Highlight(
                        kind="upset",
                        game_id=game.id,
                        player_id=game.player_id(side),
                        player_name=game.player_name(side),
                        value=mine - theirs,
                        message=(
                            f"{game.player_name(side)} (hcp {mine:g}) beat "
                            f"{game.player_name(other)} (hcp {theirs:g})"
                        ),
                    )
                )
    return found


def find_tier3_pars(
    games: Iterable[Game], players: Sequence[Player]
) -> List[Highlight]:
    """Pars made by tier 3 players."""

    tier3 = {player.id for player in players if player.tier == 3}
    if not tier3:
        return []
    found: List[Highlight] = []
    for game in games:
        for hole in game.holes:
            for side in SIDES:
                if game.player_id(side) not in tier3:
                    continue
                if hole.score(side) == hole.par_score:
                    found.append(
                        Highlight(
                            kind="tier3_par",
                            game_id=game.id,
                            player_id=game.player_id(side),
                            player_name=game.player_name(side),
                            hole_number=hole.hole_number,
                            value=hole.par_score,
                            message=(
                                f"{game.player_name(side)} made par "
                                f"on hole {hole.hole_number}"
                            ),
                        )
                    )
    return found


def tournament_highlights(
    games: Iterable[Game],
    *,
    use_handicaps: bool = False,
    players: Optional[Sequence[Player]] = None,
) -> List[Highlight]:
    """All highlights for already scored games, blow-up first."""

    game_list = list(games)
    highlights: List[Highlight] = []
    blow_up = find_blow_up_hole(game_list)
    if blow_up is not None:
        highlights.append(blow_up)
    highlights.extend(find_holes_in_one(game_list))
    highlights.extend(find_birdies(game_list))
    highlights.extend(find_tier3_pars(game_list, players or []))
    highlights.extend(find_grind_matches(game_list))
    highlights.extend(find_upsets(game_list, use_handicaps=use_handicaps))
    return highlights


__all__ = [
    "Highlight",
    "find_birdies",
    "find_blow_up_hole",
    "find_grind_matches",
    "find_holes_in_one",
    "find_tier3_pars",
    "find_upsets",
    "longest_halved_streak",
    "tournament_highlights",
]
