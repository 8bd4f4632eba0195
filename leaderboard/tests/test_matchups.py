import pytest

from leaderboard.config import DEFAULT_STROKE_INDICES
from leaderboard.scoring.errors import InvalidHoleConfiguration, InvalidMatchup
from leaderboard.scoring.matchups import (
    HistoricalScore,
    Player,
    average_score,
    build_holes,
    check_roster,
    matchup_handicap,
    new_game,
)


def _player(pid, team, *scores):
    return Player(
        id=pid,
        name=pid.title(),
        team=team,
        historical_scores=[HistoricalScore(year=y, score=s) for y, s in scores],
    )


def test_average_uses_the_most_recent_three_years():
    scores = [
        HistoricalScore(year=2021, score=50),
        HistoricalScore(year=2024, score=89),
        HistoricalScore(year=2022, score=101),
        HistoricalScore(year=2023, score=108),
    ]

    assert average_score(scores) == 99
    assert average_score(scores, window=1) == 89
    assert average_score([]) is None


@pytest.mark.parametrize(
    "usa, europe, expected",
    [
        (85, 80, (5, "USA")),
        (72.4, 80, (8, "EUROPE")),
        (80, 80, (0, None)),
        (None, 80, (0, None)),
    ],
)
def test_matchup_handicap(usa, europe, expected):
    assert matchup_handicap(usa, europe) == expected


def test_roster_follows_team_config():
    usa = _player("jordi", "USA")
    europe = _player("gilo", "EUROPE")
    other_usa = _player("kenny", "USA")

    check_roster("USA_VS_EUROPE", usa, europe)
    check_roster("USA_VS_USA", usa, other_usa)

    with pytest.raises(InvalidMatchup):
        check_roster("USA_VS_EUROPE", usa, other_usa)
    with pytest.raises(InvalidMatchup):
        check_roster("EUROPE_VS_EUROPE", usa, europe)
    with pytest.raises(InvalidMatchup):
        check_roster("USA_VS_USA", usa, usa)


def test_new_game_with_handicaps():
    usa = _player("kenny", "USA", (2024, 77), (2023, 78), (2022, 81))
    europe = _player("gilo", "EUROPE", (2024, 77), (2023, 85), (2022, 75))

    game = new_game(
        tournament_id="t1",
        usa_player=usa,
        europe_player=europe,
        use_handicaps=True,
        game_id="g1",
    )

    assert game.id == "g1"
    assert game.status == "not_started"
    assert [h.stroke_index for h in game.holes] == DEFAULT_STROKE_INDICES
    assert all(h.par_score == 4 for h in game.holes)
    assert game.usa_player_handicap == 79
    assert game.europe_player_handicap == 79
    assert game.handicap_strokes == 0
    assert game.higher_handicap_team is None


def test_new_game_assigns_strokes_to_the_better_players_opponent():
    usa = Player(id="tom", name="Tom H", team="USA", average_score=65)
    europe = Player(id="paul", name="Paul", team="EUROPE", average_score=99)

    game = new_game(
        tournament_id="t1", usa_player=usa, europe_player=europe, use_handicaps=True
    )

    assert game.handicap_strokes == 34
    assert game.higher_handicap_team == "EUROPE"
    assert game.points.raw.usa == 0


def test_new_game_without_handicaps_has_no_allowance():
    usa = Player(id="tom", name="Tom H", team="USA", average_score=65)
    europe = Player(id="paul", name="Paul", team="EUROPE", average_score=99)

    game = new_game(tournament_id="t1", usa_player=usa, europe_player=europe)

    assert game.handicap_strokes == 0
    assert game.higher_handicap_team is None


def test_build_holes_custom_course():
    holes = build_holes([2, 3, 1], [3, 4, 5])

    assert [(h.hole_number, h.stroke_index, h.par_score) for h in holes] == [
        (1, 2, 3),
        (2, 3, 4),
        (3, 1, 5),
    ]


def test_build_holes_rejects_bad_tables():
    with pytest.raises(InvalidHoleConfiguration):
        build_holes([1, 1, 2])
    with pytest.raises(InvalidHoleConfiguration):
        build_holes([1, 2, 3], [4, 4])


def test_default_course_comes_from_settings(monkeypatch):
    monkeypatch.setenv("LEADERBOARD_STROKE_INDICES", "[2, 1, 3]")
    monkeypatch.setenv("LEADERBOARD_DEFAULT_PAR", "3")

    holes = build_holes()

    assert [h.stroke_index for h in holes] == [2, 1, 3]
    assert {h.par_score for h in holes} == {3}


def test_half_averages_round_up():
    scores = [HistoricalScore(year=2023, score=72), HistoricalScore(year=2024, score=73)]

    assert average_score(scores) == 73
    assert matchup_handicap(80.5, 80) == (1, "USA")
    assert matchup_handicap(72, 74.5) == (3, "EUROPE")


def test_half_average_feeds_the_allowance():
    usa = _player("kenny", "USA", (2023, 72), (2024, 73))
    europe = _player("gilo", "EUROPE", (2023, 70), (2024, 70))

    game = new_game(
        tournament_id="t1", usa_player=usa, europe_player=europe, use_handicaps=True
    )

    assert game.usa_player_handicap == 73
    assert game.handicap_strokes == 3
    assert game.higher_handicap_team == "USA"
