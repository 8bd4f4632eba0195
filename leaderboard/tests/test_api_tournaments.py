import json
import threading

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from leaderboard import events
from leaderboard.api.routers.tournaments import stream_tournament
from leaderboard.app import app

client = TestClient(app)


def _payload(game):
    return game.model_dump(mode="json", by_alias=True)


def _decode_event(raw: bytes) -> dict:
    line = raw.decode()
    if line.startswith("data: "):
        return json.loads(line[len("data: ") :])
    raise AssertionError(f"Unexpected SSE payload: {line}")


def test_tournament_scores_endpoint(make_game):
    finished = make_game(usa=[4] * 18, europe=[5] * 18, is_complete=True)
    live = make_game(usa=[4, None], europe=[None, 4], game_id="g2")
    body = {
        "tournament": {"id": "t1", "name": "Ryder Weekend", "useHandicaps": False},
        "games": [_payload(finished), _payload(live), {"id": "broken"}],
    }

    r = client.post("/api/tournaments/scores", json=body)

    assert r.status_code == 200
    data = r.json()
    assert data["recorded"] is True
    tournament = data["tournament"]
    assert tournament["totalScore"]["raw"] == {"USA": 2.0, "EUROPE": 0.0}
    assert tournament["projectedScore"]["raw"] == {"USA": 2.5, "EUROPE": 0.5}
    assert len(tournament["progress"]) == 1
    assert tournament["progress"][0]["completedGames"] == 1
    assert [f["gameId"] for f in data["scores"]["failures"]] == ["broken"]


def test_leaderboard_endpoint(make_game):
    levelled = make_game(
        usa=[4] * 18,
        europe=[5] * 18,
        handicap_strokes=18,
        higher_handicap_team="USA",
        is_complete=True,
    )
    body = {"games": [_payload(levelled)], "useHandicaps": True}

    r = client.post("/api/tournaments/leaderboard", json=body)

    assert r.status_code == 200
    data = r.json()
    assert data["current"] == {"USA": 1.0, "EUROPE": 1.0}
    assert data["completedGames"] == 1
    assert data["games"][0]["pointsLeader"] == "draw"


def test_highlights_endpoint(make_game):
    game = make_game(usa=[9, 3], europe=[4, 4])

    r = client.post("/api/tournaments/highlights", json={"games": [_payload(game)]})

    assert r.status_code == 200
    kinds = [h["kind"] for h in r.json()["highlights"]]
    assert kinds == ["blow_up", "birdie"]


def test_daily_progress_endpoint():
    progress = [
        {"timestamp": "2024-06-01T09:00:00Z", "completedGames": 0},
        {"timestamp": "2024-06-01T17:00:00Z", "completedGames": 2},
        {"timestamp": "2024-06-02T12:00:00Z", "completedGames": 5},
    ]

    r = client.post("/api/tournaments/progress/daily", json={"progress": progress})

    assert r.status_code == 200
    assert [e["completedGames"] for e in r.json()] == [2, 5]


@pytest.mark.anyio
async def test_tournament_sse_stream_emits_updates(make_game) -> None:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        streaming_response = await stream_tournament("t1")
        generator = streaming_response.body_iterator
        try:
            initial = _decode_event(await generator.__anext__())
            assert initial == {"type": "subscribed", "tournamentId": "t1"}

            game = make_game(usa=[4], europe=[5])
            response = await client.post("/api/games/score", json=_payload(game))
            assert response.status_code == 200

            update = _decode_event(await generator.__anext__())
            assert update["type"] == "game.scored"
            assert update["game"]["matchPlayScore"]["USA"] == 1
        finally:
            await generator.aclose()


def test_highlights_endpoint_reads_handicap_flag_and_tiers(make_game):
    game = make_game(
        usa=[4] * 18,
        europe=[5] * 18,
        handicap_strokes=10,
        higher_handicap_team="USA",
        is_complete=True,
        usa_player_handicap=90,
        europe_player_handicap=80,
    )
    players = [{"id": "p1", "name": "Jordi", "team": "USA", "tier": 3}]

    plain = client.post("/api/tournaments/highlights", json={"games": [_payload(game)]})
    handicapped = client.post(
        "/api/tournaments/highlights",
        json={"games": [_payload(game)], "useHandicaps": True, "players": players},
    )

    assert "upset" not in [h["kind"] for h in plain.json()["highlights"]]
    kinds = [h["kind"] for h in handicapped.json()["highlights"]]
    assert "upset" in kinds
    assert kinds.count("tier3_par") == 18


@pytest.mark.anyio
async def test_stream_receives_events_published_from_other_threads() -> None:
    streaming_response = await stream_tournament("t2")
    generator = streaming_response.body_iterator
    try:
        await generator.__anext__()

        worker = threading.Thread(
            target=events.publish, args=("t2", {"type": "tournament.scored"})
        )
        worker.start()
        worker.join()

        update = _decode_event(await generator.__anext__())
        assert update == {"type": "tournament.scored"}
    finally:
        await generator.aclose()
