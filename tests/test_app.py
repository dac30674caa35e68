import pytest
from fastapi.testclient import TestClient

import quantum_omok.main as app_mod
from quantum_omok.game import QuantumOmokGame

from tests.conftest import FixedRandom, ManualScheduler


@pytest.fixture
def sched():
    return ManualScheduler()


@pytest.fixture
def client(monkeypatch, sched):
    # 모든 돌이 흑으로 확정되고, 타이머는 수동으로 실행
    monkeypatch.setattr(
        app_mod, "_new_engine",
        lambda: QuantumOmokGame(rng=FixedRandom(0.0), scheduler=sched, delay=3.0),
    )
    app_mod.games.clear()
    with TestClient(app_mod.app) as c:
        yield c
    app_mod.games.clear()


def _new(client):
    r = client.post("/api/game/new")
    assert r.status_code == 200
    return r.json()["game_id"]


def test_ping(client):
    assert client.get("/__ping__").json() == {"ok": True}


def test_stone_catalog(client):
    data = client.get("/api/stones").json()
    assert data["board_size"] == 11
    by_name = {s["name"]: s for s in data["stones"]}
    assert by_name["BLACK_90"]["black_probability_percent"] == 90
    assert by_name["WHITE_30"]["placed_by"] == 2
    assert by_name["WHITE_10"]["css_class"] == "p10"


def test_new_game_payload(client):
    r = client.post("/api/game/new")
    data = r.json()
    assert data["id"] == data["game_id"]
    assert data["current_turn"] == 1
    assert data["move_count"] == 0
    assert data["phase"] == "playing"
    assert data["game_over"] is False
    assert data["next_kind"] == "BLACK_90"
    assert len(data["board"]) == 11


def test_move_and_errors(client):
    gid = _new(client)
    r = client.post(f"/api/game/{gid}/move", json={"row": 5, "col": 5})
    assert r.status_code == 200
    assert r.json()["board"][5][5] == "p90"
    assert r.json()["current_turn"] == 2

    r = client.post(f"/api/game/{gid}/move", json={"row": 5, "col": 5})
    assert r.status_code == 400
    assert r.json()["error"] == "cell_occupied"

    r = client.post(f"/api/game/{gid}/move", json={"row": 11, "col": 0})
    assert r.status_code == 400
    assert r.json()["error"] == "out_of_bounds"

    assert client.get(f"/api/game/{gid}").json()["move_count"] == 1


def test_unknown_game(client):
    r = client.get("/api/game/nope")
    assert r.status_code == 404
    assert r.json()["error"] == "game_not_found"


def test_full_round_to_victory(client, sched):
    gid = _new(client)
    moves = [(5, 0), (0, 0), (5, 1), (2, 7), (5, 2), (9, 3), (5, 3), (7, 10), (5, 4)]
    for r, c in moves:
        assert client.post(f"/api/game/{gid}/move", json={"row": r, "col": c}).status_code == 200

    data = client.post(f"/api/game/{gid}/observe").json()
    assert data["phase"] == "awaiting_resolution"
    assert data["board"][5][0] == "black"

    r = client.post(f"/api/game/{gid}/move", json={"row": 10, "col": 10})
    assert r.json()["error"] == "game_locked"

    sched.fire_all()
    data = client.get(f"/api/game/{gid}").json()
    assert data["game_over"] is True
    assert data["winner"] == 1
    assert data["winning_line"] == [[5, 0], [5, 1], [5, 2], [5, 3], [5, 4]]

    r = client.post(f"/api/game/{gid}/revert")
    assert r.status_code == 400
    assert r.json()["error"] == "winner_already_declared"

    data = client.post(f"/api/game/{gid}/reset").json()
    assert data["phase"] == "playing"
    assert data["winner"] is None


def test_observe_then_revert(client, sched):
    gid = _new(client)
    client.post(f"/api/game/{gid}/move", json={"row": 1, "col": 1})
    client.post(f"/api/game/{gid}/move", json={"row": 1, "col": 2})

    r = client.post(f"/api/game/{gid}/revert")
    assert r.json()["error"] == "not_collapsed"

    client.post(f"/api/game/{gid}/observe")
    sched.fire_all()
    assert client.get(f"/api/game/{gid}").json()["phase"] == "observed"
    r = client.post(f"/api/game/{gid}/observe")
    assert r.json()["error"] == "already_collapsed"

    data = client.post(f"/api/game/{gid}/revert").json()
    assert data["phase"] == "playing"
    assert data["board"][1][1] == "p90"
    assert data["board"][1][2] == "p10"


def test_toggle_endpoint(client, sched):
    gid = _new(client)
    client.post(f"/api/game/{gid}/move", json={"row": 4, "col": 4})
    assert client.post(f"/api/game/{gid}/toggle").json()["collapsed"] is True
    sched.fire_all()
    assert client.post(f"/api/game/{gid}/toggle").json()["collapsed"] is False


def test_delete_game_cancels_timer(client, sched):
    gid = _new(client)
    client.post(f"/api/game/{gid}/move", json={"row": 4, "col": 4})
    client.post(f"/api/game/{gid}/observe")
    assert client.delete(f"/api/game/{gid}").json() == {"ok": True, "game_id": gid}
    assert sched.calls[0].cancelled
    assert client.get(f"/api/game/{gid}").status_code == 404
    assert client.delete(f"/api/game/{gid}").status_code == 404
