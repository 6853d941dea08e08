"""Tests for the Flask JSON API."""

import pytest

from engine.config import EngineConfig
from main import create_app

CLASSIC_INPUT = {
    "graph": {
        "nodes": ["A", "B", "C", "D", "E"],
        "edges": [
            {"source": "A", "target": "B", "weight": 4},
            {"source": "A", "target": "C", "weight": 2},
            {"source": "B", "target": "C", "weight": 1},
            {"source": "B", "target": "D", "weight": 5},
            {"source": "C", "target": "D", "weight": 8},
            {"source": "C", "target": "E", "weight": 10},
            {"source": "D", "target": "E", "weight": 2},
        ],
    },
}


@pytest.fixture
def app():
    return create_app(EngineConfig(secret_key="test", default_speed_ms=150))


@pytest.fixture
def client(app):
    return app.test_client()


def start_run(client, algo_key="kruskal", data=None):
    return client.post("/api/run", json={"algo_key": algo_key, "input": data or CLASSIC_INPUT})


def test_lists_algorithms(client) -> None:
    resp = client.get("/api/algorithms")
    assert resp.status_code == 200
    body = resp.get_json()
    assert {a["key"] for a in body["algorithms"]} >= {"prim", "kruskal", "largest_rectangle"}
    assert body["speed_presets"]["turbo"] == 50


def test_run_returns_an_idle_snapshot(client) -> None:
    resp = start_run(client)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "idle"
    assert body["step_index"] == 0
    assert body["algo_key"] == "kruskal"
    assert body["speed_ms"] == 150
    assert body["view"]["edge_states"]["e0"] == "idle"


def test_run_rejects_bad_requests(client) -> None:
    assert client.post("/api/run", json={}).status_code == 400
    assert client.post("/api/run", json={"algo_key": "bogosort"}).status_code == 400
    assert client.post("/api/run", json={"algo_key": "prim", "input": [1, 2]}).status_code == 400
    bad_heights = {"algo_key": "largest_rectangle", "input": {"heights": ["tall"]}}
    assert client.post("/api/run", json=bad_heights).status_code == 400
    assert client.post("/api/run", data="not json").status_code == 400
    assert client.post("/api/run", json={"algo_key": "prim", "input": {"graph": [1]}}).status_code == 400
    assert client.post("/api/run", json={"algo_key": "kahn", "input": {"adjacency": 5}}).status_code == 400
    infinite_rows = '{"algo_key": "recursive_division", "input": {"rows": Infinity}}'
    assert client.post("/api/run", data=infinite_rows, content_type="application/json").status_code == 400


def test_navigation_requires_a_run(client) -> None:
    for path in ("/api/step/next", "/api/step/play", "/api/step/pause", "/api/step/tick",
                 "/api/step/seek", "/api/reset", "/api/config/speed"):
        resp = client.post(path, json={})
        assert resp.status_code == 400
        assert "No active run" in resp.get_json()["error"]
    assert client.get("/api/state").status_code == 400


def test_step_through_to_completion(client) -> None:
    start_run(client)

    first = client.post("/api/step/next").get_json()
    assert first["advanced"] is True
    assert first["status"] == "paused"
    assert first["step_type"] == "init-sets"
    assert first["pseudocode_line"] == 1
    assert first["step_label"] == "Initializing sets"

    body = first
    while body["status"] != "complete":
        body = client.post("/api/step/next").get_json()
    assert body["advanced"] is False
    assert body["view"]["total_weight"] == 10

    again = client.post("/api/step/next").get_json()
    assert again["step_index"] == body["step_index"]


def test_play_pause_and_state(client) -> None:
    start_run(client)
    assert client.post("/api/step/play").get_json()["status"] == "playing"
    assert client.get("/api/state").get_json()["status"] == "playing"
    assert client.post("/api/step/pause").get_json()["status"] == "paused"
    tick = client.post("/api/step/tick").get_json()
    assert tick["advanced"] is False


def test_seek(client) -> None:
    start_run(client)
    body = client.post("/api/step/seek", json={"index": 3}).get_json()
    assert body["step_index"] == 3
    assert body["status"] == "paused"

    assert client.post("/api/step/seek", json={"index": -1}).status_code == 400
    assert client.post("/api/step/seek", json={"index": "2"}).status_code == 400
    assert client.post("/api/step/seek", json={"index": True}).status_code == 400


def test_reset_with_and_without_input(client) -> None:
    start_run(client)
    client.post("/api/step/next")

    body = client.post("/api/reset").get_json()
    assert body["status"] == "idle"
    assert body["step_index"] == 0

    swapped = client.post("/api/reset", json={"input": {"adjacency": "x: y(3)"}}).get_json()
    assert set(swapped["view"]["node_states"]) == {"x", "y"}

    bad = client.post("/api/reset", json={"input": {"nodes": "many"}})
    assert bad.status_code == 400


def test_speed_config(client) -> None:
    start_run(client)
    assert client.post("/api/config/speed", json={"speed": "slow"}).get_json() == {"speed_ms": 1000}
    assert client.post("/api/config/speed", json={"speed": 1}).get_json() == {"speed_ms": 5}
    assert client.post("/api/config/speed", json={"speed": "warp"}).status_code == 400
    assert client.post("/api/config/speed", json={"speed": True}).status_code == 400
    infinite = client.post("/api/config/speed", data='{"speed": Infinity}', content_type="application/json")
    assert infinite.status_code == 400
    assert client.get("/api/state").get_json()["speed_ms"] == 5


def test_sessions_are_isolated(app) -> None:
    one, two = app.test_client(), app.test_client()
    start_run(one)
    assert two.get("/api/state").status_code == 400
    start_run(two, "prim")
    assert one.get("/api/state").get_json()["algo_key"] == "kruskal"
    assert len(app.extensions["controllers"]) == 2


def test_new_run_replaces_the_old_one(app, client) -> None:
    start_run(client)
    start_run(client, "prim")
    assert len(app.extensions["controllers"]) == 1
    assert client.get("/api/state").get_json()["algo_key"] == "prim"


def test_compare(client) -> None:
    body = client.post("/api/compare", json={"algos": ["prim", "kruskal"], "input": CLASSIC_INPUT}).get_json()
    assert body["results_agree"] is True
    assert body["left"]["result"]["total_weight"] == 10
    assert body["right"]["algo_key"] == "kruskal"


def test_compare_rejects_bad_requests(client) -> None:
    assert client.post("/api/compare", json={"algos": ["prim"]}).status_code == 400
    assert client.post("/api/compare", json={"algos": ["prim", "nope"]}).status_code == 400
    mixed = client.post("/api/compare", json={"algos": ["prim", "sliding_window"]})
    assert mixed.status_code == 400
