from main import create_app
from visualgorithm.config import VisualizerConfig


def test_algorithms_endpoint(client):
    data = client.get("/api/algorithms").get_json()
    keys = [a["key"] for a in data["algorithms"]]
    assert keys == ["bubble", "insertion", "merge", "quick", "bfs", "dfs", "dijkstra"]
    assert data["graphs"] == ["simple", "complex"]
    assert "Large Grid" in data["presets"]


def test_initial_state(client):
    data = client.get("/api/state").get_json()
    assert data["mode"] == "sorting"
    assert data["playback"]["state"] == "idle"
    assert data["current_step"] is None


def test_sessions_are_isolated(app):
    a, b = app.test_client(), app.test_client()
    a.post("/api/data/custom", json={"data": [3, 2, 1]})
    assert a.get("/api/state").get_json()["data"] == [3, 2, 1]
    assert b.get("/api/state").get_json()["data"] != [3, 2, 1]


def test_run_sort_and_step(client):
    client.post("/api/data/custom", json={"data": "4, 1, 3"})
    data = client.post("/api/run", json={"algorithm": "insertion"}).get_json()
    assert data["selected_algorithm"] == "insertion"
    assert data["current_step"]["array"] == [4, 1, 3]
    assert data["metrics"]["comparisons"] > 0

    data = client.post("/api/playback/next").get_json()
    assert data["playback"]["cursor"] == 1
    data = client.post("/api/playback/prev").get_json()
    assert data["playback"]["cursor"] == 0

    total = data["playback"]["total_steps"]
    data = client.post("/api/playback/goto", json={"index": 999}).get_json()
    assert data["playback"]["cursor"] == total - 1
    assert data["current_step"]["array"] == [1, 3, 4]


def test_play_pause_reset(client):
    client.post("/api/run", json={"algorithm": "bubble"})
    assert client.post("/api/playback/play").get_json()["playback"]["is_playing"]
    assert client.post("/api/playback/pause").get_json()["playback"]["state"] == "paused"
    client.post("/api/playback/goto", json={"index": 3})
    assert client.post("/api/playback/reset").get_json()["playback"]["cursor"] == 0


def test_speed_is_clamped(client):
    data = client.post("/api/playback/speed", json={"speed": 500}).get_json()
    assert data["playback"]["speed"] == 100
    assert data["playback"]["interval_ms"] == 200


def test_graph_flow(client):
    client.post("/api/graph/load", json={"name": "complex"})
    client.post("/api/graph/endpoints", json={"start": "A", "target": "E"})
    data = client.post("/api/run", json={"algorithm": "Dijkstra's Algorithm"}).get_json()
    assert data["mode"] == "graph"
    assert data["metrics"]["path_found"] == ["A", "D", "C", "E"]
    assert data["metrics"]["total_distance"] == 7


def test_generate_graph(client):
    data = client.post("/api/graph/generate", json={"node_count": 6, "graph_type": "circular"}).get_json()
    assert len(data["graph"]["nodes"]) == 6
    assert len(data["graph"]["edges"]) == 6

    data = client.post("/api/graph/generate", json={"preset": "Star Network"}).get_json()
    assert len(data["graph"]["nodes"]) == 7


def test_mode_switch(client):
    client.post("/api/run", json={"algorithm": "merge"})
    data = client.post("/api/mode", json={"mode": "graph"}).get_json()
    assert data["mode"] == "graph"
    assert data["selected_algorithm"] is None


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
def _error(resp):
    assert resp.status_code == 400
    return resp.get_json()["error"]


def test_unknown_algorithm_is_400(client):
    assert "bogo" in _error(client.post("/api/run", json={"algorithm": "bogo"}))


def test_bad_custom_data_is_400(client):
    _error(client.post("/api/data/custom", json={"data": "1, x"}))
    _error(client.post("/api/data/custom", json={}))


def test_bad_graph_options_are_400(client):
    _error(client.post("/api/graph/generate", json={"node_count": 1}))
    _error(client.post("/api/graph/generate", json={"preset": "Nope"}))
    _error(client.post("/api/graph/generate", json={"node_count": 5, "seed": {"a": 1}}))
    _error(client.post("/api/graph/generate", json={"node_count": 5, "weighted": "maybe"}))
    _error(client.post("/api/graph/load", json={"name": "nope"}))


def test_unknown_endpoint_is_400(client):
    _error(client.post("/api/graph/endpoints", json={"start": "Z"}))


def test_bad_numbers_are_400(client):
    _error(client.post("/api/playback/goto", json={"index": "first"}))
    _error(client.post("/api/playback/speed", json={}))
    _error(client.post("/api/data/random", json={"size": "lots"}))


def test_unknown_playback_action_is_404(client):
    assert client.post("/api/playback/rewind").status_code == 404


# ---------------------------------------------------------------------------
# Session store
# ---------------------------------------------------------------------------
def test_cookieless_clients_do_not_grow_the_store():
    app = create_app(VisualizerConfig(secret_key="test-secret", max_sessions=5))
    client = app.test_client(use_cookies=False)
    for _ in range(20):
        assert client.get("/api/state").status_code == 200
    assert len(app.extensions["visualgorithm.sessions"]) == 5


def test_returning_client_keeps_its_session(app, client):
    client.post("/api/data/custom", json={"data": [3, 2, 1]})
    client.get("/api/state")
    assert len(app.extensions["visualgorithm.sessions"]) == 1
    assert client.get("/api/state").get_json()["data"] == [3, 2, 1]


def test_session_reset_replaces_entry(app, client):
    client.post("/api/data/custom", json={"data": [3, 2, 1]})
    data = client.post("/api/session/reset").get_json()
    assert data["data"] != [3, 2, 1]
    assert len(app.extensions["visualgorithm.sessions"]) == 1
