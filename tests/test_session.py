import random

import pytest

from visualgorithm.config import VisualizerConfig
from visualgorithm.engine import DEFAULT_DATA, PlaybackState, SessionStore, VisualizerSession, parse_data
from visualgorithm.exceptions import (
    InvalidDataError,
    InvalidGraphOptionsError,
    UnknownAlgorithmError,
    UnknownNodeError,
    VisualizerError,
)


@pytest.fixture
def vs(config):
    return VisualizerSession(config=config, rng=random.Random(7))


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
def test_defaults(vs):
    assert vs.mode == "sorting"
    assert vs.data == DEFAULT_DATA
    assert [n.id for n in vs.nodes] == ["A", "B", "C", "D"]
    assert len(vs.edges) == 4
    assert vs.start_node is None and vs.target_node is None
    assert vs.selected_algorithm is None
    assert vs.controller.state is PlaybackState.IDLE
    assert vs.controller.speed == 50


# ---------------------------------------------------------------------------
# Data
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("text, expected", [
    ("5, 3, 8", [5, 3, 8]),
    ("5 3 8", [5, 3, 8]),
    (" 1,2 ,, 3 ", [1, 2, 3]),
    ("1.5, -2", [1.5, -2]),
])
def test_parse_data(text, expected):
    assert parse_data(text) == expected


@pytest.mark.parametrize("text", ["", "  ,  ", "1, two, 3"])
def test_parse_data_rejects_junk(text):
    with pytest.raises(InvalidDataError):
        parse_data(text)


def test_random_data_range(vs):
    data = vs.generate_random_data()
    assert len(data) == 11
    assert all(10 <= v <= 99 for v in data)
    assert len(vs.generate_random_data(4)) == 4


def test_random_data_rejects_non_positive_size(vs):
    with pytest.raises(InvalidDataError):
        vs.generate_random_data(0)


def test_custom_data_from_list_and_text(vs):
    assert vs.set_custom_data([4, 2]) == [4, 2]
    assert vs.set_custom_data("9 8 7") == [9, 8, 7]


def test_custom_data_rejects_non_numbers(vs):
    with pytest.raises(InvalidDataError):
        vs.set_custom_data([1, "x"])
    with pytest.raises(InvalidDataError):
        vs.set_custom_data([True, 2])


def test_data_change_unloads_result(vs):
    vs.select_algorithm("bubble")
    vs.controller.play()
    vs.set_custom_data([2, 1])
    assert vs.controller.state is PlaybackState.IDLE
    assert vs.controller.total_steps == 0


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------
def test_load_graph_clears_endpoints(vs):
    vs.set_start_node("A")
    vs.set_target_node("D")
    vs.load_graph("complex")
    assert len(vs.nodes) == 6
    assert vs.start_node is None and vs.target_node is None


def test_load_unknown_graph(vs):
    with pytest.raises(VisualizerError):
        vs.load_graph("huge")


def test_generate_custom_graph_from_dict(vs):
    graph = vs.generate_custom_graph({"node_count": 5, "graph_type": "star", "seed": 3})
    assert graph.node_count() == 5
    assert vs.graph is graph


def test_generate_custom_graph_bad_options(vs):
    with pytest.raises(InvalidGraphOptionsError):
        vs.generate_custom_graph({"node_count": 2})


def test_endpoints_are_validated(vs):
    with pytest.raises(UnknownNodeError):
        vs.set_start_node("Q")
    with pytest.raises(UnknownNodeError):
        vs.set_target_node("Q")
    vs.set_target_node("C")
    vs.set_target_node(None)
    assert vs.target_node is None


# ---------------------------------------------------------------------------
# Running
# ---------------------------------------------------------------------------
def test_select_sort_loads_result(vs):
    info = vs.select_algorithm("Merge Sort")
    assert info.key == "merge"
    assert vs.mode == "sorting"
    assert vs.controller.state is PlaybackState.PAUSED
    assert list(vs.controller.result.steps[-1].array) == sorted(DEFAULT_DATA)


def test_select_traversal_auto_picks_start(vs):
    vs.select_algorithm("bfs")
    assert vs.mode == "graph"
    assert vs.start_node == "A"
    assert vs.controller.result.nodes_visited == 4


def test_select_traversal_uses_target(vs):
    vs.load_graph("complex")
    vs.set_start_node("A")
    vs.set_target_node("E")
    vs.select_algorithm("dijkstra")
    result = vs.controller.result
    assert result.path_found == ("A", "D", "C", "E")
    assert result.total_distance == 7


def test_select_unknown_algorithm(vs):
    with pytest.raises(UnknownAlgorithmError):
        vs.select_algorithm("bogo")


def test_set_mode(vs):
    vs.select_algorithm("quick")
    vs.set_mode("graph")
    assert vs.mode == "graph"
    assert vs.selected_algorithm is None
    assert vs.controller.state is PlaybackState.IDLE
    with pytest.raises(VisualizerError):
        vs.set_mode("3d")


@pytest.mark.parametrize("requested, stored", [(0, 1), (42, 42), (250, 100), (7.9, 7)])
def test_set_speed_clamps(vs, requested, stored):
    assert vs.set_speed(requested) == stored
    assert vs.controller.speed == stored


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------
def test_snapshot_before_run(vs):
    snap = vs.snapshot()
    assert snap["current_step"] is None
    assert snap["metrics"] is None
    assert snap["playback"]["state"] == "idle"
    assert snap["graph"]["nodes"][0]["id"] == "A"


def test_snapshot_after_traversal(vs):
    vs.set_target_node("D")
    vs.select_algorithm("dijkstra")
    vs.controller.seek(10_000)
    snap = vs.snapshot()
    assert snap["selected_algorithm"] == "dijkstra"
    assert snap["current_step"]["path"] == ["A", "B", "D"]
    assert "nodes" not in snap["current_step"]
    assert snap["metrics"]["total_distance"] == 2
    assert "steps" not in snap["metrics"]


def test_snapshot_metrics_match_result_counters(vs):
    vs.set_custom_data(list(range(40, 0, -1)))
    vs.select_algorithm("bubble")
    result = vs.controller.result
    assert vs.snapshot()["metrics"] == result.metrics()
    assert result.metrics()["swaps"] == 40 * 39 // 2


# ---------------------------------------------------------------------------
# SessionStore
# ---------------------------------------------------------------------------
def _store(clock, **overrides):
    return SessionStore(VisualizerConfig(secret_key="x", **overrides), clock=clock)


def test_store_create_and_get(clock):
    store = _store(clock)
    sid, vs = store.create()
    assert store.get(sid) is vs
    assert store.get("nope") is None
    assert store.get(None) is None
    assert len(store) == 1


def test_store_evicts_least_recently_used(clock):
    store = _store(clock, max_sessions=3)
    sids = [store.create()[0] for _ in range(3)]
    store.get(sids[0])
    store.create()
    assert len(store) == 3
    assert sids[0] in store
    assert sids[1] not in store


def test_store_never_exceeds_bound(clock):
    store = _store(clock, max_sessions=5)
    for _ in range(50):
        store.create()
    assert len(store) == 5


def test_store_expires_idle_sessions(clock):
    store = _store(clock, session_ttl=60)
    stale, _ = store.create()
    clock.advance(30_000)
    fresh, _ = store.create()
    clock.advance(31_000)
    assert store.get(stale) is None
    assert store.get(fresh) is not None
    assert len(store) == 1


def test_store_ttl_zero_disables_expiry(clock):
    store = _store(clock, session_ttl=0)
    sid, _ = store.create()
    clock.advance(10 ** 9)
    assert store.get(sid) is not None


def test_store_drop(clock):
    store = _store(clock)
    sid, _ = store.create()
    assert store.drop(sid)
    assert not store.drop(sid)
    assert not store.drop(None)
    assert len(store) == 0
