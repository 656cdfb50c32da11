import random
from collections import deque

import pytest

from visualgorithm.exceptions import InvalidGraphOptionsError
from visualgorithm.graph import (
    DEFAULT_GRAPHS,
    GENERATOR_PRESETS,
    Graph,
    GraphGenerationOptions,
    GraphType,
    generate_graph,
    node_id_for,
)
from visualgorithm.graph.generator import max_edge_count


def _is_connected(graph: Graph) -> bool:
    ids = graph.node_ids()
    seen = {ids[0]}
    todo = deque([ids[0]])
    while todo:
        for nbr, _ in graph.neighbours(todo.popleft()):
            if nbr not in seen:
                seen.add(nbr)
                todo.append(nbr)
    return len(seen) == len(ids)


def _no_duplicates(graph: Graph) -> bool:
    pairs = [frozenset((e.source, e.target)) for e in graph.edges]
    return len(pairs) == len(set(pairs)) and all(len(p) == 2 for p in pairs)


def gen(**kwargs) -> Graph:
    kwargs.setdefault("seed", 1)
    return generate_graph(GraphGenerationOptions(**kwargs))


# ---------------------------------------------------------------------------
# Node ids
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("index, expected", [(0, "A"), (25, "Z"), (26, "AA"), (27, "AB"), (51, "AZ"), (52, "BA")])
def test_node_id_for(index, expected):
    assert node_id_for(index) == expected


def test_ids_stay_unique_past_z():
    graph = gen(node_count=30, graph_type="circular")
    assert len(set(graph.node_ids())) == 30
    assert graph.node_ids()[26] == "AA"


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------
def test_linear_is_a_path():
    graph = gen(node_count=5, graph_type="linear")
    assert [(e.source, e.target) for e in graph.edges] == [("A", "B"), ("B", "C"), ("C", "D"), ("D", "E")]
    assert {n.y for n in graph.nodes} == {150}
    assert graph.nodes[0].x == 50 and graph.nodes[-1].x == 450


def test_linear_extra_edges_stay_bounded():
    graph = gen(node_count=4, graph_type="linear", path_length=20)
    assert 3 <= graph.edge_count() <= max_edge_count(4)
    assert _no_duplicates(graph)
    assert _is_connected(graph)


def test_circular_is_a_cycle():
    graph = gen(node_count=6, graph_type="circular")
    assert graph.edge_count() == 6
    assert all(graph.degree(nid) == 2 for nid in graph.node_ids())
    assert graph.has_edge_between("F", "A")


def test_grid_right_and_down_only():
    graph = gen(node_count=9, graph_type="grid")
    # 3x3 grid: 6 horizontal + 6 vertical
    assert graph.edge_count() == 12
    assert graph.has_edge_between("A", "B")
    assert graph.has_edge_between("A", "D")
    assert not graph.has_edge_between("C", "D")


def test_grid_partial_last_row():
    graph = gen(node_count=7, graph_type="grid")
    # 3 columns, 3 rows, last row holds only G
    assert graph.has_edge_between("D", "G")
    assert graph.degree("G") == 1
    assert _is_connected(graph)


def test_star_hub():
    graph = gen(node_count=7, graph_type="star")
    assert graph.degree("A") == 6
    assert all(graph.degree(nid) == 1 for nid in graph.node_ids()[1:])
    assert (graph.nodes[0].x, graph.nodes[0].y) == (250, 150)


@pytest.mark.parametrize("path_length", [None, 0, 1, 3, 8, 12, 100])
@pytest.mark.parametrize("seed", [1, 2, 3])
def test_random_always_connected(path_length, seed):
    graph = gen(node_count=8, graph_type="random", path_length=path_length, seed=seed)
    assert _is_connected(graph)
    assert _no_duplicates(graph)


def test_random_edge_target():
    assert gen(node_count=8, graph_type="random").edge_count() == 12
    assert gen(node_count=8, graph_type="random", path_length=10).edge_count() == 10
    assert gen(node_count=4, graph_type="random", path_length=100).edge_count() == max_edge_count(4)


def test_random_positions_inside_padding():
    graph = gen(node_count=20, graph_type="random", canvas_width=400, canvas_height=200)
    for node in graph.nodes:
        assert 50 <= node.x <= 350
        assert 50 <= node.y <= 150


# ---------------------------------------------------------------------------
# Weights and reproducibility
# ---------------------------------------------------------------------------
def test_unweighted_edges_weigh_one():
    graph = gen(node_count=6, graph_type="random")
    assert {e.weight for e in graph.edges} == {1}


def test_weights_within_bounds():
    graph = gen(node_count=10, graph_type="random", weighted=True, min_weight=3, max_weight=5)
    assert all(3 <= e.weight <= 5 for e in graph.edges)


def test_same_seed_same_graph():
    a = gen(node_count=10, graph_type="random", weighted=True, seed=99)
    b = gen(node_count=10, graph_type="random", weighted=True, seed=99)
    assert a.to_dict() == b.to_dict()


def test_injected_rng_is_used():
    options = GraphGenerationOptions(node_count=6, graph_type=GraphType.RANDOM)
    a = generate_graph(options, rng=random.Random(5))
    b = generate_graph(options, rng=random.Random(5))
    assert a.to_dict() == b.to_dict()


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("kwargs", [
    {"node_count": 2},
    {"node_count": 5, "min_weight": 0},
    {"node_count": 5, "min_weight": 6, "max_weight": 5},
    {"node_count": 5, "path_length": -1},
    {"node_count": 5, "graph_type": "hexagon"},
    {"node_count": 5, "seed": [1]},
    {"node_count": 5, "seed": "7"},
])
def test_invalid_options(kwargs):
    with pytest.raises(InvalidGraphOptionsError):
        GraphGenerationOptions(**kwargs)


def test_options_from_dict():
    options = GraphGenerationOptions.from_dict({"node_count": "6", "graph_type": "STAR", "weighted": True})
    assert options.node_count == 6
    assert options.graph_type is GraphType.STAR
    assert options.weighted


@pytest.mark.parametrize("raw, expected", [(True, True), ("false", False), ("Yes", True), ("0", False), (1, True), (0, False)])
def test_options_weighted_parses_spellings(raw, expected):
    assert GraphGenerationOptions.from_dict({"node_count": 5, "weighted": raw}).weighted is expected


@pytest.mark.parametrize("data", [
    {},
    {"node_count": "many"},
    {"node_count": 5, "weighted": "maybe"},
    {"node_count": 5, "weighted": [1]},
    {"node_count": 5, "seed": {"a": 1}},
    {"node_count": 5, "seed": "abc"},
])
def test_options_from_bad_dict(data):
    with pytest.raises(InvalidGraphOptionsError):
        GraphGenerationOptions.from_dict(data)


# ---------------------------------------------------------------------------
# Presets and demo graphs
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("name", list(GENERATOR_PRESETS))
def test_presets_generate_connected_graphs(name):
    graph = generate_graph(GENERATOR_PRESETS[name], rng=random.Random(0))
    assert graph.node_count() == GENERATOR_PRESETS[name].node_count
    assert _is_connected(graph)


def test_default_graphs():
    assert DEFAULT_GRAPHS["simple"].node_ids() == ["A", "B", "C", "D"]
    assert DEFAULT_GRAPHS["complex"].edge_count() == 7
    assert DEFAULT_GRAPHS["complex"].get_edge_between("C", "D").weight == 4
