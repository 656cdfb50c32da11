"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from visualgorithm.algorithms import REGISTRY, get_algorithm, run_sort, run_traversal

Two closed families, one enum each:

    SortAlgorithm       BUBBLE | INSERTION | MERGE | QUICK
    TraversalAlgorithm  BFS | DFS | DIJKSTRA

REGISTRY maps each enum value to an AlgoInfo card (label, function,
pseudocode, complexity, …).  Lookups accept the enum member, its value
("quick"), its label ("Quick Sort") or an alias ("quicksort"), case
insensitively.  Anything else is an UnknownAlgorithmError.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from visualgorithm.exceptions import UnknownAlgorithmError
from visualgorithm.graph import Edge, Graph, Node

from visualgorithm.algorithms.step import GraphResult, GraphStep, SortResult, SortStep
from visualgorithm.algorithms.bubble_sort    import bubble_sort    as _bubble,    PSEUDOCODE as _bubble_pc
from visualgorithm.algorithms.insertion_sort import insertion_sort as _insertion, PSEUDOCODE as _insertion_pc
from visualgorithm.algorithms.merge_sort     import merge_sort     as _merge,     PSEUDOCODE as _merge_pc
from visualgorithm.algorithms.quick_sort     import quick_sort     as _quick,     PSEUDOCODE as _quick_pc
from visualgorithm.algorithms.bfs            import bfs            as _bfs,       PSEUDOCODE as _bfs_pc
from visualgorithm.algorithms.dfs            import dfs            as _dfs,       PSEUDOCODE as _dfs_pc
from visualgorithm.algorithms.dijkstra       import dijkstra       as _dijkstra,  PSEUDOCODE as _dij_pc

logger = logging.getLogger(__name__)


class Family(Enum):
    SORTING = "sorting"
    GRAPH   = "graph"


class SortAlgorithm(Enum):
    BUBBLE    = "bubble"
    INSERTION = "insertion"
    MERGE     = "merge"
    QUICK     = "quick"


class TraversalAlgorithm(Enum):
    BFS      = "bfs"
    DFS      = "dfs"
    DIJKSTRA = "dijkstra"


AlgorithmName = Union[SortAlgorithm, TraversalAlgorithm, str]


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                # registry key, e.g. "bfs"
    label:            str                # human label, e.g. "Breadth-First Search"
    family:           Family
    fn:               Callable           # the instrumented implementation
    pseudocode:       List[str]          # lines for the side-panel
    aliases:          List[str] = field(default_factory=list)
    stable:           bool      = False  # sorting only
    complexity_time:  str       = ""
    complexity_space: str       = ""
    description:      str       = ""

    def to_dict(self) -> dict:
        return {
            "key":              self.key,
            "label":            self.label,
            "family":           self.family.value,
            "pseudocode":       list(self.pseudocode),
            "stable":           self.stable,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    SortAlgorithm.BUBBLE.value: AlgoInfo(
        key="bubble", label="Bubble Sort", family=Family.SORTING, fn=_bubble, pseudocode=_bubble_pc,
        aliases=["bubblesort", "bubble_sort"], stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly swaps adjacent out-of-order pairs; the largest value bubbles to the end each pass.",
    ),

    SortAlgorithm.INSERTION.value: AlgoInfo(
        key="insertion", label="Insertion Sort", family=Family.SORTING, fn=_insertion, pseudocode=_insertion_pc,
        aliases=["insertionsort", "insertion_sort"], stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Builds the sorted prefix one element at a time by sinking each new value into place.",
    ),

    SortAlgorithm.MERGE.value: AlgoInfo(
        key="merge", label="Merge Sort", family=Family.SORTING, fn=_merge, pseudocode=_merge_pc,
        aliases=["mergesort", "merge_sort"], stable=True,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Divide and conquer: sort both halves, then merge the two sorted runs.",
    ),

    SortAlgorithm.QUICK.value: AlgoInfo(
        key="quick", label="Quick Sort", family=Family.SORTING, fn=_quick, pseudocode=_quick_pc,
        aliases=["quicksort", "quick_sort"], stable=False,
        complexity_time="O(n log n)", complexity_space="O(log n)",
        description="Partitions around the last element as pivot, then sorts each side.",
    ),

    TraversalAlgorithm.BFS.value: AlgoInfo(
        key="bfs", label="Breadth-First Search", family=Family.GRAPH, fn=_bfs, pseudocode=_bfs_pc,
        aliases=["breadth_first_search"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer by layer. Finds the shortest path by hop count.",
    ),

    TraversalAlgorithm.DFS.value: AlgoInfo(
        key="dfs", label="Depth-First Search", family=Family.GRAPH, fn=_dfs, pseudocode=_dfs_pc,
        aliases=["depth_first_search"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking. Does NOT guarantee the shortest path.",
    ),

    TraversalAlgorithm.DIJKSTRA.value: AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", family=Family.GRAPH, fn=_dijkstra, pseudocode=_dij_pc,
        aliases=["dijkstra's", "shortest_path"],
        complexity_time="O(V²)", complexity_space="O(V)",
        description="Greedily finalises the closest node. Optimal for non-negative weights.",
    ),
}


def _build_lookup() -> Dict[str, str]:
    lookup: Dict[str, str] = {}
    for key, info in REGISTRY.items():
        for name in [key, info.label, *info.aliases]:
            lookup[name.lower()] = key
    return lookup


_LOOKUP: Dict[str, str] = _build_lookup()


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(name: AlgorithmName) -> Optional[AlgoInfo]:
    """Return AlgoInfo by enum, key, label or alias, or None."""
    if isinstance(name, (SortAlgorithm, TraversalAlgorithm)):
        return REGISTRY[name.value]
    if not isinstance(name, str):
        return None
    key = _LOOKUP.get(name.strip().lower())
    return REGISTRY.get(key) if key else None


def resolve_algorithm(name: AlgorithmName, family: Optional[Family] = None) -> AlgoInfo:
    """Like get_algorithm, but unknown (or wrong-family) names fail fast."""
    info = get_algorithm(name)
    if info is None or (family is not None and info.family is not family):
        raise UnknownAlgorithmError(name)
    return info


def list_algorithms(family: Optional[Family] = None) -> List[AlgoInfo]:
    """Return registered algorithms in insertion order, optionally one family."""
    return [a for a in REGISTRY.values() if family is None or a.family is family]


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------
def run_sort(
    algorithm: AlgorithmName,
    numbers: Sequence[Any],
    key: Optional[Callable[[Any], Any]] = None,
) -> SortResult:
    """Run one instrumented sort.  The input sequence is never mutated."""
    info = resolve_algorithm(algorithm, Family.SORTING)
    result = info.fn(numbers, key=key)
    logger.debug(
        "%s on %d values: %d steps, %d comparisons, %d swaps",
        info.label, len(numbers), result.total_steps, result.comparisons, result.swaps,
    )
    return result


def _as_graph(nodes: Union[Graph, Iterable[Any]], edges: Iterable[Any]) -> Graph:
    if isinstance(nodes, Graph):
        return nodes
    return Graph(
        nodes=[n if isinstance(n, Node) else Node.from_dict(n) for n in nodes],
        edges=[e if isinstance(e, Edge) else Edge.from_dict(e) for e in edges],
    )


def run_traversal(
    algorithm: AlgorithmName,
    nodes: Union[Graph, Iterable[Any]],
    edges: Iterable[Any] = (),
    start_id: Optional[str] = None,
    target_id: Optional[str] = None,
) -> GraphResult:
    """
    Run BFS, DFS or Dijkstra over an undirected graph.

    `nodes` may be a ready Graph (then `edges` is ignored) or sequences
    of Node/Edge objects or their dict forms.  `start_id` must name a
    node, and so must `target_id` when given.
    """
    info  = resolve_algorithm(algorithm, Family.GRAPH)
    graph = _as_graph(nodes, edges)
    graph.require_node(start_id, role="start node")
    if target_id is not None:
        graph.require_node(target_id, role="target node")

    result = info.fn(graph, start_id, target_id)
    logger.debug(
        "%s from %s to %s: visited %d, explored %d edges, path=%s",
        info.label, start_id, target_id, result.nodes_visited, result.edges_explored, result.path_found,
    )
    return result


__all__ = [
    "Family",
    "SortAlgorithm",
    "TraversalAlgorithm",
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "resolve_algorithm",
    "list_algorithms",
    "run_sort",
    "run_traversal",
    "SortStep",
    "SortResult",
    "GraphStep",
    "GraphResult",
]
