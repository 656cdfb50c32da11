"""
step.py — Algorithm Step Snapshots
===================================
Every algorithm records a trace: an ordered list of frozen snapshots.
Two snapshot shapes exist, one per family:

    SortStep   – the array plus which indices are being compared /
                 swapped / are already in place / bound the active range
    GraphStep  – visited set, current node, frontier (queue or stack),
                 distance table, newly explored ids, final path

and one result type per family bundling the trace with its counters:

    SortResult   – steps, comparisons, swaps, array_accesses
    GraphResult  – steps, nodes_visited, edges_explored, path_found,
                   total_distance

Design decisions:
  - Snapshots are frozen dataclasses holding tuples.  Once appended to
    a trace nothing can change them; the playback engine and the
    renderer are pure readers.
  - Algorithms never build snapshots by hand.  They drive a mutable
    scratch-pad (SortTrace / GraphTrace) that copies its state into a
    fresh snapshot every time `snapshot()` is called.
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Set, Tuple

from visualgorithm.graph import Edge, Graph, Node


IndexPair = Tuple[int, int]


def _json_number(value: float) -> Optional[float]:
    """inf has no JSON spelling; the renderer shows None as ∞."""
    if isinstance(value, float) and math.isinf(value):
        return None
    return value


# ===========================================================================
# SORTING
# ===========================================================================
@dataclass(frozen=True)
class SortStep:
    """
    Attributes:
        array     : Array contents at this instant.
        comparing : (i, j) being compared right now, if any.
        swapping  : (i, j) about to be swapped, if any.
        sorted    : Indices known to be in place.  Carried forward, so it
                    only ever grows along a trace.
        pivot     : Quick sort pivot index.
        left      : Lower bound of the active range (inclusive).
        right     : Upper bound of the active range (inclusive).
    """

    array:     Tuple[Any, ...]     = ()
    comparing: Optional[IndexPair] = None
    swapping:  Optional[IndexPair] = None
    sorted:    Tuple[int, ...]     = ()
    pivot:     Optional[int]       = None
    left:      Optional[int]       = None
    right:     Optional[int]       = None

    def to_dict(self) -> dict:
        return {
            "array":     list(self.array),
            "comparing": list(self.comparing) if self.comparing else None,
            "swapping":  list(self.swapping) if self.swapping else None,
            "sorted":    list(self.sorted),
            "pivot":     self.pivot,
            "left":      self.left,
            "right":     self.right,
        }


@dataclass(frozen=True)
class SortResult:
    steps:          Tuple[SortStep, ...]
    comparisons:    int = 0
    swaps:          int = 0
    array_accesses: int = 0

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    def metrics(self) -> dict:
        """Counters only; never touches the steps."""
        return {
            "comparisons":    self.comparisons,
            "swaps":          self.swaps,
            "array_accesses": self.array_accesses,
        }

    def to_dict(self) -> dict:
        return {"steps": [s.to_dict() for s in self.steps], **self.metrics()}


class SortTrace:
    """
    Mutable scratch-pad the sorting algorithms drive.

    Usage inside an algorithm:
        trace = SortTrace(values)          # records the initial snapshot
        trace.compare(j, j + 1)            # comparing snapshot + counters
        if trace.key(j) > trace.key(j + 1):
            trace.swap(j, j + 1)           # swapping + post-swap snapshots
        trace.mark_sorted(n - 1)
        return trace.finish()              # everything sorted, final snapshot

    `key` works like the builtin sorted(key=…): comparisons read
    key(item) while snapshots record the items themselves.
    """

    def __init__(self, values: Sequence[Any], key: Optional[Callable[[Any], Any]] = None):
        self.array: List[Any] = list(values)          # private copy, caller's list untouched
        self._key = key if key is not None else (lambda item: item)
        self.steps: List[SortStep] = []
        self.comparisons:    int = 0
        self.swaps:          int = 0
        self.array_accesses: int = 0
        self._sorted: Set[int] = set()
        self.snapshot()

    def __len__(self) -> int:
        return len(self.array)

    def key(self, index: int) -> Any:
        return self._key(self.array[index])

    def key_of(self, item: Any) -> Any:
        return self._key(item)

    # -- recording --
    def snapshot(self, **marks) -> SortStep:
        step = SortStep(array=tuple(self.array), sorted=tuple(sorted(self._sorted)), **marks)
        self.steps.append(step)
        return step

    def compare(self, i: int, j: int, **marks) -> None:
        """Record one element-vs-element comparison."""
        self.comparisons    += 1
        self.array_accesses += 2
        self.snapshot(comparing=(i, j), **marks)

    def swap(self, i: int, j: int, after: Optional[Dict[str, Any]] = None, **marks) -> None:
        """
        Announce, perform and show a swap of positions i and j.
        `after` replaces `marks` on the post-swap snapshot (quick sort
        uses it to follow the pivot to its new index).
        """
        self.snapshot(swapping=(i, j), **marks)
        self.array[i], self.array[j] = self.array[j], self.array[i]
        self.swaps          += 1
        self.array_accesses += 2
        self.snapshot(**(marks if after is None else after))

    def write(self, index: int, item: Any, **marks) -> None:
        """Single position write (merge sort copies values back one by one)."""
        self.array[index]    = item
        self.swaps          += 1
        self.array_accesses += 1
        self.snapshot(**marks)

    def mark_sorted(self, *indices: int, **marks) -> None:
        """Add indices to the in-place set and record the new state."""
        self._sorted.update(indices)
        self.snapshot(**marks)

    def settle(self, *indices: int) -> None:
        """Add indices to the in-place set without recording a snapshot."""
        self._sorted.update(indices)

    def finish(self) -> SortResult:
        self._sorted.update(range(len(self.array)))
        self.snapshot()
        return SortResult(
            steps=tuple(self.steps),
            comparisons=self.comparisons,
            swaps=self.swaps,
            array_accesses=self.array_accesses,
        )


# ===========================================================================
# GRAPHS
# ===========================================================================
@dataclass(frozen=True)
class GraphStep:
    """
    Attributes:
        nodes         : Every node of the graph (shared for the run).
        edges         : Every edge of the graph (shared for the run).
        visited_nodes : Node ids in the order they were visited.
        current_node  : Node being expanded right now.
        queue         : BFS frontier, front first.
        stack         : DFS frontier, top last.
        distances     : Dijkstra's distance table; inf = not reached yet.
        path          : Start → target route, only on the success step.
        exploring     : Ids discovered / relaxed by this step.
    """

    nodes:         Tuple[Node, ...]
    edges:         Tuple[Edge, ...]
    visited_nodes: Tuple[str, ...]               = ()
    current_node:  Optional[str]                 = None
    queue:         Optional[Tuple[str, ...]]     = None
    stack:         Optional[Tuple[str, ...]]     = None
    distances:     Optional[Mapping[str, float]] = None
    path:          Optional[Tuple[str, ...]]     = None
    exploring:     Tuple[str, ...]               = ()

    def to_dict(self, include_graph: bool = True) -> dict:
        data: Dict[str, Any] = {
            "visited_nodes": list(self.visited_nodes),
            "current_node":  self.current_node,
            "queue":         list(self.queue) if self.queue is not None else None,
            "stack":         list(self.stack) if self.stack is not None else None,
            "distances":     (
                {nid: _json_number(d) for nid, d in self.distances.items()}
                if self.distances is not None else None
            ),
            "path":          list(self.path) if self.path is not None else None,
            "exploring":     list(self.exploring),
        }
        if include_graph:
            data["nodes"] = [n.to_dict() for n in self.nodes]
            data["edges"] = [e.to_dict() for e in self.edges]
        return data


@dataclass(frozen=True)
class GraphResult:
    steps:          Tuple[GraphStep, ...]
    nodes_visited:  int                       = 0
    edges_explored: int                       = 0
    path_found:     Optional[Tuple[str, ...]] = None
    total_distance: Optional[float]           = None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    def metrics(self) -> dict:
        """Counters only; never touches the steps."""
        return {
            "nodes_visited":  self.nodes_visited,
            "edges_explored": self.edges_explored,
            "path_found":     list(self.path_found) if self.path_found is not None else None,
            "total_distance": self.total_distance,
        }

    def to_dict(self) -> dict:
        return {"steps": [s.to_dict(include_graph=False) for s in self.steps], **self.metrics()}


class GraphTrace:
    """
    Mutable scratch-pad the traversal algorithms drive.

        trace = GraphTrace(graph)
        trace.snapshot(queue=[start])
        trace.visit(node)
        trace.explore_edge()
        trace.snapshot(current=node, queue=queue, exploring=new_ids)
        return trace.finish(path=path)
    """

    def __init__(self, graph: Graph):
        self.graph = graph
        self.steps: List[GraphStep] = []
        self.visited_order: List[str] = []
        self.visited: Set[str] = set()
        self.edges_explored: int = 0

    # -- bookkeeping --
    def visit(self, node_id: str) -> None:
        if node_id not in self.visited:
            self.visited.add(node_id)
            self.visited_order.append(node_id)

    def explore_edge(self) -> None:
        self.edges_explored += 1

    @property
    def nodes_visited(self) -> int:
        return len(self.visited_order)

    # -- recording --
    def snapshot(
        self,
        current:   Optional[str] = None,
        queue:     Optional[Sequence[str]] = None,
        stack:     Optional[Sequence[str]] = None,
        distances: Optional[Mapping[str, float]] = None,
        path:      Optional[Sequence[str]] = None,
        exploring: Sequence[str] = (),
    ) -> GraphStep:
        step = GraphStep(
            nodes=self.graph.nodes,
            edges=self.graph.edges,
            visited_nodes=tuple(self.visited_order),
            current_node=current,
            queue=tuple(queue) if queue is not None else None,
            stack=tuple(stack) if stack is not None else None,
            distances=MappingProxyType(dict(distances)) if distances is not None else None,
            path=tuple(path) if path is not None else None,
            exploring=tuple(exploring),
        )
        self.steps.append(step)
        return step

    def finish(self, path: Optional[Sequence[str]] = None, total_distance: Optional[float] = None) -> GraphResult:
        return GraphResult(
            steps=tuple(self.steps),
            nodes_visited=self.nodes_visited,
            edges_explored=self.edges_explored,
            path_found=tuple(path) if path is not None else None,
            total_distance=total_distance,
        )


# ---------------------------------------------------------------------------
# Shared helper
# ---------------------------------------------------------------------------
def reconstruct_path(parent: Mapping[str, Optional[str]], target: str) -> List[str]:
    """Walk parent pointers from target back to the start, then reverse."""
    path = []
    cur: Optional[str] = target
    while cur is not None:
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path
