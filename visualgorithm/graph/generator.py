"""
generator.py — Procedural Graph Generation
===========================================
Builds a Graph from a declarative shape description.

    from visualgorithm.graph.generator import GraphGenerationOptions, generate_graph
    g = generate_graph(GraphGenerationOptions(node_count=8, graph_type="random", seed=7))

Shapes:
  • linear    – a simple path A–B–C–…, optionally with extra random chords
  • circular  – a cycle, last node wraps back to the first
  • grid      – ⌈√n⌉ columns, right + down neighbours only
  • star      – node A is the hub, everyone else hangs off it
  • random    – random spanning tree first (always connected), then
                random extra edges up to the requested count

Design decisions:
  - Node ids are sequential letters.  Past Z they continue spreadsheet
    style (AA, AB, …) so ids never collide.
  - All randomness goes through one `random.Random` instance; pass a
    seed (or your own rng) for reproducible graphs.
  - Duplicate detection is undirected: (A, B) and (B, A) are one edge.
"""

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Set

from visualgorithm.exceptions import InvalidGraphOptionsError
from visualgorithm.graph.edge import Edge
from visualgorithm.graph.graph import Graph
from visualgorithm.graph.node import Node

logger = logging.getLogger(__name__)

PADDING = 50


class GraphType(Enum):
    LINEAR   = "linear"
    CIRCULAR = "circular"
    GRID     = "grid"
    STAR     = "star"
    RANDOM   = "random"


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class GraphGenerationOptions:
    """
    Attributes:
        node_count    : Number of nodes, at least 3.
        path_length   : Desired edge count.  Only linear and random read it.
        graph_type    : GraphType (or its string value).
        weighted      : Draw weights from [min_weight, max_weight] if True.
        min_weight    : Inclusive lower weight bound (>= 1).
        max_weight    : Inclusive upper weight bound (>= min_weight).
        canvas_width  : Layout bounds in pixels.
        canvas_height :
        seed          : Optional seed for a reproducible graph.
    """

    node_count:    int
    graph_type:    GraphType     = GraphType.RANDOM
    path_length:   Optional[int] = None
    weighted:      bool          = False
    min_weight:    int           = 1
    max_weight:    int           = 10
    canvas_width:  float         = 500
    canvas_height: float         = 300
    seed:          Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.graph_type, GraphType):
            try:
                object.__setattr__(self, "graph_type", GraphType(str(self.graph_type).lower()))
            except ValueError:
                raise InvalidGraphOptionsError(f"Unknown graph type: {self.graph_type!r}") from None
        if self.node_count < 3:
            raise InvalidGraphOptionsError(f"node_count must be at least 3, got {self.node_count}")
        if self.min_weight < 1 or self.min_weight > self.max_weight:
            raise InvalidGraphOptionsError(
                f"weights need 1 <= min_weight <= max_weight, got {self.min_weight}..{self.max_weight}"
            )
        if self.path_length is not None and self.path_length < 0:
            raise InvalidGraphOptionsError(f"path_length cannot be negative, got {self.path_length}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise InvalidGraphOptionsError(f"seed must be an integer, got {self.seed!r}")

    @classmethod
    def from_dict(cls, data: dict) -> "GraphGenerationOptions":
        try:
            kwargs = dict(
                node_count=int(data["node_count"]),
                graph_type=data.get("graph_type", GraphType.RANDOM),
                path_length=int(data["path_length"]) if data.get("path_length") is not None else None,
                weighted=_parse_bool(data.get("weighted", False)),
                min_weight=int(data.get("min_weight", 1)),
                max_weight=int(data.get("max_weight", 10)),
                canvas_width=float(data.get("canvas_width", 500)),
                canvas_height=float(data.get("canvas_height", 300)),
                seed=int(data["seed"]) if data.get("seed") is not None else None,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidGraphOptionsError(f"Bad graph options: {e}") from e
        return cls(**kwargs)


_TRUE  = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


def _parse_bool(raw) -> bool:
    """JSON true/false, 0/1, or the usual spellings; "false" is False."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, int):
        return raw != 0
    if isinstance(raw, str) and raw.strip().lower() in _TRUE + _FALSE:
        return raw.strip().lower() in _TRUE
    raise ValueError(f"not a boolean: {raw!r}")


# ---------------------------------------------------------------------------
# Node ids
# ---------------------------------------------------------------------------
def node_id_for(index: int) -> str:
    """0 → A, 25 → Z, 26 → AA, 27 → AB, …"""
    letters = ""
    n = index + 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters = chr(65 + rem) + letters
    return letters


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def generate_graph(options: GraphGenerationOptions, rng: Optional[random.Random] = None) -> Graph:
    """Lay out `options.node_count` nodes, then connect them per graph_type."""
    if rng is None:
        rng = random.Random(options.seed)

    nodes = _generate_nodes(options, rng)
    edges = _generate_edges(nodes, options, rng)
    logger.debug(
        "generated %s graph: %d nodes, %d edges",
        options.graph_type.value, len(nodes), len(edges),
    )
    return Graph(nodes=nodes, edges=edges)


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
def _generate_nodes(options: GraphGenerationOptions, rng: random.Random) -> List[Node]:
    count  = options.node_count
    width  = options.canvas_width
    height = options.canvas_height
    kind   = options.graph_type
    positions = []

    if kind is GraphType.LINEAR:
        for i in range(count):
            x = PADDING + (i * (width - 2 * PADDING)) / max(1, count - 1)
            positions.append((x, height / 2))

    elif kind is GraphType.CIRCULAR:
        cx, cy = width / 2, height / 2
        radius = min(width, height) / 3
        for i in range(count):
            angle = 2 * math.pi * i / count
            positions.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))

    elif kind is GraphType.GRID:
        cols = math.ceil(math.sqrt(count))
        rows = math.ceil(count / cols)
        for i in range(count):
            row, col = divmod(i, cols)
            x = PADDING + (col * (width - 2 * PADDING)) / max(1, cols - 1)
            y = PADDING + (row * (height - 2 * PADDING)) / max(1, rows - 1)
            positions.append((x, y))

    elif kind is GraphType.STAR:
        cx, cy = width / 2, height / 2
        radius = min(width, height) / 3
        positions.append((cx, cy))          # hub
        for i in range(1, count):
            angle = 2 * math.pi * (i - 1) / (count - 1)
            positions.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))

    else:   # random
        for _ in range(count):
            x = PADDING + rng.random() * (width - 2 * PADDING)
            y = PADDING + rng.random() * (height - 2 * PADDING)
            positions.append((x, y))

    return [Node(id=node_id_for(i), x=x, y=y) for i, (x, y) in enumerate(positions)]


# ---------------------------------------------------------------------------
# Edges
# ---------------------------------------------------------------------------
class _EdgeSet:
    """Accumulates edges, rejecting self-loops and undirected duplicates."""

    def __init__(self, options: GraphGenerationOptions, rng: random.Random):
        self.edges: List[Edge] = []
        self._seen: Set[FrozenSet[str]] = set()
        self._options = options
        self._rng = rng

    def _weight(self) -> int:
        if self._options.weighted:
            return self._rng.randint(self._options.min_weight, self._options.max_weight)
        return 1

    def add(self, a: str, b: str) -> bool:
        key = frozenset((a, b))
        if a == b or key in self._seen:
            return False
        self._seen.add(key)
        self.edges.append(Edge(a, b, self._weight()))
        return True

    def fill_randomly(self, ids: List[str], target_count: int) -> None:
        """Add random edges until `target_count` is reached."""
        while len(self.edges) < target_count:
            self.add(self._rng.choice(ids), self._rng.choice(ids))

    def try_random(self, ids: List[str], attempts: int) -> None:
        """Draw `attempts` random pairs; collisions are simply dropped."""
        for _ in range(attempts):
            self.add(self._rng.choice(ids), self._rng.choice(ids))

    def __len__(self) -> int:
        return len(self.edges)


def max_edge_count(node_count: int) -> int:
    """Edge count of the complete simple graph on node_count nodes."""
    return node_count * (node_count - 1) // 2


def _generate_edges(nodes: List[Node], options: GraphGenerationOptions, rng: random.Random) -> List[Edge]:
    ids   = [n.id for n in nodes]
    count = len(ids)
    kind  = options.graph_type
    out   = _EdgeSet(options, rng)

    if kind is GraphType.LINEAR:
        for i in range(count - 1):
            out.add(ids[i], ids[i + 1])
        if options.path_length and options.path_length > count - 1:
            out.try_random(ids, min(options.path_length - (count - 1), max_edge_count(count)))

    elif kind is GraphType.CIRCULAR:
        for i in range(count):
            out.add(ids[i], ids[(i + 1) % count])

    elif kind is GraphType.GRID:
        cols = math.ceil(math.sqrt(count))
        rows = math.ceil(count / cols)
        for i in range(count):
            row, col = divmod(i, cols)
            if col < cols - 1 and i + 1 < count:
                out.add(ids[i], ids[i + 1])             # right
            if row < rows - 1 and i + cols < count:
                out.add(ids[i], ids[i + cols])          # down

    elif kind is GraphType.STAR:
        for other in ids[1:]:
            out.add(ids[0], other)

    else:   # random
        target = min(options.path_length or math.floor(count * 1.5), max_edge_count(count))

        # spanning tree first so the graph is always connected
        connected   = [ids[0]]
        unconnected = list(ids[1:])
        while unconnected:
            a = rng.choice(connected)
            b = unconnected.pop(rng.randrange(len(unconnected)))
            out.add(a, b)
            connected.append(b)

        out.fill_randomly(ids, target)

    return out.edges


# ---------------------------------------------------------------------------
# Presets (the "quick pick" cards in the configuration dialog)
# ---------------------------------------------------------------------------
GENERATOR_PRESETS: Dict[str, GraphGenerationOptions] = {
    "Small Path":    GraphGenerationOptions(node_count=4, path_length=3, graph_type=GraphType.LINEAR),
    "Medium Circle": GraphGenerationOptions(node_count=6, graph_type=GraphType.CIRCULAR,
                                            weighted=True, min_weight=1, max_weight=5),
    "Large Grid":    GraphGenerationOptions(node_count=9, graph_type=GraphType.GRID),
    "Star Network":  GraphGenerationOptions(node_count=7, graph_type=GraphType.STAR,
                                            weighted=True, min_weight=2, max_weight=8),
    "Random Graph":  GraphGenerationOptions(node_count=8, path_length=12, graph_type=GraphType.RANDOM,
                                            weighted=True, min_weight=1, max_weight=10),
}


__all__ = [
    "GraphType",
    "GraphGenerationOptions",
    "GENERATOR_PRESETS",
    "generate_graph",
    "node_id_for",
    "max_edge_count",
]
