"""
graph.py — Graph Container
===========================
Read-only view over a node list and an edge list that the traversal
algorithms walk.

Responsibilities:
  1. Validation                             (every edge endpoint exists)
  2. Adjacency queries                      (neighbours, edge lookup)
  3. Serialisation round-trip               (to_dict / from_dict)
  4. Built-in demo graphs                   (DEFAULT_GRAPHS)

Design decisions:
  - Nodes stored in a dict keyed by id for O(1) lookup; declaration
    order is kept as well because Dijkstra breaks ties by it.
  - `_adj[node_id] → [(neighbour_id, edge)]` is built once in edge
    declaration order.  Every edge is undirected, so both endpoints see
    it; a self-loop is listed once.
  - Construction never mutates the caller's lists.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from visualgorithm.exceptions import UnknownNodeError
from visualgorithm.graph.node import Node
from visualgorithm.graph.edge import Edge


class Graph:
    """
    Attributes:
        nodes : Tuple of Nodes in declaration order.
        edges : Tuple of Edges in declaration order.
        _by_id: {node_id: Node}
        _adj  : {node_id: [(neighbour_id, edge), …]}
    """

    def __init__(self, nodes: Iterable[Node] = (), edges: Iterable[Edge] = ()):
        self.nodes: Tuple[Node, ...] = tuple(nodes)
        self.edges: Tuple[Edge, ...] = tuple(edges)
        self._by_id: Dict[str, Node] = {n.id: n for n in self.nodes}
        self._adj:   Dict[str, List[Tuple[str, Edge]]] = {n.id: [] for n in self.nodes}

        for edge in self.edges:
            for endpoint in (edge.source, edge.target):
                if endpoint not in self._by_id:
                    raise UnknownNodeError(endpoint, role="edge endpoint")
            self._adj[edge.source].append((edge.target, edge))
            if not edge.is_self_loop:
                self._adj[edge.target].append((edge.source, edge))

    # ==================================================================
    # NODE QUERIES
    # ==================================================================
    def has_node(self, node_id: str) -> bool:
        return node_id in self._by_id

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._by_id.get(node_id)

    def require_node(self, node_id: str, role: str = "node") -> Node:
        """Like get_node, but a missing id is a contract violation."""
        node = self._by_id.get(node_id)
        if node is None:
            raise UnknownNodeError(node_id, role=role)
        return node

    def node_ids(self) -> List[str]:
        return [n.id for n in self.nodes]

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """Return [(neighbour_id, edge)] for every incident edge."""
        return list(self._adj.get(node_id, []))

    def degree(self, node_id: str) -> int:
        return len(self._adj.get(node_id, []))

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge connecting a and b (either direction)."""
        for nbr, edge in self._adj.get(a, []):
            if nbr == b:
                return edge
        return None

    def has_edge_between(self, a: str, b: str) -> bool:
        return self.get_edge_between(a, b) is not None

    def path_weight(self, path: List[str]) -> float:
        """Sum of edge weights along consecutive path nodes."""
        total = 0
        for i in range(len(path) - 1):
            edge = self.get_edge_between(path[i], path[i + 1])
            if edge is not None:
                total += edge.weight
        return total

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        return cls(
            nodes=[Node.from_dict(nd) for nd in data.get("nodes", [])],
            edges=[Edge.from_dict(ed) for ed in data.get("edges", [])],
        )

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"


# ---------------------------------------------------------------------------
# Built-in demo graphs
# ---------------------------------------------------------------------------
DEFAULT_GRAPHS: Dict[str, Graph] = {
    "simple": Graph(
        nodes=[
            Node("A", 100, 100),
            Node("B", 300, 100),
            Node("C", 200, 200),
            Node("D", 400, 200),
        ],
        edges=[
            Edge("A", "B", 1),
            Edge("A", "C", 2),
            Edge("B", "D", 1),
            Edge("C", "D", 3),
        ],
    ),
    "complex": Graph(
        nodes=[
            Node("A", 50, 150),
            Node("B", 150, 50),
            Node("C", 250, 150),
            Node("D", 150, 250),
            Node("E", 350, 100),
            Node("F", 350, 200),
        ],
        edges=[
            Edge("A", "B", 4),
            Edge("A", "D", 2),
            Edge("B", "C", 3),
            Edge("C", "E", 1),
            Edge("C", "F", 5),
            Edge("D", "C", 4),
            Edge("E", "F", 2),
        ],
    ),
}
