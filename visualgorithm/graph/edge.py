"""
edge.py — Graph Edge
====================
Connects two nodes and carries an optional weight.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Weight defaults to 1 for unweighted graphs — algorithms that ignore
    weights simply never read it.
  - Every edge is undirected.  `source` / `target` only record the order
    in which the edge was declared.
"""

from dataclasses import dataclass

from visualgorithm.exceptions import InvalidDataError


@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        source : ID of the first endpoint.
        target : ID of the second endpoint.
        weight : Positive cost (default 1).
    """

    source: str
    target: str
    weight: float = 1

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        if not isinstance(data, dict):
            raise InvalidDataError(f"edge must be an object, got {data!r}")
        # accept the front-end's from/to spelling as well
        source = data.get("source", data.get("from"))
        target = data.get("target", data.get("to"))
        if source is None or target is None:
            raise InvalidDataError("edge needs 'source'/'target' (or 'from'/'to')")
        return cls(source=str(source), target=str(target), weight=_parse_weight(data.get("weight")))

    def __repr__(self) -> str:
        return f"Edge({self.source} ↔ {self.target}, w={self.weight})"


def _parse_weight(raw) -> float:
    """Missing, null or 0 means 1; anything else must be a positive number."""
    if raw is None or raw == 0:
        return 1
    if isinstance(raw, bool) or not isinstance(raw, (int, float)) or raw < 0:
        raise InvalidDataError(f"edge weight must be a positive number, got {raw!r}")
    return raw
