"""
node.py — Graph Node
=====================
A point on the canvas with a stable id and a display label.

Design decisions:
  - Frozen: a Node is shared by every GraphStep of a run, so it must
    never change underneath a recorded snapshot.
  - Visual state (visited / frontier / current / path) is NOT stored on
    the node.  It lives in the GraphStep; the renderer derives colour
    from there.
"""

from dataclasses import dataclass
from typing import Optional

from visualgorithm.exceptions import InvalidDataError


@dataclass(frozen=True)
class Node:
    """
    Attributes:
        id     : Unique identifier within a graph ("A", "B", …).
        x, y   : Canvas coordinates in pixels.
        label  : Human-readable name shown on the canvas (defaults to id).
    """

    id:    str
    x:     float = 0.0
    y:     float = 0.0
    label: str   = ""

    def __post_init__(self):
        if not self.label:
            object.__setattr__(self, "label", self.id)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":    self.id,
            "label": self.label,
            "x":     self.x,
            "y":     self.y,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        if not isinstance(data, dict) or data.get("id") in (None, ""):
            raise InvalidDataError(f"node needs an 'id', got {data!r}")
        try:
            x = float(data.get("x", 0.0))
            y = float(data.get("y", 0.0))
        except (TypeError, ValueError):
            raise InvalidDataError(f"node {data['id']!r} has non-numeric coordinates") from None
        label: Optional[str] = data.get("label")
        return cls(id=str(data["id"]), x=x, y=y, label=str(label) if label else "")

    def __repr__(self) -> str:
        return f"Node(id={self.id}, pos=({self.x:.2f},{self.y:.2f}))"
