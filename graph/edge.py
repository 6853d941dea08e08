"""
edge.py - Graph Edge
====================
Connects two nodes and carries a weight.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and hashable.
  - Weight defaults to 1 for unweighted graphs.
  - `directed` is stored per-edge so serialisation is self-contained;
    the Graph-level flag decides what the algorithms see.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        id       : Unique identifier.
        source   : ID of the tail node.
        target   : ID of the head node.
        weight   : Numeric cost (default 1).
        directed : If False, traversal works in both directions.
    """

    id:       str
    source:   str
    target:   str
    weight:   float = 1.0
    directed: bool  = False

    def connects(self, node_a: str, node_b: str) -> bool:
        """True if this edge links node_a and node_b (respects directedness)."""
        if self.directed:
            return self.source == node_a and self.target == node_b
        return {self.source, self.target} == {node_a, node_b}

    def other_end(self, node_id: str) -> Optional[str]:
        """Given one endpoint, return the other, ignoring direction."""
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        return None

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":       self.id,
            "source":   self.source,
            "target":   self.target,
            "weight":   self.weight,
            "directed": self.directed,
        }

    @classmethod
    def from_dict(cls, data: dict, edge_id: Optional[str] = None) -> "Edge":
        return cls(
            id=str(data.get("id") or edge_id or f"{data['source']}-{data['target']}"),
            source=str(data["source"]),
            target=str(data["target"]),
            weight=float(data.get("weight", 1.0)),
            directed=bool(data.get("directed", False)),
        )

    def __repr__(self) -> str:
        arrow = " -> " if self.directed else " <-> "
        return f"Edge({self.source}{arrow}{self.target}, w={self.weight})"
