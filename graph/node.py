"""
node.py - Graph Node
====================
A vertex of the input graph.  Nodes are immutable: the engine reads them
but never writes algorithm state onto them.  All visual state (visited,
in-mst, queued, ...) lives in the projected GraphView instead.
"""

from dataclasses import dataclass
from typing import Optional
import uuid


@dataclass(frozen=True)
class Node:
    """
    Attributes:
        id    : Unique identifier (short uuid by default, or user-supplied).
        label : Human-readable name shown on the canvas.
        x, y  : Canvas coordinates, kept only so a renderer can lay nodes out.
    """

    id:    str
    label: str   = ""
    x:     float = 0.0
    y:     float = 0.0

    @classmethod
    def create(
        cls,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
        node_id: Optional[str] = None,
    ) -> "Node":
        nid = node_id or str(uuid.uuid4())[:8]
        return cls(id=nid, label=label or nid, x=x, y=y)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"id": self.id, "label": self.label, "x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls.create(
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            label=data.get("label"),
            node_id=str(data["id"]),
        )
