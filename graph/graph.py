"""
graph.py - Graph Container & Builders
=====================================
The input topology every graph algorithm reads.

Responsibilities:
  1. Building nodes & edges                 (add / create / get)
  2. Adjacency queries                      (neighbours, undirected_neighbours, ...)
  3. Graph-generation factory methods       (random weighted, random DAG)
  4. Import from an adjacency-list text     (text -> graph)
  5. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id for O(1) lookup,
    in insertion order (algorithms iterate them in that order).
  - A separate adjacency dict `_adj[node_id] -> [(neighbour_id, edge_id)]`
    is maintained incrementally so neighbour queries are O(degree).
  - Edges whose endpoints are not both known nodes are kept (so the input
    round-trips) but never appear in adjacency or `valid_edges()`.
  - The engine treats a Graph as read-only once it is wrapped in a
    GraphContext.  Random factories take a seed and use their own
    `random.Random`, never the module-level generator.
"""

import math
import random
from typing import Dict, List, Optional, Set, Tuple

from graph.node import Node
from graph.edge import Edge


class Graph:
    """
    Attributes:
        nodes    : {node_id: Node}
        edges    : {edge_id: Edge}
        directed : bool - graph-level directedness
        weighted : bool - whether weights are meaningful
        _adj     : {node_id: [(neighbour_id, edge_id), ...]}
    """

    def __init__(self, directed: bool = False, weighted: bool = True):
        self.nodes:    Dict[str, Node] = {}
        self.edges:    Dict[str, Edge] = {}
        self.directed: bool            = directed
        self.weighted: bool            = weighted
        self._adj:     Dict[str, List[Tuple[str, str]]] = {}

    # ==================================================================
    # NODES
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        return node

    def create_node(
        self,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
        node_id: Optional[str] = None,
    ) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node.create(x=x, y=y, label=label, node_id=node_id))

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def has_node(self, node_id: Optional[str]) -> bool:
        return node_id is not None and node_id in self.nodes

    # ==================================================================
    # EDGES
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        self.edges[edge.id] = edge
        if edge.source in self.nodes and edge.target in self.nodes:
            self._adj[edge.source].append((edge.target, edge.id))
            if not edge.directed and not edge.is_self_loop:
                self._adj[edge.target].append((edge.source, edge.id))
        return edge

    def create_edge(
        self,
        source: str,
        target: str,
        weight: float = 1.0,
        edge_id: Optional[str] = None,
    ) -> Edge:
        eid = edge_id or f"e{len(self.edges)}"
        while eid in self.edges:
            eid = f"{eid}'"
        return self.add_edge(
            Edge(id=eid, source=source, target=target, weight=weight, directed=self.directed)
        )

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self.edges.get(edge_id)

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge connecting a and b (direction-aware)."""
        for nbr, eid in self._adj.get(a, []):
            if nbr == b:
                return self.edges[eid]
        return None

    def valid_edges(self) -> List[Edge]:
        """Edges whose endpoints are both known nodes, in insertion order."""
        return [
            e for e in self.edges.values()
            if e.source in self.nodes and e.target in self.nodes
        ]

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """[(neighbour_id, edge)] following edge direction."""
        return [(nbr, self.edges[eid]) for nbr, eid in self._adj.get(node_id, [])]

    def undirected_neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """[(neighbour_id, edge)] treating every edge as two-way."""
        if not self.directed:
            return self.neighbours(node_id)
        result = []
        for e in self.valid_edges():
            if e.is_self_loop:
                continue
            if e.source == node_id:
                result.append((e.target, e))
            elif e.target == node_id:
                result.append((e.source, e))
        return result

    def degree(self, node_id: str) -> int:
        return len(self._adj.get(node_id, []))

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed": self.directed,
            "weighted": self.weighted,
            "nodes":    [n.to_dict() for n in self.nodes.values()],
            "edges":    [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        if not isinstance(data, dict):
            raise TypeError("graph must be an object with nodes and edges")
        g = cls(directed=bool(data.get("directed", False)), weighted=bool(data.get("weighted", True)))
        for nd in data.get("nodes", []):
            if isinstance(nd, dict):
                g.add_node(Node.from_dict(nd))
            else:
                g.create_node(node_id=str(nd))
        for i, ed in enumerate(data.get("edges", [])):
            g.create_edge(
                str(ed["source"]),
                str(ed["target"]),
                weight=float(ed.get("weight", 1.0)),
                edge_id=str(ed.get("id") or f"e{i}"),
            )
        return g

    # ==================================================================
    # GENERATORS - factory class-methods
    # ==================================================================

    # ---------- Random weighted graph ----------
    @classmethod
    def generate_random(
        cls,
        num_nodes: int = 10,
        edge_probability: float = 0.3,
        directed: bool = False,
        weighted: bool = True,
        weight_range: Tuple[int, int] = (1, 10),
        seed: Optional[int] = None,
        connected: bool = True,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Erdos-Renyi style random graph.
        Each possible edge is included with probability `edge_probability`.
        With `connected=True` a shuffled spanning path is added so MST demos
        always have an answer.
        """
        rng = random.Random(seed)
        g = cls(directed=directed, weighted=weighted)
        ids = _circle_layout(g, [str(i) for i in range(num_nodes)], canvas_w, canvas_h, rng)

        for i in range(num_nodes):
            for j in range(num_nodes):
                if i == j or (not directed and j < i):
                    continue
                if rng.random() < edge_probability:
                    w = rng.randint(*weight_range) if weighted else 1
                    g.create_edge(ids[i], ids[j], weight=w)

        if connected:
            shuffled = list(ids)
            rng.shuffle(shuffled)
            for k in range(1, len(shuffled)):
                a, b = shuffled[k - 1], shuffled[k]
                if not g.get_edge_between(a, b) and not g.get_edge_between(b, a):
                    w = rng.randint(*weight_range) if weighted else 1
                    g.create_edge(a, b, weight=w)

        return g

    # ---------- Random DAG ----------
    @classmethod
    def generate_dag(
        cls,
        num_nodes: int = 8,
        edge_probability: float = 0.3,
        seed: Optional[int] = None,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Random directed acyclic graph: edges only go from a lower position in
        a hidden random permutation to a higher one.
        """
        rng = random.Random(seed)
        g = cls(directed=True, weighted=False)
        ids = _circle_layout(g, [str(i) for i in range(num_nodes)], canvas_w, canvas_h, rng)
        rank = list(ids)
        rng.shuffle(rank)
        for i in range(num_nodes):
            for j in range(i + 1, num_nodes):
                if rng.random() < edge_probability:
                    g.create_edge(rank[i], rank[j])
        return g

    # ---------- Import from adjacency list (text) ----------
    @classmethod
    def from_adjacency_list(
        cls,
        text: str,
        directed: bool = False,
        weighted: bool = True,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one node per line):
            A: B C D            -> A connects to B, C, D  (weight 1)
            A: B(3) C(7)        -> A-B weight 3, A-C weight 7
            0 -> 1,2,3          -> alternate arrow syntax
            0: 1(5), 2(3)       -> comma-separated with weights

        Malformed weights fall back to 1.  Nodes are laid out in a circle.
        """
        if not isinstance(text, str):
            raise TypeError("adjacency list must be a string")
        adjacency: Dict[str, List[Tuple[str, float]]] = {}

        for line in text.strip().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if ":" in line:
                parts = line.split(":", 1)
            elif "->" in line:
                parts = line.split("->", 1)
            else:
                parts = [line, ""]

            src = parts[0].strip()
            if not src:
                continue
            adjacency.setdefault(src, [])

            for token in parts[1].replace(",", " ").split():
                if "(" in token and token.endswith(")"):
                    tgt, w_str = token[:-1].split("(", 1)
                    try:
                        w = float(w_str)
                    except ValueError:
                        w = 1.0
                else:
                    tgt, w = token, 1.0
                if not tgt:
                    continue
                adjacency.setdefault(tgt, [])
                adjacency[src].append((tgt, w if weighted else 1.0))

        g = cls(directed=directed, weighted=weighted)
        _circle_layout(g, list(adjacency), canvas_w, canvas_h, None)

        # deduplicate mirrored entries for undirected input
        seen: Set = set()
        for src, targets in adjacency.items():
            for tgt, w in targets:
                key = (src, tgt) if directed else frozenset((src, tgt))
                if key in seen:
                    continue
                seen.add(key)
                g.create_edge(src, tgt, weight=w)

        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def total_weight(self, edge_ids) -> float:
        return sum(self.edges[eid].weight for eid in edge_ids if eid in self.edges)

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"


# ---------------------------------------------------------------------------
# Layout helper
# ---------------------------------------------------------------------------
def _circle_layout(
    g: Graph,
    ids: List[str],
    canvas_w: float,
    canvas_h: float,
    rng: Optional[random.Random],
) -> List[str]:
    """Place `ids` on a circle (with jitter when an rng is given) and add them to g."""
    n = len(ids)
    margin = 40
    cx, cy = canvas_w / 2, canvas_h / 2
    radius = min(canvas_w, canvas_h) * 0.35
    for i, nid in enumerate(ids):
        angle = 2 * math.pi * i / max(n, 1)
        x = cx + radius * math.cos(angle)
        y = cy + radius * math.sin(angle)
        if rng is not None:
            x += rng.uniform(-30, 30)
            y += rng.uniform(-30, 30)
        x = max(margin, min(canvas_w - margin, x))
        y = max(margin, min(canvas_h - margin, y))
        g.create_node(x, y, label=nid, node_id=nid)
    return ids
