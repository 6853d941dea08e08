"""
union_find.py - Disjoint-Set with Observable Mutations
======================================================
Union-Find used by Kruskal for cycle detection and component tracking.

Two maps are kept on purpose:
  - `parent` / `rank` decide correctness (which root a node reaches).
  - `set_id` is purely observational: a stable colour per component.
    It is updated as a side effect of `union` and never read by `find`.

`union` reports which nodes changed their visible set id, because the
visualizer recolours exactly those nodes.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class UnionResult:
    merged:         bool
    from_set_id:    int
    to_set_id:      int
    affected_nodes: Tuple[str, ...] = ()


class UnionFind:
    """
    Attributes:
        parent : {node_id: parent_id}; roots point at themselves.
        rank   : {node_id: rank} - upper bound on tree height under a root.
        set_id : {node_id: visual set id}; starts as the node's index.
    """

    def __init__(self, ids: Iterable[str] = ()):
        self.parent: Dict[str, str] = {}
        self.rank:   Dict[str, int] = {}
        self.set_id: Dict[str, int] = {}
        for i, node_id in enumerate(ids):
            if node_id in self.parent:
                continue
            self.parent[node_id] = node_id
            self.rank[node_id] = 0
            self.set_id[node_id] = i

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.parent

    def __len__(self) -> int:
        return len(self.parent)

    # ------------------------------------------------------------------
    # Core operations
    # ------------------------------------------------------------------
    def find(self, node_id: str) -> str:
        """Root of node_id's set.  Repoints every visited node at the root."""
        if node_id not in self.parent:
            return node_id

        root = node_id
        while self.parent[root] != root:
            root = self.parent[root]

        cur = node_id
        while self.parent[cur] != root:
            nxt = self.parent[cur]
            self.parent[cur] = root
            cur = nxt
        return root

    def union(self, a: str, b: str) -> UnionResult:
        """Merge the sets of a and b by rank, reporting recoloured nodes."""
        root_a = self.find(a)
        root_b = self.find(b)

        if root_a == root_b:
            sid = self.set_id.get(root_a, 0)
            return UnionResult(merged=False, from_set_id=sid, to_set_id=sid)
        if root_a not in self.parent or root_b not in self.parent:
            # unknown ids are never merged
            sid = self.set_id.get(root_a, self.set_id.get(root_b, 0))
            return UnionResult(merged=False, from_set_id=sid, to_set_id=sid)

        rank_a = self.rank[root_a]
        rank_b = self.rank[root_b]

        if rank_a < rank_b:
            child, keeper = root_a, root_b
        else:
            child, keeper = root_b, root_a
            if rank_a == rank_b:
                self.rank[root_a] = rank_a + 1
        self.parent[child] = keeper

        from_sid = self.set_id[child]
        to_sid = self.set_id[keeper]
        affected: List[str] = []
        for node_id, sid in self.set_id.items():
            if sid == from_sid:
                self.set_id[node_id] = to_sid
                affected.append(node_id)

        return UnionResult(
            merged=True,
            from_set_id=from_sid,
            to_set_id=to_sid,
            affected_nodes=tuple(affected),
        )

    # ------------------------------------------------------------------
    # Observational helpers
    # ------------------------------------------------------------------
    def connected(self, a: str, b: str) -> bool:
        return a in self.parent and b in self.parent and self.find(a) == self.find(b)

    def set_of(self, node_id: str) -> Optional[int]:
        """Visual set id of node_id's component."""
        if node_id not in self.parent:
            return None
        return self.set_id[self.find(node_id)]

    def groups(self) -> Dict[int, List[str]]:
        """{set_id: [members]} for every surviving set."""
        result: Dict[int, List[str]] = {}
        for node_id, sid in self.set_id.items():
            result.setdefault(sid, []).append(node_id)
        return result

    def snapshot(self) -> Dict[str, int]:
        return dict(self.set_id)
