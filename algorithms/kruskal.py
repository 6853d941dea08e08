"""
kruskal.py - Kruskal's Minimum Spanning Tree
============================================
Visual pattern: "scattered picking".  Edges are taken cheapest-first
from anywhere in the graph; Union-Find rejects the ones that would
close a cycle.  The colour-coded sets (one per component) merge as the
forest grows into a single tree.

Yields:
  1. init-sets                        -> every node in its own set
  2. consider-edge                    -> next edge in weight order
  3. find-set x2                      -> set of each endpoint
  4. reject-edge | union-sets + add-to-mst
  5. complete | disconnected          -> terminal

Edges are stable-sorted by weight, so equal weights keep insertion order.
Direction is ignored.  Edges with unknown endpoints are skipped.
"""

import logging
import math
from typing import Dict, Generator, List

from algorithms.context import GraphContext
from algorithms.step import (
    AddToMst, ConsiderEdge, Disconnected, FindSet, GraphStep, InitSets,
    MstComplete, RejectEdge, UnionSets, VisitNode,
)
from algorithms.union_find import UnionFind

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Kruskal(graph):",                               # 0
    "    for v in V: makeSet(v)",                        # 1
    "    sort edges by weight",                          # 2
    "    for (u, v, w) in edges:",                       # 3
    "        if find(u) != find(v):",                    # 4
    "            union(u, v)",                           # 5
    "            mst.add((u, v))",                       # 6
    "        else: skip (cycle)",                        # 7
    "    return mst",                                    # 8
]

LINE_MAPPING: Dict[str, int] = {
    "init-sets":     1,
    "visit-node":    1,
    "consider-edge": 3,
    "find-set":      4,
    "union-sets":    5,
    "add-to-mst":    6,
    "reject-edge":   7,
    "complete":      8,
    "disconnected":  8,
}


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def kruskal(context: GraphContext) -> Generator[GraphStep, None, None]:
    graph = context.graph
    node_ids = graph.node_ids()
    n = len(node_ids)

    if n == 0:
        logger.debug("kruskal: empty graph")
        yield MstComplete(total_weight=0, edge_count=0)
        return

    if n == 1:
        yield VisitNode(node_id=node_ids[0])
        yield MstComplete(total_weight=0, edge_count=0)
        return

    edges = graph.valid_edges()
    if not edges:
        logger.debug("kruskal: %d nodes but no usable edges", n)
        yield Disconnected(accepted_edges=0, node_count=n)
        return

    uf = UnionFind(node_ids)
    yield InitSets(node_sets=uf.snapshot())

    sorted_edges = sorted(edges, key=lambda e: e.weight)
    required = n - 1
    mst_edges: List[str] = []
    weights: List[float] = []

    for edge in sorted_edges:
        if len(mst_edges) >= required:
            break

        yield ConsiderEdge(edge_id=edge.id, weight=edge.weight)

        root_source = uf.find(edge.source)
        root_target = uf.find(edge.target)
        yield FindSet(node_id=edge.source, set_id=uf.set_id[root_source])
        yield FindSet(node_id=edge.target, set_id=uf.set_id[root_target])

        if root_source == root_target:
            yield RejectEdge(edge_id=edge.id, reason="same-set")
            continue

        result = uf.union(edge.source, edge.target)
        yield UnionSets(
            edge_id=edge.id,
            from_set_id=result.from_set_id,
            to_set_id=result.to_set_id,
            affected_nodes=result.affected_nodes,
        )

        mst_edges.append(edge.id)
        weights.append(edge.weight)
        yield AddToMst(edge_id=edge.id)

    if len(mst_edges) < required:
        yield Disconnected(accepted_edges=len(mst_edges), node_count=n)
        return

    yield MstComplete(
        total_weight=math.fsum(weights),
        edge_count=len(mst_edges),
        mst_edges=tuple(mst_edges),
    )
