"""
prim.py - Prim's Minimum Spanning Tree
======================================
Generator-based Prim using a min-heap (heapq).

Visual pattern: "infection spreading".  The tree grows from a single
start node, always absorbing the cheapest edge that crosses from the
tree to the rest of the graph.

Yields:
  1. start                            -> chosen start node
  2. extract-min                      -> cheapest frontier entry popped
  3. visit-node / add-to-mst          -> node (and the edge that brought it) join the tree
  4. consider-edge                    -> each edge to a non-tree neighbour
  5. update-priority                  -> that edge is the best known link so far
  6. complete | disconnected          -> terminal

Edge direction is ignored: a spanning tree is an undirected notion.
Heap entries are (priority, -counter, node, edge) so equal priorities pop
the most recently inserted / updated entry first.  Stale entries are
skipped silently.
"""

import heapq
import logging
import math
from typing import Dict, Generator, List, Optional, Tuple

from algorithms.context import GraphContext
from algorithms.step import (
    AddToMst, ConsiderEdge, Disconnected, ExtractMin, GraphStep,
    MstComplete, StartNode, UpdatePriority, VisitNode,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Prim(graph, start):",                          # 0
    "    pq ← [(0, start, None)]",                      # 1
    "    inMST ← {}",                                    # 2
    "    while pq is not empty:",                        # 3
    "        (w, node, edge) ← pq.pop_min()",           # 4
    "        if node in inMST: continue",               # 5
    "        inMST.add(node)",                           # 6
    "        if edge: mst.add(edge)",                    # 7
    "        for (nbr, e) in adj(node):",                # 8
    "            if nbr not in inMST and e.w < key[nbr]:",  # 9
    "                key[nbr] ← e.w; pq.push(nbr)",     # 10
    "    return mst",                                    # 11
]

LINE_MAPPING: Dict[str, int] = {
    "start":           1,
    "extract-min":     4,
    "visit-node":      6,
    "add-to-mst":      7,
    "consider-edge":   9,
    "update-priority": 10,
    "complete":        11,
    "disconnected":    11,
}


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def prim(context: GraphContext) -> Generator[GraphStep, None, None]:
    graph = context.graph
    node_ids = graph.node_ids()
    n = len(node_ids)

    if n == 0:
        logger.debug("prim: empty graph")
        yield MstComplete(total_weight=0, edge_count=0)
        return

    start = context.start_node_id if graph.has_node(context.start_node_id) else node_ids[0]

    if n == 1:
        yield StartNode(node_id=start)
        yield VisitNode(node_id=start)
        yield MstComplete(total_weight=0, edge_count=0)
        return

    yield StartNode(node_id=start)

    in_mst: set = set()
    key: Dict[str, float] = {}                  # best known link weight per frontier node
    counter = 0
    pq: List[Tuple[float, int, str, Optional[str]]] = [(0, 0, start, None)]
    mst_edges: List[str] = []
    weights: List[float] = []

    while pq:
        priority, _, node, edge_id = heapq.heappop(pq)

        if node in in_mst:
            continue
        if edge_id is not None and priority > key.get(node, priority):
            continue    # stale

        yield ExtractMin(node_id=node, priority=priority)

        in_mst.add(node)
        yield VisitNode(node_id=node)

        if edge_id is not None:
            mst_edges.append(edge_id)
            weights.append(priority)
            yield AddToMst(edge_id=edge_id, node_id=node)

        if len(mst_edges) == n - 1:
            break

        for nbr, edge in graph.undirected_neighbours(node):
            if nbr in in_mst:
                continue

            yield ConsiderEdge(edge_id=edge.id, weight=edge.weight)

            if nbr not in key or edge.weight < key[nbr]:
                key[nbr] = edge.weight
                counter += 1
                heapq.heappush(pq, (edge.weight, -counter, nbr, edge.id))
                yield UpdatePriority(node_id=nbr, priority=edge.weight, edge_id=edge.id)

    if len(mst_edges) < n - 1:
        yield Disconnected(accepted_edges=len(mst_edges), node_count=n)
        return

    yield MstComplete(
        total_weight=math.fsum(weights),
        edge_count=len(mst_edges),
        mst_edges=tuple(mst_edges),
    )
