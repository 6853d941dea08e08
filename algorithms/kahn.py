"""
kahn.py - Kahn's Topological Sort
=================================
Visual pattern: "indegree countdown".  Nodes with no remaining incoming
edges are queued, emitted in order, and their outgoing edges are
removed, which may free further nodes.

Yields:
  1. init-indegrees                   -> incoming-edge count per node
  2. enqueue-zero                     -> each node with indegree 0
  3. dequeue / add-to-order           -> next node takes its position
  4. process-outgoing-edge            -> edge removed ...
  5. decrement-indegree (+ enqueue-zero)  -> ... and its target updated
  6. topo-complete | cycle-detected   -> terminal

Every node left over when the queue drains sits on (or behind) a cycle.
An undirected graph with two or more nodes cannot be ordered at all.
"""

import logging
from collections import deque
from typing import Dict, Generator, List

from algorithms.context import GraphContext
from algorithms.step import (
    AddToOrder, CycleDetected, DecrementIndegree, Dequeue, EnqueueZero,
    GraphStep, InitIndegrees, ProcessOutgoingEdge, TopoComplete,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Kahn(graph):",                                  # 0
    "    indeg ← count incoming edges",                  # 1
    "    queue ← [v for v in V if indeg[v] == 0]",       # 2
    "    while queue is not empty:",                     # 3
    "        u ← queue.popleft()",                       # 4
    "        order.append(u)",                           # 5
    "        for v in adj(u):",                          # 6
    "            indeg[v] ← indeg[v] - 1",               # 7
    "            if indeg[v] == 0: queue.append(v)",     # 8
    "    if len(order) < |V|: cycle!",                   # 9
    "    return order",                                  # 10
]

LINE_MAPPING: Dict[str, int] = {
    "init-indegrees":        1,
    "enqueue-zero":          2,
    "dequeue":               4,
    "add-to-order":          5,
    "process-outgoing-edge": 6,
    "decrement-indegree":    7,
    "cycle-detected":        9,
    "topo-complete":         10,
}


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def kahn(context: GraphContext) -> Generator[GraphStep, None, None]:
    graph = context.graph
    node_ids = graph.node_ids()
    n = len(node_ids)

    if n == 0:
        logger.debug("kahn: empty graph")
        yield TopoComplete(order=())
        return

    if n == 1:
        only = node_ids[0]
        yield InitIndegrees(indegrees={only: 0})
        yield EnqueueZero(node_id=only)
        yield Dequeue(node_id=only, order_index=0)
        yield AddToOrder(node_id=only, order_index=0)
        yield TopoComplete(order=(only,))
        return

    if not graph.directed:
        logger.debug("kahn: undirected graph with %d nodes", n)
        yield CycleDetected(remaining_nodes=n)
        return

    indegrees: Dict[str, int] = {nid: 0 for nid in node_ids}
    for edge in graph.valid_edges():
        indegrees[edge.target] += 1

    yield InitIndegrees(indegrees=dict(indegrees))

    queue: deque = deque()
    for nid in node_ids:
        if indegrees[nid] == 0:
            queue.append(nid)
            yield EnqueueZero(node_id=nid)

    order: List[str] = []

    while queue:
        node = queue.popleft()
        yield Dequeue(node_id=node, order_index=len(order))

        order.append(node)
        yield AddToOrder(node_id=node, order_index=len(order) - 1)

        for nbr, edge in graph.neighbours(node):
            yield ProcessOutgoingEdge(edge_id=edge.id, source_id=node, target_id=nbr)

            indegrees[nbr] -= 1
            yield DecrementIndegree(node_id=nbr, new_indegree=indegrees[nbr])

            if indegrees[nbr] == 0:
                queue.append(nbr)
                yield EnqueueZero(node_id=nbr)

    if len(order) < n:
        yield CycleDetected(remaining_nodes=n - len(order), order=tuple(order))
        return

    yield TopoComplete(order=tuple(order))
