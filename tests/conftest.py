"""Shared fixtures for engine and generator tests."""

from typing import List, Tuple

import pytest

from algorithms.context import GraphContext
from graph import Graph


def build_graph(
    nodes: List[str],
    edges: List[Tuple[str, str, float]],
    directed: bool = False,
) -> Graph:
    return Graph.from_dict({
        "directed": directed,
        "nodes": nodes,
        "edges": [{"source": s, "target": t, "weight": w} for s, t, w in edges],
    })


# Unique MST: B-C(1), A-C(2), D-E(2), B-D(5) -> total 10
CLASSIC_NODES = ["A", "B", "C", "D", "E"]
CLASSIC_EDGES = [
    ("A", "B", 4),    # e0
    ("A", "C", 2),    # e1
    ("B", "C", 1),    # e2
    ("B", "D", 5),    # e3
    ("C", "D", 8),    # e4
    ("C", "E", 10),   # e5
    ("D", "E", 2),    # e6
]


@pytest.fixture
def classic_graph() -> Graph:
    return build_graph(CLASSIC_NODES, CLASSIC_EDGES)


@pytest.fixture
def classic_context(classic_graph: Graph) -> GraphContext:
    return GraphContext(graph=classic_graph)


@pytest.fixture
def diamond_dag() -> Graph:
    return build_graph(
        ["a", "b", "c", "d"],
        [("a", "b", 1), ("a", "c", 1), ("b", "d", 1), ("c", "d", 1)],
        directed=True,
    )


class FakeClock:
    """Monotonic clock the test advances by hand."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_graph():
    return build_graph
