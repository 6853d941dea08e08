"""Tests for the graph container and its builders."""

import pytest

from graph import Edge, Graph, Node


def test_undirected_adjacency_is_symmetric() -> None:
    g = Graph()
    for nid in "abc":
        g.create_node(node_id=nid)
    e = g.create_edge("a", "b", weight=3)

    assert e.id == "e0"
    assert [n for n, _ in g.neighbours("a")] == ["b"]
    assert [n for n, _ in g.neighbours("b")] == ["a"]
    assert g.get_edge_between("b", "a") is e
    assert g.degree("c") == 0


def test_directed_neighbours_follow_direction() -> None:
    g = Graph(directed=True)
    for nid in "ab":
        g.create_node(node_id=nid)
    g.create_edge("a", "b")

    assert [n for n, _ in g.neighbours("a")] == ["b"]
    assert g.neighbours("b") == []
    assert [n for n, _ in g.undirected_neighbours("b")] == ["a"]


def test_edges_to_unknown_nodes_are_kept_but_invalid() -> None:
    g = Graph()
    g.create_node(node_id="a")
    g.create_edge("a", "ghost")

    assert g.edge_count() == 1
    assert g.valid_edges() == []
    assert g.neighbours("a") == []


def test_duplicate_edge_ids_get_suffixed() -> None:
    g = Graph()
    for nid in "ab":
        g.create_node(node_id=nid)
    first = g.create_edge("a", "b", edge_id="x")
    second = g.create_edge("b", "a", edge_id="x")
    assert first.id == "x"
    assert second.id == "x'"


def test_self_loop_appears_once_in_adjacency() -> None:
    g = Graph()
    g.create_node(node_id="a")
    e = g.create_edge("a", "a")
    assert e.is_self_loop
    assert g.degree("a") == 1


def test_dict_round_trip_preserves_topology() -> None:
    g = Graph.from_dict({
        "directed": True,
        "nodes": [{"id": "a", "x": 1, "y": 2}, "b"],
        "edges": [{"id": "ab", "source": "a", "target": "b", "weight": 2.5}],
    })
    clone = Graph.from_dict(g.to_dict())

    assert clone.directed
    assert clone.node_ids() == ["a", "b"]
    assert clone.get_edge("ab").weight == 2.5
    assert clone.get_node("a").x == 1.0
    assert clone.total_weight(["ab", "missing"]) == 2.5


def test_adjacency_list_parses_weights_and_dedupes() -> None:
    text = """
    # comment
    A: B(3) C(7)
    B: A(3)
    C -> D
    """
    g = Graph.from_adjacency_list(text)

    assert g.node_ids() == ["A", "B", "C", "D"]
    assert g.edge_count() == 3
    assert g.get_edge_between("A", "B").weight == 3.0
    assert g.get_edge_between("D", "C").weight == 1.0


def test_adjacency_list_bad_weight_falls_back_to_one() -> None:
    g = Graph.from_adjacency_list("A: B(x)", directed=True)
    assert g.get_edge_between("A", "B").weight == 1.0
    assert g.get_edge_between("B", "A") is None


def test_random_graph_is_seeded_and_connected() -> None:
    a = Graph.generate_random(num_nodes=12, edge_probability=0.1, seed=3)
    b = Graph.generate_random(num_nodes=12, edge_probability=0.1, seed=3)
    assert a.to_dict() == b.to_dict()

    seen = {"0"}
    frontier = ["0"]
    while frontier:
        for nbr, _ in a.neighbours(frontier.pop()):
            if nbr not in seen:
                seen.add(nbr)
                frontier.append(nbr)
    assert seen == set(a.node_ids())


def test_generated_dag_only_points_forward() -> None:
    g = Graph.generate_dag(num_nodes=10, edge_probability=0.5, seed=11)
    assert g.directed
    # a DAG admits a topological order: repeatedly strip sources
    remaining = set(g.node_ids())
    edges = [(e.source, e.target) for e in g.valid_edges()]
    while remaining:
        sources = {n for n in remaining if not any(t == n and s in remaining for s, t in edges)}
        assert sources
        remaining -= sources


def test_node_and_edge_serialisation() -> None:
    node = Node.create(x=5, y=6, node_id="n1")
    assert node.label == "n1"
    assert Node.from_dict(node.to_dict()) == node

    edge = Edge.from_dict({"source": "a", "target": "b", "weight": "4"}, edge_id="e9")
    assert edge.id == "e9"
    assert edge.weight == 4.0
    assert edge.connects("b", "a")
    assert edge.other_end("a") == "b"


def test_numeric_edge_ids_become_strings() -> None:
    g = Graph.from_dict({"nodes": ["a", "b"], "edges": [{"source": "a", "target": "b", "id": 7}]})
    assert list(g.edges) == ["7"]
    assert g.get_edge("7").id == "7"


def test_builders_reject_the_wrong_shape() -> None:
    with pytest.raises(TypeError):
        Graph.from_dict([1])
    with pytest.raises(TypeError):
        Graph.from_adjacency_list(5)
