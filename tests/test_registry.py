"""Tests for the algorithm registry."""

import pytest

from algorithms import (
    FAMILIES, REGISTRY, algorithms_by_family, algorithms_by_tag, get_algorithm, list_algorithms,
)
from algorithms.context import (
    DEFAULT_HEIGHTS, MAX_BARS, MAX_HEIGHT, MIN_BARS, GraphContext, GridContext, HeightsContext,
    PatternContext,
)
from graph import Graph


def sample_contexts(family: str, make_graph):
    if family == "graph":
        return [
            GraphContext(graph=make_graph(["A", "B", "C"], [("A", "B", 2), ("B", "C", 1), ("A", "C", 3)])),
            GraphContext(graph=make_graph(["a", "b", "c"], [("a", "b", 1), ("b", "c", 1)], directed=True)),
            GraphContext(graph=make_graph(["a", "b", "c"], [("a", "b", 1), ("b", "a", 1)], directed=True)),
            GraphContext(graph=make_graph(["A", "B", "C", "D"], [("A", "B", 1), ("C", "D", 1)])),
            GraphContext(graph=make_graph(["solo"], [])),
            GraphContext(graph=Graph()),
        ]
    if family == "maze":
        return [
            GridContext(rows=9, cols=9, end=(7, 7), seed=1),
            GridContext(rows=1, cols=1),
            GridContext(rows=6, cols=10, end=(4, 8), seed=3, wall_probability=0.6),
        ]
    if family == "pattern":
        return [
            PatternContext(input="abcabcbb", target="abc"),
            PatternContext(input="ADOBECODEBANC", target="ABC"),
            PatternContext(input="", target="a"),
            PatternContext(input="aa", target="b"),
        ]
    return [
        HeightsContext(heights=[0, 1, 0, 2, 1, 0, 1, 3, 2, 1, 2, 1]),
        HeightsContext(heights=[2, 1, 5, 6, 2, 3]),
        HeightsContext(heights=[5]),
        HeightsContext(heights=[]),
    ]


def test_registry_has_every_algorithm() -> None:
    assert set(REGISTRY) == {
        "prim", "kruskal", "kahn",
        "recursive_division", "random_noise", "backtracker",
        "sliding_window", "min_window",
        "trapping_rain_water", "largest_rectangle",
    }
    assert len(list_algorithms()) == len(REGISTRY)
    assert all(info.family in FAMILIES for info in REGISTRY.values())


@pytest.mark.parametrize("key", sorted(REGISTRY))
def test_every_emitted_step_has_a_line_and_label(key: str, make_graph) -> None:
    info = REGISTRY[key]
    for context in sample_contexts(info.family, make_graph):
        steps = list(info.fn(context))

        assert steps and steps[-1].terminal
        assert sum(1 for s in steps if s.terminal) == 1
        for step in steps:
            assert step.type in info.line_mapping, (key, step.type)
            assert step.type in info.step_labels, (key, step.type)
            assert 0 <= info.line_mapping[step.type] < len(info.pseudocode)


@pytest.mark.parametrize("key", sorted(REGISTRY))
def test_default_context_runs_to_a_terminal(key: str) -> None:
    info = get_algorithm(key)
    context = info.build_context()
    assert isinstance(context, info.context_type)
    steps = list(info.fn(context))
    assert steps[-1].terminal


def test_lookup_helpers() -> None:
    assert get_algorithm("nope") is None
    assert [a.key for a in algorithms_by_family("pattern")] == ["sliding_window", "min_window"]
    assert {a.key for a in algorithms_by_tag("mst")} == {"prim", "kruskal"}
    assert get_algorithm("min_window").objective == "minimize"


def test_card_is_serialisable() -> None:
    card = get_algorithm("prim").to_dict()
    assert card["key"] == "prim"
    assert card["family"] == "graph"
    assert card["pseudocode"][0].startswith("def Prim")
    assert "fn" not in card


def test_build_context_from_payloads() -> None:
    graph_ctx = get_algorithm("kahn").build_context({"adjacency": "a -> b\nb -> c", "directed": True})
    assert graph_ctx.graph.directed
    assert graph_ctx.graph.node_ids() == ["a", "b", "c"]

    dag_ctx = get_algorithm("kahn").build_context({"dag": True, "nodes": 6, "seed": 2})
    assert dag_ctx.graph.node_count() == 6

    grid_ctx = get_algorithm("backtracker").build_context({"rows": 7, "cols": 9, "seed": "4"})
    assert (grid_ctx.rows, grid_ctx.cols, grid_ctx.end, grid_ctx.seed) == (7, 9, (5, 7), 4)

    pattern_ctx = get_algorithm("min_window").build_context({"input": "abc", "target": None})
    assert pattern_ctx.target == ""


@pytest.mark.parametrize(
    "key,attr,expected",
    [
        ("sliding_window", "best_substring", "abc"),
        ("min_window", "best_substring", "BANC"),
        ("trapping_rain_water", "total_water", 6),
        ("largest_rectangle", "max_area", 10),
    ],
)
def test_default_inputs_are_worked_examples(key: str, attr: str, expected) -> None:
    info = get_algorithm(key)
    steps = list(info.fn(info.build_context()))
    assert len(steps) > 1
    assert getattr(steps[-1], attr) == expected
    assert info.to_dict()["default_input"] == info.default_input


def test_presets_resolve_by_name() -> None:
    assert PatternContext.from_dict({"preset": "two_chars"}).input == "pwwkew"
    assert PatternContext.from_dict({}).input == "abcabcbb"
    assert HeightsContext.from_dict({"preset": "valley"}).heights == (3, 0, 0, 2, 0, 4)
    assert HeightsContext.from_dict({}).heights == DEFAULT_HEIGHTS
    with pytest.raises(ValueError):
        PatternContext.from_dict({"preset": "nope"})
    with pytest.raises(ValueError):
        HeightsContext.from_dict({"preset": "nope"})


def test_random_heights_are_seeded_and_clamped() -> None:
    first = HeightsContext.from_dict({"random": 10, "seed": 3})
    assert first == HeightsContext.from_dict({"random": 10, "seed": 3})
    assert len(first.heights) == 10
    assert all(0 <= h <= MAX_HEIGHT for h in first.heights)

    assert len(HeightsContext.from_dict({"random": 1, "seed": 0}).heights) == MIN_BARS
    assert len(HeightsContext.from_dict({"random": 500, "seed": 0}).heights) == MAX_BARS


def test_heights_must_be_a_list() -> None:
    with pytest.raises(TypeError):
        HeightsContext.from_dict({"heights": "123"})
