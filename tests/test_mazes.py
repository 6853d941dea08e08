"""Tests for the maze generators."""

import random
from typing import Iterable, Set

import pytest

from algorithms.backtracker import backtracker
from algorithms.context import GridContext
from algorithms.grid import Coord, is_solvable, path_into_region
from algorithms.random_noise import random_noise
from algorithms.recursive_division import divisions, recursive_division
from algorithms.step import ClearCell, FillWalls, MazeComplete, PlaceWall

GENERATORS = [recursive_division, random_noise, backtracker]


def fold_walls(steps: Iterable) -> Set[Coord]:
    walls: Set[Coord] = set()
    for step in steps:
        if isinstance(step, PlaceWall):
            walls.add(step.coord)
        elif isinstance(step, ClearCell):
            walls.discard(step.coord)
        elif isinstance(step, FillWalls):
            walls.update(step.cells)
    return walls


@pytest.mark.parametrize("seed", range(15))
@pytest.mark.parametrize("size", [(5, 5), (9, 13), (15, 25), (4, 7)])
def test_recursive_division_is_always_solvable(seed: int, size) -> None:
    rows, cols = size
    ctx = GridContext(rows=rows, cols=cols, start=(1, 1), end=(rows - 2, cols - 2), seed=seed)
    steps = list(recursive_division(ctx))
    walls = fold_walls(steps)

    assert ctx.start not in walls and ctx.end not in walls
    assert is_solvable(rows, cols, walls, ctx.start, ctx.end)
    assert steps[-1] == MazeComplete(wall_count=len(walls))


@pytest.mark.parametrize("seed", range(15))
@pytest.mark.parametrize("size", [(9, 13), (15, 25), (21, 31)])
def test_division_gaps_sit_on_entry_lines(seed: int, size) -> None:
    rows, cols = size
    plan = list(divisions(rows, cols, (1, 1), (rows - 2, cols - 2), random.Random(seed)))
    assert plan

    for division in plan:
        row_start, row_end, col_start, col_end = division.chamber
        if division.horizontal:
            assert row_start < division.line < row_end - 1
            crossing = [c for c in division.entry_cols if col_start <= c < col_end]
        else:
            assert col_start < division.line < col_end - 1
            crossing = [r for r in division.entry_rows if row_start <= r < row_end]
        if crossing:
            assert division.gap in crossing


@pytest.mark.parametrize("seed", range(15))
def test_sub_chambers_inherit_the_parent_gap(seed: int) -> None:
    plan = list(divisions(15, 25, (1, 1), (13, 23), random.Random(seed)))
    children = [d for d in plan if d.parent is not None]
    assert children

    for child in children:
        parent = plan[child.parent]
        assert set(parent.entry_rows) <= set(child.entry_rows)
        assert set(parent.entry_cols) <= set(child.entry_cols)

        row_start, row_end, col_start, col_end = child.chamber
        if parent.horizontal:
            assert parent.gap in child.entry_cols
            above = row_end == parent.line
            assert above or row_start == parent.line + 1
            assert (parent.line - 1 if above else parent.line + 1) in child.entry_rows
        else:
            assert parent.gap in child.entry_rows
            left = col_end == parent.line
            assert left or col_start == parent.line + 1
            assert (parent.line - 1 if left else parent.line + 1) in child.entry_cols


def test_walls_follow_the_division_plan() -> None:
    plan = list(divisions(15, 25, (1, 1), (13, 23), random.Random(5)))
    planned = [c for d in plan for c in d.cells() if c not in {(1, 1), (13, 23)}]

    placed = [s.coord for s in recursive_division(GridContext(seed=5)) if isinstance(s, PlaceWall)]
    assert placed == list(dict.fromkeys(planned))


@pytest.mark.parametrize("seed", range(10))
def test_backtracker_is_always_solvable(seed: int) -> None:
    ctx = GridContext(rows=11, cols=16, start=(0, 0), end=(10, 15), seed=seed)
    steps = list(backtracker(ctx))
    walls = fold_walls(steps)

    assert ctx.start not in walls and ctx.end not in walls
    assert is_solvable(11, 16, walls, ctx.start, ctx.end)
    assert steps[-1].wall_count == len(walls)


def test_backtracker_starts_with_a_full_grid() -> None:
    ctx = GridContext(rows=5, cols=5, start=(1, 1), end=(3, 3), seed=1)
    first = next(backtracker(ctx))

    assert isinstance(first, FillWalls)
    assert len(first.cells) == 23
    assert (1, 1) not in first.cells and (3, 3) not in first.cells
    assert first.cells[0] == (0, 0)


def test_backtracker_only_carves_after_filling() -> None:
    steps = list(backtracker(GridContext(rows=7, cols=7, seed=2, end=(5, 5))))
    kinds = {s.type for s in steps[1:-1]}
    assert kinds == {"empty"}


@pytest.mark.parametrize("fn", GENERATORS)
def test_same_seed_gives_same_sequence(fn) -> None:
    ctx = GridContext(rows=12, cols=18, end=(10, 16), seed=42)
    assert list(fn(ctx)) == list(fn(ctx))


def test_different_seeds_differ() -> None:
    a = list(recursive_division(GridContext(seed=1)))
    b = list(recursive_division(GridContext(seed=2)))
    assert a != b


def test_random_noise_probability_bounds() -> None:
    none = list(random_noise(GridContext(rows=6, cols=6, end=(4, 4), seed=0, wall_probability=0.0)))
    assert none == [MazeComplete(wall_count=0)]

    full = list(random_noise(GridContext(rows=6, cols=6, end=(4, 4), seed=0, wall_probability=1.0)))
    walls = fold_walls(full)
    assert len(walls) == 34
    assert (1, 1) not in walls and (4, 4) not in walls
    assert full[-1].wall_count == 34


def test_random_noise_emits_cells_in_row_major_order() -> None:
    steps = list(random_noise(GridContext(rows=8, cols=8, end=(6, 6), seed=5)))
    coords = [s.coord for s in steps if isinstance(s, PlaceWall)]
    assert coords == sorted(coords)
    assert len(set(coords)) == len(coords)


@pytest.mark.parametrize("fn", GENERATORS)
@pytest.mark.parametrize("rows,cols", [(0, 0), (1, 1), (0, 5), (3, 0)])
def test_degenerate_grids_complete_immediately(fn, rows: int, cols: int) -> None:
    assert list(fn(GridContext(rows=rows, cols=cols, seed=1))) == [MazeComplete(wall_count=0)]


@pytest.mark.parametrize("fn", GENERATORS)
def test_out_of_range_endpoints_are_clamped(fn) -> None:
    ctx = GridContext(rows=6, cols=6, start=(-3, -3), end=(99, 99), seed=3, wall_probability=1.0)
    walls = fold_walls(fn(ctx))
    assert (0, 0) not in walls
    assert (5, 5) not in walls


def test_path_into_region_runs_from_meeting_cell_to_origin() -> None:
    path = path_into_region(5, 5, (0, 0), {(0, 3), (4, 4)})
    assert path[0] == (0, 3)
    assert path[-1] == (0, 0)
    assert len(path) == 4
    assert path_into_region(5, 5, (0, 0), {(0, 0)}) == []
    assert path_into_region(5, 5, (0, 0), set()) == []
