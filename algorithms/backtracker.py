"""
backtracker.py - Recursive Backtracker Maze ("perfect" maze)
============================================================
Randomized depth-first carving through a grid that starts full of walls.

  1. fill-walls: every cell except start and end becomes a wall.
  2. From an odd-aligned cell near start, repeatedly step two cells in a
     random unvisited direction, carving both the target cell and the
     wall cell in between (`empty` steps).  Dead ends backtrack.
  3. Start and end are then each joined to the carved region by the
     shortest path found with BFS, carving any wall on it.

Yields long, winding corridors with no loops.  The DFS uses an explicit
stack so large grids do not hit the recursion limit.
"""

import logging
import random
from typing import Dict, Generator, List, Set, Tuple

from algorithms.context import GridContext
from algorithms.grid import Coord, all_cells, bfs_reachable, clamp, in_bounds, path_into_region
from algorithms.step import ClearCell, FillWalls, MazeComplete, MazeStep

logger = logging.getLogger(__name__)

# two cells away so a wall cell is left in between (up, right, down, left)
CARVE_DIRECTIONS: Tuple[Coord, ...] = ((-2, 0), (0, 2), (2, 0), (0, -2))


PSEUDOCODE: List[str] = [
    "fill grid with walls",                               # 0
    "carve(cell):",                                       # 1
    "    mark cell visited, open it",                     # 2
    "    for nbr in shuffle(unvisited cells 2 away):",    # 3
    "        open wall between cell and nbr",             # 4
    "        carve(nbr)",                                 # 5
    "connect start and end to the carved area",           # 6
]

LINE_MAPPING: Dict[str, int] = {
    "fill-walls": 0,
    "empty":      2,
    "complete":   6,
}


def backtracker(context: GridContext) -> Generator[MazeStep, None, None]:
    rows, cols = context.rows, context.cols
    if rows <= 0 or cols <= 0 or rows * cols <= 1:
        logger.debug("backtracker: degenerate grid %dx%d", rows, cols)
        yield MazeComplete(wall_count=0)
        return

    rng = random.Random(context.seed)
    start = clamp(context.start, rows, cols)
    end = clamp(context.end, rows, cols)

    filled = tuple(cell for cell in all_cells(rows, cols) if cell not in (start, end))
    walls: Set[Coord] = set(filled)
    yield FillWalls(cells=filled)

    def unvisited_around(cell: Coord) -> List[Coord]:
        found = [
            (cell[0] + dr, cell[1] + dc)
            for dr, dc in CARVE_DIRECTIONS
            if in_bounds((cell[0] + dr, cell[1] + dc), rows, cols)
            and (cell[0] + dr, cell[1] + dc) not in visited
        ]
        rng.shuffle(found)
        return found

    carve_start = (
        min(start[0] + 1, rows - 1) if start[0] % 2 == 0 else start[0],
        min(start[1] + 1, cols - 1) if start[1] % 2 == 0 else start[1],
    )

    visited: Set[Coord] = {carve_start}
    walls.discard(carve_start)
    yield ClearCell(coord=carve_start)

    stack = [(carve_start, iter(unvisited_around(carve_start)))]
    while stack:
        cell, pending = stack[-1]
        nxt = next((nb for nb in pending if nb not in visited), None)
        if nxt is None:
            stack.pop()
            continue

        between = ((cell[0] + nxt[0]) // 2, (cell[1] + nxt[1]) // 2)
        if between not in visited:
            visited.add(between)
            walls.discard(between)
            yield ClearCell(coord=between)

        visited.add(nxt)
        walls.discard(nxt)
        yield ClearCell(coord=nxt)
        stack.append((nxt, iter(unvisited_around(nxt))))

    # ---- join start & end to the carved region ----
    for endpoint in (start, end):
        region = bfs_reachable(rows, cols, walls, carve_start)
        if endpoint in region:
            continue
        for cell in path_into_region(rows, cols, endpoint, region):
            if cell in walls:
                walls.discard(cell)
                yield ClearCell(coord=cell)

    yield MazeComplete(wall_count=len(walls))
