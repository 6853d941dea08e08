"""
recursive_division.py - Recursive Division Maze ("chamber" maze)
================================================================
Divide and conquer: split the current chamber with one straight wall
that has a single gap, then recurse into both halves.

Connectivity is kept by chaining gaps.  The row/column on each side of a
gap becomes an "entry" for the sub-chamber, and later walls put their own
gap on an entry line whenever one crosses the chamber.  Because a later
wall can still land next to an earlier gap, a repair pass follows: BFS
from start, and if the end is unreachable, BFS from the end to the
nearest reachable cell and carve that path open with `empty` steps.

`divisions()` plans the walls (chamber, line, gap, entry sets) without
touching the grid; `recursive_division()` turns the plan into steps.

Start and end cells are never walled.  Randomness comes only from
`random.Random(context.seed)`.
"""

import logging
import random
from dataclasses import dataclass
from typing import Dict, Generator, List, Optional, Set, Tuple

from algorithms.context import GridContext
from algorithms.grid import Coord, bfs_reachable, clamp, path_into_region
from algorithms.step import ClearCell, MazeComplete, MazeStep, PlaceWall

logger = logging.getLogger(__name__)


PSEUDOCODE: List[str] = [
    "def divide(chamber):",                               # 0
    "    if chamber too small: return",                   # 1
    "    pick orientation (split the longer side)",       # 2
    "    build wall, leave one gap on an entry line",     # 3
    "    divide(first half); divide(second half)",        # 4
    "if end unreachable from start:",                     # 5
    "    carve shortest path from end to reachable area", # 6
]

LINE_MAPPING: Dict[str, int] = {
    "wall":     3,
    "empty":    6,
    "complete": 5,
}


# ---------------------------------------------------------------------------
# Division plan
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Division:
    """
    One wall of the recursion.

    Attributes:
        chamber    : (row_start, row_end, col_start, col_end), ends exclusive.
        horizontal : True for a wall along a row.
        line       : Wall row (horizontal) or wall column (vertical).
        gap        : Gap column (horizontal) or gap row (vertical).
        entry_rows : Entry rows handed down to this chamber.
        entry_cols : Entry columns handed down to this chamber.
        parent     : Index of the division whose wall made this chamber.
    """

    chamber:    Tuple[int, int, int, int]
    horizontal: bool
    line:       int
    gap:        int
    entry_rows: Tuple[int, ...]
    entry_cols: Tuple[int, ...]
    parent:     Optional[int] = None

    def cells(self) -> List[Coord]:
        """Every cell on the wall line except the gap."""
        row_start, row_end, col_start, col_end = self.chamber
        if self.horizontal:
            return [(self.line, c) for c in range(col_start, col_end) if c != self.gap]
        return [(r, self.line) for r in range(row_start, row_end) if r != self.gap]


def divisions(
    rows: int, cols: int, start: Coord, end: Coord, rng: random.Random,
) -> Generator[Division, None, None]:
    """Plan the walls in the order they are built (parent before children)."""
    count = 0

    def divide(row_start, row_end, col_start, col_end, entry_rows, entry_cols, parent):
        nonlocal count
        height = row_end - row_start
        width = col_end - col_start
        if height < 3 or width < 3:
            return

        horizontal = height > width or (height == width and rng.random() < 0.5)
        index = count
        count += 1

        if horizontal:
            wall_row = rng.randrange(row_start + 1, row_end - 1)
            crossing = [c for c in entry_cols if col_start <= c < col_end]
            gap_col = rng.choice(crossing) if crossing else rng.randrange(col_start, col_end)
            yield Division(
                (row_start, row_end, col_start, col_end), True, wall_row, gap_col,
                tuple(entry_rows), tuple(entry_cols), parent,
            )

            top_rows = entry_rows if wall_row - 1 in entry_rows else entry_rows + [wall_row - 1]
            bottom_rows = entry_rows if wall_row + 1 in entry_rows else entry_rows + [wall_row + 1]
            next_cols = entry_cols if gap_col in entry_cols else entry_cols + [gap_col]

            yield from divide(row_start, wall_row, col_start, col_end, top_rows, next_cols, index)
            yield from divide(wall_row + 1, row_end, col_start, col_end, bottom_rows, next_cols, index)
        else:
            wall_col = rng.randrange(col_start + 1, col_end - 1)
            crossing = [r for r in entry_rows if row_start <= r < row_end]
            gap_row = rng.choice(crossing) if crossing else rng.randrange(row_start, row_end)
            yield Division(
                (row_start, row_end, col_start, col_end), False, wall_col, gap_row,
                tuple(entry_rows), tuple(entry_cols), parent,
            )

            left_cols = entry_cols if wall_col - 1 in entry_cols else entry_cols + [wall_col - 1]
            right_cols = entry_cols if wall_col + 1 in entry_cols else entry_cols + [wall_col + 1]
            next_rows = entry_rows if gap_row in entry_rows else entry_rows + [gap_row]

            yield from divide(row_start, row_end, col_start, wall_col, next_rows, left_cols, index)
            yield from divide(row_start, row_end, wall_col + 1, col_end, next_rows, right_cols, index)

    yield from divide(0, rows, 0, cols, [start[0], end[0]], [start[1], end[1]], None)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def recursive_division(context: GridContext) -> Generator[MazeStep, None, None]:
    rows, cols = context.rows, context.cols
    if rows <= 0 or cols <= 0 or rows * cols <= 1:
        logger.debug("recursive_division: degenerate grid %dx%d", rows, cols)
        yield MazeComplete(wall_count=0)
        return

    rng = random.Random(context.seed)
    start = clamp(context.start, rows, cols)
    end = clamp(context.end, rows, cols)
    protected = {start, end}
    walls: Set[Coord] = set()

    for division in divisions(rows, cols, start, end, rng):
        for cell in division.cells():
            if cell in protected or cell in walls:
                continue
            walls.add(cell)
            yield PlaceWall(coord=cell)

    # ---- repair pass ----
    reachable = bfs_reachable(rows, cols, walls, start)
    if end not in reachable:
        logger.debug("recursive_division: end cut off, carving a connection")
        for cell in path_into_region(rows, cols, end, reachable):
            if cell in walls:
                walls.discard(cell)
                yield ClearCell(coord=cell)

    yield MazeComplete(wall_count=len(walls))
