"""
random_noise.py - Random Noise Maze ("rubble")
==============================================
Each cell except start and end independently becomes a wall with
probability `context.wall_probability`.  No connectivity guarantee:
this is the generator that produces unsolvable grids on purpose.
"""

import logging
import random
from typing import Dict, Generator, List

from algorithms.context import GridContext
from algorithms.grid import all_cells, clamp
from algorithms.step import MazeComplete, MazeStep, PlaceWall

logger = logging.getLogger(__name__)


PSEUDOCODE: List[str] = [
    "for each cell in grid:",                             # 0
    "    if cell is start or end: continue",              # 1
    "    if random() < p: cell ← wall",                   # 2
]

LINE_MAPPING: Dict[str, int] = {
    "wall":     2,
    "complete": 0,
}


def random_noise(context: GridContext) -> Generator[MazeStep, None, None]:
    rows, cols = context.rows, context.cols
    if rows <= 0 or cols <= 0 or rows * cols <= 1:
        logger.debug("random_noise: degenerate grid %dx%d", rows, cols)
        yield MazeComplete(wall_count=0)
        return

    rng = random.Random(context.seed)
    probability = context.wall_probability
    protected = {clamp(context.start, rows, cols), clamp(context.end, rows, cols)}
    wall_count = 0

    for cell in all_cells(rows, cols):
        if cell in protected:
            continue
        if rng.random() < probability:
            wall_count += 1
            yield PlaceWall(coord=cell)

    yield MazeComplete(wall_count=wall_count)
