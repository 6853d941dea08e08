"""
grid.py - Grid Helpers for Maze Generators
==========================================
Bounds checks, 4-neighbourhoods and the two BFS passes the maze
generators share: "what can start reach?" and "carve the shortest way
from a cell into a region".

Coordinates are (row, col) tuples.
"""

from collections import deque
from typing import AbstractSet, Dict, Iterable, List, Optional, Set, Tuple

Coord = Tuple[int, int]

DIRECTIONS: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))   # up, down, left, right


def in_bounds(coord: Coord, rows: int, cols: int) -> bool:
    r, c = coord
    return 0 <= r < rows and 0 <= c < cols


def clamp(coord: Coord, rows: int, cols: int) -> Coord:
    """Pull an out-of-range coordinate onto the nearest grid cell."""
    r, c = coord
    return (min(max(int(r), 0), max(rows - 1, 0)), min(max(int(c), 0), max(cols - 1, 0)))


def neighbours(coord: Coord, rows: int, cols: int) -> List[Coord]:
    r, c = coord
    return [
        (r + dr, c + dc)
        for dr, dc in DIRECTIONS
        if in_bounds((r + dr, c + dc), rows, cols)
    ]


def all_cells(rows: int, cols: int) -> Iterable[Coord]:
    for r in range(rows):
        for c in range(cols):
            yield (r, c)


def bfs_reachable(
    rows: int,
    cols: int,
    walls: AbstractSet[Coord],
    start: Coord,
) -> Set[Coord]:
    """Every open cell reachable from `start` by 4-moves."""
    if not in_bounds(start, rows, cols) or start in walls:
        return set()
    seen = {start}
    queue = deque([start])
    while queue:
        cur = queue.popleft()
        for nbr in neighbours(cur, rows, cols):
            if nbr not in seen and nbr not in walls:
                seen.add(nbr)
                queue.append(nbr)
    return seen


def is_solvable(rows: int, cols: int, walls: AbstractSet[Coord], start: Coord, end: Coord) -> bool:
    return end in bfs_reachable(rows, cols, walls, start)


def path_into_region(
    rows: int,
    cols: int,
    origin: Coord,
    region: AbstractSet[Coord],
) -> List[Coord]:
    """
    Shortest path (ignoring walls) from `origin` to the nearest cell of
    `region`, returned from the meeting cell back to the origin.
    Empty when the origin is already inside the region or the region is empty.
    """
    if origin in region or not region:
        return []

    parent: Dict[Coord, Optional[Coord]] = {origin: None}
    queue = deque([origin])
    meeting: Optional[Coord] = None

    while queue and meeting is None:
        cur = queue.popleft()
        for nbr in neighbours(cur, rows, cols):
            if nbr in parent:
                continue
            parent[nbr] = cur
            if nbr in region:
                meeting = nbr
                break
            queue.append(nbr)

    path: List[Coord] = []
    node = meeting
    while node is not None:
        path.append(node)
        node = parent[node]
    return path
