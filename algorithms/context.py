"""
context.py - Input Contexts
===========================
Immutable problem instances handed to the step generators.

A context is created once per run (new input or restart) and never
mutated by the engine.  Rewinding a run means building a fresh generator
from the SAME context, so anything random is described by a seed rather
than by a live random source.
"""

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from graph import Graph


Coord = Tuple[int, int]   # (row, col)


# ---------------------------------------------------------------------------
# Default inputs and presets
# ---------------------------------------------------------------------------
DEFAULT_PATTERN_INPUT = "abcabcbb"

PATTERN_PRESETS: Dict[str, str] = {
    "classic":    "abcabcbb",    # longest = 3 ("abc")
    "all_same":   "bbbbb",       # longest = 1
    "all_unique": "abcdefgh",    # whole string
    "two_chars":  "pwwkew",      # "wke"
    "longer":     "dvdf",        # "vdf"
    "empty":      "",
    "single":     "a",
}

DEFAULT_HEIGHTS: Tuple[int, ...] = (0, 1, 0, 2, 1, 0, 1, 3, 2, 1, 2, 1)

HEIGHTS_PRESETS: Dict[str, Tuple[int, ...]] = {
    "classic":  DEFAULT_HEIGHTS,
    "valley":   (3, 0, 0, 2, 0, 4),
    "stairs":   (4, 2, 0, 3, 2, 5),
    "mountain": (1, 2, 3, 4, 3, 2, 1),
    "pool":     (5, 2, 1, 2, 1, 2, 5),
}

MIN_BARS   = 3
MAX_BARS   = 20
MAX_HEIGHT = 8


def random_heights(count: int, seed: Optional[int] = None) -> List[int]:
    """Random terrain of `count` bars (clamped to MIN_BARS..MAX_BARS), each 0..MAX_HEIGHT."""
    rng = random.Random(seed)
    count = max(MIN_BARS, min(MAX_BARS, int(count)))
    return [rng.randint(0, MAX_HEIGHT) for _ in range(count)]


def _preset(presets: Dict[str, Any], name: Any) -> Any:
    if name not in presets:
        raise ValueError(f"Unknown preset: {name!r} (choose from {', '.join(presets)})")
    return presets[name]


@dataclass(frozen=True)
class GraphContext:
    """
    Attributes:
        graph         : The input graph (read-only to the engine).
        start_node_id : Frontier-based algorithms start here; invalid or
                        missing ids fall back to the first node.
    """

    graph:         Graph         = field(default_factory=Graph)
    start_node_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"graph": self.graph.to_dict(), "start_node_id": self.start_node_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GraphContext":
        if "graph" in data:
            graph = Graph.from_dict(data["graph"])
        elif "adjacency" in data:
            graph = Graph.from_adjacency_list(
                data["adjacency"],
                directed=bool(data.get("directed", False)),
                weighted=bool(data.get("weighted", True)),
            )
        elif data.get("dag"):
            graph = Graph.generate_dag(
                num_nodes=int(data.get("nodes", 8)),
                edge_probability=float(data.get("prob", 0.3)),
                seed=data.get("seed"),
            )
        else:
            graph = Graph.generate_random(
                num_nodes=int(data.get("nodes", 8)),
                edge_probability=float(data.get("prob", 0.3)),
                directed=bool(data.get("directed", False)),
                seed=data.get("seed"),
            )
        start = data.get("start_node_id")
        return cls(graph=graph, start_node_id=str(start) if start is not None else None)


@dataclass(frozen=True)
class GridContext:
    """
    Attributes:
        rows, cols       : Grid dimensions.
        start, end       : Cells that must never be walled.
        seed             : Seed for the generator's private random source
                           (None = fresh entropy each run).
        wall_probability : Per-cell wall chance for the random-noise maze.
    """

    rows:             int           = 15
    cols:             int           = 25
    start:            Coord         = (1, 1)
    end:              Coord         = (13, 23)
    seed:             Optional[int] = None
    wall_probability: float         = 0.3

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": self.rows,
            "cols": self.cols,
            "start": list(self.start),
            "end": list(self.end),
            "seed": self.seed,
            "wall_probability": self.wall_probability,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GridContext":
        rows = int(data.get("rows", 15))
        cols = int(data.get("cols", 25))
        start = data.get("start", (1, 1))
        end = data.get("end", (rows - 2, cols - 2))
        seed = data.get("seed")
        return cls(
            rows=rows,
            cols=cols,
            start=(int(start[0]), int(start[1])),
            end=(int(end[0]), int(end[1])),
            seed=int(seed) if seed is not None else None,
            wall_probability=float(data.get("wall_probability", 0.3)),
        )


@dataclass(frozen=True)
class PatternContext:
    """
    Attributes:
        input  : The string being scanned.
        target : Required characters (minimum-window problems only).
    """

    input:  str = DEFAULT_PATTERN_INPUT
    target: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"input": self.input, "target": self.target}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PatternContext":
        if "preset" in data:
            text = _preset(PATTERN_PRESETS, data["preset"])
        elif data.get("input") is None:
            text = DEFAULT_PATTERN_INPUT
        else:
            text = str(data["input"])
        return cls(input=text, target=str(data.get("target", "") or ""))


@dataclass(frozen=True)
class HeightsContext:
    """
    Attributes:
        heights : Bar heights (terrain for rain water, histogram for rectangles).
    """

    heights: Tuple[float, ...] = DEFAULT_HEIGHTS

    def __post_init__(self):
        object.__setattr__(self, "heights", tuple(self.heights))

    def to_dict(self) -> Dict[str, Any]:
        return {"heights": list(self.heights)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HeightsContext":
        """
        Accepts {"heights": [...]}, {"preset": name} or {"random": n, "seed": s}.
        No key at all gives DEFAULT_HEIGHTS.
        """
        if "random" in data:
            heights = random_heights(data["random"], seed=data.get("seed"))
        elif "preset" in data:
            heights = _preset(HEIGHTS_PRESETS, data["preset"])
        else:
            heights = data.get("heights", DEFAULT_HEIGHTS)
            if isinstance(heights, (str, bytes, dict)):
                raise TypeError("heights must be a list of numbers")
        return cls(heights=tuple(_number(h) for h in heights))


def _number(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return float(value)
