"""
algorithms/__init__.py - Algorithm Registry
===========================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "prim": AlgoInfo(key, label, family, fn, pseudocode, line_mapping, ...),
        ...
    }

AlgoInfo is a lightweight dataclass.  The engine and the HTTP layer both
consume it, so adding a new algorithm is: write the generator, add one
entry here.  That's the plugin system.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type

from algorithms.context import GraphContext, GridContext, HeightsContext, PatternContext
from algorithms.step import (
    GRAPH_STEP_LABELS, INTERVIEW_STEP_LABELS, MAZE_STEP_LABELS, PATTERN_STEP_LABELS,
)

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.prim                import prim                as _prim,   PSEUDOCODE as _prim_pc,   LINE_MAPPING as _prim_lm
from algorithms.kruskal             import kruskal             as _krus,   PSEUDOCODE as _krus_pc,   LINE_MAPPING as _krus_lm
from algorithms.kahn                import kahn                as _kahn,   PSEUDOCODE as _kahn_pc,   LINE_MAPPING as _kahn_lm
from algorithms.recursive_division  import recursive_division  as _rdiv,   PSEUDOCODE as _rdiv_pc,   LINE_MAPPING as _rdiv_lm
from algorithms.random_noise        import random_noise        as _noise,  PSEUDOCODE as _noise_pc,  LINE_MAPPING as _noise_lm
from algorithms.backtracker         import backtracker         as _back,   PSEUDOCODE as _back_pc,   LINE_MAPPING as _back_lm
from algorithms.sliding_window      import sliding_window      as _sw,     PSEUDOCODE as _sw_pc,     LINE_MAPPING as _sw_lm
from algorithms.min_window          import min_window          as _mw,     PSEUDOCODE as _mw_pc,     LINE_MAPPING as _mw_lm
from algorithms.trapping_rain_water import trapping_rain_water as _rain,   PSEUDOCODE as _rain_pc,   LINE_MAPPING as _rain_lm
from algorithms.largest_rectangle   import largest_rectangle   as _hist,   PSEUDOCODE as _hist_pc,   LINE_MAPPING as _hist_lm


FAMILIES: Dict[str, Type] = {
    "graph":     GraphContext,
    "maze":      GridContext,
    "pattern":   PatternContext,
    "interview": HeightsContext,
}


# ---------------------------------------------------------------------------
# AlgoInfo - metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "prim"
    label:            str                    # human label, e.g. "Prim's Algorithm"
    family:           str                    # graph | maze | pattern | interview
    fn:               Callable               # the generator function
    pseudocode:       List[str]              # lines for the side-panel
    line_mapping:     Dict[str, int]         # step type -> pseudocode line
    step_labels:      Dict[str, str]         # step type -> status-bar label
    tags:             List[str] = field(default_factory=list)
    complexity_time:  str       = ""         # e.g. "O(E log V)"
    complexity_space: str       = ""         # e.g. "O(V)"
    description:      str       = ""         # one-liner for the UI card
    objective:        Optional[str] = None   # "maximize" | "minimize" for window problems
    default_input:    Dict[str, Any] = field(default_factory=dict)   # used when a run gives no input

    @property
    def context_type(self) -> Type:
        return FAMILIES[self.family]

    def build_context(self, data: Optional[Dict[str, Any]] = None):
        """Input context for this algorithm from a JSON-ish dict."""
        return self.context_type.from_dict(data or self.default_input)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key":              self.key,
            "label":            self.label,
            "family":           self.family,
            "pseudocode":       list(self.pseudocode),
            "tags":             list(self.tags),
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
            "objective":        self.objective,
            "default_input":    dict(self.default_input),
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "prim": AlgoInfo(
        key="prim", label="Prim's Algorithm", family="graph", fn=_prim,
        pseudocode=_prim_pc, line_mapping=_prim_lm, step_labels=GRAPH_STEP_LABELS,
        tags=["weighted", "mst", "greedy"],
        complexity_time="O(E log V)", complexity_space="O(V + E)",
        description="Grows one tree from a start node, always taking the cheapest crossing edge.",
    ),

    "kruskal": AlgoInfo(
        key="kruskal", label="Kruskal's Algorithm", family="graph", fn=_krus,
        pseudocode=_krus_pc, line_mapping=_krus_lm, step_labels=GRAPH_STEP_LABELS,
        tags=["weighted", "mst", "greedy", "union-find"],
        complexity_time="O(E log E)", complexity_space="O(V)",
        description="Picks the cheapest edges anywhere; Union-Find rejects the ones that close a cycle.",
    ),

    "kahn": AlgoInfo(
        key="kahn", label="Kahn's Topological Sort", family="graph", fn=_kahn,
        pseudocode=_kahn_pc, line_mapping=_kahn_lm, step_labels=GRAPH_STEP_LABELS,
        tags=["directed", "dag", "ordering"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Repeatedly emits nodes with no remaining prerequisites. Leftovers mean a cycle.",
    ),

    "recursive_division": AlgoInfo(
        key="recursive_division", label="Recursive Division", family="maze", fn=_rdiv,
        pseudocode=_rdiv_pc, line_mapping=_rdiv_lm, step_labels=MAZE_STEP_LABELS,
        tags=["maze", "divide-and-conquer", "solvable"],
        complexity_time="O(R * C)", complexity_space="O(R * C)",
        description="Splits chambers with single-gap walls. Always solvable.",
    ),

    "random_noise": AlgoInfo(
        key="random_noise", label="Random Noise", family="maze", fn=_noise,
        pseudocode=_noise_pc, line_mapping=_noise_lm, step_labels=MAZE_STEP_LABELS,
        tags=["maze", "random"],
        complexity_time="O(R * C)", complexity_space="O(1)",
        description="Scatters walls at random. May be unsolvable, which is the point.",
    ),

    "backtracker": AlgoInfo(
        key="backtracker", label="Recursive Backtracker", family="maze", fn=_back,
        pseudocode=_back_pc, line_mapping=_back_lm, step_labels=MAZE_STEP_LABELS,
        tags=["maze", "dfs", "perfect"],
        complexity_time="O(R * C)", complexity_space="O(R * C)",
        description="Randomized DFS carving long winding corridors with no loops.",
    ),

    "sliding_window": AlgoInfo(
        key="sliding_window", label="Longest Substring Without Repeats", family="pattern", fn=_sw,
        pseudocode=_sw_pc, line_mapping=_sw_lm, step_labels=PATTERN_STEP_LABELS,
        tags=["string", "two-pointers", "sliding-window"],
        complexity_time="O(n)", complexity_space="O(min(m, n))",
        description="Expand right, shrink left on a duplicate, remember the longest valid window.",
        objective="maximize",
    ),

    "min_window": AlgoInfo(
        key="min_window", label="Minimum Window Substring", family="pattern", fn=_mw,
        pseudocode=_mw_pc, line_mapping=_mw_lm, step_labels=PATTERN_STEP_LABELS,
        tags=["string", "two-pointers", "sliding-window"],
        complexity_time="O(n + m)", complexity_space="O(m)",
        description="Expand until every target character is covered, then shrink to the smallest window.",
        objective="minimize",
        default_input={"input": "ADOBECODEBANC", "target": "ABC"},
    ),

    "trapping_rain_water": AlgoInfo(
        key="trapping_rain_water", label="Trapping Rain Water", family="interview", fn=_rain,
        pseudocode=_rain_pc, line_mapping=_rain_lm, step_labels=INTERVIEW_STEP_LABELS,
        tags=["array", "two-pointers"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="The side with the smaller running maximum decides how much water a bar holds.",
    ),

    "largest_rectangle": AlgoInfo(
        key="largest_rectangle", label="Largest Rectangle in Histogram", family="interview", fn=_hist,
        pseudocode=_hist_pc, line_mapping=_hist_lm, step_labels=INTERVIEW_STEP_LABELS,
        tags=["array", "monotonic-stack"],
        complexity_time="O(n)", complexity_space="O(n)",
        description="A monotonic stack settles each bar's widest rectangle when a shorter bar arrives.",
        default_input={"heights": [2, 1, 5, 6, 2, 3]},
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_family(family: str) -> List[AlgoInfo]:
    """Filter registry by family."""
    return [a for a in REGISTRY.values() if a.family == family]


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "AlgoInfo",
    "FAMILIES",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_family",
    "algorithms_by_tag",
]
