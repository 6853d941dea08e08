"""
step.py - Step Taxonomy
=======================
Every algorithm is a generator that yields Step objects.
A Step is ONE micro-operation (compare, extract-min, union sets,
decrement indegree, expand a window, ...), not a full picture of the
run: the projectors in `engine.projectors` fold steps into UI state.

Design decisions:
  - One frozen dataclass per variant.  The `type` tag is a class
    attribute, so payload fields are exactly the data the variant needs.
  - Variants are grouped into closed per-family unions (GraphStep,
    MazeStep, PatternStep, InterviewStep).  Tags may repeat across
    families ("init", "complete") but never within one.
  - Payloads hold plain values, tuples, or read-only mappings: dict
    fields are copied into a MappingProxyType on construction, so a
    step stays hashable and nobody downstream can edit a snapshot.
  - `terminal` marks the variants that end a sequence and carry the
    aggregate result.  Each sequence ends with exactly one of them.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Any, ClassVar, Dict, Optional, Tuple, Union


@dataclass(frozen=True)
class Step:
    type:     ClassVar[str]  = "step"
    terminal: ClassVar[bool] = False

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, dict):
                object.__setattr__(self, f.name, MappingProxyType(dict(value)))

    def __hash__(self) -> int:
        return hash((self.type,) + tuple(_hashable(getattr(self, f.name)) for f in fields(self)))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type}
        for f in fields(self):
            data[f.name] = to_jsonable(getattr(self, f.name))
        return data

    def describe(self) -> str:
        """Plain-English "why" text for Learning Mode."""
        return self.type


def to_jsonable(value: Any) -> Any:
    """Tuples, sets and dicts -> JSON-ready lists / dicts (recursively)."""
    if isinstance(value, (tuple, list)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return sorted(to_jsonable(v) for v in value)
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    return value


def _hashable(value: Any) -> Any:
    if isinstance(value, Mapping):
        return frozenset(value.items())
    return value


# ===========================================================================
# GRAPH FAMILY - Prim, Kruskal, Kahn
# ===========================================================================
@dataclass(frozen=True)
class StartNode(Step):
    type: ClassVar[str] = "start"
    node_id: str

    def describe(self) -> str:
        return f"Start growing the tree from '{self.node_id}'."


@dataclass(frozen=True)
class ConsiderEdge(Step):
    type: ClassVar[str] = "consider-edge"
    edge_id: str
    weight:  float

    def describe(self) -> str:
        return f"Consider edge {self.edge_id} (w={self.weight})."


@dataclass(frozen=True)
class AddToMst(Step):
    type: ClassVar[str] = "add-to-mst"
    edge_id: str
    node_id: Optional[str] = None

    def describe(self) -> str:
        return f"Edge {self.edge_id} joins the spanning tree."


@dataclass(frozen=True)
class RejectEdge(Step):
    type: ClassVar[str] = "reject-edge"
    edge_id: str
    reason:  str = "same-set"

    def describe(self) -> str:
        return f"Reject edge {self.edge_id}: both ends are already connected, it would close a cycle."


@dataclass(frozen=True)
class VisitNode(Step):
    type: ClassVar[str] = "visit-node"
    node_id: str

    def describe(self) -> str:
        return f"'{self.node_id}' is now part of the tree."


@dataclass(frozen=True)
class MstComplete(Step):
    type:     ClassVar[str]  = "complete"
    terminal: ClassVar[bool] = True
    total_weight: float
    edge_count:   int
    mst_edges:    Tuple[str, ...] = ()

    def describe(self) -> str:
        return f"Spanning tree complete: {self.edge_count} edge(s), total weight {self.total_weight}."


@dataclass(frozen=True)
class Disconnected(Step):
    type:     ClassVar[str]  = "disconnected"
    terminal: ClassVar[bool] = True
    accepted_edges: int = 0
    node_count:     int = 0

    def describe(self) -> str:
        return (
            f"Graph is disconnected: only {self.accepted_edges} of "
            f"{max(self.node_count - 1, 0)} required edges could be accepted."
        )


@dataclass(frozen=True)
class InitSets(Step):
    type: ClassVar[str] = "init-sets"
    __hash__ = Step.__hash__
    node_sets: Dict[str, int]

    def describe(self) -> str:
        return f"Every node starts in its own set ({len(self.node_sets)} sets)."


@dataclass(frozen=True)
class FindSet(Step):
    type: ClassVar[str] = "find-set"
    node_id: str
    set_id:  int

    def describe(self) -> str:
        return f"find('{self.node_id}') -> set {self.set_id}."


@dataclass(frozen=True)
class UnionSets(Step):
    type: ClassVar[str] = "union-sets"
    edge_id:        str
    from_set_id:    int
    to_set_id:      int
    affected_nodes: Tuple[str, ...] = ()

    def describe(self) -> str:
        return (
            f"Union: set {self.from_set_id} merges into set {self.to_set_id} "
            f"({len(self.affected_nodes)} node(s) recoloured)."
        )


@dataclass(frozen=True)
class UpdatePriority(Step):
    type: ClassVar[str] = "update-priority"
    node_id:  str
    priority: float
    edge_id:  str

    def describe(self) -> str:
        return f"Cheapest known link to '{self.node_id}' is now {self.priority} via {self.edge_id}."


@dataclass(frozen=True)
class ExtractMin(Step):
    type: ClassVar[str] = "extract-min"
    node_id:  str
    priority: float

    def describe(self) -> str:
        return f"Extract '{self.node_id}' (priority {self.priority}), the cheapest frontier entry."


@dataclass(frozen=True)
class InitIndegrees(Step):
    type: ClassVar[str] = "init-indegrees"
    __hash__ = Step.__hash__
    indegrees: Dict[str, int]

    def describe(self) -> str:
        return "Count incoming edges for every node."


@dataclass(frozen=True)
class EnqueueZero(Step):
    type: ClassVar[str] = "enqueue-zero"
    node_id: str

    def describe(self) -> str:
        return f"'{self.node_id}' has no remaining prerequisites, enqueue it."


@dataclass(frozen=True)
class Dequeue(Step):
    type: ClassVar[str] = "dequeue"
    node_id:     str
    order_index: int

    def describe(self) -> str:
        return f"Dequeue '{self.node_id}'."


@dataclass(frozen=True)
class AddToOrder(Step):
    type: ClassVar[str] = "add-to-order"
    node_id:     str
    order_index: int

    def describe(self) -> str:
        return f"'{self.node_id}' takes position {self.order_index} in the order."


@dataclass(frozen=True)
class ProcessOutgoingEdge(Step):
    type: ClassVar[str] = "process-outgoing-edge"
    edge_id:   str
    source_id: str
    target_id: str

    def describe(self) -> str:
        return f"Remove edge {self.source_id}->{self.target_id}."


@dataclass(frozen=True)
class DecrementIndegree(Step):
    type: ClassVar[str] = "decrement-indegree"
    node_id:      str
    new_indegree: int

    def describe(self) -> str:
        return f"Indegree of '{self.node_id}' drops to {self.new_indegree}."


@dataclass(frozen=True)
class CycleDetected(Step):
    type:     ClassVar[str]  = "cycle-detected"
    terminal: ClassVar[bool] = True
    remaining_nodes: int
    order:           Tuple[str, ...] = ()

    def describe(self) -> str:
        return f"Cycle detected: {self.remaining_nodes} node(s) never reached indegree 0."


@dataclass(frozen=True)
class TopoComplete(Step):
    type:     ClassVar[str]  = "topo-complete"
    terminal: ClassVar[bool] = True
    order: Tuple[str, ...] = ()

    def describe(self) -> str:
        return f"Topological order: {' -> '.join(self.order) or '(empty)'}."


GraphStep = Union[
    StartNode, ConsiderEdge, AddToMst, RejectEdge, VisitNode, MstComplete,
    Disconnected, InitSets, FindSet, UnionSets, UpdatePriority, ExtractMin,
    InitIndegrees, EnqueueZero, Dequeue, AddToOrder, ProcessOutgoingEdge,
    DecrementIndegree, CycleDetected, TopoComplete,
]

GRAPH_STEP_LABELS: Dict[str, str] = {
    "start":                 "Starting node",
    "consider-edge":         "Considering edge",
    "add-to-mst":            "Adding to MST",
    "reject-edge":           "Rejecting edge",
    "visit-node":            "Visiting node",
    "complete":              "Algorithm complete",
    "disconnected":          "Graph disconnected",
    "init-sets":             "Initializing sets",
    "find-set":              "Finding set",
    "union-sets":            "Merging sets",
    "update-priority":       "Updating priority",
    "extract-min":           "Extracting minimum",
    "init-indegrees":        "Counting indegrees",
    "enqueue-zero":          "Enqueueing node",
    "dequeue":               "Dequeueing node",
    "add-to-order":          "Adding to order",
    "process-outgoing-edge": "Processing edge",
    "decrement-indegree":    "Decrementing indegree",
    "cycle-detected":        "Cycle detected",
    "topo-complete":         "Sort complete",
}


# ===========================================================================
# MAZE FAMILY
# ===========================================================================
@dataclass(frozen=True)
class PlaceWall(Step):
    type: ClassVar[str] = "wall"
    coord: Tuple[int, int]


@dataclass(frozen=True)
class ClearCell(Step):
    type: ClassVar[str] = "empty"
    coord: Tuple[int, int]


@dataclass(frozen=True)
class FillWalls(Step):
    type: ClassVar[str] = "fill-walls"
    cells: Tuple[Tuple[int, int], ...] = ()

    def describe(self) -> str:
        return f"Fill {len(self.cells)} cells with walls before carving."


@dataclass(frozen=True)
class MazeComplete(Step):
    type:     ClassVar[str]  = "complete"
    terminal: ClassVar[bool] = True
    wall_count: int = 0

    def describe(self) -> str:
        return f"Maze complete with {self.wall_count} wall(s)."


MazeStep = Union[PlaceWall, ClearCell, FillWalls, MazeComplete]

MAZE_STEP_LABELS: Dict[str, str] = {
    "wall":       "Placing wall",
    "empty":      "Carving passage",
    "fill-walls": "Filling grid",
    "complete":   "Maze complete",
}


# ===========================================================================
# PATTERN FAMILY - sliding window problems
# ===========================================================================
@dataclass(frozen=True)
class WindowInit(Step):
    type: ClassVar[str] = "init"
    __hash__ = Step.__hash__
    left:                 int
    right:                int
    frequency_map:        Dict[str, int]
    target_frequency_map: Optional[Dict[str, int]] = None

    def describe(self) -> str:
        extra = ""
        if self.target_frequency_map:
            extra = f" We need: {', '.join(sorted(self.target_frequency_map))}."
        return f"Start with an empty window.{extra}"


@dataclass(frozen=True)
class Expand(Step):
    type: ClassVar[str] = "expand"
    __hash__ = Step.__hash__
    right:                int
    char:                 str
    frequency_before:     Dict[str, int]
    frequency_map:        Dict[str, int]
    causes_duplicate:     bool = False
    satisfies_constraint: bool = False

    def describe(self) -> str:
        if self.causes_duplicate:
            return f"Adding '{self.char}' creates a duplicate, the window is now invalid."
        if self.satisfies_constraint:
            return f"Adding '{self.char}': every required character is present."
        return f"Expand the window to include '{self.char}'."


@dataclass(frozen=True)
class ValidityCheck(Step):
    type: ClassVar[str] = "validity-check"
    is_valid:        bool
    char:            str
    index:           int
    reason:          str
    frequency:       Optional[int] = None
    satisfied_count: Optional[int] = None
    required_count:  Optional[int] = None

    def describe(self) -> str:
        counts = ""
        if self.satisfied_count is not None and self.required_count is not None:
            counts = f" ({self.satisfied_count}/{self.required_count} requirements met)"
        if self.reason == "duplicate":
            return f"Duplicate '{self.char}' (count {self.frequency}), the window must shrink."
        if self.reason == "constraint-satisfied":
            return f"Window is valid{counts}."
        return f"Window is missing required characters{counts}."


@dataclass(frozen=True)
class Shrink(Step):
    type: ClassVar[str] = "shrink"
    __hash__ = Step.__hash__
    left:             int
    char:             str
    frequency_before: Dict[str, int]
    frequency_map:    Dict[str, int]
    window_valid:     bool

    def describe(self) -> str:
        status = "Window is valid." if self.window_valid else "Still invalid."
        return f"Drop '{self.char}' from the left. {status}"


@dataclass(frozen=True)
class UpdateBest(Step):
    type: ClassVar[str] = "update-best"
    best_length:  int
    window_start: int
    window_end:   int
    substring:    str

    def describe(self) -> str:
        return f"New best: \"{self.substring}\" (length {self.best_length})."


@dataclass(frozen=True)
class WindowComplete(Step):
    type:     ClassVar[str]  = "complete"
    terminal: ClassVar[bool] = True
    best_length:    int
    best_substring: str

    def describe(self) -> str:
        return f"Done: best window \"{self.best_substring}\" with length {self.best_length}."


PatternStep = Union[WindowInit, Expand, ValidityCheck, Shrink, UpdateBest, WindowComplete]

PATTERN_STEP_LABELS: Dict[str, str] = {
    "init":           "Initializing window",
    "expand":         "Expanding window",
    "validity-check": "Checking validity",
    "shrink":         "Shrinking window",
    "update-best":    "New best found",
    "complete":       "Algorithm complete",
}


# ===========================================================================
# INTERVIEW FAMILY - two pointers & monotonic stack
# ===========================================================================
@dataclass(frozen=True)
class RainInit(Step):
    type: ClassVar[str] = "init"
    left:      int
    right:     int
    max_left:  float
    max_right: float

    def describe(self) -> str:
        return "Two pointers start at the extremes, tracking the tallest bar seen from each side."


@dataclass(frozen=True)
class Compare(Step):
    type: ClassVar[str] = "compare"
    left:         int
    right:        int
    smaller_side: str

    def describe(self) -> str:
        return f"The {self.smaller_side} maximum is smaller, so that side bounds the water level."


@dataclass(frozen=True)
class MoveLeft(Step):
    type: ClassVar[str] = "move-left"
    from_index: int
    to_index:   int


@dataclass(frozen=True)
class MoveRight(Step):
    type: ClassVar[str] = "move-right"
    from_index: int
    to_index:   int


@dataclass(frozen=True)
class UpdateMaxLeft(Step):
    type: ClassVar[str] = "update-max-left"
    index:        int
    previous_max: float
    new_max:      float


@dataclass(frozen=True)
class UpdateMaxRight(Step):
    type: ClassVar[str] = "update-max-right"
    index:        int
    previous_max: float
    new_max:      float


@dataclass(frozen=True)
class FillWater(Step):
    type: ClassVar[str] = "fill-water"
    index:        int
    water_amount: float
    total_water:  float
    side:         str

    def describe(self) -> str:
        return f"Trap {self.water_amount} unit(s) at index {self.index} (total {self.total_water})."


@dataclass(frozen=True)
class RainWaterComplete(Step):
    type:     ClassVar[str]  = "complete"
    terminal: ClassVar[bool] = True
    total_water: float

    def describe(self) -> str:
        return f"Pointers met. Total trapped water: {self.total_water}."


@dataclass(frozen=True)
class StackPush(Step):
    type: ClassVar[str] = "stack-push"
    index:  int
    height: float
    stack:  Tuple[int, ...] = ()


@dataclass(frozen=True)
class StackPop(Step):
    type: ClassVar[str] = "stack-pop"
    popped_index:  int
    popped_height: float
    current_index: int
    stack:         Tuple[int, ...] = ()


@dataclass(frozen=True)
class CalculateArea(Step):
    type: ClassVar[str] = "calculate-area"
    popped_index: int
    height:       float
    left_bound:   int
    right_bound:  int
    width:        int
    area:         float

    def describe(self) -> str:
        return f"Bar {self.popped_index} spans width {self.width}: area {self.area}."


@dataclass(frozen=True)
class UpdateMaxArea(Step):
    type: ClassVar[str] = "update-max-area"
    previous_max: float
    new_max:      float
    rectangle:    Tuple[int, int, float]   # (left, right exclusive, height)


@dataclass(frozen=True)
class HistogramComplete(Step):
    type:     ClassVar[str]  = "complete"
    terminal: ClassVar[bool] = True
    max_area:  float
    rectangle: Tuple[int, int, float] = (0, 0, 0)

    def describe(self) -> str:
        return f"Largest rectangle has area {self.max_area}."


InterviewStep = Union[
    RainInit, Compare, MoveLeft, MoveRight, UpdateMaxLeft, UpdateMaxRight,
    FillWater, RainWaterComplete, StackPush, StackPop, CalculateArea,
    UpdateMaxArea, HistogramComplete,
]

INTERVIEW_STEP_LABELS: Dict[str, str] = {
    "init":             "Initializing pointers",
    "compare":          "Comparing max heights",
    "move-left":        "Moving left pointer",
    "move-right":       "Moving right pointer",
    "update-max-left":  "Updating left maximum",
    "update-max-right": "Updating right maximum",
    "fill-water":       "Trapping water",
    "stack-push":       "Pushing to stack",
    "stack-pop":        "Popping from stack",
    "calculate-area":   "Calculating area",
    "update-max-area":  "New maximum area",
    "complete":         "Algorithm complete",
}
