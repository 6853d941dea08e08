"""
projectors.py - Derived UI State
================================
A projector turns the step stream into what a renderer draws.

    view = projector.initial(context)
    for step in steps:
        view = projector.apply(view, step)
    view = projector.finalize(view, context)      # once, on exhaustion

Rules:
  - Views are frozen dataclasses.  `apply` never mutates its input; it
    builds a new view with `dataclasses.replace`.  Rewinding is therefore
    just `replay()` over a shorter prefix.
  - `apply` only reads the step and the previous view.  Nothing reaches
    back into the generator.
  - `finalize` fills fields that only make sense once the run is over
    (solvability, best-window position, "complete" colouring).
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, Dict, FrozenSet, Iterable, Optional, Tuple

from algorithms.context import GraphContext, GridContext, HeightsContext, PatternContext
from algorithms.grid import Coord, clamp, is_solvable
from algorithms.step import (
    AddToMst, AddToOrder, CalculateArea, ClearCell, ConsiderEdge, CycleDetected,
    DecrementIndegree, Dequeue, Disconnected, EnqueueZero, Expand, ExtractMin,
    FillWalls, FillWater, FindSet, HistogramComplete, InitIndegrees, InitSets,
    MazeComplete, MoveLeft, MoveRight, MstComplete, PlaceWall, ProcessOutgoingEdge,
    RainInit, RainWaterComplete, RejectEdge, Shrink, StackPop, StackPush, StartNode,
    Step, TopoComplete, UnionSets, UpdateBest, UpdateMaxArea, UpdateMaxLeft,
    UpdateMaxRight, UpdatePriority, ValidityCheck, VisitNode, WindowComplete,
    WindowInit, to_jsonable,
)


class View:
    def to_dict(self) -> Dict[str, Any]:
        return {f.name: to_jsonable(getattr(self, f.name)) for f in fields(self)}


class Projector:
    """Base reducer.  Subclasses fill `handlers` with {StepClass: method}."""

    handlers: Dict[type, Callable] = {}

    def initial(self, context):
        raise NotImplementedError

    def apply(self, view, step: Step):
        handler = self.handlers.get(type(step))
        if handler is None:
            return view
        return handler(self, view, step)

    def finalize(self, view, context):
        return view


def replay(projector: Projector, context, steps: Iterable[Step]):
    """Fold a step prefix into a view (no finalize)."""
    view = projector.initial(context)
    for step in steps:
        view = projector.apply(view, step)
    return view


def _with(mapping: Dict, key, value) -> Dict:
    updated = dict(mapping)
    updated[key] = value
    return updated


# ===========================================================================
# GRAPH
# ===========================================================================
@dataclass(frozen=True)
class GraphView(View):
    """
    node_states : idle | source | visited | in-mst | current | processing | queued | in-order
    edge_states : idle | considering | in-mst | rejected | processed
    """

    node_states:       Dict[str, str]            = field(default_factory=dict)
    edge_states:       Dict[str, str]            = field(default_factory=dict)
    set_ids:           Dict[str, int]            = field(default_factory=dict)
    priorities:        Dict[str, float]          = field(default_factory=dict)
    indegrees:         Dict[str, int]            = field(default_factory=dict)
    order:             Tuple[str, ...]           = ()
    mst_edges:         Tuple[str, ...]           = ()
    total_weight:      Optional[float]           = None
    edge_count:        Optional[int]             = None
    disconnected:      bool                      = False
    has_cycle:         bool                      = False
    remaining_nodes:   Optional[int]             = None
    topological_order: Optional[Tuple[str, ...]] = None


def _mark_if_idle(states: Dict[str, str], node_id: str, state: str) -> Dict[str, str]:
    if states.get(node_id, "idle") != "idle":
        return states
    return _with(states, node_id, state)


class GraphProjector(Projector):

    def initial(self, context: GraphContext) -> GraphView:
        graph = context.graph
        return GraphView(
            node_states={nid: "idle" for nid in graph.nodes},
            edge_states={eid: "idle" for eid in graph.edges},
        )

    def _start(self, view, step):
        return replace(view, node_states=_with(view.node_states, step.node_id, "source"))

    def _visit(self, view, step):
        return replace(view, node_states=_with(view.node_states, step.node_id, "visited"))

    def _consider(self, view, step):
        return replace(view, edge_states=_with(view.edge_states, step.edge_id, "considering"))

    def _add_to_mst(self, view, step):
        nodes = view.node_states
        if step.node_id is not None:
            nodes = _with(nodes, step.node_id, "in-mst")
        return replace(
            view,
            node_states=nodes,
            edge_states=_with(view.edge_states, step.edge_id, "in-mst"),
            mst_edges=view.mst_edges + (step.edge_id,),
        )

    def _reject(self, view, step):
        return replace(view, edge_states=_with(view.edge_states, step.edge_id, "rejected"))

    def _extract_min(self, view, step):
        priorities = dict(view.priorities)
        priorities.pop(step.node_id, None)
        return replace(
            view,
            node_states=_with(view.node_states, step.node_id, "current"),
            priorities=priorities,
        )

    def _update_priority(self, view, step):
        return replace(
            view,
            node_states=_mark_if_idle(view.node_states, step.node_id, "processing"),
            priorities=_with(view.priorities, step.node_id, step.priority),
        )

    def _init_sets(self, view, step):
        return replace(view, set_ids=dict(step.node_sets))

    def _find_set(self, view, step):
        return replace(view, node_states=_mark_if_idle(view.node_states, step.node_id, "processing"))

    def _union(self, view, step):
        set_ids = dict(view.set_ids)
        for node_id in step.affected_nodes:
            set_ids[node_id] = step.to_set_id
        return replace(view, set_ids=set_ids)

    def _mst_complete(self, view, step):
        return replace(
            view,
            total_weight=step.total_weight,
            edge_count=step.edge_count,
            mst_edges=tuple(step.mst_edges) or view.mst_edges,
        )

    def _disconnected(self, view, step):
        return replace(view, disconnected=True)

    def _init_indegrees(self, view, step):
        return replace(view, indegrees=dict(step.indegrees))

    def _enqueue(self, view, step):
        return replace(view, node_states=_with(view.node_states, step.node_id, "queued"))

    def _dequeue(self, view, step):
        return replace(view, node_states=_with(view.node_states, step.node_id, "current"))

    def _process_edge(self, view, step):
        return replace(view, edge_states=_with(view.edge_states, step.edge_id, "considering"))

    def _decrement(self, view, step):
        edges = {
            eid: ("processed" if state == "considering" else state)
            for eid, state in view.edge_states.items()
        }
        return replace(
            view,
            indegrees=_with(view.indegrees, step.node_id, step.new_indegree),
            node_states=_mark_if_idle(view.node_states, step.node_id, "processing"),
            edge_states=edges,
        )

    def _add_to_order(self, view, step):
        return replace(
            view,
            node_states=_with(view.node_states, step.node_id, "in-order"),
            order=view.order + (step.node_id,),
        )

    def _cycle(self, view, step):
        return replace(view, has_cycle=True, remaining_nodes=step.remaining_nodes)

    def _topo_complete(self, view, step):
        return replace(view, order=tuple(step.order), topological_order=tuple(step.order))

    handlers = {
        StartNode:           _start,
        VisitNode:           _visit,
        ConsiderEdge:        _consider,
        AddToMst:            _add_to_mst,
        RejectEdge:          _reject,
        ExtractMin:          _extract_min,
        UpdatePriority:      _update_priority,
        InitSets:            _init_sets,
        FindSet:             _find_set,
        UnionSets:           _union,
        MstComplete:         _mst_complete,
        Disconnected:        _disconnected,
        InitIndegrees:       _init_indegrees,
        EnqueueZero:         _enqueue,
        Dequeue:             _dequeue,
        ProcessOutgoingEdge: _process_edge,
        DecrementIndegree:   _decrement,
        AddToOrder:          _add_to_order,
        CycleDetected:       _cycle,
        TopoComplete:        _topo_complete,
    }


# ===========================================================================
# MAZE
# ===========================================================================
@dataclass(frozen=True)
class MazeView(View):
    rows:       int
    cols:       int
    start:      Coord
    end:        Coord
    walls:      FrozenSet[Coord]  = frozenset()
    last_cell:  Optional[Coord]   = None
    wall_count: int               = 0
    solvable:   Optional[bool]    = None


class MazeProjector(Projector):

    def initial(self, context: GridContext) -> MazeView:
        rows, cols = max(context.rows, 0), max(context.cols, 0)
        return MazeView(
            rows=rows,
            cols=cols,
            start=clamp(context.start, rows, cols),
            end=clamp(context.end, rows, cols),
        )

    def _wall(self, view, step):
        walls = view.walls | {step.coord}
        return replace(view, walls=walls, last_cell=step.coord, wall_count=len(walls))

    def _empty(self, view, step):
        walls = view.walls - {step.coord}
        return replace(view, walls=walls, last_cell=step.coord, wall_count=len(walls))

    def _fill(self, view, step):
        walls = view.walls | frozenset(step.cells)
        return replace(view, walls=walls, wall_count=len(walls))

    def _complete(self, view, step):
        return replace(view, wall_count=step.wall_count)

    handlers = {
        PlaceWall:    _wall,
        ClearCell:    _empty,
        FillWalls:    _fill,
        MazeComplete: _complete,
    }

    def finalize(self, view: MazeView, context: GridContext) -> MazeView:
        if view.rows * view.cols == 0:
            return replace(view, solvable=False)
        return replace(
            view,
            wall_count=len(view.walls),
            solvable=is_solvable(view.rows, view.cols, view.walls, view.start, view.end),
        )


# ===========================================================================
# PATTERN - sliding window
# ===========================================================================
@dataclass(frozen=True)
class WindowView(View):
    """
    char_states : idle | in-window | entering | leaving | duplicate | best | constraint-satisfied
    status      : "valid" | "invalid"
    """

    input:                str
    objective:            str
    char_states:          Tuple[str, ...]
    window_start:         int             = 0
    window_end:           int             = -1
    frequency_map:        Dict[str, int]  = field(default_factory=dict)
    target_frequency_map: Dict[str, int]  = field(default_factory=dict)
    status:               str             = "valid"
    duplicate_char:       Optional[str]   = None
    best_length:          int             = 0
    best_substring:       str             = ""
    best_start:           int             = -1

    @property
    def window_text(self) -> str:
        if self.window_end < self.window_start:
            return ""
        return self.input[self.window_start:self.window_end + 1]


class WindowProjector(Projector):

    def __init__(self, objective: str = "maximize"):
        self.objective = objective

    def initial(self, context: PatternContext) -> WindowView:
        return WindowView(
            input=context.input,
            objective=self.objective,
            char_states=("idle",) * len(context.input),
            status="valid" if self.objective == "maximize" else "invalid",
        )

    def apply(self, view: WindowView, step: Step) -> WindowView:
        view = super().apply(view, step)
        return replace(view, char_states=self._char_states(view, step))

    def _char_states(self, view: WindowView, step: Step) -> Tuple[str, ...]:
        start, end = view.window_start, view.window_end
        states = []
        for i, ch in enumerate(view.input):
            in_window = start <= i <= end
            state = "in-window" if in_window else "idle"
            if isinstance(step, WindowComplete):
                best = view.best_start >= 0 and view.best_start <= i < view.best_start + view.best_length
                state = "best" if best else "idle"
            elif isinstance(step, Expand) and i == step.right:
                if step.causes_duplicate:
                    state = "duplicate"
                elif step.satisfies_constraint:
                    state = "constraint-satisfied"
                else:
                    state = "entering"
            elif isinstance(step, ValidityCheck) and ch == step.char and in_window:
                if not step.is_valid and step.reason == "duplicate":
                    state = "duplicate"
                elif step.is_valid and step.reason == "constraint-satisfied":
                    state = "constraint-satisfied"
            elif isinstance(step, Shrink) and i == step.left - 1:
                state = "leaving"
            states.append(state)
        return tuple(states)

    def _init(self, view, step):
        return replace(
            view,
            window_start=step.left,
            window_end=step.right,
            frequency_map=dict(step.frequency_map),
            target_frequency_map=dict(step.target_frequency_map or {}),
            status="valid" if self.objective == "maximize" else "invalid",
            duplicate_char=None,
        )

    def _expand(self, view, step):
        status, dup = view.status, view.duplicate_char
        if step.causes_duplicate:
            status, dup = "invalid", step.char
        elif step.satisfies_constraint or self.objective == "maximize":
            status, dup = "valid", None
        return replace(
            view,
            window_end=step.right,
            frequency_map=dict(step.frequency_map),
            status=status,
            duplicate_char=dup,
        )

    def _validity(self, view, step):
        if step.is_valid:
            return replace(view, status="valid", duplicate_char=None)
        dup = step.char if step.reason == "duplicate" else view.duplicate_char
        return replace(view, status="invalid", duplicate_char=dup)

    def _shrink(self, view, step):
        return replace(
            view,
            window_start=step.left,
            frequency_map=dict(step.frequency_map),
            status="valid" if step.window_valid else "invalid",
            duplicate_char=None if step.window_valid else view.duplicate_char,
        )

    def _update_best(self, view, step):
        return replace(
            view,
            best_length=step.best_length,
            best_substring=step.substring,
            best_start=step.window_start,
        )

    def _complete(self, view, step):
        return replace(
            view,
            best_length=step.best_length,
            best_substring=step.best_substring,
            best_start=_locate(view.input, step.best_substring),
        )

    handlers = {
        WindowInit:     _init,
        Expand:         _expand,
        ValidityCheck:  _validity,
        Shrink:         _shrink,
        UpdateBest:     _update_best,
        WindowComplete: _complete,
    }

    def finalize(self, view: WindowView, context: PatternContext) -> WindowView:
        best_start = _locate(view.input, view.best_substring)
        states = tuple(
            "best" if best_start >= 0 and best_start <= i < best_start + view.best_length else "idle"
            for i in range(len(view.input))
        )
        return replace(view, best_start=best_start, char_states=states)


def _locate(text: str, sub: str) -> int:
    return text.find(sub) if sub else -1


# ===========================================================================
# INTERVIEW - trapping rain water
# ===========================================================================
@dataclass(frozen=True)
class RainWaterView(View):
    """
    bar_states : idle | left-pointer | right-pointer | left-max | right-max | filling | complete
    """

    heights:         Tuple[float, ...]
    water_levels:    Tuple[float, ...]
    bar_states:      Tuple[str, ...]
    left:            int   = 0
    right:           int   = 0
    max_left:        float = 0
    max_right:       float = 0
    max_left_index:  int   = 0
    max_right_index: int   = 0
    total_water:     float = 0
    filling_index:   Optional[int] = None


class RainWaterProjector(Projector):

    def initial(self, context: HeightsContext) -> RainWaterView:
        heights = tuple(context.heights)
        n = len(heights)
        return RainWaterView(
            heights=heights,
            water_levels=(0,) * n,
            bar_states=("idle",) * n,
            right=max(n - 1, 0),
            max_right_index=max(n - 1, 0),
        )

    def apply(self, view: RainWaterView, step: Step) -> RainWaterView:
        view = replace(super().apply(view, step), filling_index=None)
        if isinstance(step, FillWater):
            view = replace(view, filling_index=step.index)
        return replace(view, bar_states=self._bar_states(view))

    @staticmethod
    def _bar_states(view: RainWaterView) -> Tuple[str, ...]:
        states = []
        for i in range(len(view.heights)):
            if i == view.filling_index:
                states.append("filling")
            elif i == view.left:
                states.append("left-pointer")
            elif i == view.right:
                states.append("right-pointer")
            elif i == view.max_left_index:
                states.append("left-max")
            elif i == view.max_right_index:
                states.append("right-max")
            else:
                states.append("idle")
        return tuple(states)

    def _init(self, view, step):
        return replace(
            view,
            left=step.left,
            right=step.right,
            max_left=step.max_left,
            max_right=step.max_right,
            max_left_index=step.left,
            max_right_index=step.right,
        )

    def _move_left(self, view, step):
        return replace(view, left=step.to_index)

    def _move_right(self, view, step):
        return replace(view, right=step.to_index)

    def _max_left(self, view, step):
        return replace(view, max_left=step.new_max, max_left_index=step.index)

    def _max_right(self, view, step):
        return replace(view, max_right=step.new_max, max_right_index=step.index)

    def _fill(self, view, step):
        levels = list(view.water_levels)
        levels[step.index] = step.water_amount
        return replace(view, water_levels=tuple(levels), total_water=step.total_water)

    def _complete(self, view, step):
        return replace(view, total_water=step.total_water)

    handlers = {
        RainInit:          _init,
        MoveLeft:          _move_left,
        MoveRight:         _move_right,
        UpdateMaxLeft:     _max_left,
        UpdateMaxRight:    _max_right,
        FillWater:         _fill,
        RainWaterComplete: _complete,
    }

    def finalize(self, view: RainWaterView, context: HeightsContext) -> RainWaterView:
        return replace(view, bar_states=("complete",) * len(view.heights), filling_index=None)


# ===========================================================================
# INTERVIEW - largest rectangle in histogram
# ===========================================================================
@dataclass(frozen=True)
class HistogramView(View):
    """
    bar_states : idle | in-stack | current | popped | best
    rectangle  : (left, right_exclusive, height) of the best area so far
    """

    heights:       Tuple[float, ...]
    bar_states:    Tuple[str, ...]
    stack:         Tuple[int, ...]                  = ()
    current_index: Optional[int]                    = None
    popped_index:  Optional[int]                    = None
    last_area:     Optional[float]                  = None
    max_area:      float                            = 0
    rectangle:     Optional[Tuple[int, int, float]] = None


class HistogramProjector(Projector):

    def initial(self, context: HeightsContext) -> HistogramView:
        heights = tuple(context.heights)
        return HistogramView(heights=heights, bar_states=("idle",) * len(heights))

    def apply(self, view: HistogramView, step: Step) -> HistogramView:
        view = super().apply(view, step)
        stacked = set(view.stack)
        states = []
        for i in range(len(view.heights)):
            if i == view.popped_index:
                states.append("popped")
            elif i == view.current_index:
                states.append("current")
            elif i in stacked:
                states.append("in-stack")
            else:
                states.append("idle")
        return replace(view, bar_states=tuple(states))

    def _push(self, view, step):
        return replace(view, stack=tuple(step.stack), current_index=step.index, popped_index=None)

    def _pop(self, view, step):
        return replace(
            view,
            stack=tuple(step.stack),
            current_index=step.current_index,
            popped_index=step.popped_index,
        )

    def _area(self, view, step):
        return replace(view, last_area=step.area)

    def _max_area(self, view, step):
        return replace(view, max_area=step.new_max, rectangle=tuple(step.rectangle))

    def _complete(self, view, step):
        return replace(view, max_area=step.max_area, rectangle=tuple(step.rectangle), popped_index=None)

    handlers = {
        StackPush:         _push,
        StackPop:          _pop,
        CalculateArea:     _area,
        UpdateMaxArea:     _max_area,
        HistogramComplete: _complete,
    }

    def finalize(self, view: HistogramView, context: HeightsContext) -> HistogramView:
        left, right = (view.rectangle[0], view.rectangle[1]) if view.rectangle else (0, 0)
        states = tuple(
            "best" if left <= i < right else "idle"
            for i in range(len(view.heights))
        )
        return replace(view, bar_states=states, current_index=None, popped_index=None)


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------
def projector_for(family: str, key: str = "", objective: Optional[str] = None) -> Projector:
    """Projector matching an algorithm's family (and key, for interview problems)."""
    if family == "graph":
        return GraphProjector()
    if family == "maze":
        return MazeProjector()
    if family == "pattern":
        return WindowProjector(objective or "maximize")
    if family == "interview":
        return HistogramProjector() if key == "largest_rectangle" else RainWaterProjector()
    raise ValueError(f"Unknown algorithm family: {family!r}")
