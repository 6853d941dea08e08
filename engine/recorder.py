"""
recorder.py - Run Recorder & Comparison
=======================================
Records a complete algorithm run (every Step), then computes the
metrics the client shows in its analytics panel and Comparison Mode.

Usage:
    rec = Recorder()
    rec.start("prim", context)
    rec.run_to_completion()          # drives the controller to the end
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot

Comparison Mode:
    The client holds two Recorders (one per algorithm), runs both to
    completion on the SAME context, then calls compare(rec1, rec2).
    Prim vs Kruskal on one graph must agree on total weight.
"""

import logging
import time
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from algorithms import AlgoInfo, get_algorithm
from algorithms.step import Step
from engine.controller import PlaybackController, create_controller

logger = logging.getLogger(__name__)

# terminal payload fields that describe the answer rather than how it was reached
AGGREGATE_KEYS = (
    "total_weight", "edge_count", "accepted_edges", "remaining_nodes",
    "best_length", "total_water", "max_area", "wall_count",
)


# ---------------------------------------------------------------------------
# Metrics dataclass - what the analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str            = ""
    algo_label:    str            = ""
    total_steps:   int            = 0          # number of Steps yielded
    terminal_type: str            = ""         # e.g. "complete", "cycle-detected"
    result:        Dict[str, Any] = field(default_factory=dict)   # terminal payload
    step_counts:   Dict[str, int] = field(default_factory=dict)   # type -> count
    wall_time_ms:  float          = 0.0        # wall-clock time to run to completion


# ---------------------------------------------------------------------------
# ComparisonResult - side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:          RunMetrics = field(default_factory=RunMetrics)
    right:         RunMetrics = field(default_factory=RunMetrics)
    winner_steps:  str        = ""      # label of the run with fewer steps, or "tie"
    results_agree: bool       = False   # same terminal kind & same aggregates

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps      : Full list of Steps from the run.
        metrics    : Computed RunMetrics (available after run_to_completion).
        controller : The underlying PlaybackController.
    """

    def __init__(self):
        self.steps:      List[Step]                   = []
        self.metrics:    Optional[RunMetrics]         = None
        self.controller: Optional[PlaybackController] = None

        self._algo_info: Optional[AlgoInfo] = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, context: Any = None) -> None:
        """Build a controller for this run.  Unknown keys raise ValueError."""
        info = get_algorithm(algo_key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo_key!r}")

        self._algo_info = info
        self.steps      = []
        self.metrics    = None
        self.controller = create_controller(algo_key, context)

    def run_to_completion(self) -> RunMetrics:
        """Advance until the run completes, recording every step."""
        if self.controller is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        while self.controller.next_step():
            self.steps.append(self.controller.current_step)
        wall_ms = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        logger.debug(
            "recorded %s: %d steps, terminal %s",
            self.metrics.algo_key, self.metrics.total_steps, self.metrics.terminal_type,
        )
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        controller = self.controller
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "input":    controller.context.to_dict() if controller else {},
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "view":     controller.view.to_dict() if controller else {},
            "steps":    [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        last = self.steps[-1] if self.steps else None
        result = last.to_dict() if last is not None and last.terminal else {}
        result.pop("type", None)

        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            total_steps=len(self.steps),
            terminal_type=last.type if last is not None else "",
            result=result,
            step_counts=dict(Counter(s.type for s in self.steps)),
            wall_time_ms=round(wall_ms, 2),
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key, lower_is_better=True):
        if l_val == r_val:
            return "tie"
        if lower_is_better:
            return l_key if l_val < r_val else r_key
        return l_key if l_val > r_val else r_key

    agree = l.terminal_type == r.terminal_type and all(
        l.result.get(k) == r.result.get(k)
        for k in AGGREGATE_KEYS
        if k in l.result or k in r.result
    )

    return ComparisonResult(
        left=l,
        right=r,
        winner_steps=winner(l.total_steps, r.total_steps, l.algo_label, r.algo_label),
        results_agree=agree,
    )
