"""
controller.py - Playback Controller
===================================
The controller is the ONLY object a client drives during a run.
It owns exactly one live generator, pulls steps from it on demand, and
folds each step into the current view through a projector.

State machine:
    IDLE     ->  play()       ->  PLAYING
    IDLE     ->  next_step()  ->  PAUSED
    PLAYING  ->  pause()      ->  PAUSED
    PAUSED   ->  play()       ->  PLAYING
    PLAYING | PAUSED  ->  (generator exhausted)  ->  COMPLETE
    any      ->  reset()      ->  IDLE

Scheduling is cooperative: the host calls `tick()` from its timer or
event loop, and the controller advances once whenever the configured
interval has elapsed.  The clock is injectable so tests can drive time.

Rewinding never walks backwards through a generator.  `reset()` closes
the live generator and rebuilds the view from the context; `seek(i)`
does the same and then replays i steps from a fresh generator.

This class is NOT thread-safe.  Call it from a single thread.
"""

import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Generator, Optional

from algorithms import get_algorithm
from algorithms.step import Step
from engine.projectors import Projector, projector_for

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackStatus(Enum):
    IDLE     = "idle"
    PLAYING  = "playing"
    PAUSED   = "paused"
    COMPLETE = "complete"


# ---------------------------------------------------------------------------
# Speed presets (milliseconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS: Dict[str, int] = {
    "slow":   1000,   # teaching mode
    "medium": 400,
    "fast":   150,    # demo mode
    "turbo":  50,
}

DEFAULT_SPEED_MS = SPEED_PRESETS["medium"]
MIN_SPEED_MS     = 5


# ---------------------------------------------------------------------------
# Snapshot - what a renderer needs after every change
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Snapshot:
    status:          PlaybackStatus
    step_index:      int
    step_type:       Optional[str]
    step:            Optional[Step]
    view:            Any
    step_label:      str
    pseudocode_line: Optional[int]
    speed_ms:        int
    explanation:     str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status":          self.status.value,
            "step_index":      self.step_index,
            "step_type":       self.step_type,
            "step":            self.step.to_dict() if self.step is not None else None,
            "view":            self.view.to_dict(),
            "step_label":      self.step_label,
            "pseudocode_line": self.pseudocode_line,
            "speed_ms":        self.speed_ms,
            "explanation":     self.explanation,
        }


# ---------------------------------------------------------------------------
# PlaybackController
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        status       : Current PlaybackStatus.
        step_index   : Number of steps consumed from the live generator.
        current_step : Last step consumed (None before the first pull).
        view         : Fold of every consumed step (see engine.projectors).
        speed_ms     : Milliseconds between auto-advance ticks.
        on_step      : Optional callback(Snapshot) fired after every change.
                       The client hooks its re-render here.
    """

    def __init__(
        self,
        fn:           Callable[[Any], Generator[Step, None, None]],
        projector:    Projector,
        context:      Any,
        speed_ms:     int                                  = DEFAULT_SPEED_MS,
        min_speed_ms: int                                  = MIN_SPEED_MS,
        line_mapping: Optional[Dict[str, int]]             = None,
        step_labels:  Optional[Dict[str, str]]             = None,
        on_step:      Optional[Callable[[Snapshot], None]] = None,
        clock:        Callable[[], float]                  = time.monotonic,
        algo_key:     str                                  = "",
    ):
        self._fn          = fn
        self._projector   = projector
        self._generator:  Optional[Generator[Step, None, None]] = None
        self._clock       = clock
        self._last_tick:  float = 0.0

        self.algo_key     = algo_key
        self.context      = context
        self.min_speed_ms = min_speed_ms
        self.speed_ms     = max(min_speed_ms, int(speed_ms))
        self.line_mapping = line_mapping or {}
        self.step_labels  = step_labels or {}
        self.on_step      = on_step

        self.status:       PlaybackStatus = PlaybackStatus.IDLE
        self.step_index:   int            = 0
        self.current_step: Optional[Step] = None
        self.view                         = projector.initial(context)

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.status == PlaybackStatus.COMPLETE:
            logger.debug("%s: play() ignored, run is complete", self.algo_key)
            return
        if self.status == PlaybackStatus.PLAYING:
            return
        if self._generator is None:
            self._generator = self._fn(self.context)
        self._set_status(PlaybackStatus.PLAYING)
        self._last_tick = self._clock()
        self._notify()

    def pause(self) -> None:
        if self.status != PlaybackStatus.PLAYING:
            logger.debug("%s: pause() ignored in state %s", self.algo_key, self.status.value)
            return
        self._set_status(PlaybackStatus.PAUSED)
        self._notify()

    def toggle_play(self) -> None:
        if self.status == PlaybackStatus.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Manual stepping
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance exactly one step.  Returns False once the run is complete."""
        if self.status == PlaybackStatus.COMPLETE:
            logger.debug("%s: next_step() ignored, run is complete", self.algo_key)
            return False
        if self._generator is None:
            self._generator = self._fn(self.context)
        if self.status != PlaybackStatus.PAUSED:
            self._set_status(PlaybackStatus.PAUSED)
        advanced = self._advance()
        self._notify()
        return advanced

    def jump_to_end(self) -> None:
        """Consume the rest of the run and land on the completed view."""
        if self.status == PlaybackStatus.COMPLETE:
            return
        if self._generator is None:
            self._generator = self._fn(self.context)
        while self._advance():
            pass
        self._notify()

    def seek(self, index: int) -> None:
        """
        Re-derive the view after `index` steps from a fresh generator.
        Lands paused, or complete if the run ends before `index`.
        """
        self._close_generator()
        self.view         = self._projector.initial(self.context)
        self.step_index   = 0
        self.current_step = None
        self.status       = PlaybackStatus.PAUSED
        self._generator   = self._fn(self.context)
        for _ in range(max(0, int(index))):
            if not self._advance():
                break
        logger.debug("%s: seek(%d) -> step %d", self.algo_key, index, self.step_index)
        self._notify()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically.  If playing and at least `speed_ms` has elapsed
        since the last advance, advances one step.  Returns True if a step
        was taken.
        """
        if self.status != PlaybackStatus.PLAYING:
            return False
        now = self._clock() if now is None else now
        if (now - self._last_tick) * 1000.0 < self.speed_ms:
            return False
        self._last_tick = now
        advanced = self._advance()
        self._notify()
        return advanced

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, interval_ms: float) -> None:
        """Change the tick interval.  Position and play state are untouched."""
        if not math.isfinite(interval_ms):
            raise ValueError(f"speed must be a finite number of milliseconds, got {interval_ms!r}")
        self.speed_ms = max(self.min_speed_ms, int(interval_ms))

    def set_speed_preset(self, preset: str) -> None:
        self.set_speed(SPEED_PRESETS.get(preset, DEFAULT_SPEED_MS))

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Back to IDLE with the view rebuilt from the current context."""
        self._close_generator()
        self.view         = self._projector.initial(self.context)
        self.step_index   = 0
        self.current_step = None
        self._set_status(PlaybackStatus.IDLE)
        self._notify()

    def reset_with_input(self, context: Any) -> None:
        """Swap in a new input context, then reset."""
        self.context = context
        self.reset()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def snapshot(self) -> Snapshot:
        step = self.current_step
        step_type = step.type if step is not None else None
        return Snapshot(
            status=self.status,
            step_index=self.step_index,
            step_type=step_type,
            step=step,
            view=self.view,
            step_label=self.step_labels.get(step_type, step_type or "") if step_type else "",
            pseudocode_line=self.line_mapping.get(step_type) if step_type else None,
            speed_ms=self.speed_ms,
            explanation=step.describe() if step is not None else "",
        )

    @property
    def is_complete(self) -> bool:
        return self.status == PlaybackStatus.COMPLETE

    @property
    def is_playing(self) -> bool:
        return self.status == PlaybackStatus.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _advance(self) -> bool:
        """Pull one Step and fold it in.  On exhaustion, finalize and complete."""
        if self._generator is None:
            return False
        try:
            step = next(self._generator)
        except StopIteration:
            self._generator = None
            self.view = self._projector.finalize(self.view, self.context)
            self._set_status(PlaybackStatus.COMPLETE)
            return False
        self.step_index  += 1
        self.current_step = step
        self.view         = self._projector.apply(self.view, step)
        return True

    def _close_generator(self) -> None:
        if self._generator is not None:
            self._generator.close()
            self._generator = None

    def _set_status(self, status: PlaybackStatus) -> None:
        if status != self.status:
            logger.debug("%s: %s -> %s", self.algo_key, self.status.value, status.value)
        self.status = status

    def _notify(self) -> None:
        if self.on_step:
            self.on_step(self.snapshot)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------
def create_controller(algo_key: str, context: Any = None, **kwargs) -> PlaybackController:
    """Wire a registry entry to its projector.  Unknown keys raise ValueError."""
    info = get_algorithm(algo_key)
    if info is None:
        raise ValueError(f"Unknown algorithm: {algo_key!r}")
    if context is None:
        context = info.build_context()
    return PlaybackController(
        info.fn,
        projector_for(info.family, info.key, info.objective),
        context,
        line_mapping=info.line_mapping,
        step_labels=info.step_labels,
        algo_key=info.key,
        **kwargs,
    )
