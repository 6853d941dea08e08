"""
engine/
-------
Playback, derived state & recording layer.

    from engine import create_controller, Recorder, compare
"""

from engine.config      import EngineConfig, load_config
from engine.controller  import (
    PlaybackController, PlaybackStatus, Snapshot, SPEED_PRESETS, create_controller,
)
from engine.projectors  import (
    GraphProjector, GraphView, HistogramProjector, HistogramView, MazeProjector,
    MazeView, Projector, RainWaterProjector, RainWaterView, WindowProjector,
    WindowView, projector_for, replay,
)
from engine.recorder    import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "EngineConfig",
    "load_config",
    "PlaybackController",
    "PlaybackStatus",
    "Snapshot",
    "SPEED_PRESETS",
    "create_controller",
    "Projector",
    "GraphProjector",
    "GraphView",
    "MazeProjector",
    "MazeView",
    "WindowProjector",
    "WindowView",
    "RainWaterProjector",
    "RainWaterView",
    "HistogramProjector",
    "HistogramView",
    "projector_for",
    "replay",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
