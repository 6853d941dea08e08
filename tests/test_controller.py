"""Tests for the playback controller."""

from typing import List

import pytest

from algorithms.context import GraphContext, PatternContext
from algorithms.kruskal import LINE_MAPPING as KRUSKAL_LINES
from algorithms.prim import LINE_MAPPING as PRIM_LINES
from algorithms.prim import prim
from algorithms.step import GRAPH_STEP_LABELS
from engine.controller import (
    DEFAULT_SPEED_MS, PlaybackController, PlaybackStatus, Snapshot, create_controller,
)
from engine.projectors import GraphProjector, replay


class TrackedGenerator:
    """Wraps a generator function and records which generators were closed."""

    def __init__(self, fn):
        self.fn = fn
        self.created: List = []
        self.closed: List[int] = []

    def __call__(self, context):
        index = len(self.created)
        gen = self._run(context, index)
        self.created.append(gen)
        return gen

    def _run(self, context, index):
        try:
            yield from self.fn(context)
        finally:
            self.closed.append(index)


def make_controller(context, clock=None, **kwargs) -> PlaybackController:
    if clock is not None:
        kwargs["clock"] = clock
    return PlaybackController(
        prim,
        GraphProjector(),
        context,
        line_mapping=PRIM_LINES,
        step_labels=GRAPH_STEP_LABELS,
        algo_key="prim",
        **kwargs,
    )


def test_starts_idle_with_initial_view(classic_context: GraphContext) -> None:
    controller = make_controller(classic_context)
    snap = controller.snapshot

    assert snap.status is PlaybackStatus.IDLE
    assert snap.step_index == 0
    assert snap.step is None
    assert snap.pseudocode_line is None
    assert snap.step_label == ""
    assert set(snap.view.node_states.values()) == {"idle"}


def test_next_step_from_idle_pauses(classic_context: GraphContext) -> None:
    controller = make_controller(classic_context)
    assert controller.next_step()

    snap = controller.snapshot
    assert snap.status is PlaybackStatus.PAUSED
    assert snap.step_index == 1
    assert snap.step_type == "start"
    assert snap.step_label == "Starting node"
    assert snap.pseudocode_line == PRIM_LINES["start"]
    assert "A" in snap.explanation


def test_exhaustion_is_detected_on_the_next_pull(classic_context: GraphContext) -> None:
    total = len(list(prim(classic_context)))
    controller = make_controller(classic_context)

    for _ in range(total):
        assert controller.next_step()
    assert controller.status is PlaybackStatus.PAUSED
    assert controller.current_step.type == "complete"

    assert controller.next_step() is False
    assert controller.is_complete
    assert controller.step_index == total


def test_completed_run_ignores_navigation(classic_context: GraphContext) -> None:
    controller = make_controller(classic_context)
    controller.jump_to_end()
    snap = controller.snapshot

    controller.play()
    controller.pause()
    assert controller.next_step() is False
    assert controller.tick(now=100.0) is False
    assert controller.snapshot == snap


def test_play_and_pause(classic_context: GraphContext) -> None:
    controller = make_controller(classic_context)
    controller.pause()
    assert controller.status is PlaybackStatus.IDLE

    controller.play()
    assert controller.is_playing
    controller.pause()
    assert controller.status is PlaybackStatus.PAUSED
    controller.toggle_play()
    assert controller.is_playing
    controller.toggle_play()
    assert controller.status is PlaybackStatus.PAUSED


def test_tick_waits_for_the_interval(classic_context: GraphContext, clock) -> None:
    controller = make_controller(classic_context, clock=clock)
    assert controller.tick(now=5.0) is False   # not playing

    controller.play()
    assert controller.tick(now=0.1) is False
    assert controller.step_index == 0

    assert controller.tick(now=1.0) is True
    assert controller.step_index == 1
    assert controller.tick(now=1.1) is False

    clock.advance(2.0)
    assert controller.tick() is True
    assert controller.step_index == 2


def test_playing_to_the_end_completes(classic_context: GraphContext) -> None:
    total = len(list(prim(classic_context)))
    controller = make_controller(classic_context, speed_ms=10)
    controller.play()

    now = 0.0
    while not controller.is_complete:
        now += 1.0
        controller.tick(now=now)
    assert controller.step_index == total
    assert controller.view.total_weight == 10


def test_reset_closes_the_generator_and_restores_the_view(classic_context: GraphContext) -> None:
    tracked = TrackedGenerator(prim)
    controller = PlaybackController(tracked, GraphProjector(), classic_context)
    for _ in range(6):
        controller.next_step()

    controller.reset()
    assert tracked.closed == [0]
    assert controller.status is PlaybackStatus.IDLE
    assert controller.step_index == 0
    assert controller.current_step is None
    assert controller.view == GraphProjector().initial(classic_context)


def test_reset_then_step_matches_a_fresh_run(classic_context: GraphContext) -> None:
    used = make_controller(classic_context)
    for _ in range(9):
        used.next_step()
    used.reset()

    fresh = make_controller(classic_context)
    for _ in range(4):
        used.next_step()
        fresh.next_step()
    assert used.snapshot == fresh.snapshot


def test_seek_matches_replay(classic_context: GraphContext) -> None:
    steps = list(prim(classic_context))
    tracked = TrackedGenerator(prim)
    controller = PlaybackController(tracked, GraphProjector(), classic_context)

    for _ in range(12):
        controller.next_step()
    controller.seek(5)

    assert tracked.closed == [0]
    assert controller.status is PlaybackStatus.PAUSED
    assert controller.step_index == 5
    assert controller.current_step == steps[4]
    assert controller.view == replay(GraphProjector(), classic_context, steps[:5])


def test_seek_past_the_end_completes(classic_context: GraphContext) -> None:
    total = len(list(prim(classic_context)))
    controller = make_controller(classic_context)
    controller.seek(total + 50)
    assert controller.is_complete
    assert controller.step_index == total


def test_speed_is_clamped_and_presets_resolve(classic_context: GraphContext) -> None:
    controller = make_controller(classic_context, speed_ms=1)
    assert controller.speed_ms == 5

    controller.set_speed(0)
    assert controller.speed_ms == 5
    controller.set_speed(250.7)
    assert controller.speed_ms == 250
    controller.set_speed_preset("turbo")
    assert controller.speed_ms == 50
    controller.set_speed_preset("ludicrous")
    assert controller.speed_ms == DEFAULT_SPEED_MS


def test_set_speed_while_playing_keeps_position(classic_context: GraphContext, clock) -> None:
    tracked = TrackedGenerator(prim)
    controller = PlaybackController(tracked, GraphProjector(), classic_context, clock=clock)
    controller.play()
    assert controller.tick(now=0.5) is True

    controller.set_speed(1000)
    assert controller.is_playing
    assert controller.step_index == 1
    assert len(tracked.created) == 1 and tracked.closed == []

    # 500ms later is no longer enough at the slower speed
    assert controller.tick(now=1.0) is False
    assert controller.tick(now=1.5) is True
    assert controller.step_index == 2
    assert len(tracked.created) == 1


def test_set_speed_rejects_non_finite_values(classic_context: GraphContext) -> None:
    controller = make_controller(classic_context)
    with pytest.raises(ValueError):
        controller.set_speed(float("inf"))
    assert controller.speed_ms == DEFAULT_SPEED_MS


def test_on_step_receives_every_change(classic_context: GraphContext) -> None:
    seen: List[Snapshot] = []
    controller = make_controller(classic_context, on_step=seen.append)

    controller.next_step()
    controller.next_step()
    controller.reset()

    assert [s.step_index for s in seen] == [1, 2, 0]
    assert seen[-1].status is PlaybackStatus.IDLE


def test_reset_with_input_swaps_the_context(classic_context: GraphContext, make_graph) -> None:
    controller = make_controller(classic_context)
    controller.next_step()

    other = GraphContext(graph=make_graph(["x", "y"], [("x", "y", 3)]))
    controller.reset_with_input(other)
    controller.jump_to_end()
    assert controller.view.total_weight == 3


def test_snapshot_serialises(classic_context: GraphContext) -> None:
    controller = make_controller(classic_context)
    controller.next_step()
    data = controller.snapshot.to_dict()

    assert data["status"] == "paused"
    assert data["step"] == {"type": "start", "node_id": "A"}
    assert data["view"]["node_states"]["A"] == "source"
    assert data["speed_ms"] == DEFAULT_SPEED_MS


def test_create_controller_wires_registry_entry(classic_context: GraphContext) -> None:
    controller = create_controller("kruskal", classic_context)
    controller.next_step()
    assert controller.algo_key == "kruskal"
    assert controller.snapshot.pseudocode_line == KRUSKAL_LINES["init-sets"]

    windowed = create_controller("min_window", PatternContext(input="aab", target="ab"))
    windowed.jump_to_end()
    assert windowed.view.objective == "minimize"
    assert windowed.view.best_substring == "ab"


def test_create_controller_builds_a_default_context() -> None:
    controller = create_controller("recursive_division")
    assert controller.context.rows == 15

    windowed = create_controller("sliding_window")
    windowed.jump_to_end()
    assert windowed.view.best_substring == "abc"


def test_create_controller_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError):
        create_controller("bogosort")
