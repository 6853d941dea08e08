"""
main.py - Stepwise Visualizer Flask API
=======================================
The JSON server that drives playback controllers for a browser client.
It renders nothing: every response is a snapshot (status, step, view,
pseudocode line, label) for the client to draw.

Routes:
  GET  /api/algorithms         - registry listing
  POST /api/run                - new run {algo_key, input}
  POST /api/step/next          - advance one step
  POST /api/step/play          - start auto-play
  POST /api/step/pause         - pause auto-play
  POST /api/step/tick          - timer tick while playing
  POST /api/step/seek          - jump to step N {index}
  POST /api/reset              - back to idle {input?}
  POST /api/config/speed       - interval in ms, or a preset name {speed}
  GET  /api/state              - current snapshot (for polling)
  POST /api/compare            - run two algorithms on one input {algos, input}

State management:
  Each browser session gets a random id in the Flask session cookie.
  Controllers live in a process-local dict keyed by that id; there is
  exactly one live controller (and generator) per session.
"""

import logging
import math
import os
import secrets
import sys
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request, session

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from algorithms import get_algorithm, list_algorithms
from engine import EngineConfig, PlaybackController, Recorder, SPEED_PRESETS, compare, create_controller, load_config
from engine.logging_setup import init_logging

logger = logging.getLogger(__name__)

# malformed input surfaces as one of these while building a context
INPUT_ERRORS = (ValueError, TypeError, KeyError, IndexError, OverflowError)


def create_app(config: Optional[EngineConfig] = None) -> Flask:
    config = config or load_config()

    app = Flask(__name__)
    app.secret_key = config.secret_key or secrets.token_hex(32)
    app.config["ENGINE"] = config

    controllers: Dict[str, PlaybackController] = {}
    app.extensions["controllers"] = controllers

    # -----------------------------------------------------------------------
    # Session State Helpers
    # -----------------------------------------------------------------------
    def session_id() -> str:
        if "sid" not in session:
            session["sid"] = secrets.token_hex(16)
        return session["sid"]

    def current_controller() -> Optional[PlaybackController]:
        return controllers.get(session_id())

    def body() -> Dict[str, Any]:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    def error(message: str, status: int = 400) -> Tuple[Any, int]:
        return jsonify({"error": message}), status

    def snapshot_response(controller: PlaybackController, **extra):
        payload = controller.snapshot.to_dict()
        payload["algo_key"] = controller.algo_key
        payload.update(extra)
        return jsonify(payload)

    def build_context(algo_key: str, raw: Any):
        info = get_algorithm(algo_key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo_key!r}")
        if raw is not None and not isinstance(raw, dict):
            raise ValueError("input must be an object")
        return info.build_context(raw)

    NO_RUN = "No active run. POST /api/run first."

    # -----------------------------------------------------------------------
    # API: Registry
    # -----------------------------------------------------------------------
    @app.route("/api/algorithms", methods=["GET"])
    def api_algorithms():
        return jsonify({
            "algorithms": [a.to_dict() for a in list_algorithms()],
            "speed_presets": SPEED_PRESETS,
        })

    # -----------------------------------------------------------------------
    # API: Run Algorithm
    # -----------------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        data = body()
        algo_key = data.get("algo_key")
        if not isinstance(algo_key, str) or not algo_key:
            return error("algo_key is required")

        try:
            context = build_context(algo_key, data.get("input"))
            controller = create_controller(
                algo_key,
                context,
                speed_ms=config.default_speed_ms,
                min_speed_ms=config.min_speed_ms,
            )
        except INPUT_ERRORS as e:
            return error(str(e))

        sid = session_id()
        previous = controllers.pop(sid, None)
        if previous is not None:
            previous.reset()
        controllers[sid] = controller
        logger.info("session %s started %s", sid[:8], algo_key)
        return snapshot_response(controller)

    # -----------------------------------------------------------------------
    # API: Step Navigation
    # -----------------------------------------------------------------------
    @app.route("/api/step/next", methods=["POST"])
    def api_step_next():
        controller = current_controller()
        if controller is None:
            return error(NO_RUN)
        advanced = controller.next_step()
        return snapshot_response(controller, advanced=advanced)

    @app.route("/api/step/play", methods=["POST"])
    def api_step_play():
        controller = current_controller()
        if controller is None:
            return error(NO_RUN)
        controller.play()
        return snapshot_response(controller)

    @app.route("/api/step/pause", methods=["POST"])
    def api_step_pause():
        controller = current_controller()
        if controller is None:
            return error(NO_RUN)
        controller.pause()
        return snapshot_response(controller)

    @app.route("/api/step/tick", methods=["POST"])
    def api_step_tick():
        controller = current_controller()
        if controller is None:
            return error(NO_RUN)
        advanced = controller.tick()
        return snapshot_response(controller, advanced=advanced)

    @app.route("/api/step/seek", methods=["POST"])
    def api_step_seek():
        controller = current_controller()
        if controller is None:
            return error(NO_RUN)
        index = body().get("index")
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            return error("index must be a non-negative integer")
        controller.seek(index)
        return snapshot_response(controller)

    @app.route("/api/reset", methods=["POST"])
    def api_reset():
        controller = current_controller()
        if controller is None:
            return error(NO_RUN)
        data = body()
        if data.get("input") is None:
            controller.reset()
        else:
            try:
                context = build_context(controller.algo_key, data["input"])
            except INPUT_ERRORS as e:
                return error(str(e))
            controller.reset_with_input(context)
        return snapshot_response(controller)

    # -----------------------------------------------------------------------
    # API: Config
    # -----------------------------------------------------------------------
    @app.route("/api/config/speed", methods=["POST"])
    def api_config_speed():
        controller = current_controller()
        if controller is None:
            return error(NO_RUN)
        speed = body().get("speed")
        if isinstance(speed, str):
            if speed not in SPEED_PRESETS:
                return error(f"Unknown speed preset: {speed!r}")
            controller.set_speed_preset(speed)
        elif isinstance(speed, (int, float)) and not isinstance(speed, bool):
            if not math.isfinite(speed):
                return error("speed must be a finite number of milliseconds")
            controller.set_speed(speed)
        else:
            return error("speed must be a number of milliseconds or a preset name")
        return jsonify({"speed_ms": controller.speed_ms})

    @app.route("/api/state", methods=["GET"])
    def api_state():
        controller = current_controller()
        if controller is None:
            return error(NO_RUN)
        return snapshot_response(controller)

    # -----------------------------------------------------------------------
    # API: Comparison Mode
    # -----------------------------------------------------------------------
    @app.route("/api/compare", methods=["POST"])
    def api_compare():
        data = body()
        algos = data.get("algos")
        if not isinstance(algos, list) or len(algos) != 2 or not all(isinstance(a, str) for a in algos):
            return error("algos must be a list of two algorithm keys")

        infos = [get_algorithm(a) for a in algos]
        for key, info in zip(algos, infos):
            if info is None:
                return error(f"Unknown algorithm: {key!r}")
        if infos[0].family != infos[1].family:
            return error("Both algorithms must take the same kind of input")

        try:
            context = build_context(algos[0], data.get("input"))
        except INPUT_ERRORS as e:
            return error(str(e))

        left, right = Recorder(), Recorder()
        left.start(algos[0], context)
        right.start(algos[1], context)
        left.run_to_completion()
        right.run_to_completion()
        return jsonify(compare(left, right).to_dict())

    return app


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    cfg = load_config()
    init_logging(cfg.log_level)
    logger.info("Stepwise Visualizer listening on http://%s:%d", cfg.host, cfg.port)
    create_app(cfg).run(debug=cfg.debug, host=cfg.host, port=cfg.port)
