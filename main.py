"""
main.py — Visualgorithm Flask App
==================================
JSON API in front of the visualizer engine.  Rendering lives in the
browser; every route returns the session snapshot the client draws from.

Routes:
  GET  /api/algorithms               – registry metadata, demo graphs, presets
  GET  /api/state                    – current session state (polls the timer)
  POST /api/mode                     – {"mode": "sorting" | "graph"}
  POST /api/data/random              – {"size": 11}
  POST /api/data/custom              – {"data": [5, 3, 8]} or {"data": "5, 3, 8"}
  POST /api/graph/load               – {"name": "simple" | "complex"}
  POST /api/graph/generate           – generation options, or {"preset": name}
  POST /api/graph/endpoints          – {"start": "A", "target": "E"}
  POST /api/run                      – {"algorithm": "dijkstra"}
  POST /api/playback/<action>        – play | pause | reset | next | prev
                                       | goto {"index"} | speed {"speed"}
  POST /api/session/reset             – forget this browser's state

State management:
  The Flask cookie session only carries an opaque id.  The real state
  (a VisualizerSession per browser) lives in a bounded SessionStore on
  the app, so it vanishes on restart.  Least-recently-used sessions are
  evicted past `max_sessions`, idle ones after `session_ttl` seconds.  Auto-play advances whenever the
  client polls /api/state.

Errors:
  Any VisualizerError becomes {"error": message} with HTTP 400.
"""

import logging
from typing import Any, Dict, Optional

from flask import Flask, current_app, jsonify, request, session

from visualgorithm.algorithms import list_algorithms
from visualgorithm.config import VisualizerConfig, load_config
from visualgorithm.engine import SessionStore, VisualizerSession
from visualgorithm.exceptions import InvalidDataError, VisualizerError
from visualgorithm.graph import DEFAULT_GRAPHS, GENERATOR_PRESETS

logger = logging.getLogger(__name__)

SESSION_KEY = "visualgorithm_sid"


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def _store() -> SessionStore:
    return current_app.extensions["visualgorithm.sessions"]


def get_session() -> VisualizerSession:
    """Return this browser's VisualizerSession, creating it on first use."""
    store = _store()
    vs = store.get(session.get(SESSION_KEY))
    if vs is None:
        sid, vs = store.create()
        session[SESSION_KEY] = sid
        logger.info("new session %s", sid[:8])
    return vs


def _body() -> Dict[str, Any]:
    return request.get_json(silent=True) or {}


def _number(body: Dict[str, Any], name: str, kind=int):
    try:
        return kind(body[name])
    except KeyError:
        raise InvalidDataError(f"Missing field: {name!r}") from None
    except (TypeError, ValueError):
        raise InvalidDataError(f"Field {name!r} must be a number, got {body[name]!r}") from None


def _state_response():
    return jsonify(get_session().snapshot())


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[VisualizerConfig] = None) -> Flask:
    config = config or load_config()

    app = Flask(__name__)
    app.secret_key = config.secret_key
    app.config["VISUALGORITHM"] = config
    app.extensions["visualgorithm.sessions"] = SessionStore(config)

    @app.errorhandler(VisualizerError)
    def handle_visualizer_error(e):
        logger.info("rejected request to %s: %s", request.path, e)
        return jsonify({"error": str(e)}), 400

    # -----------------------------------------------------------------------
    # API: Metadata & State
    # -----------------------------------------------------------------------
    @app.route("/api/algorithms")
    def api_algorithms():
        return jsonify({
            "algorithms": [a.to_dict() for a in list_algorithms()],
            "graphs":     list(DEFAULT_GRAPHS),
            "presets":    list(GENERATOR_PRESETS),
        })

    @app.route("/api/state")
    def api_state():
        get_session().controller.poll()
        return _state_response()

    # -----------------------------------------------------------------------
    # API: Input
    # -----------------------------------------------------------------------
    @app.route("/api/mode", methods=["POST"])
    def api_mode():
        get_session().set_mode(_body().get("mode"))
        return _state_response()

    @app.route("/api/data/random", methods=["POST"])
    def api_data_random():
        body = _body()
        size = _number(body, "size") if "size" in body else None
        get_session().generate_random_data(size)
        return _state_response()

    @app.route("/api/data/custom", methods=["POST"])
    def api_data_custom():
        data = _body().get("data")
        if data is None:
            raise InvalidDataError("Missing field: 'data'")
        get_session().set_custom_data(data)
        return _state_response()

    @app.route("/api/graph/load", methods=["POST"])
    def api_graph_load():
        get_session().load_graph(_body().get("name", "simple"))
        return _state_response()

    @app.route("/api/graph/generate", methods=["POST"])
    def api_graph_generate():
        body = _body()
        preset = body.get("preset")
        if preset is not None:
            options = GENERATOR_PRESETS.get(preset)
            if options is None:
                raise VisualizerError(f"Unknown preset: {preset!r}")
        else:
            options = dict(body)
            cfg = current_app.config["VISUALGORITHM"]
            options.setdefault("canvas_width", cfg.canvas_width)
            options.setdefault("canvas_height", cfg.canvas_height)
        get_session().generate_custom_graph(options)
        return _state_response()

    @app.route("/api/graph/endpoints", methods=["POST"])
    def api_graph_endpoints():
        body = _body()
        s = get_session()
        if "start" in body:
            s.set_start_node(body["start"])
        if "target" in body:
            s.set_target_node(body["target"])
        return _state_response()

    # -----------------------------------------------------------------------
    # API: Run
    # -----------------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        get_session().select_algorithm(_body().get("algorithm"))
        return _state_response()

    # -----------------------------------------------------------------------
    # API: Playback
    # -----------------------------------------------------------------------
    @app.route("/api/playback/<action>", methods=["POST"])
    def api_playback(action: str):
        s = get_session()
        ctl = s.controller
        if action == "play":
            ctl.play()
        elif action == "pause":
            ctl.pause()
        elif action == "reset":
            ctl.reset()
        elif action == "next":
            ctl.step_forward()
        elif action == "prev":
            ctl.step_backward()
        elif action == "goto":
            ctl.seek(_number(_body(), "index"))
        elif action == "speed":
            s.set_speed(_number(_body(), "speed", float))
        else:
            return jsonify({"error": f"Unknown playback action: {action!r}"}), 404
        return _state_response()

    # -----------------------------------------------------------------------
    # API: Session
    # -----------------------------------------------------------------------
    @app.route("/api/session/reset", methods=["POST"])
    def api_session_reset():
        _store().drop(session.pop(SESSION_KEY, None))
        return _state_response()

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    cfg = load_config()
    app = create_app(cfg)
    print("=" * 60)
    print("  Visualgorithm")
    print("  Starting Flask server...")
    print(f"  Open http://{cfg.host}:{cfg.port}")
    print("=" * 60)
    app.run(debug=cfg.debug, host=cfg.host, port=cfg.port)
