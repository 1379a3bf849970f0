"""
web/server.py: Cube Paint browser runner.

Serves the cubepaint engine over HTTP + Socket.IO. Every session owns its
own PlaySession; the browser sends directions, swipes, taps or whole drag
paths and receives the serialised board plus a rendered PNG frame.

Settings (environment variables):
    HOST, PORT, SECRET_KEY, CORS_ORIGINS, FLASK_DEBUG
    CUBEPAINT_* (see cubepaint/config.py)

Usage:
    python web/server.py                                        # from project root
    python -m web.server                                        # module style
    PORT=3000 python web/server.py                              # custom port
    gunicorn --worker-class eventlet -w 1 web.server:app        # production
"""

# ---------------------------------------------------------------------------
# Eventlet monkey-patching. MUST happen before any other imports.
# ---------------------------------------------------------------------------
try:
    import eventlet
    eventlet.monkey_patch()
except ImportError:
    pass  # eventlet not installed, fall back to threading mode

import logging
import os
import sys
from pathlib import Path

from flask import Flask, jsonify, request
from flask_socketio import SocketIO, emit, join_room

# ---------------------------------------------------------------------------
# Project root, one level up from web/
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from cubepaint import config
from cubepaint.constants import PAINTABLE_TILES, GameStatus
from cubepaint.levels import builtin_levels
from cubepaint.path import parse_point
from cubepaint.render import frame_to_png_base64, render_board
from cubepaint.session import PlaySession, SessionRegistry

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Flask + SocketIO
# ---------------------------------------------------------------------------
app = Flask(__name__)
app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY", "cubepaint-dev-key")

CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

_async_mode = "eventlet" if "eventlet" in sys.modules else "threading"
logger.info(f"SocketIO async_mode: {_async_mode}")

socketio = SocketIO(
    app,
    cors_allowed_origins=CORS_ORIGINS,
    async_mode=_async_mode,
    ping_timeout=60,
    ping_interval=25,
    max_http_buffer_size=1_000_000,
)

LEVELS = builtin_levels()
registry = SessionRegistry()


# ---------------------------------------------------------------------------
# Session helpers
# ---------------------------------------------------------------------------

def get_session_state(session_id: str, session: PlaySession) -> dict:
    """Serialize session state plus a PNG of the active layer."""
    frame = render_board(session.level, session.board, scale=config.RENDER_SCALE)
    state = session.to_dict()
    state.update({
        "session_id": session_id,
        "is_last_level": session.is_last_level,
        "frame": frame_to_png_base64(frame),
        "frame_width": frame.shape[1],
        "frame_height": frame.shape[0],
    })
    return state


def _lookup(data):
    """(session_id, session) for an event payload; raises KeyError if unknown."""
    session_id = (data or {}).get("session_id")
    return session_id, registry.get(session_id)


def _emit_result(session_id: str, session: PlaySession, prev_status: GameStatus):
    """Emit the state, plus level_complete / game_over on a terminal transition."""
    state = get_session_state(session_id, session)
    if session.status is not prev_status:
        if session.status is GameStatus.WON:
            emit("level_complete", {
                "level": session.level_number,
                "total_levels": len(session.levels),
                "message": session.result_message(),
            })
        elif session.status is GameStatus.LOST:
            emit("game_over", {
                "level": session.level_number,
                "percentage": session.percentage,
                "message": session.result_message(),
            })
    emit("frame_update", state)
    return state


# ═══════════════════════════════════════════════════════════════════════════
#  HTTP ROUTES
# ═══════════════════════════════════════════════════════════════════════════

@app.route("/health")
def health():
    return jsonify({
        "status": "healthy",
        "levels": len(LEVELS),
        "sessions": len(registry),
    }), 200


@app.route("/api/levels")
def api_levels():
    """Return the built-in level table."""
    out = []
    for i, level in enumerate(LEVELS):
        out.append({
            "index": i,
            "number": i + 1,
            "name": level.name,
            "width": level.width,
            "height": level.height,
            "layers": level.layer_count,
            "paintable_tiles": level.count_tiles(PAINTABLE_TILES),
        })
    return jsonify({"levels": out})


@app.route("/api/sessions")
def api_sessions():
    """List active sessions (debug)."""
    registry.cleanup()
    return jsonify({"sessions": [registry.info(sid) for sid in registry]})


@app.route("/api/sessions/<session_id>/state")
def api_session_state(session_id):
    try:
        session = registry.get(session_id)
    except KeyError:
        return jsonify({"error": "Session not found"}), 404
    return jsonify(get_session_state(session_id, session))


# ═══════════════════════════════════════════════════════════════════════════
#  WEBSOCKET EVENTS
# ═══════════════════════════════════════════════════════════════════════════

@socketio.on("connect")
def on_connect():
    logger.info(f"Client connected: {request.sid}")


@socketio.on("disconnect")
def on_disconnect():
    logger.info(f"Client disconnected: {request.sid}")


@socketio.on("create_game")
def on_create_game(data):
    """Create a new session, optionally starting on a given level."""
    try:
        data = data or {}
        seed = int(data.get("seed", 0))
        player_name = data.get("player_name", "Anonymous")
        registry.cleanup()

        session_id, session = registry.create(seed=seed, levels=LEVELS,
                                              player_name=player_name)
        if data.get("level") is not None:
            session.load_level(int(data["level"]))

        join_room(session_id)
        state = get_session_state(session_id, session)
        emit("game_created", state)
        emit("frame_update", state)
        logger.info(f"Game created for {player_name} "
                    f"(session={session_id}, seed={seed}, level={session.level_number})")
    except Exception as e:
        logger.error(f"Error creating game: {e}", exc_info=True)
        emit("error", {"message": str(e)})


@socketio.on("join_game")
def on_join_game(data):
    """Rejoin an existing session (e.g. after page refresh)."""
    try:
        session_id, session = _lookup(data)
        join_room(session_id)
        state = get_session_state(session_id, session)
        emit("game_joined", state)
        emit("frame_update", state)
    except KeyError:
        emit("error", {"message": "Session not found. Create a new game."})
    except Exception as e:
        logger.error(f"Error joining: {e}", exc_info=True)
        emit("error", {"message": str(e)})


@socketio.on("step")
def on_step(data):
    """Single move: {"session_id", "direction": "up"|"down"|"left"|"right"}."""
    try:
        session_id, session = _lookup(data)
        direction = data.get("direction")
        prev = session.status
        result = session.attempt_direction(direction)
        if not result["accepted"]:
            emit("step_rejected", {"direction": direction,
                                   "status": result["status"].value})
        _emit_result(session_id, session, prev)
    except KeyError:
        emit("error", {"message": "Session not found"})
    except Exception as e:
        logger.error(f"Error in step: {e}", exc_info=True)
        emit("error", {"message": str(e)})


@socketio.on("path")
def on_path(data):
    """Drag gesture: {"session_id", "points": [[x, y], ...], "origin", "tile_size"}.

    Accepted steps are emitted one frame at a time, STEP_DELAY_MS apart.
    """
    try:
        session_id, session = _lookup(data)
        points = [parse_point(p) for p in data.get("points", [])]
        origin = parse_point(data.get("origin"))
        tile_size = data.get("tile_size")
        tile_size = float(tile_size) if tile_size is not None else None

        prev = session.status
        accepted = []
        for tile, outcome in session.iter_path(points, origin, tile_size):
            # Exhaust the generator; it evaluates status when it finishes
            if not outcome.accepted:
                continue
            accepted.append(list(tile))
            emit("frame_update", get_session_state(session_id, session))
            socketio.sleep(config.STEP_DELAY_MS / 1000.0)

        emit("path_done", {"accepted_tiles": accepted,
                           "status": session.status.value})
        _emit_result(session_id, session, prev)
    except KeyError:
        emit("error", {"message": "Session not found"})
    except ValueError as e:
        emit("error", {"message": f"Invalid payload: {e}"})
    except Exception as e:
        logger.error(f"Error in path: {e}", exc_info=True)
        emit("error", {"message": str(e)})


@socketio.on("swipe")
def on_swipe(data):
    """Swipe gesture: {"session_id", "start": [x, y], "end": [x, y]}."""
    try:
        session_id, session = _lookup(data)
        prev = session.status
        session.attempt_swipe(parse_point(data.get("start")), parse_point(data.get("end")))
        _emit_result(session_id, session, prev)
    except KeyError:
        emit("error", {"message": "Session not found"})
    except ValueError as e:
        emit("error", {"message": f"Invalid payload: {e}"})
    except Exception as e:
        logger.error(f"Error in swipe: {e}", exc_info=True)
        emit("error", {"message": str(e)})


@socketio.on("tap")
def on_tap(data):
    """Tap/click: {"session_id", "point": [x, y], "origin", "tile_size"}."""
    try:
        session_id, session = _lookup(data)
        tile_size = data.get("tile_size")
        prev = session.status
        session.attempt_tap(parse_point(data.get("point")), parse_point(data.get("origin")),
                            float(tile_size) if tile_size is not None else None)
        _emit_result(session_id, session, prev)
    except KeyError:
        emit("error", {"message": "Session not found"})
    except ValueError as e:
        emit("error", {"message": f"Invalid payload: {e}"})
    except Exception as e:
        logger.error(f"Error in tap: {e}", exc_info=True)
        emit("error", {"message": str(e)})


@socketio.on("replay")
def on_replay(data):
    """Restart the current level."""
    try:
        session_id, session = _lookup(data)
        session.replay()
        state = get_session_state(session_id, session)
        emit("level_reset", state)
        emit("frame_update", state)
    except KeyError:
        emit("error", {"message": "Session not found"})
    except Exception as e:
        logger.error(f"Error replaying level: {e}", exc_info=True)
        emit("error", {"message": str(e)})


@socketio.on("next_level")
def on_next_level(data):
    """Advance after a win; on the last level the run is complete."""
    try:
        session_id, session = _lookup(data)
        if session.status is not GameStatus.WON:
            emit("error", {"message": "Finish the current level first"})
            return
        if not session.next_level():
            emit("game_won", {"message": session.result_message(),
                              "total_levels": len(session.levels)})
        state = get_session_state(session_id, session)
        emit("frame_update", state)
    except KeyError:
        emit("error", {"message": "Session not found"})
    except Exception as e:
        logger.error(f"Error advancing level: {e}", exc_info=True)
        emit("error", {"message": str(e)})


# ═══════════════════════════════════════════════════════════════════════════
#  ENTRYPOINT
# ═══════════════════════════════════════════════════════════════════════════

def main():
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", 8080))
    debug = os.environ.get("FLASK_DEBUG", "0") == "1"

    logger.info(f"Cube Paint runner starting on {host}:{port}")
    logger.info(f"Levels: {len(LEVELS)}  step delay: {config.STEP_DELAY_MS} ms")
    logger.info(f"Debug: {debug}")

    socketio.run(app, host=host, port=port, debug=debug, allow_unsafe_werkzeug=True)


if __name__ == "__main__":
    main()
