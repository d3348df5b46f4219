"""Web host for the champion gallery: HTML pages plus a small JSON event API."""
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

from flask import Flask, abort, current_app, jsonify, request
from flask_cors import CORS

from champion_gallery.config import Settings
from champion_gallery.device import WindowSize
from champion_gallery.router import Detail, Home
from champion_gallery.state import LocationChanged, NavigateRequested, WindowResized, decide
from champion_gallery.store import Store
from champion_gallery.views import render_page, screen_to_dict, state_to_dict


class InvalidRequest(ValueError):
    pass


def _store() -> Store:
    return current_app.config["STORE"]


def _snapshot(store: Store) -> Dict[str, Any]:
    state, location = store.read()
    return {
        "status": "success",
        "location": location,
        "state": state_to_dict(state),
        "screen": screen_to_dict(decide(state), store.settings),
    }


def _raw_path() -> str:
    """The request path still percent-encoded, without the script root."""
    environ = request.environ
    raw = environ.get("RAW_URI") or environ.get("REQUEST_URI")
    if raw:
        raw = raw.split("?", 1)[0]
        script_root = quote(environ.get("SCRIPT_NAME", "").encode("latin-1"), safe="/")
        if script_root and raw.startswith(script_root):
            raw = raw[len(script_root):]
        return raw or "/"
    # WSGI hands PATH_INFO over as latin-1 decoded bytes
    return quote(environ.get("PATH_INFO", "/").encode("latin-1"), safe="/")


def _size_arg(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise InvalidRequest(f"{name} must be a non-negative integer")
    try:
        size = int(value)
    except (TypeError, ValueError):
        raise InvalidRequest(f"{name} must be a non-negative integer")
    if size < 0:
        raise InvalidRequest(f"{name} must be a non-negative integer")
    return size


def _window_size(data: Dict[str, Any]) -> WindowSize:
    if "width" not in data or "height" not in data:
        raise InvalidRequest("width and height required")
    return WindowSize(_size_arg(data["width"], "width"), _size_arg(data["height"], "height"))


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidRequest("JSON object required")
    return data


def _error(message: str, status: int) -> Tuple[Any, int]:
    return jsonify({"status": "error", "message": message}), status


def create_app(
    settings: Optional[Settings] = None,
    session: Optional[Any] = None,
    start_loader: bool = True,
    initial_path: str = "/",
    initial_size: Optional[WindowSize] = None,
) -> Flask:
    settings = settings or Settings()
    app = Flask(__name__)
    CORS(app)

    # In-memory view state; lives as long as the process.
    store = Store(settings, initial_path=initial_path, initial_size=initial_size, session=session)
    app.config["SETTINGS"] = settings
    app.config["STORE"] = store
    if start_loader:
        store.start()
        app.logger.info("Started champion catalog fetch")

    @app.errorhandler(InvalidRequest)
    def bad_request(exc: InvalidRequest):
        return _error(str(exc), 400)

    @app.errorhandler(404)
    def not_found(exc: Exception):
        if request.path.startswith("/api/"):
            return _error("Not found", 404)
        return "Not found", 404

    @app.route("/health", methods=["GET"])
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok", "service": "champion-gallery"})

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """Current view state and screen."""
        return jsonify(_snapshot(_store()))

    @app.route("/api/navigate", methods=["POST"])
    def navigate():
        """Navigate to a champion, or home when no identifier is given."""
        data = _json_body()
        identifier = data.get("identifier")
        if identifier is None or identifier == "":
            route = Home()
        elif isinstance(identifier, str):
            route = Detail(identifier)
        else:
            raise InvalidRequest("identifier must be a string")
        store = _store()
        store.dispatch(NavigateRequested(route))
        current_app.logger.info("Navigated to %s", store.history.current)
        return jsonify(_snapshot(store))

    @app.route("/api/location", methods=["POST"])
    def location_changed():
        """Report a location change from the client (back/forward or a fresh load)."""
        data = _json_body()
        path = data.get("path")
        if not isinstance(path, str):
            raise InvalidRequest("path required")
        store = _store()
        store.dispatch(LocationChanged(path))
        return jsonify(_snapshot(store))

    @app.route("/api/history/back", methods=["POST"])
    def history_back():
        store = _store()
        moved = store.go_back() is not None
        return jsonify(dict(_snapshot(store), moved=moved))

    @app.route("/api/history/forward", methods=["POST"])
    def history_forward():
        store = _store()
        moved = store.go_forward() is not None
        return jsonify(dict(_snapshot(store), moved=moved))

    @app.route("/api/resize", methods=["POST"])
    def resize():
        """Report new window dimensions."""
        size = _window_size(_json_body())
        store = _store()
        store.dispatch(WindowResized(size))
        return jsonify(_snapshot(store))

    @app.route("/", defaults={"path": ""}, methods=["GET"])
    @app.route("/<path:path>", methods=["GET"])
    def page(path: str):
        """Serve the gallery page for a location."""
        if path.startswith("api/"):
            abort(404)
        store = _store()
        if "width" in request.args or "height" in request.args:
            store.post(WindowResized(_window_size(request.args)))
        state, _ = store.visit(_raw_path())
        return render_page(decide(state), state.device, store.settings)

    return app
