"""Flask application factory for the py-vfs web UI.

The ``create_app`` function builds a router, creates a shell, and
returns a Flask app.  Flask serves requests from several threads, so
every request that touches the router runs under one lock: mount
table changes and tree projections never interleave.
"""

from __future__ import annotations

import threading
from dataclasses import asdict

from flask import Flask, Response, jsonify, render_template, request

from py_vfs.config import VfsConfig, build_router
from py_vfs.shell import Shell
from py_vfs.usage import collect_usage

_HTTP_BAD_REQUEST = 400


def create_app(config: VfsConfig | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Start-up configuration (defaults when omitted).

    Returns:
        A configured Flask application ready to serve.

    """
    router = build_router(config)
    shell = Shell(router=router)
    lock = threading.Lock()

    startup_log = "\n".join(str(entry) for entry in router.logger.entries)

    app = Flask(__name__)

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the terminal HTML page."""
        return render_template("index.html", startup_log=startup_log)

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Execute a shell command and return JSON output.

        Expects JSON body: ``{"command": "..."}``

        Returns:
            JSON with ``output``, ``cwd`` and ``exited`` fields.

        """
        data = request.get_json(silent=True)
        if data is None or "command" not in data:
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST

        command: str = data["command"]
        with lock:
            result = shell.execute(command)
            cwd = router.current_directory

        if result == Shell.EXIT_SENTINEL:
            return jsonify({"output": "Session closed.", "cwd": cwd, "exited": True})
        return jsonify({"output": result, "cwd": cwd, "exited": False})

    @app.route("/api/tree")
    def tree() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the unified tree as nested JSON."""
        with lock:
            projection = router.unified_tree()
        return jsonify(projection.to_dict())

    @app.route("/api/usage")
    def usage() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return disk usage statistics."""
        with lock:
            report = collect_usage(router)
        return jsonify(asdict(report))

    @app.route("/api/mounts")
    def mounts() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the mount table."""
        with lock:
            table = router.mount_table()
        return jsonify([{"mount_point": path, "fs_type": fs_type} for path, fs_type in table])

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``py-vfs-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
