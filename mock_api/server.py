"""
Stand-alone entry point for one mock backend instance.

Builds the application, prints where it is listening, and serves it with
Werkzeug's threaded server on all interfaces. A port that cannot be bound
is fatal: the error is logged and the process exits with status 1.
"""

from __future__ import annotations

import logging
import os
import sys

from flask import Flask
from werkzeug.serving import BaseWSGIServer, make_server

from mock_api import EXTENSION_KEY, create_app

logger = logging.getLogger(__name__)

BIND_HOST = "0.0.0.0"


def startup_lines(server_name: str, port: int) -> list[str]:
    """Return the human-readable banner printed when the server starts."""
    return [
        f"Python Mock API Server ({server_name}) running on port {port}",
        f"Performance endpoint: http://localhost:{port}/performance",
        f"Health check: http://localhost:{port}/health",
    ]


def build_server(app: Flask, host: str = BIND_HOST, port: int | None = None) -> BaseWSGIServer:
    """
    Bind a threaded WSGI server for ``app``.

    Args:
        app: Application created by ``create_app``.
        host: Interface to bind.
        port: Port to bind; defaults to the port the app reports.

    Raises:
        OSError: If the port cannot be bound (in use, no permission).
    """
    if port is None:
        port = app.extensions[EXTENSION_KEY].port
    return make_server(host, port, app, threaded=True)


def main() -> int:
    """Run the mock API server until interrupted and return the exit status."""
    app = create_app(os.getenv("FLASK_ENV", "production"))
    dataset = app.extensions[EXTENSION_KEY]

    try:
        server = build_server(app)
    except OSError as exc:
        logger.error("Could not bind %s:%s: %s", BIND_HOST, dataset.port, exc)
        return 1

    for line in startup_lines(dataset.server_name, dataset.port):
        print(line, flush=True)

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down %s", dataset.server_name)
    finally:
        server.server_close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
