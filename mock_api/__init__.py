"""
Flask application factory module.

This module creates and configures the mock API application using the
factory pattern. The factory builds the read-only ``MockDataset`` once,
attaches it to the app, enables CORS for any origin, and registers the
API blueprint together with JSON error handlers, so every response
(including routing errors) identifies the backend instance that served it.
"""

import logging
import time

from flask import Flask, Response, current_app, g, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import get_config
from mock_api import metrics
from mock_api.models import MockDataset

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Key under which the dataset is stored in ``app.extensions``.
EXTENSION_KEY = "mock_api"


def get_dataset() -> MockDataset:
    """Return the dataset attached to the current application."""
    return current_app.extensions[EXTENSION_KEY]


def error_response(message: str, status: int) -> tuple[Response, int]:
    """Build an ErrorResponse body with a fresh server info."""
    return jsonify({
        "error": message,
        "server_info": get_dataset().server_info().to_dict(),
    }), status


def _register_error_handlers(app: Flask) -> None:
    """Answer routing and server errors in JSON instead of HTML."""

    @app.errorhandler(404)
    def route_not_found(error: HTTPException) -> tuple[Response, int]:
        return error_response("Route not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(error: HTTPException) -> tuple[Response, int]:
        response, status = error_response("Method not allowed", 405)
        if error.valid_methods:
            response.headers["Allow"] = ", ".join(error.valid_methods)
        return response, status

    @app.errorhandler(500)
    def internal_error(error: Exception) -> tuple[Response, int]:
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return error_response("Internal server error", 500)


def _register_request_hooks(app: Flask) -> None:
    """Time, tag, count, and log every response."""

    @app.before_request
    def start_timer() -> None:
        g.request_started = time.perf_counter()

    @app.after_request
    def tag_response(response: Response) -> Response:
        dataset = get_dataset()
        response.headers["X-Server-Name"] = dataset.server_name
        response.headers["X-Language"] = dataset.language
        logger.info(
            "%s %s -> %s [%s]",
            request.method, request.path, response.status_code, dataset.server_name,
        )
        if metrics.should_track(request.method, request.path):
            started = g.get("request_started", time.perf_counter())
            metrics.record_request(
                dataset.server_name, dataset.language, time.perf_counter() - started,
            )
        return response


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     If None, uses FLASK_ENV environment variable.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Load configuration
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    # Keep fields in declaration order
    app.json.sort_keys = False

    logger.info(f"Creating app with config: {config_class.__name__}")

    # Build the shared read-only dataset
    dataset = MockDataset(
        server_name=app.config["MOCK_SERVER_NAME"],
        port=app.config["MOCK_PORT"],
        language=app.config["MOCK_LANGUAGE"],
    )
    app.extensions[EXTENSION_KEY] = dataset
    logger.info(
        "Loaded %d posts and %d users for %s",
        len(dataset.posts), len(dataset.users), dataset.server_name,
    )

    # Initialize extensions
    CORS(app)

    # Register blueprints
    from mock_api.routes.api import api_bp

    app.register_blueprint(api_bp)
    _register_error_handlers(app)
    _register_request_hooks(app)

    return app
