"""
REST API endpoints for the mock backend.

Every endpoint is a read-only view over the shared ``MockDataset`` and
stamps its JSON body with server info computed at response time, so a
load-balancer test harness can see which instance answered.

Endpoints:
    GET /health           - Health check
    GET /posts            - List all posts
    GET /posts/<id>       - Get a single post by ID
    GET /users            - List all users
    GET /users/<id>       - Get a single user by ID
    GET /performance      - Fixed CPU-bound micro-benchmark
    GET /metrics          - Prometheus request and uptime metrics
"""

import logging
import time

from flask import Blueprint, Response, jsonify

from mock_api import error_response, get_dataset, metrics
from mock_api.models import cpu_count, utc_now_iso, wrapping_sum

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

# Concurrency model of the threaded Werkzeug / WSGI server.
THREADS_DESCRIPTION = "thread-per-request (werkzeug)"
CONCURRENCY_DESCRIPTION = "threaded WSGI"


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------

def not_found(message: str) -> tuple[Response, int]:
    """
    Build a 404 ErrorResponse.

    Args:
        message: Human-readable description of the missing resource.

    Returns:
        JSON error body with fresh server info and 404 status code.
    """
    return error_response(message, 404)


# -----------------------------------------------------------------------------
# API Endpoints
# -----------------------------------------------------------------------------

@api_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Health check endpoint for load balancer probes."""
    dataset = get_dataset()
    info = dataset.server_info()
    return jsonify({
        "status": "healthy",
        "language": info.language,
        "server": info.server,
        "port": info.port,
        "timestamp": info.timestamp,
        "uptime": info.uptime,
        "memory": {
            "rss": "N/A",
            "threads": cpu_count(),
        },
        "threads": THREADS_DESCRIPTION,
    }), 200


@api_bp.route("/posts", methods=["GET"])
def get_posts() -> tuple[Response, int]:
    """
    List all posts in seed order.

    Returns:
        JSON array of posts, each with its own fresh server info.
    """
    dataset = get_dataset()
    return jsonify([post.to_dict(dataset.server_info()) for post in dataset.posts]), 200


@api_bp.route("/posts/<int:post_id>", methods=["GET"])
def get_post(post_id: int) -> tuple[Response, int]:
    """
    Get a single post by ID.

    Args:
        post_id: The unique identifier of the post.

    Returns:
        JSON response with post data and 200 status code,
        or error message and 404 if not found.
    """
    dataset = get_dataset()
    post = dataset.find_post(post_id)
    if post is None:
        logger.warning(f"Post {post_id} not found")
        return not_found("Post not found")

    return jsonify(post.to_dict(dataset.server_info())), 200


@api_bp.route("/users", methods=["GET"])
def get_users() -> tuple[Response, int]:
    """List all users in seed order."""
    dataset = get_dataset()
    return jsonify([user.to_dict(dataset.server_info()) for user in dataset.users]), 200


@api_bp.route("/users/<int:user_id>", methods=["GET"])
def get_user(user_id: int) -> tuple[Response, int]:
    """Get a single user by ID, or 404 with "User not found"."""
    dataset = get_dataset()
    user = dataset.find_user(user_id)
    if user is None:
        logger.warning(f"User {user_id} not found")
        return not_found("User not found")

    return jsonify(user.to_dict(dataset.server_info())), 200


@api_bp.route("/performance", methods=["GET"])
def performance() -> tuple[Response, int]:
    """
    Run the fixed summation benchmark.

    Only the summation loop is timed; JSON encoding and HTTP overhead
    are excluded from ``processing_time`` (microseconds).
    """
    dataset = get_dataset()

    start = time.perf_counter_ns()
    result = wrapping_sum()
    elapsed_ns = time.perf_counter_ns() - start

    return jsonify({
        "language": dataset.language,
        "server": dataset.server_name,
        "timestamp": utc_now_iso(),
        "result": result,
        "processing_time": elapsed_ns // 1000,
        "concurrency": CONCURRENCY_DESCRIPTION,
        "threads": f"{cpu_count()}x logical CPUs",
    }), 200


@api_bp.route("/metrics", methods=["GET"])
def metrics_endpoint() -> Response:
    """Expose request counts, latencies and uptime in Prometheus text format."""
    dataset = get_dataset()
    body, content_type = metrics.render(
        dataset.server_name, dataset.language, dataset.uptime_seconds(),
    )
    return Response(body, mimetype=content_type)
