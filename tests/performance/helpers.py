"""
Helper utilities for Locust performance scenarios.

Provides the building blocks every Locust user class relies on: safe
JSON parsing, in-band response validation, and a tally of which backend
instance answered each request so a run against a load balancer reports
how traffic was spread.

Key Concepts Demonstrated:
- Reusable validation helpers that wrap Locust's ``catch_response`` protocol
- Attributing each response to a backend via the ``X-Server-Name`` header
"""

from __future__ import annotations

from collections import Counter
from typing import Any

from locust.clients import HttpSession

# Requests served per backend instance over the whole run.
BACKEND_HITS: Counter[str] = Counter()


def _safe_json(response: Any) -> Any:
    """
    Return the parsed JSON body, or ``None`` if parsing fails.

    Load balancers may answer with non-JSON bodies (e.g. a 502 page when
    every backend is down). Using this wrapper prevents ``ValueError`` from
    propagating into task methods where it would abort the virtual user.
    """
    try:
        return response.json()
    except ValueError:
        return None


def record_backend(response: Any) -> str | None:
    """Count the backend that served ``response`` and return its name."""
    backend = response.headers.get("X-Server-Name")
    if backend:
        BACKEND_HITS[backend] += 1
    return backend


def get_json(
    client: HttpSession,
    path: str,
    *,
    name: str | None = None,
    expected_status: int = 200,
) -> Any:
    """
    GET ``path`` and mark the request failed unless it matches expectations.

    Args:
        client: The Locust HTTP session.
        path: Request path, e.g. ``"/posts/1"``.
        name: Stats bucket name; defaults to ``path``.
        expected_status: Status code that counts as success.

    Returns:
        The parsed JSON body, or ``None`` when the request failed.
    """
    with client.get(path, name=name or path, catch_response=True) as response:
        record_backend(response)
        if response.status_code != expected_status:
            response.failure(f"Expected {expected_status}, got {response.status_code}")
            return None

        data = _safe_json(response)
        if data is None:
            response.failure("Response body is not JSON")
            return None

        response.success()
        return data


def distribution_summary() -> list[str]:
    """Format per-backend request counts and shares, busiest first."""
    total = sum(BACKEND_HITS.values())
    if total == 0:
        return ["No backend responses recorded"]

    lines = [f"{'Backend':<28}{'Requests':>10}{'Share':>10}"]
    for backend, hits in BACKEND_HITS.most_common():
        lines.append(f"{backend:<28}{hits:>10}{hits / total:>10.1%}")
    return lines
