"""
Data model for the mock API service.

This module defines the immutable records served by the API (posts and
users), the per-response server metadata attached to them, and the
``MockDataset`` that bundles the seed data with the process identity.
A dataset is built once when the application is created and is shared
read-only by every request thread afterwards.
"""

import os
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

# Unsigned 64-bit wraparound for the performance summation.
U64_MASK = 0xFFFFFFFFFFFFFFFF

# Upper bound (exclusive) of the performance summation loop.
SUMMATION_LIMIT = 100_000


@dataclass(frozen=True)
class ServerInfo:
    """
    Identifying metadata stamped on every response.

    Attributes:
        language: Implementation language of this backend.
        server: Configured instance name.
        port: Listening port, as a string.
        timestamp: ISO-8601 UTC time the response was built.
        uptime: Seconds since process start, e.g. ``"12.345s"``.
    """

    language: str
    server: str
    port: str
    timestamp: str
    uptime: str

    def to_dict(self) -> dict[str, str]:
        """Convert the server info to a dictionary representation."""
        return {
            "language": self.language,
            "server": self.server,
            "port": self.port,
            "timestamp": self.timestamp,
            "uptime": self.uptime,
        }


@dataclass(frozen=True)
class Post:
    """
    A blog post.

    ``user_id`` refers to a :class:`User` id; the seed data keeps this
    consistent, nothing else enforces it.
    """

    id: int
    title: str
    body: str
    user_id: int

    def to_dict(self, server_info: ServerInfo) -> dict[str, Any]:
        """Convert the post to its JSON shape with the given server info."""
        return {
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "userId": self.user_id,
            "server_info": server_info.to_dict(),
        }


@dataclass(frozen=True)
class User:
    """A user account."""

    id: int
    name: str
    email: str

    def to_dict(self, server_info: ServerInfo) -> dict[str, Any]:
        """Convert the user to its JSON shape with the given server info."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "server_info": server_info.to_dict(),
        }


SEED_POSTS: tuple[Post, ...] = (
    Post(id=1, title="Post 1", body="This is post 1", user_id=1),
    Post(id=2, title="Post 2", body="This is post 2", user_id=1),
    Post(id=3, title="Post 3", body="This is post 3", user_id=2),
)

SEED_USERS: tuple[User, ...] = (
    User(id=1, name="John Doe", email="john@example.com"),
    User(id=2, name="Jane Smith", email="jane@example.com"),
)


def _ensure_unique_ids(records: Iterable[Any], kind: str) -> None:
    """Raise ValueError if two records share an id."""
    seen: set[int] = set()
    for record in records:
        if record.id in seen:
            raise ValueError(f"Duplicate {kind} id: {record.id}")
        seen.add(record.id)


def utc_now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def format_uptime(seconds: float) -> str:
    """Format elapsed seconds with millisecond precision, e.g. ``"1.250s"``."""
    return f"{seconds:.3f}s"


@dataclass(frozen=True)
class MockDataset:
    """
    Read-only state shared by all request handlers.

    Attributes:
        server_name: Instance name reported in every response.
        port: Listening port reported in every response.
        language: Implementation language reported in every response.
        posts: Seed posts, in insertion order.
        users: Seed users, in insertion order.
        started_at: ``clock()`` reading taken when the dataset was built.
        clock: Monotonic clock used for uptime.
    """

    server_name: str
    port: int
    language: str = "Python"
    posts: tuple[Post, ...] = SEED_POSTS
    users: tuple[User, ...] = SEED_USERS
    clock: Callable[[], float] = field(default=time.monotonic, repr=False, compare=False)
    started_at: float = field(default=-1.0, compare=False)

    def __post_init__(self) -> None:
        # Frozen dataclass: normalise via object.__setattr__.
        object.__setattr__(self, "posts", tuple(self.posts))
        object.__setattr__(self, "users", tuple(self.users))
        if self.started_at < 0:
            object.__setattr__(self, "started_at", self.clock())
        _ensure_unique_ids(self.posts, "post")
        _ensure_unique_ids(self.users, "user")

    def uptime_seconds(self) -> float:
        """Return seconds elapsed since the dataset was built."""
        return max(0.0, self.clock() - self.started_at)

    def server_info(self) -> ServerInfo:
        """Build a ServerInfo for the current moment."""
        return ServerInfo(
            language=self.language,
            server=self.server_name,
            port=str(self.port),
            timestamp=utc_now_iso(),
            uptime=format_uptime(self.uptime_seconds()),
        )

    def find_post(self, post_id: int) -> Post | None:
        """Return the post with ``post_id``, or None."""
        return next((post for post in self.posts if post.id == post_id), None)

    def find_user(self, user_id: int) -> User | None:
        """Return the user with ``user_id``, or None."""
        return next((user for user in self.users if user.id == user_id), None)


def cpu_count() -> int:
    """Return the number of logical CPUs, or 1 if the platform cannot tell."""
    return os.cpu_count() or 1


def wrapping_sum(limit: int = SUMMATION_LIMIT) -> int:
    """
    Sum the integers ``0 .. limit - 1`` with unsigned 64-bit wraparound.

    For the default limit the result is 4999950000, which fits in 64 bits;
    the mask only matters for much larger limits.
    """
    result = 0
    for i in range(limit):
        result = (result + i) & U64_MASK
    return result
