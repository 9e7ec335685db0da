"""
Shared pytest fixtures for the mock API test suite.

This module contains fixtures that are shared across all test modules.
Fixtures follow the Arrange-Act-Assert (AAA) pattern and ensure test
isolation by handing out fresh clients, controllable clocks, and
throwaway datasets for each test.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Fixture dependencies
- Test data factories
- Swapping shared read-only state on a dedicated app instance
- Test client creation
"""

import os
from typing import Any, Callable

import pytest
from faker import Faker
from flask import Flask

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from mock_api import EXTENSION_KEY, create_app
from mock_api.models import MockDataset, Post, User


# Initialize Faker for generating test data
fake = Faker()


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """
    Create application instance for the test session.

    The dataset is read-only, so one app can safely serve every test
    that only needs the seed data.

    Yields:
        Flask application instance configured for testing.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for making HTTP requests.

    Args:
        app: Flask application fixture.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def dataset(app) -> MockDataset:
    """Return the dataset the session app serves."""
    return app.extensions[EXTENSION_KEY]


# -----------------------------------------------------------------------------
# Clock and Dataset Factory Fixtures
# -----------------------------------------------------------------------------

class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a clock that only moves when the test says so."""
    return FakeClock()


@pytest.fixture
def dataset_factory() -> Callable[..., MockDataset]:
    """
    Factory fixture for building MockDataset instances.

    Posts and users default to Faker-generated records with sequential
    ids, so tests can focus on the field they care about.

    Example:
        def test_something(dataset_factory):
            dataset = dataset_factory(posts=[], users=[])
            assert dataset.find_post(1) is None
    """

    def _create_dataset(
        posts: list[Post] | None = None,
        users: list[User] | None = None,
        server_name: str = "factory-mock-api",
        port: int = 4100,
        **kwargs: Any,
    ) -> MockDataset:
        if users is None:
            users = [
                User(id=i, name=fake.name(), email=fake.email())
                for i in range(1, 4)
            ]
        if posts is None:
            posts = [
                Post(
                    id=i,
                    title=fake.sentence(nb_words=4),
                    body=fake.paragraph(),
                    user_id=users[(i - 1) % len(users)].id if users else 1,
                )
                for i in range(1, 6)
            ]
        return MockDataset(
            server_name=server_name,
            port=port,
            posts=tuple(posts),
            users=tuple(users),
            **kwargs,
        )

    return _create_dataset


@pytest.fixture
def app_with_dataset() -> Callable[[MockDataset], Flask]:
    """
    Build a fresh app that serves a custom dataset.

    The session app is left untouched; each call returns a new
    application whose shared state is the given dataset.
    """

    def _create(dataset: MockDataset) -> Flask:
        application = create_app("testing")
        application.extensions[EXTENSION_KEY] = dataset
        return application

    return _create
