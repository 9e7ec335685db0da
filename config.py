"""
Application configuration module.

This module defines configuration classes for the mock API service in
different environments (development, testing, production). Values are
loaded from environment variables with sensible defaults so that several
instances of the same image can run side by side behind a load balancer,
each with its own ``SERVER_NAME`` and ``PORT``.
"""

import os

# Default identity for a single backend instance.
DEFAULT_SERVER_NAME = "python-mock-api-4"
DEFAULT_PORT = 3004

# Largest value an unsigned 16-bit port can hold.
MAX_PORT = 65535


def parse_port(raw: str | None, default: int = DEFAULT_PORT) -> int:
    """
    Parse a fixed listening port as an unsigned 16-bit integer.

    Port 0 is rejected: it would bind an ephemeral port while the
    instance keeps reporting "0" in its server info.

    Args:
        raw: Raw value, usually taken from the ``PORT`` environment variable.
        default: Port returned when ``raw`` is missing, not a number, or
                 outside the 1-65535 range.

    Returns:
        The parsed port, or ``default``.
    """
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    if not 1 <= value <= MAX_PORT:
        return default
    return value


class Config:
    """Base configuration with default settings."""

    # Flask reserves SERVER_NAME for host matching, so the instance label
    # lives under its own key.
    MOCK_SERVER_NAME: str = os.environ.get("SERVER_NAME", DEFAULT_SERVER_NAME)
    MOCK_PORT: int = parse_port(os.environ.get("PORT"))
    MOCK_LANGUAGE: str = "Python"


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Testing environment configuration."""

    DEBUG: bool = True
    TESTING: bool = True

    # Fixed identity so assertions do not depend on the caller's shell.
    MOCK_SERVER_NAME: str = os.environ.get("TEST_SERVER_NAME", "python-mock-api-test")
    MOCK_PORT: int = parse_port(os.environ.get("TEST_PORT"), 3999)


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG: bool = False
    TESTING: bool = False


# Configuration mapping for easy access
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (development, testing, production).
             If None, uses FLASK_ENV environment variable.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
