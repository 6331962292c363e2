"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from propsmith.placeholders import PlaceholderResolver


@pytest.fixture
def resolver() -> PlaceholderResolver:
    """Lenient ${...} resolver with ':' defaults."""
    return PlaceholderResolver("${", "}", ":", True)


@pytest.fixture
def strict_resolver() -> PlaceholderResolver:
    """Strict ${...} resolver with ':' defaults."""
    return PlaceholderResolver("${", "}", ":", False)


@pytest.fixture
def properties() -> dict:
    """A small set of interdependent properties."""
    return {
        "host": "localhost",
        "port": "8080",
        "base_url": "http://${host}:${port}",
        "api_url": "${base_url}/api",
        "env": "prod",
        "db.prod": "postgres://prod",
        "db.dev": "sqlite://dev",
    }


@pytest.fixture
def env_file(tmp_path: Path) -> Path:
    """Create a .env file for testing."""
    path = tmp_path / ".env"
    path.write_text(
        "HOST=filehost\n"
        "PORT=9090\n"
        "URL=http://${HOST}:${PORT}\n"
    )
    return path
