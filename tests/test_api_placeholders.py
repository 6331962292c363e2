"""Tests for placeholder API endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from propsmith.api import routes
from propsmith.api.routes import router


def test_placeholder_routes_registered():
    """Test that placeholder routes are properly registered."""
    route_paths = [route.path for route in router.routes]

    assert "/placeholders/parse" in route_paths
    assert "/placeholders/resolve" in route_paths
    assert "/health" in route_paths


@pytest.fixture
def client():
    """Create a test client for the API."""
    app = FastAPI()
    app.include_router(router, prefix="/api")
    return TestClient(app)


class TestParseEndpoint:
    """Test the /api/placeholders/parse endpoint."""

    def test_parse_placeholders(self, client):
        """Test extracting placeholders and validation."""
        response = client.post(
            "/api/placeholders/parse",
            json={"text": "jdbc:${db:h2}://${host}", "separator": ":"},
        )

        assert response.status_code == 200
        data = response.json()
        assert [p["name"] for p in data["placeholders"]] == ["db", "host"]
        assert data["placeholders"][0]["default"] == "h2"
        assert data["validation"]["valid"] is True

    def test_parse_unterminated(self, client):
        """Test that unterminated placeholders are reported."""
        response = client.post("/api/placeholders/parse", json={"text": "x ${open"})

        assert response.status_code == 200
        data = response.json()
        assert data["placeholders"] == []
        assert data["validation"]["valid"] is False

    def test_parse_invalid_syntax_override(self, client):
        """Test that an empty suffix override is rejected."""
        response = client.post(
            "/api/placeholders/parse",
            json={"text": "x", "prefix": "${", "suffix": ""},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "invalid_config"


class TestResolveEndpoint:
    """Test the /api/placeholders/resolve endpoint."""

    def test_resolve(self, client):
        """Test resolving recursive placeholders."""
        response = client.post(
            "/api/placeholders/resolve",
            json={
                "text": "${url}",
                "properties": {"host": "localhost", "url": "http://${host}/"},
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["resolved"] == "http://localhost/"
        assert data["original"] == "${url}"
        assert data["unresolved"] == []

    def test_resolve_reports_unresolved(self, client):
        """Test that ignored placeholders are listed."""
        response = client.post(
            "/api/placeholders/resolve",
            json={"text": "${a}-${b}", "properties": {"a": "1"}, "ignore_unresolvable": True},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["resolved"] == "1-${b}"
        assert data["unresolved"] == ["${b}"]

    def test_resolve_strict(self, client):
        """Test strict mode returns 422."""
        response = client.post(
            "/api/placeholders/resolve",
            json={"text": "${missing}", "ignore_unresolvable": False},
        )

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error"] == "unresolvable_placeholder"
        assert detail["key"] == "missing"

    def test_resolve_circular(self, client):
        """Test circular references return 409."""
        response = client.post(
            "/api/placeholders/resolve",
            json={"text": "${a}", "properties": {"a": "${b}", "b": "${a}"}},
        )

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "circular_reference"

    def test_resolve_with_environment(self, client, monkeypatch):
        """Test environment fallback with request properties taking precedence."""
        monkeypatch.setenv("PROPSMITH_API_USER", "env-user")
        monkeypatch.setenv("PROPSMITH_API_ROLE", "env-role")

        response = client.post(
            "/api/placeholders/resolve",
            json={
                "text": "${PROPSMITH_API_USER}/${PROPSMITH_API_ROLE}",
                "properties": {"PROPSMITH_API_ROLE": "admin"},
                "include_environment": True,
            },
        )

        assert response.status_code == 200
        assert response.json()["resolved"] == "env-user/admin"

    def test_resolve_custom_markers(self, client):
        """Test per-request prefix and suffix."""
        response = client.post(
            "/api/placeholders/resolve",
            json={"text": "Hello {{name}}", "prefix": "{{", "suffix": "}}", "properties": {"name": "Ana"}},
        )

        assert response.status_code == 200
        assert response.json()["resolved"] == "Hello Ana"

    def test_resolve_max_depth(self, client, monkeypatch):
        """Test that nesting beyond the configured depth returns 422."""
        monkeypatch.setattr(routes.settings, "max_depth", 1)
        monkeypatch.setattr(routes, "_placeholder_resolver", None)

        response = client.post(
            "/api/placeholders/resolve",
            json={"text": "${a}", "properties": {"a": "${b}", "b": "${c}", "c": "end"}},
        )

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error"] == "max_depth_exceeded"
        assert detail["max_depth"] == 1

    def test_resolve_invalid_syntax_override(self, client):
        """Test that an empty prefix override is rejected."""
        response = client.post(
            "/api/placeholders/resolve",
            json={"text": "${a}", "prefix": "", "properties": {"a": "1"}},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "invalid_config"

    def test_resolve_null_separator_disables_defaults(self, client):
        """Test that an explicit null separator turns inline defaults off."""
        response = client.post(
            "/api/placeholders/resolve",
            json={"text": "${a:b}", "separator": None},
        )

        assert response.status_code == 200
        assert response.json()["resolved"] == "${a:b}"

    def test_resolve_omitted_separator_keeps_defaults(self, client):
        """Test that leaving the separator out keeps the configured one."""
        response = client.post("/api/placeholders/resolve", json={"text": "${a:b}"})

        assert response.status_code == 200
        assert response.json()["resolved"] == "b"
