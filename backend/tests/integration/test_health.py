"""Integration tests for the health endpoint."""

from __future__ import annotations


def test_health_endpoint(client) -> None:
    """Health check should report the app and database as up."""

    response = client.get("/api/v1/health")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload == {"status": "ok", "db": "ok", "version": "dev"}
    assert "X-Request-ID" in response.headers
