"""
Tests for health endpoints and response middleware.
"""

from shared.config.settings import settings
from store_api.core.cors import cors_origins


class TestHealth:

    def test_health_check(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_detailed_health_check(self, client):
        response = client.get("/api/health/detailed")

        assert response.status_code == 200
        body = response.json()
        assert body["dependencies"]["database"]["status"] == "healthy"
        assert body["cms"] == {"configured": False}


class TestMiddlewares:

    def test_security_headers(self, client):
        response = client.get("/api/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_correlation_id_is_echoed(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_missing_correlation_id_is_generated(self, client):
        response = client.get("/api/health")

        assert len(response.headers["X-Request-ID"]) == 32

    def test_malformed_correlation_id_is_replaced(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "bad id with spaces"})

        assert response.headers["X-Request-ID"] != "bad id with spaces"

    def test_non_json_body_is_415(self, client, staff_headers):
        response = client.post(
            "/api/store/categories",
            content="name=Pizzas",
            headers={**staff_headers, "Content-Type": "application/x-www-form-urlencoded"},
        )

        assert response.status_code == 415

    def test_unknown_route_uses_error_body(self, client):
        response = client.get("/api/nowhere")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}


class TestCors:

    def test_dev_server_preflight_is_allowed(self, client):
        response = client.options(
            "/api/store/products",
            headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "GET"},
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_configured_origins_replace_the_dev_servers(self, monkeypatch):
        monkeypatch.setattr(settings, "allowed_origins", "https://bistro.example/, ,https://admin.bistro.example")

        assert cors_origins() == ["https://bistro.example", "https://admin.bistro.example"]

    def test_blank_setting_falls_back_to_dev_servers(self, monkeypatch):
        monkeypatch.setattr(settings, "allowed_origins", "")

        assert "http://127.0.0.1:5173" in cors_origins()
