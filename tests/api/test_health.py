"""Tests for the health check endpoints."""

import pytest

from shorturl.api.dependencies import get_store
from tests.utils import FailingStore


@pytest.mark.api
class TestHealthEndpoints:

    def test_health_reports_store(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["environment"] == "testing"
        assert body["components"]["memory"]["status"] == "healthy"

    def test_health_degraded_when_store_down(self, client, test_app):
        test_app.dependency_overrides[get_store] = lambda: FailingStore()

        body = client.get("/api/health").json()

        assert body["status"] == "degraded"
        assert body["components"]["failing"]["status"] == "unhealthy"

    def test_readiness(self, client):
        body = client.get("/api/health/ready").json()
        assert body == {"ready": True, "components": {"api": True, "store": True}}

    def test_readiness_when_store_down(self, client, test_app):
        test_app.dependency_overrides[get_store] = lambda: FailingStore()

        body = client.get("/api/health/ready").json()

        assert body["ready"] is False
        assert body["components"]["store"] is False

    def test_liveness(self, client):
        assert client.get("/api/health/live").json() == {"alive": True}
