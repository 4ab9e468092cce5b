"""
Tests for the health check endpoint.
"""

import pytest
from django.db import DatabaseError

from notifications.gateway import PushGateway
from notifications.wiring import get_services


@pytest.fixture(autouse=True)
def fresh_services():
    get_services.cache_clear()
    yield
    get_services.cache_clear()


class TestHealthCheck:
    url = "/health/"

    def test_degraded_push_is_still_healthy(self, client, db, settings):
        settings.FIREBASE_CREDENTIALS_PATH = ""

        response = client.get(self.url)

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "database": "connected",
            "cache": "connected",
            "push": "degraded",
        }

    def test_push_available(self, client, db, mocker):
        services = mocker.Mock(gateway=PushGateway(client=mocker.Mock()))
        mocker.patch("notifications.wiring.get_services", return_value=services)

        response = client.get(self.url)

        assert response.json()["push"] == "available"

    def test_database_down(self, client, db, mocker):
        connection = mocker.patch("core.views.connection")
        connection.cursor.side_effect = DatabaseError("unreachable")

        response = client.get(self.url)

        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"
        assert response.json()["status"] == "unhealthy"
