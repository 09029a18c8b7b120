"""HTTP tests for service info, health and error rendering."""

import pytest

pytestmark = pytest.mark.api


def test_root_reports_service(client):
    body = client.get("/").json()

    assert body["service"] == "Restaurant Order System"
    assert body["docs"] == "/docs"


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy", "service": "restaurant-api"}


def test_unknown_route_uses_message_shape(client):
    response = client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


def test_401_advertises_bearer(client):
    response = client.get("/api/orders")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
