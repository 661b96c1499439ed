"""Integration tests for JWT authentication.

Validates:
  - /health is public (plain Django view, no DRF).
  - Order endpoints return 401 without a token or with a bad one.
  - A token issued by the SimpleJWT endpoint is accepted.
"""

import pytest

pytestmark = pytest.mark.integration

ORDERS_URL = "/api/v1/orders/"


class TestPublicEndpoints:
    """Health check must remain accessible without credentials."""

    def test_health_is_public(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"


class TestProtectedEndpoints:
    """All DRF endpoints require a valid JWT by default (Fail Closed)."""

    def test_no_token_returns_401(self, api_client):
        response = api_client.get(ORDERS_URL)
        assert response.status_code == 401

    def test_post_without_token_returns_401(self, api_client):
        response = api_client.post(ORDERS_URL, {}, format="json")
        assert response.status_code == 401

    def test_invalid_token_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer invalid.token.here")
        response = api_client.get(ORDERS_URL)
        assert response.status_code == 401

    def test_malformed_auth_header_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Token some-token")
        response = api_client.get(ORDERS_URL)
        assert response.status_code == 401

    def test_401_includes_www_authenticate_header(self, api_client):
        response = api_client.get(ORDERS_URL)
        assert response.status_code == 401
        assert "Bearer" in response.get("WWW-Authenticate", "")


class TestTokenFlow:
    def test_issued_token_grants_access(self, api_client, buyer):
        token_response = api_client.post(
            "/api/v1/auth/token/",
            {"username": "buyer", "password": "testpass123"},
            format="json",
        )
        assert token_response.status_code == 200

        api_client.credentials(
            HTTP_AUTHORIZATION=f"Bearer {token_response.json()['access']}"
        )
        response = api_client.get(ORDERS_URL)
        assert response.status_code == 200
