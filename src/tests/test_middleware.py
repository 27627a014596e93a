import inspect
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from api.api_v1.api import api_router
from api.api_v1.middleware import get_client_identifier
from core.rate_limiter import RateLimiter


def test_preflight_answered_immediately(client: TestClient):
    response = client.options(
        "/api/user/signup", headers={"Origin": "http://localhost:5173"}
    )

    assert response.status_code == 204
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert "PATCH" in response.headers["access-control-allow-methods"]
    assert response.headers["access-control-allow-headers"] == "Content-Type"


def test_unknown_origin_gets_first_allowed_origin(client: TestClient):
    response = client.get("/api/health", headers={"Origin": "https://evil.example"})

    assert response.headers["access-control-allow-origin"] == "https://a11.fund"


def test_security_headers_on_errors(client: TestClient):
    response = client.get("/api/user/0x123")

    assert response.status_code == 400
    assert response.headers["content-type"].startswith("application/json")
    assert response.headers["x-frame-options"] == "DENY"
    assert "max-age" in response.headers["strict-transport-security"]
    assert response.headers["content-security-policy"].startswith("default-src 'none'")


def test_unknown_route_and_method(client: TestClient):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}

    response = client.put("/api/users")
    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


def test_unexpected_error_is_generic(client: TestClient):
    with patch(
        "services.portfolio_service.PortfolioService.get_market_data",
        side_effect=RuntimeError("secret connection string"),
    ):
        response = client.get("/api/market-data")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert "secret" not in response.text
    assert response.headers["x-content-type-options"] == "nosniff"


def test_database_error_is_generic(client: TestClient):
    with patch(
        "services.portfolio_service.PortfolioService.get_market_data",
        side_effect=OperationalError("SELECT 1", {}, Exception("db down")),
    ):
        response = client.get("/api/market-data")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_101st_request_is_rate_limited(client: TestClient):
    headers = {"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}
    for _ in range(100):
        response = client.get("/api/market-data", headers=headers)
        assert response.status_code == 200

    assert response.headers["x-ratelimit-limit"] == "100"
    assert response.headers["x-ratelimit-remaining"] == "0"

    response = client.get("/api/market-data", headers=headers)

    assert response.status_code == 429
    assert response.json()["error"] == "Too many requests"
    assert response.headers["retry-after"].isdigit()
    assert 1 <= int(response.headers["retry-after"]) <= 60
    assert response.json()["message"] == (
        f"Rate limit exceeded. Try again in {response.headers['retry-after']} seconds"
    )
    assert response.headers["x-ratelimit-remaining"] == "0"
    assert "x-ratelimit-reset" in response.headers

    # other clients and the health check are unaffected
    other = client.get("/api/market-data", headers={"X-Forwarded-For": "198.51.100.2"})
    assert other.status_code == 200
    assert client.get("/api/health", headers=headers).status_code == 200


def test_rate_limiter_is_injectable(client: TestClient):
    assert isinstance(client.app.state.rate_limiter, RateLimiter)


def test_client_identifier_precedence():
    class FakeClient:
        host = "127.0.0.1"

    class FakeRequest:
        def __init__(self, headers, client=FakeClient()):
            self.headers = headers
            self.client = client

    assert get_client_identifier(
        FakeRequest({"cf-connecting-ip": "1.1.1.1", "x-forwarded-for": "2.2.2.2"})
    ) == "1.1.1.1"
    assert get_client_identifier(FakeRequest({"x-forwarded-for": "2.2.2.2, 3.3.3.3"})) == "2.2.2.2"
    assert get_client_identifier(FakeRequest({"x-real-ip": "4.4.4.4"})) == "4.4.4.4"
    assert get_client_identifier(FakeRequest({})) == "127.0.0.1"
    assert get_client_identifier(FakeRequest({}, client=None)) == "unknown"


def test_database_routes_run_in_threadpool():
    # sync handlers are dispatched to the threadpool instead of the event loop
    for route in api_router.routes:
        if route.path == "/health":
            continue
        assert not inspect.iscoroutinefunction(route.endpoint), route.path
