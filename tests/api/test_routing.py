from __future__ import annotations

from fastapi.testclient import TestClient

# ---- 404: undefined routes ----


def test_undefined_route_returns_404(client: TestClient) -> None:
    resp = client.get("/nonexistent")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Not Found"}


def test_undefined_secured_route_returns_404(client: TestClient) -> None:
    resp = client.get("/secured/missing", headers={"Authorization": "Bearer x"})
    assert resp.status_code == 404


# ---- 405: wrong HTTP method on existing routes ----


def test_put_health_returns_405(client: TestClient) -> None:
    resp = client.put("/health", json={"status": "bad"})
    assert resp.status_code == 405


def test_get_echo_returns_405(client: TestClient) -> None:
    resp = client.get("/echo")
    assert resp.status_code == 405


# ---- CORS ----


def test_cors_preflight_is_permissive(client: TestClient) -> None:
    resp = client.options(
        "/auth/login",
        headers={
            "Origin": "https://client.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"
