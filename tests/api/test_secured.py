"""Bearer gate in front of /secured.

The default validator admits every credential; a rejecting validator is
swapped in to exercise the 401 path the gate must support.
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from authz_service.main import app
from authz_service.services.credential_validator import (
    StaticTokenValidator,
    get_credential_validator,
)
from tests.conftest import RecordingValidator


def test_secured_admits_any_bearer_by_default(client: TestClient) -> None:
    resp = client.get("/secured/", headers={"Authorization": "Bearer anything-goes"})
    assert resp.status_code == 200
    assert resp.text == "Hello world!"


def test_secured_passes_credential_to_validator(client: TestClient) -> None:
    validator = RecordingValidator()
    app.dependency_overrides[get_credential_validator] = lambda: validator
    client.get("/secured/", headers={"Authorization": "Bearer cred-123"})
    assert validator.seen == ["cred-123"]


def test_secured_rejects_missing_header_before_gate(client: TestClient) -> None:
    validator = RecordingValidator()
    app.dependency_overrides[get_credential_validator] = lambda: validator
    resp = client.get("/secured/")
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"
    assert validator.seen == []


def test_secured_rejects_non_bearer_scheme(client: TestClient) -> None:
    resp = client.get("/secured/", headers={"Authorization": "Basic dXNlcjpwYXNz"})
    assert resp.status_code == 401


def test_secured_rejects_when_validator_says_no(client: TestClient) -> None:
    app.dependency_overrides[get_credential_validator] = lambda: RecordingValidator(
        verdict=False
    )
    resp = client.get("/secured/", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401
    assert resp.text == "Authentication error: bearer credential rejected"
    assert resp.headers["www-authenticate"] == 'Bearer error="invalid_token"'


def test_secured_with_static_trust_store(client: TestClient) -> None:
    app.dependency_overrides[get_credential_validator] = lambda: StaticTokenValidator(
        {"good-token"}
    )
    ok = client.get("/secured/", headers={"Authorization": "Bearer good-token"})
    bad = client.get("/secured/", headers={"Authorization": "Bearer bad-token"})
    assert ok.status_code == 200
    assert bad.status_code == 401


def test_issued_token_reaches_secured_resource(client: TestClient) -> None:
    """End to end: implicit grant, then use the token on the resource."""
    issued = client.post("/auth/login", json={"response_type": "token"}).json()
    resp = client.get(
        "/secured/",
        headers={"Authorization": f"{issued['token_type']} {issued['access_token']}"},
    )
    assert resp.status_code == 200


def test_unprotected_hello_needs_no_credential(client: TestClient) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.text == "Hello world!"
