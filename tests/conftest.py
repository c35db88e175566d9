from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from authz_service.main import app
from authz_service.models.authorization import IssuedTokenMaterial


class FixedTokenIssuer:
    """Issuer returning preset material, so tests control refresh tokens."""

    def __init__(
        self, access_token: str = "access_token", refresh_token: str | None = None
    ) -> None:
        self.material = IssuedTokenMaterial(
            access_token=access_token, refresh_token=refresh_token
        )
        self.scopes_seen: list[str | None] = []

    def issue(self, scope: str | None) -> IssuedTokenMaterial:
        self.scopes_seen.append(scope)
        return self.material


class FailingTokenIssuer:
    def issue(self, scope: str | None) -> IssuedTokenMaterial:
        raise RuntimeError("signing backend unavailable")


class RecordingValidator:
    """Validator with a fixed verdict that remembers what it was shown."""

    def __init__(self, verdict: bool = True) -> None:
        self.verdict = verdict
        self.seen: list[str] = []

    def validate(self, credential: str) -> bool:
        self.seen.append(credential)
        return self.verdict


@pytest.fixture(autouse=True)
def reset_dependency_overrides() -> Iterator[None]:
    """Undo any issuer/validator swaps a test installed."""
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client() -> TestClient:
    # Redirects are assertions here, not something to follow
    return TestClient(app, follow_redirects=False)
