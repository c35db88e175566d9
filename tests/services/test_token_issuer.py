from __future__ import annotations

from authz_service.models.authorization import IssuedTokenMaterial
from authz_service.services.token_issuer import (
    PLACEHOLDER_ACCESS_TOKEN,
    PlaceholderTokenIssuer,
    TokenIssuer,
    get_token_issuer,
)


def test_placeholder_issues_constant_without_refresh() -> None:
    material = PlaceholderTokenIssuer().issue("read")
    assert material == IssuedTokenMaterial(access_token=PLACEHOLDER_ACCESS_TOKEN)
    assert material.refresh_token is None


def test_placeholder_ignores_scope() -> None:
    issuer = PlaceholderTokenIssuer()
    assert issuer.issue(None) == issuer.issue("admin")


def test_default_issuer_is_placeholder() -> None:
    issuer = get_token_issuer()
    assert isinstance(issuer, TokenIssuer)
    assert isinstance(issuer, PlaceholderTokenIssuer)
