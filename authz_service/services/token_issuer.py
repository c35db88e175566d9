"""Token issuance capability used by the authorization dispatcher.

The dispatcher only depends on the ``TokenIssuer`` protocol.  The shipped
``PlaceholderTokenIssuer`` hands out a fixed opaque value: there is no
signing, expiry or persistence behind it.  Swap in a real issuer through
``get_token_issuer`` (or ``app.dependency_overrides`` in tests).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from authz_service.models.authorization import IssuedTokenMaterial

PLACEHOLDER_ACCESS_TOKEN = "access_token"


@runtime_checkable
class TokenIssuer(Protocol):
    def issue(self, scope: str | None) -> IssuedTokenMaterial:
        """Mint token material.  ``scope`` is a hint and may be ignored."""
        ...


class PlaceholderTokenIssuer:
    """Issues the constant access token and never a refresh token."""

    def issue(self, scope: str | None) -> IssuedTokenMaterial:
        return IssuedTokenMaterial(access_token=PLACEHOLDER_ACCESS_TOKEN)


# Stateless, so one instance serves every request
token_issuer: TokenIssuer = PlaceholderTokenIssuer()


def get_token_issuer() -> TokenIssuer:
    return token_issuer
