from __future__ import annotations

import hmac
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from authz_service.core.config import SETTINGS


@runtime_checkable
class CredentialValidator(Protocol):
    def validate(self, credential: str) -> bool:
        """Return True to admit the request, False to reject it."""
        ...


class AcceptAllValidator:
    """Admits every well-formed bearer credential.

    Used when no trust store is configured.
    """

    def validate(self, credential: str) -> bool:
        return True


class StaticTokenValidator:
    """Admits only credentials from a fixed allow-list."""

    def __init__(self, trusted: Iterable[str]) -> None:
        self._trusted = frozenset(trusted)

    def validate(self, credential: str) -> bool:
        # Compare against every entry so timing doesn't reveal a partial match
        matched = False
        for candidate in self._trusted:
            if hmac.compare_digest(candidate.encode(), credential.encode()):
                matched = True
        return matched


def build_validator(trusted: Iterable[str]) -> CredentialValidator:
    trusted = frozenset(trusted)
    if not trusted:
        return AcceptAllValidator()
    return StaticTokenValidator(trusted)


credential_validator: CredentialValidator = build_validator(
    SETTINGS.trusted_bearer_tokens
)


def get_credential_validator() -> CredentialValidator:
    return credential_validator
