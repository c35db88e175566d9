from __future__ import annotations


class AuthorizationError(Exception):
    """Base for failures of an authorization request.

    Each subclass fixes the HTTP status and the label used in the
    plain-text error body (``"<label>: <message>"``).  New failure kinds
    are added as subclasses; the dispatcher's shape does not change.
    """

    status_code: int = 400
    label: str = "Authorization error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def render(self) -> str:
        return f"{self.label}: {self.message}"


class InvalidInput(AuthorizationError):
    """Client-correctable defect in the request (400)."""

    status_code = 400
    label = "Input error"


class TokenIssuanceFailed(AuthorizationError):
    """The token issuer raised while minting token material (500)."""

    status_code = 500
    label = "Issuer error"


class AuthenticationFailed(Exception):
    """A bearer credential was presented but the validator rejected it.

    Deliberately not an AuthorizationError: the resource gate and the
    authorization endpoint fail in different ways (401 vs 400).
    """

    def __init__(self, message: str = "bearer credential rejected") -> None:
        super().__init__(message)
        self.message = message
