from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Wire values accepted for response_type.  Both the lowercase OAuth
# spelling and the capitalized variant name decode to the same mode.
_RESPONSE_TYPE_ALIASES = {
    "code": "code",
    "Code": "code",
    "token": "token",
    "Token": "token",
}


class ResponseMode(str, Enum):
    """Grant shape requested by the client."""

    CODE = "code"
    TOKEN = "token"


class AuthorizationRequest(BaseModel):
    """One inbound authorization request, decoded from form or JSON input.

    Only per-field validation happens here.  "code without redirect_uri"
    parses fine and is rejected later by the dispatcher.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    response_mode: ResponseMode = Field(alias="response_type")
    scope: str | None = None
    redirect_uri: str | None = None

    @field_validator("response_mode", mode="before")
    @classmethod
    def _normalize_alias(cls, value: object) -> object:
        if isinstance(value, str):
            return _RESPONSE_TYPE_ALIASES.get(value, value)
        return value


@dataclass(frozen=True, slots=True)
class IssuedTokenMaterial:
    access_token: str
    refresh_token: str | None = None


@dataclass(frozen=True, slots=True)
class RedirectOutcome:
    """Code-mode result: send the client to ``location`` with a 302."""

    location: str


class TokenBody(BaseModel):
    """Token-mode result, serialized as the 200 JSON body.

    Absent optional fields are dropped from the JSON rather than emitted
    as null; use ``to_json_dict()`` when rendering.
    """

    model_config = ConfigDict(frozen=True)

    token_type: str
    access_token: str
    refresh_token: str | None = None
    scope: str | None = None

    def to_json_dict(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True)


AuthorizationOutcome = RedirectOutcome | TokenBody
