from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import ValidationError

from authz_service.core.metrics import AUTHORIZATION_REQUESTS
from authz_service.models.authorization import (
    AuthorizationRequest,
    RedirectOutcome,
    TokenBody,
)
from authz_service.models.errors import AuthorizationError
from authz_service.services.dispatcher import dispatch
from authz_service.services.token_issuer import TokenIssuer, get_token_issuer

# ---------------------------------------------------------------------------
# Authorization endpoint
#
#   POST /auth/login   response_type=code  → 302 to redirect_uri with tokens
#                      response_type=token → 200 JSON token body
#
# The body is form-encoded or JSON.  Both decode into the same
# AuthorizationRequest and go through the same dispatcher.
# ---------------------------------------------------------------------------

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authorization"])

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"

# Bearer tokens must never be stored by intermediaries
NO_STORE_HEADERS = {"Cache-Control": "no-store"}


def _media_type(request: Request) -> str:
    raw = request.headers.get("content-type", "")
    return raw.split(";", 1)[0].strip().lower()


async def _read_fields(request: Request) -> dict[str, Any]:
    media_type = _media_type(request)

    if media_type == FORM_CONTENT_TYPE:
        form = await request.form()
        return {key: value for key, value in form.items()}

    if media_type == JSON_CONTENT_TYPE:
        try:
            payload = await request.json()
        except ValueError:
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST, "Malformed JSON body"
            ) from None
        if not isinstance(payload, dict):
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST, "Malformed JSON body"
            )
        return payload

    raise HTTPException(
        status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
        f"Content-Type must be {FORM_CONTENT_TYPE} or {JSON_CONTENT_TYPE}",
    )


async def decode_authorization_request(request: Request) -> AuthorizationRequest:
    """Decode the body by content type into one AuthorizationRequest.

    An unknown or missing response_type is a request-format error (422),
    not an authorization failure.
    """
    fields = await _read_fields(request)
    try:
        return AuthorizationRequest.model_validate(fields)
    except ValidationError as e:
        logger.warning("Undecodable authorization request: %d error(s)", e.error_count())
        raise RequestValidationError(e.errors(include_url=False)) from None


def render_redirect(outcome: RedirectOutcome) -> Response:
    return PlainTextResponse(
        f"Redirecting to {outcome.location}",
        status_code=status.HTTP_302_FOUND,
        headers={"Location": outcome.location},
    )


def render_token_body(outcome: TokenBody) -> Response:
    return JSONResponse(outcome.to_json_dict(), headers=NO_STORE_HEADERS)


@router.post(
    "/login",
    responses={
        302: {"description": "code: redirect to redirect_uri with tokens in the query"},
        400: {"description": "Input error"},
        415: {"description": "Unsupported Content-Type"},
    },
)
def authorize(
    auth_request: Annotated[AuthorizationRequest, Depends(decode_authorization_request)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> Response:
    response_type = auth_request.response_mode.value
    logger.info(
        "Authorization request  response_type=%s scope=%s redirect_uri=%s",
        response_type,
        auth_request.scope,
        auth_request.redirect_uri,
        extra={"response_type": response_type},
    )

    try:
        outcome = dispatch(auth_request, issuer)
    except AuthorizationError as e:
        AUTHORIZATION_REQUESTS.labels(
            response_type=response_type, result=type(e).__name__
        ).inc()
        raise

    if isinstance(outcome, RedirectOutcome):
        AUTHORIZATION_REQUESTS.labels(response_type=response_type, result="redirect").inc()
        # The location carries tokens; log only where we are sending the client
        logger.info("Redirecting client  redirect_uri=%s", auth_request.redirect_uri)
        return render_redirect(outcome)

    AUTHORIZATION_REQUESTS.labels(response_type=response_type, result="body").inc()
    logger.info("Issued token body  scope=%s", outcome.scope)
    return render_token_body(outcome)
