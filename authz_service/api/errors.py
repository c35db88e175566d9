from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from authz_service.models.errors import AuthenticationFailed, AuthorizationError

logger = logging.getLogger(__name__)


async def authorization_error_handler(
    _request: Request, exc: AuthorizationError
) -> PlainTextResponse:
    if exc.status_code >= 500:
        logger.error("Authorization failed: %s", exc.render(), exc_info=exc.__cause__)
    else:
        logger.warning("Authorization rejected: %s", exc.render())
    return PlainTextResponse(exc.render(), status_code=exc.status_code)


async def authentication_failed_handler(
    _request: Request, exc: AuthenticationFailed
) -> PlainTextResponse:
    return PlainTextResponse(
        f"Authentication error: {exc.message}",
        status_code=401,
        headers={"WWW-Authenticate": 'Bearer error="invalid_token"'},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthorizationError, authorization_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(AuthenticationFailed, authentication_failed_handler)  # type: ignore[arg-type]
