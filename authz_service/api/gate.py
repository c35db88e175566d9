"""Bearer-credential gate for protected resources.

Two steps, deliberately split:

  1. ``bearer_credential``: HTTP-layer extraction.  A missing or
     non-Bearer Authorization header is a request-format problem and is
     answered with 401 here, before the gate ever runs.

  2. ``resource_gate``: observes the credential (fingerprint only), asks
     the CredentialValidator, and either admits the request or raises
     AuthenticationFailed.

Attach the gate to a router with ``dependencies=[Depends(resource_gate)]``
or depend on it directly to receive the admitted credential.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from authz_service.core.metrics import BEARER_GATE_DECISIONS
from authz_service.models.errors import AuthenticationFailed
from authz_service.services.credential_validator import (
    CredentialValidator,
    get_credential_validator,
)

logger = logging.getLogger(__name__)

# auto_error=False: the 401 below is ours, independent of FastAPI's default
bearer_scheme = HTTPBearer(auto_error=False)


def fingerprint(secret: str) -> str:
    """Short, non-reversible tag for a secret so it can be logged."""
    return hashlib.sha256(secret.encode()).hexdigest()[:12]


def bearer_credential(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
) -> str:
    if credentials is None:
        BEARER_GATE_DECISIONS.labels(result="missing").inc()
        logger.warning("Protected resource requested without a bearer credential")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


def resource_gate(
    credential: Annotated[str, Depends(bearer_credential)],
    validator: Annotated[CredentialValidator, Depends(get_credential_validator)],
) -> str:
    """Admit or reject a presented credential.  Returns it when admitted."""
    tag = fingerprint(credential)
    logger.info(
        "Bearer credential presented  fingerprint=%s",
        tag,
        extra={"credential_fingerprint": tag},
    )

    if not validator.validate(credential):
        BEARER_GATE_DECISIONS.labels(result="rejected").inc()
        logger.warning("Bearer credential rejected  fingerprint=%s", tag)
        raise AuthenticationFailed()

    BEARER_GATE_DECISIONS.labels(result="admitted").inc()
    return credential
