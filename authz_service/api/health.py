"""Liveness and readiness probes.

The service has no backing stores (tokens are neither persisted nor
looked up), so both probes only prove the process can answer.
"""

from __future__ import annotations

from fastapi import APIRouter, Response

from authz_service.services.credential_validator import (
    StaticTokenValidator,
    get_credential_validator,
)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Liveness probe.  Also reports which trust store the gate is using."""
    validator = get_credential_validator()
    trust_store = "static" if isinstance(validator, StaticTokenValidator) else "accept_all"
    return {"status": "ok", "checks": {"trust_store": trust_store}}


@router.get("/ready")
async def ready() -> Response:
    return Response(status_code=200)
