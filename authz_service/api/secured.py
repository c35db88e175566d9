from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from authz_service.api.gate import resource_gate

# Everything registered on this router sits behind the bearer gate
router = APIRouter(
    prefix="/secured",
    tags=["secured"],
    dependencies=[Depends(resource_gate)],
)


@router.get("/", response_class=PlainTextResponse)
def secured_hello() -> str:
    """Protected twin of GET /: reachable only with an admitted credential."""
    return "Hello world!"
