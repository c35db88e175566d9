from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

# Unauthenticated smoke-test routes

router = APIRouter(tags=["greetings"])


@router.get("/", response_class=PlainTextResponse)
def hello() -> str:
    return "Hello world!"


@router.post("/echo", response_class=PlainTextResponse)
async def echo(request: Request) -> str:
    body = await request.body()
    return body.decode("utf-8", errors="replace")


@router.get("/hey", response_class=PlainTextResponse)
def hey() -> str:
    return "Hey there!"
