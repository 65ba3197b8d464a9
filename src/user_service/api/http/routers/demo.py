"""Demonstration endpoints that do not touch the user repository."""

from datetime import UTC, datetime

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from src.user_service.entities.core.user import UserPayload

router = APIRouter(tags=["demo"])


@router.get("/", response_class=PlainTextResponse)
def index() -> str:
    return "Hello World"


@router.get("/bar", response_class=PlainTextResponse)
def bar(name: str = "") -> str:
    """Greet ``name``, or Bar when it is missing or empty."""
    return f"Hello {name or 'Bar'}!"


@router.post("/foo", response_model=UserPayload, status_code=201)
def foo(payload: UserPayload) -> UserPayload:
    """Echo the decoded payload back with created_at set to now."""
    payload.created_at = datetime.now(UTC)
    return payload
