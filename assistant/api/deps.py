"""Shared API dependencies and error responses."""

from fastapi import Depends, Response
from fastapi.responses import JSONResponse
from sqlmodel import Session

from assistant.database import get_session
from assistant.services.completion_client import CompletionClient
from assistant.services.store import TradeStore
from assistant.utils.constants import CORS_HEADERS


def get_store(session: Session = Depends(get_session)) -> TradeStore:
    return TradeStore(session)


def get_completion_client() -> CompletionClient:
    return CompletionClient.from_settings()


def error_response(error: str, details: str | None) -> JSONResponse:
    """500 payload shared by the chat and summary endpoints."""
    return JSONResponse(
        status_code=500,
        content={"error": error, "details": details},
        headers=CORS_HEADERS,
    )


def preflight_response() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)
