"""Pydantic schemas for the chat and summary API."""

from pydantic import BaseModel, Field, field_validator


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)
    user_id: str = Field(alias="userId", min_length=1)
    session_id: str | None = Field(default=None, alias="sessionId")

    model_config = {"populate_by_name": True}

    @field_validator("message", "user_id")
    @classmethod
    def _trim_required_text(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text


class ChatResponse(BaseModel):
    message: str
    usage: dict = Field(default_factory=dict)


class SummaryRequest(BaseModel):
    session_id: str = Field(alias="sessionId", min_length=1)
    user_id: str = Field(alias="userId", min_length=1)

    model_config = {"populate_by_name": True}


class SummaryResponse(BaseModel):
    summary: str
    usage: dict = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
