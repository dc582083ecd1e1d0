"""Completion client for an OpenAI-compatible chat completions backend.

Failures are returned as CompletionResult values instead of raised, so every
caller handles them explicitly. One attempt per call; no automatic retry.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum

import httpx

from assistant.config import settings
from assistant.utils.constants import CHAT_FALLBACK_TEXT

logger = logging.getLogger(__name__)


class FailureKind(str, Enum):
    BACKEND_UNAVAILABLE = "backend_unavailable"
    MISSING_CREDENTIAL = "missing_credential"
    EMPTY_RESPONSE = "empty_response"  # soft: success=True with fallback text
    SESSION_NOT_FOUND = "session_not_found"


@dataclass
class CompletionResult:
    success: bool
    text: str | None = None
    failure: FailureKind | None = None
    error: str | None = None
    usage: dict = field(default_factory=dict)
    latency_ms: float = 0.0

    @classmethod
    def failed(cls, failure: FailureKind, error: str) -> "CompletionResult":
        return cls(success=False, failure=failure, error=error)


class CompletionClient:
    """Sends system context plus an optional user message to the backend."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key
        self._model = model
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "CompletionClient":
        return cls(
            api_key=settings.openai_api_key,
            model=settings.completion_model,
            base_url=settings.completion_base_url,
            timeout=settings.completion_timeout,
        )

    @property
    def model_name(self) -> str:
        return self._model

    def build_payload(
        self,
        system_context: str,
        user_message: str | None,
        max_tokens: int,
        temperature: float,
    ) -> dict:
        messages = [{"role": "system", "content": system_context}]
        if user_message is not None:
            messages.append({"role": "user", "content": user_message})
        return {
            "model": self._model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

    async def complete(
        self,
        system_context: str,
        user_message: str | None = None,
        max_tokens: int = 1000,
        temperature: float = 0.7,
        fallback: str = CHAT_FALLBACK_TEXT,
    ) -> CompletionResult:
        """Request one completion.

        Args:
            system_context: Content of the system message.
            user_message: Content of the user message; omitted when None.
            max_tokens: Maximum response tokens.
            temperature: Sampling temperature.
            fallback: Text returned when the backend answers without content.

        Returns:
            CompletionResult; on failure ``failure`` names the kind.
        """
        if not self._api_key:
            logger.error("Completion backend credential is not configured")
            return CompletionResult.failed(
                FailureKind.MISSING_CREDENTIAL, "Completion backend is not configured"
            )

        payload = self.build_payload(system_context, user_message, max_tokens, temperature)
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        start_time = time.time()

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post("/chat/completions", json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Completion API error: {e.response.status_code} - {e.response.text}")
            return CompletionResult.failed(
                FailureKind.BACKEND_UNAVAILABLE,
                f"Completion request failed: {e.response.status_code}",
            )
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers a 2xx body that is not JSON
            logger.error(f"Completion call failed: {e}")
            return CompletionResult.failed(
                FailureKind.BACKEND_UNAVAILABLE, f"Completion request failed: {e}"
            )

        if not isinstance(data, dict):
            data = {}
        latency_ms = (time.time() - start_time) * 1000
        usage = data.get("usage")
        if not isinstance(usage, dict):
            usage = {}
        content = self.parse_content(data)

        if not content:
            logger.warning("Completion backend returned no content; using fallback text")
            return CompletionResult(
                success=True,
                text=fallback,
                failure=FailureKind.EMPTY_RESPONSE,
                usage=usage,
                latency_ms=latency_ms,
            )

        logger.debug(f"Completion received in {latency_ms:.0f}ms ({usage.get('total_tokens', 0)} tokens)")
        return CompletionResult(success=True, text=content, usage=usage, latency_ms=latency_ms)

    @staticmethod
    def parse_content(data: dict) -> str | None:
        """Extract choices[0].message.content; anything but a non-empty string is None."""
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            return None
        choice = choices[0]
        if not isinstance(choice, dict):
            return None
        message = choice.get("message")
        if not isinstance(message, dict):
            return None
        content = message.get("content")
        if not isinstance(content, str) or not content.strip():
            return None
        return content
