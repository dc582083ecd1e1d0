"""HTTP client for a running assistant API.

Lets a TurnOrchestrator run outside the server process: ``reply`` has the same
shape as ChatService.reply.
"""

import logging

import httpx

from assistant.services.completion_client import CompletionResult, FailureKind

logger = logging.getLogger(__name__)


class AssistantClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def _post(self, path: str, body: dict, text_key: str) -> CompletionResult:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(path, json=body)
        except httpx.HTTPError as e:
            logger.error(f"Assistant API unreachable at {self.base_url}: {e}")
            return CompletionResult.failed(FailureKind.BACKEND_UNAVAILABLE, str(e))

        if response.is_error:
            try:
                details = response.json().get("details", response.text)
            except ValueError:
                details = response.text
            logger.error(f"Assistant API {path} returned {response.status_code}: {details}")
            return CompletionResult.failed(FailureKind.BACKEND_UNAVAILABLE, str(details))

        data = response.json()
        return CompletionResult(success=True, text=data.get(text_key), usage=data.get("usage") or {})

    async def reply(
        self,
        message: str,
        user_id: str,
        session_id: str | None = None,
    ) -> CompletionResult:
        body = {"message": message, "userId": user_id}
        if session_id is not None:
            body["sessionId"] = session_id
        return await self._post("/chat", body, "message")

    async def summary(self, session_id: str, user_id: str) -> CompletionResult:
        return await self._post("/summary", {"sessionId": session_id, "userId": user_id}, "summary")
