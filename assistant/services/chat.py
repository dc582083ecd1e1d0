"""Chat service — grounds a user message in their trading data and asks the backend."""

import asyncio
import logging

from assistant.config import settings
from assistant.services.completion_client import CompletionClient, CompletionResult
from assistant.services.context_builder import build_context
from assistant.services.prompts import build_chat_prompt
from assistant.services.store import TradeStore
from assistant.utils.constants import CHAT_FALLBACK_TEXT

logger = logging.getLogger(__name__)


class ChatService:
    def __init__(self, store: TradeStore, client: CompletionClient):
        self.store = store
        self.client = client

    async def reply(
        self,
        message: str,
        user_id: str,
        session_id: str | None = None,
    ) -> CompletionResult:
        """Answer one general query.

        Raises InvalidOwnership if the store hands back foreign records.
        """
        # Store queries are synchronous; keep them off the event loop
        loop = asyncio.get_running_loop()
        sessions = await loop.run_in_executor(None, self.store.list_sessions, user_id)
        trades = await loop.run_in_executor(None, self.store.list_trades, user_id)
        context = build_context(
            user_id,
            sessions,
            trades,
            recent_sessions_limit=settings.recent_sessions_limit,
            recent_trades_limit=settings.recent_trades_limit,
        )

        current_name = None
        if session_id is not None:
            current_name = next((s.name for s in sessions if s.id == session_id), None)

        prompt = build_chat_prompt(
            context,
            assistant_name=settings.assistant_name,
            current_session_name=current_name,
        )
        logger.info(
            f"Chat request for user {user_id}: {context.total_sessions} sessions, "
            f"{context.stats.total_trades} trades"
        )
        return await self.client.complete(
            prompt,
            message,
            max_tokens=settings.chat_max_tokens,
            temperature=settings.temperature,
            fallback=CHAT_FALLBACK_TEXT,
        )
