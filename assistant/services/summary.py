"""Session summary generator — a narrative report for one trading session."""

import asyncio
import logging

from assistant.config import settings
from assistant.services.completion_client import (
    CompletionClient,
    CompletionResult,
    FailureKind,
)
from assistant.services.context_builder import build_context
from assistant.services.prompts import build_summary_prompt
from assistant.services.store import TradeStore
from assistant.utils.constants import SUMMARY_FALLBACK_TEXT

logger = logging.getLogger(__name__)


class SummaryGenerator:
    def __init__(self, store: TradeStore, client: CompletionClient):
        self.store = store
        self.client = client

    async def summarize(self, session_id: str, user_id: str) -> CompletionResult:
        """Summarize one session owned by user_id.

        The lookup itself is scoped by user, so a foreign session id yields
        SESSION_NOT_FOUND exactly like an unknown one.
        """
        loop = asyncio.get_running_loop()
        session = await loop.run_in_executor(None, self.store.get_session, session_id, user_id)
        if session is None:
            logger.warning(f"Summary requested for unknown session {session_id} (user {user_id})")
            return CompletionResult.failed(FailureKind.SESSION_NOT_FOUND, "Session not found")

        trades = await loop.run_in_executor(None, self.store.list_trades, user_id, session_id)
        context = build_context(user_id, [session], trades, focus_session_id=session_id)
        prompt = build_summary_prompt(context, assistant_name=settings.assistant_name)

        logger.info(f"Generating summary for session {session_id} ({context.stats.total_trades} trades)")
        return await self.client.complete(
            prompt,
            None,
            max_tokens=settings.summary_max_tokens,
            temperature=settings.temperature,
            fallback=SUMMARY_FALLBACK_TEXT,
        )
