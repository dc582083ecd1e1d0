"""Chat API — one conversational reply grounded in the user's trading data."""

import logging

from fastapi import APIRouter, Depends

from assistant.api.deps import error_response, get_completion_client, get_store, preflight_response
from assistant.schemas.chat import ChatRequest, ChatResponse
from assistant.services.chat import ChatService
from assistant.services.completion_client import CompletionClient
from assistant.services.errors import InvalidOwnership
from assistant.services.store import TradeStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])

ERROR_MESSAGE = "Failed to process chat request"


@router.options("")
def chat_preflight():
    return preflight_response()


@router.post("", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    store: TradeStore = Depends(get_store),
    client: CompletionClient = Depends(get_completion_client),
):
    service = ChatService(store, client)
    try:
        result = await service.reply(body.message, body.user_id, body.session_id)
    except InvalidOwnership as e:
        logger.error(f"Ownership check failed for user {body.user_id}: {e}")
        return error_response(ERROR_MESSAGE, "Trading data could not be assembled")
    except Exception as e:
        logger.exception(f"Error in chat request for user {body.user_id}")
        return error_response(ERROR_MESSAGE, str(e))

    if not result.success:
        return error_response(ERROR_MESSAGE, result.error)
    return ChatResponse(message=result.text, usage=result.usage)
