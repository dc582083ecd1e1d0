"""Session summary API."""

import logging

from fastapi import APIRouter, Depends

from assistant.api.deps import error_response, get_completion_client, get_store, preflight_response
from assistant.schemas.chat import SummaryRequest, SummaryResponse
from assistant.services.completion_client import CompletionClient
from assistant.services.errors import InvalidOwnership
from assistant.services.store import TradeStore
from assistant.services.summary import SummaryGenerator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/summary", tags=["summary"])

ERROR_MESSAGE = "Failed to generate session summary"


@router.options("")
def summary_preflight():
    return preflight_response()


@router.post("", response_model=SummaryResponse)
async def generate_summary(
    body: SummaryRequest,
    store: TradeStore = Depends(get_store),
    client: CompletionClient = Depends(get_completion_client),
):
    generator = SummaryGenerator(store, client)
    try:
        result = await generator.summarize(body.session_id, body.user_id)
    except InvalidOwnership as e:
        logger.error(f"Ownership check failed for session {body.session_id}: {e}")
        return error_response(ERROR_MESSAGE, "Trading data could not be assembled")
    except Exception as e:
        logger.exception(f"Error generating summary for session {body.session_id}")
        return error_response(ERROR_MESSAGE, str(e))

    if not result.success:
        return error_response(ERROR_MESSAGE, result.error)
    return SummaryResponse(summary=result.text, usage=result.usage)
