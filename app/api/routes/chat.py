import logging

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from app.api.deps import get_conversations, get_llm, get_messages, read_json_object
from app.api.schemas import ChatRequest, ChatResponse
from app.core.errors import InvalidInput, UpstreamError
from app.core.llm import CompletionClient
from app.core.middleware import preflight_ok
from app.services.chat_service import chat_turn

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_FIELDS = "Missing required fields: message, userId, language"
CHAT_FAILED = "Failed to generate chat response."


@router.options("/chat", include_in_schema=False)
async def chat_options(request: Request):
    return preflight_ok(request.headers.get("origin"))


@router.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
async def chat(
    request: Request,
    llm: CompletionClient = Depends(get_llm),
    conversations=Depends(get_conversations),
    messages=Depends(get_messages),
):
    body = await read_json_object(request, MISSING_FIELDS)
    try:
        chat_request = ChatRequest.model_validate(body)
    except ValidationError as e:
        logger.info("Rejected chat request: %d validation error(s)", e.error_count())
        raise InvalidInput(MISSING_FIELDS)

    try:
        return await chat_turn(chat_request, llm, conversations, messages)
    except Exception as e:
        logger.exception("Chat error")
        raise UpstreamError(CHAT_FAILED, details=str(e))
