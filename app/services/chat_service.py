import json
import logging
from datetime import datetime

from bson import ObjectId
from pydantic import ValidationError

from app.api.schemas import ChatRequest, ChatResponse, Correction
from app.core.config import settings
from app.core.errors import MalformedUpstreamOutput
from app.core.llm import CompletionClient
from app.core.prompts import correction_prompt, persona_prompt
from app.db.models import ConversationDocument, MessageDocument
from app.db.repository import (
    create_conversation, find_conversation, recent_messages, record_turn, save_message,
)
from app.utils.datetime_utils import iso_timestamp, utc_now

logger = logging.getLogger(__name__)

CORRECTIVE_STYLE = "corrective"


def build_model_input(request: ChatRequest, history: list[dict]) -> list[dict]:
    return (
        [{"role": "system", "content": persona_prompt(request.coaching_style, request.language)}]
        + history
        + [{"role": "user", "content": request.message}]
    )


def strip_code_fence(reply: str) -> str:
    # Models often wrap JSON in markdown
    if "```json" in reply:
        return reply.split("```json")[1].split("```")[0]
    if "```" in reply:
        return reply.split("```")[1].split("```")[0]
    return reply


def parse_corrections(reply: str) -> list[Correction]:
    """Parse the correction-extraction reply; items that are not correction objects are dropped."""
    try:
        parsed = json.loads(strip_code_fence(reply).strip())
    except (json.JSONDecodeError, IndexError) as e:
        raise MalformedUpstreamOutput(f"corrections are not valid JSON: {e}") from e
    if not isinstance(parsed, list):
        raise MalformedUpstreamOutput(f"expected a JSON array, got {type(parsed).__name__}")

    corrections = []
    for item in parsed:
        try:
            corrections.append(Correction.model_validate(item))
        except ValidationError:
            logger.debug("Dropping malformed correction item: %r", item)
    return corrections


async def extract_corrections(llm: CompletionClient, language: str, message: str) -> list[Correction]:
    """Best effort: any failure degrades to no corrections."""
    try:
        reply = await llm.complete(
            [{"role": "user", "content": correction_prompt(language, message)}],
            max_tokens=settings.CORRECTION_MAX_TOKENS,
            temperature=settings.CORRECTION_TEMPERATURE,
        )
        return parse_corrections(reply)
    except MalformedUpstreamOutput as e:
        logger.warning("Could not parse corrections JSON: %s", e)
    except Exception:
        logger.warning("Correction request failed", exc_info=True)
    return []


async def chat_turn(
    request: ChatRequest,
    llm: CompletionClient,
    conversations,
    messages,
    now: datetime | None = None,
) -> ChatResponse:
    conversation_id = request.conversation_id or str(ObjectId())

    conversation = await find_conversation(conversations, conversation_id)
    if conversation is None:
        await create_conversation(conversations, conversation_id, ConversationDocument(
            userId=request.user_id,
            language=request.language,
            coachingStyle=request.coaching_style,
        ))
        logger.info("Created conversation %s for user %s", conversation_id, request.user_id)

    history = await recent_messages(messages, conversation_id, settings.CHAT_HISTORY_LIMIT)

    reply = await llm.complete(
        build_model_input(request, history),
        max_tokens=settings.CHAT_MAX_TOKENS,
        temperature=settings.CHAT_TEMPERATURE,
    )

    await save_message(messages, MessageDocument(
        conversationId=conversation_id,
        userId=request.user_id,
        content=request.message,
        type="user",
        language=request.language,
    ))
    assistant_id = await save_message(messages, MessageDocument(
        conversationId=conversation_id,
        userId=request.user_id,
        content=reply,
        type="assistant",
        language=request.language,
        coachingStyle=request.coaching_style,
    ))
    await record_turn(conversations, conversation_id)
    logger.info("Chat turn in %s (%s, %d messages of context)",
                conversation_id, request.coaching_style, len(history))

    response = ChatResponse(
        reply=reply,
        conversation_id=conversation_id,
        message_id=str(assistant_id),
        timestamp=iso_timestamp(now or utc_now()),
    )
    if request.coaching_style == CORRECTIVE_STYLE and request.include_corrections:
        response.corrections = await extract_corrections(llm, request.language, request.message)
    return response
