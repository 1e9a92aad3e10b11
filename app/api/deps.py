import json

from fastapi import Request

from app.core.errors import InvalidInput
from app.core.llm import CompletionClient


def get_llm(request: Request) -> CompletionClient:
    return request.app.state.llm


def get_study_plans(request: Request):
    return request.app.state.study_plans


def get_conversations(request: Request):
    return request.app.state.conversations


def get_messages(request: Request):
    return request.app.state.messages


async def read_json_object(request: Request, error_message: str) -> dict:
    """Request body as a JSON object; an empty body reads as ``{}``."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        raise InvalidInput(error_message)
    if not isinstance(body, dict):
        raise InvalidInput(error_message)
    return body
