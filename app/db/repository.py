"""Store operations shared by the study plan and chat services.

Timestamps are assigned by MongoDB through ``$currentDate`` so that message
ordering follows the server clock. New documents are written with an upsert
on a freshly generated ``_id``, which lets the insert carry ``$currentDate``.
"""
from bson import ObjectId
from pymongo import DESCENDING

from app.db.models import ConversationDocument, MessageDocument, StudyPlanRecord


async def insert_with_server_time(collection, doc: dict, *time_fields: str, doc_id=None):
    """Insert ``doc`` with each of ``time_fields`` set to the server time. Returns the ``_id``."""
    if doc_id is None:
        doc_id = ObjectId()
    await collection.update_one(
        {"_id": doc_id},
        {"$set": doc, "$currentDate": {field: True for field in time_fields}},
        upsert=True,
    )
    return doc_id


async def save_study_plan(study_plans, record: StudyPlanRecord):
    return await insert_with_server_time(
        study_plans, record.model_dump(exclude_none=True), "createdAt"
    )


async def find_conversation(conversations, conversation_id: str) -> dict | None:
    return await conversations.find_one({"_id": conversation_id})


async def create_conversation(conversations, conversation_id: str, conversation: ConversationDocument) -> dict:
    doc = conversation.model_dump(exclude_none=True)
    await insert_with_server_time(conversations, doc, "createdAt", doc_id=conversation_id)
    return doc


async def recent_messages(messages, conversation_id: str, limit: int) -> list[dict]:
    """The last ``limit`` messages of a conversation as role-tagged chat messages, oldest first."""
    # ObjectIds increase with insertion order, which breaks ties on equal timestamps
    cursor = (
        messages.find({"conversationId": conversation_id})
        .sort([("timestamp", DESCENDING), ("_id", DESCENDING)])
        .limit(limit)
    )
    docs = await cursor.to_list(length=None)
    docs.reverse()
    return [
        {
            "role": "user" if d.get("type") == "user" else "assistant",
            "content": d.get("content", ""),
        }
        for d in docs
    ]


async def save_message(messages, message: MessageDocument) -> ObjectId:
    return await insert_with_server_time(
        messages, message.model_dump(exclude_none=True), "timestamp"
    )


async def record_turn(conversations, conversation_id: str, message_count: int = 2) -> None:
    await conversations.update_one(
        {"_id": conversation_id},
        {
            "$inc": {"messageCount": message_count},
            "$currentDate": {"lastActivity": True, "updatedAt": True},
        },
    )
