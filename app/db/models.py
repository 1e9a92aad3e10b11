from pydantic import BaseModel
from datetime import datetime
from typing import Literal


class StudyPlanRecord(BaseModel):
    """Shape of documents in the `studyPlans` collection."""
    userId: str
    language: str
    level: str
    goals: list[str]
    studyPlan: str
    createdAt: datetime | None = None  # server assigned


class ConversationDocument(BaseModel):
    """Shape of documents in the `conversations` collection."""
    userId: str
    language: str
    coachingStyle: str
    messageCount: int = 0
    createdAt: datetime | None = None  # server assigned
    lastActivity: datetime | None = None
    updatedAt: datetime | None = None


class MessageDocument(BaseModel):
    """Shape of documents in the `messages` collection."""
    conversationId: str
    userId: str
    content: str
    type: Literal["user", "assistant"]
    language: str
    coachingStyle: str | None = None  # assistant messages only
    timestamp: datetime | None = None  # server assigned
