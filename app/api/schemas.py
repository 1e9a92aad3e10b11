from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.prompts import DEFAULT_COACHING_STYLE


class CamelModel(BaseModel):
    """Wire models use camelCase field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- /generateStudyPlan -------------------------------------------------------

class StudyPlanRequest(CamelModel):
    language: str = Field("Spanish", min_length=1)
    level: str = Field("Beginner", min_length=1)
    goals: list[str] = Field(default_factory=lambda: ["General learning"])
    user_id: str = "anonymous"

    @field_validator("goals", mode="before")
    @classmethod
    def scalar_goals_as_text(cls, v):
        # Numbers and booleans inside the list are kept as their JSON text
        if not isinstance(v, list):
            return v
        return [
            str(g).lower() if isinstance(g, bool)
            else str(g) if isinstance(g, (int, float))
            else g
            for g in v
        ]

    @field_validator("user_id", mode="before")
    @classmethod
    def anonymous_user(cls, v):
        return "anonymous" if v is None else v


class LanguageInfo(CamelModel):
    name: str
    native_name: str


class Goal(CamelModel):
    title: str
    category: str = "General"


class Task(CamelModel):
    id: str
    title: str
    description: str
    duration: int
    completed: bool = False
    category: str


class Day(CamelModel):
    day_number: int
    date: str
    tasks: list[Task]


class Week(CamelModel):
    week_number: int
    theme: str
    days: list[Day]


class Resources(CamelModel):
    apps: list[str]
    websites: list[str]
    books: list[str]
    videos: list[str]


class StudyPlan(CamelModel):
    id: str
    language: LanguageInfo
    level: str
    goals: list[Goal]
    duration: int  # weeks
    time_commitment: int  # minutes per day
    weeks: list[Week]
    resources: Resources
    tips: list[str]
    cultural_notes: list[str]
    ai_generated_content: str
    created_at: str


class StudyPlanResponse(CamelModel):
    success: bool = True
    plan: StudyPlan


# --- /chat --------------------------------------------------------------------

class ChatRequest(CamelModel):
    message: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    language: str = Field(min_length=1)
    conversation_id: str | None = None
    coaching_style: str = DEFAULT_COACHING_STYLE
    include_corrections: bool = True

    @field_validator("conversation_id", mode="before")
    @classmethod
    def blank_conversation_id(cls, v):
        # An empty id starts a new conversation
        return v or None

    @field_validator("coaching_style", mode="before")
    @classmethod
    def default_coaching_style(cls, v):
        return DEFAULT_COACHING_STYLE if v is None else v

    @field_validator("include_corrections", mode="before")
    @classmethod
    def null_skips_corrections(cls, v):
        return False if v is None else v


class Correction(CamelModel):
    original: str
    corrected: str
    type: str  # grammar / vocabulary / punctuation, as declared by the model
    explanation: str


class ChatResponse(CamelModel):
    reply: str
    conversation_id: str
    message_id: str
    timestamp: str
    corrections: list[Correction] | None = None
