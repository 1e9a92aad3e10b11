import logging
from datetime import datetime, timedelta

from app.api.schemas import (
    Day, Goal, LanguageInfo, Resources, StudyPlan, StudyPlanRequest, Task, Week,
)
from app.core.config import settings
from app.core.llm import CompletionClient
from app.core.prompts import study_plan_prompt
from app.db.models import StudyPlanRecord
from app.db.repository import save_study_plan
from app.utils.datetime_utils import iso_timestamp, utc_now

logger = logging.getLogger(__name__)

PLAN_WEEKS = 2
DAYS_PER_WEEK = 7
DAILY_MINUTES = 30

DAILY_TASKS = [
    {
        "title": "Vocabulary Practice",
        "description": "Learn 10 new words",
        "duration": 15,
        "category": "vocabulary",
    },
    {
        "title": "Grammar Exercise",
        "description": "Practice sentence structures",
        "duration": 15,
        "category": "grammar",
    },
]

RESOURCES = Resources(
    apps=["Duolingo", "Babbel"],
    websites=["BBC Languages", "FluentU"],
    books=["Language Learning Guide"],
    videos=["YouTube Language Channels"],
)

TIPS = [
    "Practice daily for consistency",
    "Focus on speaking from day one",
    "Immerse yourself in the language",
    "Use spaced repetition for vocabulary",
    "Find a language partner",
]

CULTURAL_NOTES = [
    "Learn about cultural customs",
    "Watch movies in the target language",
    "Try authentic cuisine",
]


def build_weeks(language: str, start: datetime) -> list[Week]:
    weeks = []
    for week_number in range(1, PLAN_WEEKS + 1):
        days = []
        for day_number in range(1, DAYS_PER_WEEK + 1):
            offset = (week_number - 1) * DAYS_PER_WEEK + day_number - 1
            tasks = [
                Task(id=f"task-{week_number}-{day_number}-{index}", **template)
                for index, template in enumerate(DAILY_TASKS, start=1)
            ]
            days.append(Day(
                day_number=day_number,
                date=iso_timestamp(start + timedelta(days=offset)),
                tasks=tasks,
            ))
        weeks.append(Week(
            week_number=week_number,
            theme=f"Week {week_number}: {language} Learning",
            days=days,
        ))
    return weeks


def build_study_plan(request: StudyPlanRequest, ai_content: str, now: datetime | None = None) -> StudyPlan:
    """Fill the fixed two-week template; the model's text is embedded verbatim, not parsed."""
    now = now or utc_now()
    return StudyPlan(
        id=str(int(now.timestamp() * 1000)),
        language=LanguageInfo(name=request.language, native_name=request.language),
        level=request.level,
        goals=[Goal(title=g) for g in request.goals],
        duration=PLAN_WEEKS,
        time_commitment=DAILY_MINUTES,
        weeks=build_weeks(request.language, now),
        resources=RESOURCES,
        tips=list(TIPS),
        cultural_notes=list(CULTURAL_NOTES),
        ai_generated_content=ai_content,
        created_at=iso_timestamp(now),
    )


async def generate_study_plan(
    request: StudyPlanRequest,
    llm: CompletionClient,
    study_plans,
    now: datetime | None = None,
) -> StudyPlan:
    prompt = study_plan_prompt(request.language, request.level, request.goals)
    content = await llm.complete(
        [{"role": "user", "content": prompt}],
        max_tokens=settings.STUDY_PLAN_MAX_TOKENS,
    )

    record = StudyPlanRecord(
        userId=request.user_id,
        language=request.language,
        level=request.level,
        goals=request.goals,
        studyPlan=content,
    )
    plan_id = await save_study_plan(study_plans, record)
    logger.info("Study plan %s stored for user %s (%s, %s)",
                plan_id, request.user_id, request.language, request.level)

    return build_study_plan(request, content, now)
