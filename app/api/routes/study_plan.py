import logging

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from app.api.deps import get_llm, get_study_plans, read_json_object
from app.api.schemas import StudyPlanRequest, StudyPlanResponse
from app.core.errors import InvalidInput, UpstreamError
from app.core.llm import CompletionClient
from app.core.middleware import preflight_ok
from app.services.study_plan_service import generate_study_plan

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_REQUEST = "Invalid request data. Please ensure all fields are provided."
GENERATION_FAILED = "Failed to generate study plan."


@router.options("/generateStudyPlan", include_in_schema=False)
async def study_plan_options(request: Request):
    return preflight_ok(request.headers.get("origin"))


@router.post("/generateStudyPlan", response_model=StudyPlanResponse)
async def generate_study_plan_route(
    request: Request,
    llm: CompletionClient = Depends(get_llm),
    study_plans=Depends(get_study_plans),
):
    body = await read_json_object(request, INVALID_REQUEST)
    try:
        plan_request = StudyPlanRequest.model_validate(body)
    except ValidationError as e:
        logger.info("Rejected study plan request: %d validation error(s)", e.error_count())
        raise InvalidInput(INVALID_REQUEST)

    try:
        plan = await generate_study_plan(plan_request, llm, study_plans)
    except Exception:
        logger.exception("Study plan generation failed")
        raise UpstreamError(GENERATION_FAILED)

    return StudyPlanResponse(plan=plan)
