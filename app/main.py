from fastapi import FastAPI
from app.api.routes.chat import router as chat_router
from app.api.routes.study_plan import router as study_plan_router
from app.core.config import settings
from app.core.errors import ServiceError, service_error_handler
from app.core.logging_config import setup_logging
from app.core.middleware import PreflightCORSMiddleware
from app.db.mongodb import lifespan

setup_logging(settings.LOG_LEVEL)

app = FastAPI(lifespan=lifespan)

app.add_middleware(
    PreflightCORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)

app.add_exception_handler(ServiceError, service_error_handler)

app.include_router(study_plan_router)
app.include_router(chat_router)
