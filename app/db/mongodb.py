import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pymongo import AsyncMongoClient
from pymongo.server_api import ServerApi

from app.core.config import settings
from app.core.llm import create_completion_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    llm = create_completion_client(settings.OPENAI_API_KEY, settings.OPENAI_MODEL)
    app.state.llm = llm
    logger.info("Completion client ready (model=%s)", settings.OPENAI_MODEL)

    client = AsyncMongoClient(
        settings.MONGO_URI,
        server_api=ServerApi("1")
    )

    app.state.mongo_client = client
    app.state.db = client[settings.MONGO_DB]
    app.state.study_plans = app.state.db["studyPlans"]
    app.state.conversations = app.state.db["conversations"]
    app.state.messages = app.state.db["messages"]
    logger.info("MongoDB connected (db=%s)", settings.MONGO_DB)

    try:
        yield
    finally:
        await client.close()
        await llm.close()
        logger.info("MongoDB disconnected")
