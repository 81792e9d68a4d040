from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from foodcost.api.routes import router as api_router
from foodcost.logging import configure_logging, get_logger
from foodcost.services.llm.dspy_client import configure_dspy
from foodcost.storage.db import create_db_and_tables
from foodcost.storage.repositories import get_workspace

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    logger.info("startup: configuring services")
    configure_dspy()
    create_db_and_tables()
    ws = get_workspace()
    logger.info("startup: catalog=%s recipes=%s", len(ws.catalog), len(ws.recipes.list()))
    yield


app = FastAPI(title="Food Cost API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
