"""FastAPI application entry point."""

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

# Logging constants defined here (not in constants/) because logging.basicConfig()
# must run before any module imports that might create loggers.
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(
    format=LOG_FORMAT,
    datefmt=DATE_FORMAT,
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
)

# Unify uvicorn loggers with app format
for uvicorn_logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
    uvicorn_logger = logging.getLogger(uvicorn_logger_name)
    uvicorn_logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    uvicorn_logger.addHandler(handler)

from docubot import __version__  # noqa: E402
from docubot.api.routers import slack  # noqa: E402
from docubot.config import load_settings  # noqa: E402
from docubot.security.masking import install_log_masking  # noqa: E402

# Every handler redacts credentials before writing
install_log_masking()
for uvicorn_logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
    install_log_masking(logging.getLogger(uvicorn_logger_name))

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan handler for startup and shutdown events.

    On startup:
    - Loads settings so configuration errors surface immediately
    - Warns when no LLM API key is configured (requests will fail at
      completion time, not here)
    """
    settings = load_settings()
    logging.getLogger().setLevel(settings.log_level)

    if not settings.llm_api_key:
        logger.warning("GROQ_API_KEY is not set - questions needing the LLM will fail")
    logger.info(f"Answering questions about {settings.docs_name} ({settings.docs_base_url})")
    logger.info("DocuBot started")

    yield


app = FastAPI(
    title="DocuBot",
    description="Slack documentation assistant",
    version=__version__,
    lifespan=lifespan,
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


app.include_router(slack.router)
