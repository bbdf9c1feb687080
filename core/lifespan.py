from contextlib import asynccontextmanager
from fastapi import FastAPI
import logging
from core.settings import settings
from relay.service import create_resguardo_service_from_env

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown tasks."""

    logger.info("Initializing resguardo service...")
    app.state.resguardo_service = create_resguardo_service_from_env()
    logger.info(
        "Resguardo service ready",
        extra={"service": settings.UPSTREAM_BASE_URL},
    )

    yield

    logger.info("Shutting down")
