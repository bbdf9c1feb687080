"""FastAPI application entry point."""

from dotenv import load_dotenv

load_dotenv()

import logging

import uvicorn
from api.routes import buscar, health
from core.error_handlers import (
    handle_http_error,
    handle_relay_error,
    handle_unknown_error,
    handle_validation_error,
)
from core.lifespan import lifespan
from core.middleware import cors_middleware, trace_id_middleware
from core.settings import settings
from core.validation import validate_all_settings
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from relay.core.exceptions import RelayError
from relay.core.logging_config import configure_structured_logging
from starlette.exceptions import HTTPException as StarletteHTTPException

# Configure logging
configure_structured_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)
logger = logging.getLogger(__name__)

# Validate environment before starting application
validate_all_settings()

# Initialize FastAPI app
app = FastAPI(
    title="Buscador de Resguardos",
    version="1.0.0",
    description="Relays identifier lookups to the consular registration form "
    "service and returns the registration receipt as base64",
    lifespan=lifespan,
)

# 1. Register Middleware (last registered runs first)
app.middleware("http")(cors_middleware)
app.middleware("http")(trace_id_middleware)

# 2. Register Exception Handlers
app.add_exception_handler(RequestValidationError, handle_validation_error)
app.add_exception_handler(StarletteHTTPException, handle_http_error)
app.add_exception_handler(RelayError, handle_relay_error)
app.add_exception_handler(Exception, handle_unknown_error)

# Routes
app.include_router(health.router)
app.include_router(buscar.router)
if settings.DEBUG_ENDPOINT_ENABLED:
    app.include_router(buscar.debug_router)


def run() -> None:
    """Console entry point: serve the app on ``HOST:PORT``."""
    logger.info(
        "Server starting on port %s, endpoint: POST /buscar",
        settings.PORT,
    )
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
