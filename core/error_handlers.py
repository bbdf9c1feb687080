import logging
from typing import Any, Optional

from api.mappers import build_failure_response, envelope_content
from api.schemas import ProblemDetail
from core.utils import ensure_trace_id
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from relay.core.exceptions import RelayError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Routes whose contract is "always 200, inspect the body"
ENVELOPE_PATHS = frozenset({"/buscar", "/debug"})


def _is_envelope_route(request: Request) -> bool:
    return request.url.path in ENVELOPE_PATHS


def _envelope(
    message: str, trace_id: str, debug: Optional[dict[str, Any]] = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=envelope_content(build_failure_response(message, debug)),
        headers={"X-Trace-ID": trace_id},
    )


def _problem(problem: ProblemDetail, trace_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(exclude_none=True),
        headers={"X-Trace-ID": trace_id},
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Handler for FastAPI/Pydantic request validation errors."""
    trace_id = ensure_trace_id(request)

    first_error = exc.errors()[0] if exc.errors() else {}
    loc = first_error.get("loc", [])
    field = ".".join(str(loc_part) for loc_part in loc if loc_part != "body")
    msg = first_error.get("msg", "Validation failed")
    detail = f"{field}: {msg}" if field else msg
    error_type = first_error.get("type", "")

    logger.warning(
        f"Validation error: {detail}",
        extra={"trace_id": trace_id, "path": request.url.path, "error_type": error_type},
    )

    if _is_envelope_route(request):
        return _envelope(f"Solicitud inválida: {detail}", trace_id)

    return _problem(
        ProblemDetail(
            type="/errors/VALIDATION_ERROR",
            title="Request validation failed",
            status=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            instance=request.url.path,
            code="VALIDATION_ERROR",
            category="client_error",
            retryable=False,
            trace_id=trace_id,
        ),
        trace_id,
    )


async def handle_relay_error(request: Request, exc: RelayError):
    """Handler for lookup failures raised out of a relay route.

    Only relay routes raise these, so the answer is always the HTTP 200
    envelope with the error message and its diagnostic context.
    """
    trace_id = ensure_trace_id(request)

    logger.info(
        "Lookup failed: %s",
        exc.message,
        extra={
            "trace_id": trace_id,
            "error_code": exc.error_code,
            "path": request.url.path,
        },
    )

    return _envelope(exc.message, trace_id, debug=exc.debug())


async def handle_http_error(request: Request, exc: StarletteHTTPException):
    """Handler for standard HTTP exceptions (404, 405, etc.)."""
    trace_id = ensure_trace_id(request)

    logger.warning(
        "HTTP exception",
        extra={
            "trace_id": trace_id,
            "http_status": exc.status_code,
            "path": request.url.path,
        },
    )

    return _problem(
        ProblemDetail(
            type=f"/errors/HTTP_{exc.status_code}",
            title=str(exc.detail),
            status=exc.status_code,
            detail=str(exc.detail),
            code=f"HTTP_{exc.status_code}",
            category="server_error" if exc.status_code >= 500 else "client_error",
            retryable=False,
            instance=request.url.path,
            trace_id=trace_id,
        ),
        trace_id,
    )


async def handle_unknown_error(request: Request, exc: Exception):
    """Handler for unexpected errors; relay routes still get an envelope."""
    trace_id = ensure_trace_id(request)

    logger.exception(
        "Unexpected error occurred",
        extra={
            "trace_id": trace_id,
            "path": request.url.path,
            "error_type": type(exc).__name__,
        },
    )

    if _is_envelope_route(request):
        return _envelope(f"Error: {exc}", trace_id)

    return _problem(
        ProblemDetail(
            type="/errors/INTERNAL_SERVER_ERROR",
            title="Internal server error",
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please contact support with trace ID.",
            code="INTERNAL_SERVER_ERROR",
            category="server_error",
            retryable=False,
            instance=request.url.path,
            trace_id=trace_id,
        ),
        trace_id,
    )
