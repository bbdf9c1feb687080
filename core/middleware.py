"""Request tracing and CORS middleware."""

from core.utils import ensure_trace_id
from fastapi import Request, Response
from relay.core.logging_config import reset_trace_id, set_trace_id

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS, PUT, DELETE",
    "Access-Control-Allow-Headers": "Origin, X-Requested-With, Content-Type, Accept",
    "Access-Control-Max-Age": "86400",
}


async def trace_id_middleware(request: Request, call_next):
    """Ensure every request has a trace ID in state, logs and response headers."""
    trace_id = ensure_trace_id(request)
    token = set_trace_id(trace_id)
    try:
        response = await call_next(request)
    finally:
        reset_trace_id(token)
    response.headers["X-Trace-ID"] = trace_id
    return response


async def cors_middleware(request: Request, call_next):
    """Allow every origin; answer any preflight with a bare 200."""
    if request.method == "OPTIONS":
        response = Response(status_code=200)
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response
