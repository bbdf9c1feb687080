"""Receipt lookup endpoints.

Both routes answer HTTP 200 whatever happens; callers read ``exito``.
"""

import logging
from typing import Optional

from api.mappers import (
    build_buscar_response,
    build_debug_response,
    build_failure_response,
    envelope_content,
)
from api.schemas import BuscarRequest, BuscarResponse, DebugResponse
from core.dependencies import get_resguardo_service
from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse
from relay.core.exceptions import RelayError
from relay.service import ResguardoService

router = APIRouter()
debug_router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/buscar", response_model=BuscarResponse, tags=["resguardo"])
async def buscar_resguardo(
    request: Request,
    payload: Optional[BuscarRequest] = Body(default=None),
    service: ResguardoService = Depends(get_resguardo_service),
):
    payload = payload or BuscarRequest()

    try:
        outcome = await service.buscar(payload.identificador, payload.consulado)
    except Exception as e:
        logger.exception(
            "[BUSCAR] unexpected error",
            extra={"path": request.url.path, "error_type": type(e).__name__},
        )
        return JSONResponse(content=envelope_content(build_failure_response(f"Error: {e}")))

    return JSONResponse(content=envelope_content(build_buscar_response(outcome)))


@debug_router.post(
    "/debug",
    response_model=DebugResponse,
    tags=["diagnostics"],
)
async def debug_validacion(
    request: Request,
    payload: Optional[BuscarRequest] = Body(default=None),
    service: ResguardoService = Depends(get_resguardo_service),
):
    """Echo the validator's raw answer and its keys for operator diagnosis.

    Lookup failures propagate to the app handler, which answers with the
    same 200 envelope as ``POST /buscar``.
    """
    payload = payload or BuscarRequest()

    try:
        report = await service.diagnosticar(payload.identificador, payload.consulado)
    except RelayError:
        raise
    except Exception as e:
        logger.exception(
            "[DEBUG] unexpected error",
            extra={"path": request.url.path, "error_type": type(e).__name__},
        )
        return JSONResponse(content=envelope_content(build_failure_response(f"Error: {e}")))

    return JSONResponse(content=build_debug_response(report).model_dump(mode="json"))
