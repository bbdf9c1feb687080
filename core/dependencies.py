"""FastAPI dependency injection functions."""

from fastapi import Request
from relay.service import ResguardoService, create_resguardo_service_from_env


async def get_resguardo_service(request: Request) -> ResguardoService:
    """Get the lookup service from app state.

    Falls back to a service built from settings when the lifespan did not
    run (e.g. a TestClient used without a ``with`` block).
    """
    service = getattr(request.app.state, "resguardo_service", None)

    if service is None:
        service = create_resguardo_service_from_env()
        request.app.state.resguardo_service = service

    return service
