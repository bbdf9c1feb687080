from datetime import datetime, timezone

from api.schemas import HealthResponse
from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter()

BANNER_HTML = """
<h1>Servidor Buscador de Resguardos</h1>
<p>Consulado de España en La Habana</p>
<p>Endpoint: POST /buscar</p>
"""


@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )


@router.get("/", response_class=HTMLResponse, tags=["health"])
async def banner():
    return HTMLResponse(content=BANNER_HTML)
