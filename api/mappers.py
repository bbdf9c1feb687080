from typing import Any, Optional

from api.schemas import BuscarResponse, DebugResponse, ResguardoPayload
from relay.models import DiagnosticReport, LookupOutcome, ResguardoFound


def build_buscar_response(outcome: LookupOutcome) -> BuscarResponse:
    """
    Map a lookup outcome to the response envelope.
    Pure transformation, no side effects.
    """
    if isinstance(outcome, ResguardoFound):
        return BuscarResponse(
            exito=True,
            expediente=outcome.expediente,
            resguardo=ResguardoPayload(
                size=outcome.size,
                pdf_base64=outcome.pdf_base64,
            ),
        )

    return BuscarResponse(exito=False, error=outcome.message, debug=outcome.debug)


def build_failure_response(
    message: str, debug: Optional[dict[str, Any]] = None
) -> BuscarResponse:
    """Envelope for failures raised outside the lookup outcome."""
    return BuscarResponse(exito=False, error=message, debug=debug)


def build_debug_response(report: DiagnosticReport) -> DebugResponse:
    return DebugResponse(
        status=report.status_code,
        respuesta=report.respuesta,
        campos=report.keys,
        expediente=report.expediente,
    )


def envelope_content(response: BuscarResponse) -> dict:
    """JSON-ready envelope: aliases applied, empty top-level fields dropped."""
    content = response.model_dump(mode="json", by_alias=True)
    return {key: value for key, value in content.items() if value is not None}
