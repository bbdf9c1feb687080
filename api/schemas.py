"""Pydantic request/response schemas for API endpoints."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    Used for every route except the relay endpoints, which always answer
    with the ``exito`` envelope.

    See: https://www.rfc-editor.org/rfc/rfc7807
    """

    type: str = Field(..., description="URI reference identifying the problem type")
    title: str = Field(..., description="Short, human-readable summary of the problem")
    status: int = Field(..., description="HTTP status code for this problem")
    detail: Optional[str] = Field(
        None, description="Human-readable explanation specific to this occurrence"
    )
    instance: Optional[str] = Field(
        None,
        description="URI reference identifying this specific occurrence (e.g., request path)",
    )

    code: str = Field(..., description="Application-specific error code")
    category: str = Field(
        ..., description="Error category (client_error, server_error, etc.)"
    )
    retryable: bool = Field(
        default=False, description="Whether the request can be retried"
    )
    trace_id: Optional[str] = Field(
        None, description="Tracing ID for correlation across services"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "/errors/HTTP_404",
                "title": "Not Found",
                "status": 404,
                "detail": "Not Found",
                "instance": "/nope",
                "code": "HTTP_404",
                "category": "client_error",
                "retryable": False,
                "trace_id": "a1b2c3d4-e5f6-7890-abcd-ef1234567890",
            }
        }
    )


class BuscarRequest(BaseModel):
    """Body of ``POST /buscar`` and ``POST /debug``.

    The identifier is optional at the schema level so that a missing value
    produces the ``Identificador requerido`` envelope instead of a 422.
    """

    identificador: Optional[str] = Field(
        None, description="Applicant identifier (sent uppercased upstream)"
    )
    consulado: Optional[str] = Field(
        None, description="Consulate selector, defaults to the configured value"
    )

    @field_validator("consulado", mode="before")
    @classmethod
    def coerce_consulado(cls, value: Any) -> Any:
        """Accept numeric selectors such as ``1``."""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class ResguardoPayload(BaseModel):
    """The receipt PDF, base64-encoded."""

    size: int = Field(..., alias="tamaño", description="Size in bytes")
    pdf_base64: str = Field(..., description="Standard base64 of the PDF")

    model_config = ConfigDict(populate_by_name=True)


class BuscarResponse(BaseModel):
    """Envelope returned by the relay routes, always with HTTP 200."""

    exito: bool
    error: Optional[str] = None
    expediente: Optional[str] = None
    resguardo: Optional[ResguardoPayload] = None
    debug: Optional[dict[str, Any]] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "exito": True,
                "expediente": "2024-000123",
                "resguardo": {"tamaño": 10240, "pdf_base64": "JVBERi0xLjQK..."},
            }
        }
    )


class DebugResponse(BaseModel):
    """Raw validator answer for operators."""

    exito: bool = True
    status: int
    respuesta: Any = None
    campos: List[str]
    expediente: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
