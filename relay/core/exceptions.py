"""Error hierarchy for the resguardo relay.

Every failure along the lookup flow is one of these exceptions. Relay routes
never surface them as protocol errors: ``POST /buscar`` gets them back as a
``LookupFailure`` and ``POST /debug`` lets them reach the app handler, which
renders the same envelope with HTTP 200.
"""

from typing import Any, Optional


class RelayError(Exception):
    """Base for failures that end a lookup.

    Attributes:
        message: Human-readable error message (Spanish, shown to callers)
        error_code: Application-specific error code
        details: Additional context for logs (dict)

    ``debug`` returns the diagnostic context that is copied into the
    response envelope, or ``None`` when there is nothing to add.
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def debug(self) -> Optional[dict[str, Any]]:
        return None


class MissingIdentifierError(RelayError):
    """The request carried no identifier."""

    def __init__(self):
        super().__init__(
            message="Identificador requerido",
            error_code="MISSING_IDENTIFIER",
        )


class ExternalServiceError(RelayError):
    """Upstream transport failure (timeout, connection, TLS).

    Args:
        service_name: Name of the external service
        error_type: "timeout", "unavailable" or "tls_error"
        reason: Text of the underlying exception
    """

    def __init__(self, service_name: str, error_type: str, reason: str, **kwargs):
        additional_details = kwargs.pop("details", {})
        additional_details.update(
            {
                "service": service_name,
                "error_type": error_type,
                "reason": reason,
            }
        )

        super().__init__(
            message=f"Error: {reason}",
            error_code=f"{service_name.upper()}_{error_type.upper()}",
            details=additional_details,
        )
        self.service_name = service_name
        self.error_type = error_type
        self.reason = reason


class IdentifierNotFoundError(RelayError):
    """The validator did not recognise the identifier."""

    def __init__(self, status_code: Optional[int] = None):
        super().__init__(
            message="Identificador no encontrado en el sistema",
            error_code="IDENTIFIER_NOT_FOUND",
            details={"upstream_status": status_code},
        )


class CaseReferenceNotFoundError(RelayError):
    """The validation response has no known case-reference field.

    Carries the full upstream payload and its keys so an operator can see
    which field name the upstream started using.
    """

    def __init__(self, payload: dict[str, Any], keys: list[str]):
        super().__init__(
            message="No se encontró el número de expediente en la respuesta",
            error_code="CASE_REFERENCE_NOT_FOUND",
            details={"keys": keys},
        )
        self.payload = payload
        self.keys = keys

    def debug(self) -> Optional[dict[str, Any]]:
        return {
            "respuesta_completa": self.payload,
            "campos_disponibles": self.keys,
        }


class DocumentDownloadError(RelayError):
    """The document endpoint returned an empty body."""

    def __init__(self, status_code: Optional[int]):
        super().__init__(
            message="Error al descargar documento",
            error_code="DOCUMENT_DOWNLOAD_FAILED",
            details={"upstream_status": status_code},
        )
        self.status_code = status_code

    def debug(self) -> Optional[dict[str, Any]]:
        return {"status": self.status_code}
