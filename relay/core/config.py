# =============================================================================
# Upstream (formularioinscripcion.exteriores.gob.es)
# =============================================================================

EXTERIORES_SERVICE_NAME = "exteriores"
EXTERIORES_BASE_URL = "https://formularioinscripcion.exteriores.gob.es"

VALIDATION_PATH = "/citaprevia/validaciones/validarIdentificador"
DOCUMENT_PATH = "/citaprevia/documento/obtenerResguardo/{expediente}"

# Field in the validation response that flags a known identifier
EXISTS_FLAG_FIELD = "existeIdentificador"

# The upstream rejects requests that do not look like they come from a browser
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "es-ES,es;q=0.9",
    "Referer": "https://formularioinscripcion.exteriores.gob.es/",
    "Cache-Control": "no-cache",
}

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


# =============================================================================
# External Service Timeouts
# =============================================================================

UPSTREAM_TIMEOUT_SECONDS = 15.0  # Per outbound call, no retry
UPSTREAM_MAX_REDIRECTS = 10


# =============================================================================
# Lookup defaults
# =============================================================================

DEFAULT_CONSULADO = "1"

# Tried in order, exact case-sensitive match, first truthy value wins
CASE_REFERENCE_FIELDS = (
    "expediente",
    "numeroExpediente",
    "numExpediente",
    "idExpediente",
    "codigoExpediente",
    "expedienteId",
    "referenciaExpediente",
    "numeroSolicitud",
    "idSolicitud",
    "solicitud",
    "numeroInscripcion",
    "idInscripcion",
)


# =============================================================================
# Error Handling
# =============================================================================

ERROR_BODY_MAX_CHARS = 200  # Maximum chars from upstream bodies in logs
