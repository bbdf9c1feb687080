import logging
import ssl
from typing import Any, NoReturn, Optional
from urllib.parse import quote

import httpx
from relay.core.config import (
    BROWSER_HEADERS,
    DOCUMENT_PATH,
    ERROR_BODY_MAX_CHARS,
    EXTERIORES_SERVICE_NAME,
    FORM_CONTENT_TYPE,
    UPSTREAM_MAX_REDIRECTS,
    UPSTREAM_TIMEOUT_SECONDS,
    VALIDATION_PATH,
)
from relay.core.exceptions import ExternalServiceError
from relay.models import DocumentResult, ValidationResult

logger = logging.getLogger(__name__)


def _is_tls_failure(exc: BaseException) -> bool:
    """Walk the cause chain looking for an SSL error."""
    seen: set[int] = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, ssl.SSLError):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def _raise_upstream_error(exc: httpx.HTTPError) -> NoReturn:
    reason = str(exc) or type(exc).__name__
    if isinstance(exc, httpx.TimeoutException):
        error_type = "timeout"
    elif _is_tls_failure(exc):
        error_type = "tls_error"
    else:
        error_type = "unavailable"

    raise ExternalServiceError(
        service_name=EXTERIORES_SERVICE_NAME,
        error_type=error_type,
        reason=reason,
    ) from exc


def _decode_body(resp: httpx.Response) -> Any:
    """Decode a JSON body; a body that is not JSON is kept as text."""
    try:
        return resp.json()
    except ValueError:
        logger.warning(
            "Validation response is not JSON: %s",
            resp.text[:ERROR_BODY_MAX_CHARS],
            extra={"http_status": resp.status_code},
        )
        return resp.text


class ExterioresClient:
    """Async client for the consular registration form service.

    Both calls accept any HTTP status; callers inspect the result instead.
    Transport failures are raised as ``ExternalServiceError``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = UPSTREAM_TIMEOUT_SECONDS,
        max_redirects: int = UPSTREAM_MAX_REDIRECTS,
        verify: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_redirects = max_redirects
        self.verify = verify
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            verify=self.verify,
            headers=BROWSER_HEADERS,
            follow_redirects=True,
            max_redirects=self.max_redirects,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def validar_identificador(
        self, identificador: str, consulado: str
    ) -> ValidationResult:
        """Submit the identifier to the validator.

        Args:
            identificador: Applicant identifier, sent uppercased.
            consulado: Consulate selector.

        Returns:
            ValidationResult with the status code and decoded body.

        Raises:
            ExternalServiceError: On timeout, TLS or connection failure.
        """
        if not self._client:
            raise RuntimeError("Client not started")

        try:
            resp = await self._client.post(
                VALIDATION_PATH,
                data={
                    "identificador": identificador.upper(),
                    "consulado": consulado,
                },
                headers={"Content-Type": FORM_CONTENT_TYPE},
            )
        except httpx.HTTPError as e:
            _raise_upstream_error(e)

        return ValidationResult(status_code=resp.status_code, raw=_decode_body(resp))

    async def obtener_resguardo(self, expediente: str) -> DocumentResult:
        """Download the receipt for a case reference.

        The case reference is percent-encoded as a single path segment.

        Raises:
            ExternalServiceError: On timeout, TLS or connection failure.
        """
        if not self._client:
            raise RuntimeError("Client not started")

        path = DOCUMENT_PATH.format(expediente=quote(expediente, safe=""))
        try:
            resp = await self._client.get(path)
        except httpx.HTTPError as e:
            _raise_upstream_error(e)

        return DocumentResult(status_code=resp.status_code, content=resp.content)
