"""Two-step receipt lookup: validate the identifier, then fetch the PDF."""

import logging
from collections.abc import Sequence
from typing import Optional

import httpx
from core.logging_utils import sanitize_identificador
from core.settings import Settings, settings
from relay.clients.exteriores_client import ExterioresClient
from relay.core.config import CASE_REFERENCE_FIELDS, DEFAULT_CONSULADO
from relay.core.exceptions import (
    CaseReferenceNotFoundError,
    DocumentDownloadError,
    IdentifierNotFoundError,
    MissingIdentifierError,
    RelayError,
)
from relay.discovery import available_keys, find_case_reference
from relay.models import DiagnosticReport, LookupFailure, LookupOutcome, ResguardoFound
from relay.utils.timing import StepTimers

logger = logging.getLogger(__name__)


class ResguardoService:
    """Runs one lookup per call; holds configuration only, no request state."""

    def __init__(
        self,
        base_url: str,
        timeout: float,
        max_redirects: int,
        verify: bool = True,
        candidates: Sequence[str] = CASE_REFERENCE_FIELDS,
        default_consulado: str = DEFAULT_CONSULADO,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.max_redirects = max_redirects
        self.verify = verify
        self.candidates = tuple(candidates)
        self.default_consulado = default_consulado
        self._transport = transport

    def _consulado(self, consulado: Optional[str]) -> str:
        # Only an absent selector falls back; an explicit "" is sent as is
        return self.default_consulado if consulado is None else consulado

    def _client(self) -> ExterioresClient:
        return ExterioresClient(
            base_url=self.base_url,
            timeout=self.timeout,
            max_redirects=self.max_redirects,
            verify=self.verify,
            transport=self._transport,
        )

    async def buscar(
        self, identificador: Optional[str], consulado: Optional[str] = None
    ) -> LookupOutcome:
        """Look up the receipt for an identifier.

        Never raises for expected failures: every ``RelayError`` becomes a
        ``LookupFailure`` carrying its message and diagnostic context.
        """
        try:
            return await self._buscar(identificador, self._consulado(consulado))
        except RelayError as e:
            logger.info(
                "[BUSCAR] failed: %s",
                e.message,
                extra={"error_code": e.error_code},
            )
            return LookupFailure.from_error(e)

    async def _buscar(self, identificador: Optional[str], consulado: str) -> ResguardoFound:
        if not identificador:
            raise MissingIdentifierError()

        masked = sanitize_identificador(identificador)
        timers = StepTimers()
        logger.info("[BUSCAR] start identificador=%s consulado=%s", masked, consulado)

        async with self._client() as client:
            with timers.timer("validar"):
                validation = await client.validar_identificador(identificador, consulado)

            logger.info(
                "[BUSCAR] validation status=%s keys=%s",
                validation.status_code,
                available_keys(validation.data),
                extra={"http_status": validation.status_code},
            )

            if not validation.exists:
                raise IdentifierNotFoundError(validation.status_code)

            expediente = find_case_reference(validation.data, self.candidates)
            if not expediente:
                keys = available_keys(validation.data)
                logger.warning(
                    "[BUSCAR] case reference not found, available keys=%s", keys
                )
                raise CaseReferenceNotFoundError(validation.data, keys)

            with timers.timer("resguardo"):
                document = await client.obtener_resguardo(expediente)

        logger.info(
            "[BUSCAR] document status=%s size=%d bytes",
            document.status_code,
            len(document.content),
            extra={"http_status": document.status_code, "expediente": expediente},
        )

        if not document.content:
            raise DocumentDownloadError(document.status_code)

        logger.info(
            "[BUSCAR] receipt retrieved",
            extra={"expediente": expediente, "duration_ms": timers.as_extra()},
        )
        return ResguardoFound(expediente=expediente, pdf=document.content)

    async def diagnosticar(
        self, identificador: Optional[str], consulado: Optional[str] = None
    ) -> DiagnosticReport:
        """Run only the validation call and return its raw answer.

        Raises:
            MissingIdentifierError: If no identifier was given.
            ExternalServiceError: On upstream transport failure.
        """
        if not identificador:
            raise MissingIdentifierError()

        logger.info("[DEBUG] identificador=%s", sanitize_identificador(identificador))
        async with self._client() as client:
            validation = await client.validar_identificador(
                identificador, self._consulado(consulado)
            )

        return DiagnosticReport(
            status_code=validation.status_code,
            respuesta=validation.raw,
            keys=available_keys(validation.data),
            expediente=find_case_reference(validation.data, self.candidates),
        )


def create_resguardo_service_from_env(
    config: Settings = settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ResguardoService:
    """Factory function to create ResguardoService from centralized settings."""
    return ResguardoService(
        base_url=config.UPSTREAM_BASE_URL,
        timeout=config.UPSTREAM_TIMEOUT_SECONDS,
        max_redirects=config.UPSTREAM_MAX_REDIRECTS,
        verify=config.UPSTREAM_VERIFY_SSL,
        candidates=config.CASE_REFERENCE_FIELDS,
        default_consulado=config.DEFAULT_CONSULADO,
        transport=transport,
    )
