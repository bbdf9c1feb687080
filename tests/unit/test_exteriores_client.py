"""Unit tests for the upstream HTTP client."""

import ssl
from urllib.parse import parse_qs

import httpx
import pytest

from relay.clients.exteriores_client import ExterioresClient
from relay.core.config import BROWSER_HEADERS, VALIDATION_PATH
from relay.core.exceptions import ExternalServiceError


def _client(handler) -> ExterioresClient:
    return ExterioresClient(
        base_url="https://exteriores.test/",
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


class TestValidarIdentificador:
    """Tests for the validation call."""

    @pytest.mark.asyncio
    async def test_posts_uppercased_form(self, upstream):
        async with _client(upstream.handler) as client:
            result = await client.validar_identificador("ab12cd", "3")

        request = upstream.validation_requests[0]
        form = parse_qs(request.content.decode())
        assert form == {"identificador": ["AB12CD"], "consulado": ["3"]}
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert request.url.path == VALIDATION_PATH
        assert result.status_code == 200
        assert result.exists is True

    @pytest.mark.asyncio
    async def test_sends_browser_headers(self, upstream):
        async with _client(upstream.handler) as client:
            await client.validar_identificador("AB12CD", "1")

        request = upstream.requests[0]
        for name in ("User-Agent", "Accept-Language", "Referer"):
            assert request.headers[name] == BROWSER_HEADERS[name]

    @pytest.mark.asyncio
    async def test_error_status_is_not_enforced(self, upstream):
        upstream.set_validation(status=500, json={"existeIdentificador": False})

        async with _client(upstream.handler) as client:
            result = await client.validar_identificador("AB12CD", "1")

        assert result.status_code == 500
        assert result.exists is False

    @pytest.mark.asyncio
    async def test_non_json_body_kept_as_text(self, upstream):
        upstream.set_validation(status=200, text="<html>mantenimiento</html>")

        async with _client(upstream.handler) as client:
            result = await client.validar_identificador("AB12CD", "1")

        assert result.raw == "<html>mantenimiento</html>"
        assert result.data == {}
        assert result.exists is False

    @pytest.mark.asyncio
    async def test_json_list_kept_raw(self, upstream):
        upstream.set_validation(json=[{"existeIdentificador": True}])

        async with _client(upstream.handler) as client:
            result = await client.validar_identificador("AB12CD", "1")

        assert result.raw == [{"existeIdentificador": True}]
        assert result.data == {}
        assert result.exists is False

    @pytest.mark.asyncio
    async def test_follows_redirects(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == VALIDATION_PATH:
                return httpx.Response(307, headers={"Location": "/nuevo/validar"})
            return httpx.Response(200, json={"existeIdentificador": True})

        async with _client(handler) as client:
            result = await client.validar_identificador("AB12CD", "1")

        assert result.exists is True


class TestTransportFailures:
    """Transport errors are classified, never retried."""

    @pytest.mark.asyncio
    async def test_timeout(self, upstream):
        upstream.fail_validation(
            lambda request: httpx.ReadTimeout("timed out", request=request)
        )

        async with _client(upstream.handler) as client:
            with pytest.raises(ExternalServiceError) as exc_info:
                await client.validar_identificador("AB12CD", "1")

        assert exc_info.value.error_type == "timeout"
        assert exc_info.value.message == "Error: timed out"
        assert len(upstream.requests) == 1

    @pytest.mark.asyncio
    async def test_connection_refused(self, upstream):
        upstream.fail_validation(
            lambda request: httpx.ConnectError("Connection refused", request=request)
        )

        async with _client(upstream.handler) as client:
            with pytest.raises(ExternalServiceError) as exc_info:
                await client.validar_identificador("AB12CD", "1")

        assert exc_info.value.error_type == "unavailable"
        assert exc_info.value.error_code == "EXTERIORES_UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_certificate_failure_is_distinct(self):
        def handler(request: httpx.Request) -> httpx.Response:
            try:
                raise ssl.SSLCertVerificationError(1, "certificate verify failed")
            except ssl.SSLError as e:
                raise httpx.ConnectError(
                    "[SSL: CERTIFICATE_VERIFY_FAILED] certificate verify failed",
                    request=request,
                ) from e

        async with _client(handler) as client:
            with pytest.raises(ExternalServiceError) as exc_info:
                await client.validar_identificador("AB12CD", "1")

        assert exc_info.value.error_type == "tls_error"
        assert "CERTIFICATE_VERIFY_FAILED" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_too_many_redirects(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(302, headers={"Location": request.url.path})

        client = ExterioresClient(
            base_url="https://exteriores.test",
            max_redirects=2,
            transport=httpx.MockTransport(handler),
        )
        async with client:
            with pytest.raises(ExternalServiceError) as exc_info:
                await client.validar_identificador("AB12CD", "1")

        assert exc_info.value.error_type == "unavailable"


class TestObtenerResguardo:
    """Tests for the document call."""

    @pytest.mark.asyncio
    async def test_returns_raw_bytes(self, upstream):
        upstream.set_document(content=b"%PDF-1.7 bytes")

        async with _client(upstream.handler) as client:
            result = await client.obtener_resguardo("EXP-1")

        assert result.content == b"%PDF-1.7 bytes"
        assert upstream.document_requests[0].url.path.endswith("/EXP-1")

    @pytest.mark.asyncio
    async def test_case_reference_is_one_path_segment(self, upstream):
        async with _client(upstream.handler) as client:
            await client.obtener_resguardo("2024/001 A")

        raw_path = upstream.document_requests[0].url.raw_path
        assert raw_path == b"/citaprevia/documento/obtenerResguardo/2024%2F001%20A"

    @pytest.mark.asyncio
    async def test_requires_started_client(self):
        client = ExterioresClient(base_url="https://exteriores.test")
        with pytest.raises(RuntimeError):
            await client.obtener_resguardo("EXP-1")
