"""Shared fixtures: an in-memory stand-in for the upstream form service."""

from __future__ import annotations

from typing import Callable, Union

import httpx
import pytest

from relay.core.config import VALIDATION_PATH
from relay.service import ResguardoService

PDF_BYTES = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<< /Type /Catalog >>\nendobj\n%%EOF\n"
DOCUMENT_PREFIX = "/citaprevia/documento/obtenerResguardo/"

Reply = Union[httpx.Response, Exception]


class FakeExteriores:
    """Records every request and answers from configurable factories."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.set_validation(json={"existeIdentificador": True, "numeroExpediente": "EXP-2024-001"})
        self.set_document(content=PDF_BYTES)

    def set_validation(self, status: int = 200, **kwargs) -> None:
        self._validation: Callable[[httpx.Request], Reply] = (
            lambda request: httpx.Response(status, **kwargs)
        )

    def set_document(self, status: int = 200, **kwargs) -> None:
        self._document: Callable[[httpx.Request], Reply] = (
            lambda request: httpx.Response(status, **kwargs)
        )

    def fail_validation(self, factory: Callable[[httpx.Request], Exception]) -> None:
        self._validation = factory

    def fail_document(self, factory: Callable[[httpx.Request], Exception]) -> None:
        self._document = factory

    @property
    def validation_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == VALIDATION_PATH]

    @property
    def document_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.startswith(DOCUMENT_PREFIX)]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST" and request.url.path == VALIDATION_PATH:
            reply = self._validation(request)
        elif request.method == "GET" and request.url.path.startswith(DOCUMENT_PREFIX):
            reply = self._document(request)
        else:
            reply = httpx.Response(404, json={"detail": "not found"})

        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def upstream() -> FakeExteriores:
    return FakeExteriores()


@pytest.fixture
def service(upstream: FakeExteriores) -> ResguardoService:
    return ResguardoService(
        base_url="https://exteriores.test",
        timeout=1.0,
        max_redirects=10,
        transport=httpx.MockTransport(upstream.handler),
    )


@pytest.fixture
def pdf_bytes() -> bytes:
    return PDF_BYTES
