"""
Typed contracts passed between the upstream client, the lookup flow and the
API mappers.
"""

from __future__ import annotations

import base64
from typing import Any, Literal, Union

from pydantic import BaseModel

from relay.core.config import EXISTS_FLAG_FIELD
from relay.core.exceptions import RelayError


class ValidationResult(BaseModel):
    """
    Answer of the identifier validator.

    ``raw`` is the decoded JSON, or the body text when it is not JSON. The
    existence check and field discovery read ``data``, which is empty for
    anything but a JSON object so that the identifier simply counts as
    unknown.
    """

    status_code: int
    raw: Any = None

    @property
    def data(self) -> dict[str, Any]:
        return self.raw if isinstance(self.raw, dict) else {}

    @property
    def exists(self) -> bool:
        return bool(self.data.get(EXISTS_FLAG_FIELD))


class DocumentResult(BaseModel):
    """
    Raw body of the document endpoint and the status it came with.
    """

    status_code: int
    content: bytes


class ResguardoFound(BaseModel):
    """
    Successful lookup: the case reference and the receipt bytes.
    """

    kind: Literal["found"] = "found"
    expediente: str
    pdf: bytes

    @property
    def size(self) -> int:
        return len(self.pdf)

    @property
    def pdf_base64(self) -> str:
        return base64.b64encode(self.pdf).decode("ascii")


class LookupFailure(BaseModel):
    """
    Failed lookup with the message shown to the caller.
    """

    kind: Literal["failure"] = "failure"
    message: str
    error_code: str
    debug: dict[str, Any] | None = None

    @classmethod
    def from_error(cls, exc: RelayError) -> LookupFailure:
        return cls(message=exc.message, error_code=exc.error_code, debug=exc.debug())


LookupOutcome = Union[ResguardoFound, LookupFailure]


class DiagnosticReport(BaseModel):
    """
    Raw validator answer for operators, as returned by ``POST /debug``.
    """

    status_code: int
    keys: list[str]
    respuesta: Any = None
    expediente: str | None = None
