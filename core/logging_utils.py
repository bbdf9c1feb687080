"""
PII-safe logging utilities.

Applicant identifiers are personal data; logs keep just enough of them to
correlate a complaint with a request.
"""


def sanitize_identificador(identificador: str | None) -> str:
    """
    Mask an applicant identifier for logs.

    Rules:
    - None / empty / <5 chars → fully masked
    - Otherwise → first 2 + last 2 chars, middle masked
    """
    if not identificador:
        return "***"

    identificador = str(identificador).strip()
    if len(identificador) < 5:
        return "***"

    return f"{identificador[:2]}***{identificador[-2:]}"
