"""Locate the case reference in a schema-less validation response.

The validator is not ours and has renamed the case-number field before, so
the lookup tries a list of known names instead of a fixed one. When nothing
matches, callers report the raw payload and its keys so the list can be
extended.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Optional

from relay.core.config import CASE_REFERENCE_FIELDS


def find_case_reference(
    data: Any, candidates: Sequence[str] = CASE_REFERENCE_FIELDS
) -> Optional[str]:
    """Return the value of the first candidate key holding a truthy value.

    Args:
        data: Decoded upstream response. Anything but a mapping yields None.
        candidates: Key names in priority order (exact, case-sensitive).

    Returns:
        The case reference as a string, or None if no candidate matched.
    """
    if not isinstance(data, Mapping):
        return None

    for key in candidates:
        value = data.get(key)
        if value:
            return value if isinstance(value, str) else str(value)
    return None


def available_keys(data: Any) -> list[str]:
    """Keys of the upstream mapping in their original order."""
    if not isinstance(data, Mapping):
        return []
    return [str(key) for key in data.keys()]
