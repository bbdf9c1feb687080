"""
Per-step wall-clock timings for a single lookup.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Dict


class StepTimers:
    """
    Accumulate elapsed milliseconds per named step ("validar", "resguardo").
    """

    def __init__(self) -> None:
        self.totals: Dict[str, float] = {}

    @contextmanager
    def timer(self, name: str):
        start_time = time.perf_counter()
        try:
            yield
        finally:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            self.totals[name] = self.totals.get(name, 0.0) + elapsed_ms

    def as_extra(self) -> Dict[str, int]:
        """Rounded totals for the ``duration_ms`` log field."""
        return {name: round(value) for name, value in self.totals.items()}
