"""
Timing metrics.

- Durations use monotonic time
- One measurement = one METRIC_TIMER log event, never aggregated
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Iterator

from observability.logger import log_event


@contextmanager
def timed(
    name: str,
    *,
    session_id: str | None = None,
    details: dict[str, Any] | None = None,
) -> Iterator[None]:
    """
    Measure the wrapped block and log it, even if the block raises.

    Usage:
        with timed("dispatch", session_id=decoded.session_id):
            result = dispatch(state, decoded.event)
    """
    start_ns = time.monotonic_ns()
    try:
        yield
    finally:
        log_event({
            "event_type": "METRIC_TIMER",
            "metric": name,
            "value_ms": (time.monotonic_ns() - start_ns) // 1_000_000,
            "session_id": session_id,
            "details": details or {},
        })
