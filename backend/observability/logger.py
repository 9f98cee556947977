"""
JSONL event logger.

- One JSON object per line
- Output to stdout
- No buffering, no batching
- Can be switched off process-wide (ENABLE_JSON_LOGS=0)
- Records carry an optional "level" (default INFO); records below
  LOG_LEVEL are dropped
"""

from __future__ import annotations

import json
import logging
import sys
import time
from typing import Any, Callable, Mapping


# ------------------------------------------------------------------
# Explicit output sink (patchable in tests)
# ------------------------------------------------------------------

def _stdout_print(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()

_print: Callable[[str], None] = _stdout_print

_enabled: bool = True

_min_level: int = logging.INFO


def _level_number(name: Any) -> int:
    number = logging.getLevelName(str(name).upper())
    return number if isinstance(number, int) else logging.INFO


def configure(*, enabled: bool, level: str = "INFO") -> None:
    """Set output on/off and the minimum level (called once from the app factory)."""
    global _enabled, _min_level  # pylint: disable=global-statement
    _enabled = enabled
    _min_level = _level_number(level)


def log_event(event: Mapping[str, Any]) -> None:
    """
    Write a single JSONL event to stdout.

    ts_ms is filled in with wall-clock time when the caller leaves it out.
    Never raises: unserializable payloads are replaced by a
    LOGGER_SERIALIZATION_ERROR record.
    """
    if not _enabled:
        return
    if _level_number(event.get("level", "INFO")) < _min_level:
        return

    payload = dict(event)
    payload.setdefault("ts_ms", time.time_ns() // 1_000_000)

    try:
        line = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        # Last-resort fallback; logging must never break a voice turn
        fallback: dict[str, Any] = {
            "ts_ms": payload["ts_ms"],
            "event_type": "LOGGER_SERIALIZATION_ERROR",
            "error": str(e),
            "original_event_repr": repr(event),
        }
        line = json.dumps(fallback, ensure_ascii=False, separators=(",", ":"))

    _print(line)
