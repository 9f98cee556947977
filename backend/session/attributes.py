"""
SessionState <-> session attributes.

The platform persists a flat JSON mapping between invocations:

    {
        "buttonCount": 2,
        "amzn1.ask.gadget.AAA_initialized": true,
        "amzn1.ask.gadget.BBB_initialized": true,
        "breathAnimation": [{"durationMs": 40, "color": "000000", ...}, ...]
    }

Responsibilities:
- Rebuild a SessionState at the start of every invocation
- Serialize the returned SessionState for the response

Non-responsibilities:
- No durability or concurrency guarantees (the store owns those)
- No dispatch decisions
"""

from __future__ import annotations

from typing import Any, Mapping

from constants import (
    ATTR_BREATH_ANIMATION,
    ATTR_BUTTON_COUNT,
    ATTR_INITIALIZED_SUFFIX,
)
from lights.animation import DEFAULT_BREATH_ANIMATION, Animation, AnimationFrame
from observability.logger import log_event
from orchestrator.state_dataclass import ButtonRecord, SessionState


def _load_breath_animation(raw: Any) -> Animation:
    if raw is None:
        return DEFAULT_BREATH_ANIMATION

    try:
        frames = tuple(AnimationFrame.from_wire(frame) for frame in raw)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        log_event({
            "event_type": "SESSION_ATTRIBUTES",
            "level": "WARNING",
            "decision": "breath_animation_reset",
            "details": {"error": str(exc)},
        })
        return DEFAULT_BREATH_ANIMATION

    return frames or DEFAULT_BREATH_ANIMATION


def state_from_attributes(attributes: Mapping[str, Any] | None) -> SessionState:
    """
    Rebuild session state from persisted attributes.

    Missing keys mean a fresh session. If the stored count disagrees with
    the stored records, the records win.
    """
    attributes = attributes or {}

    records: dict[str, ButtonRecord] = {}
    for key, value in attributes.items():
        if key.endswith(ATTR_INITIALIZED_SUFFIX) and value is True:
            device_id = key[: -len(ATTR_INITIALIZED_SUFFIX)]
            records[device_id] = ButtonRecord(device_id=device_id, seen=True)

    stored_count = attributes.get(ATTR_BUTTON_COUNT, 0)
    if stored_count != len(records):
        log_event({
            "event_type": "SESSION_ATTRIBUTES",
            "level": "WARNING",
            "decision": "button_count_repaired",
            "details": {"stored": stored_count, "records": len(records)},
        })

    return SessionState(
        button_count=len(records),
        records=records,
        breath_animation=_load_breath_animation(attributes.get(ATTR_BREATH_ANIMATION)),
    )


def state_to_attributes(state: SessionState) -> dict[str, Any]:
    attributes: dict[str, Any] = {ATTR_BUTTON_COUNT: state.button_count}

    for device_id, record in state.records.items():
        if record.seen:
            attributes[device_id + ATTR_INITIALIZED_SUFFIX] = True

    attributes[ATTR_BREATH_ANIMATION] = [frame.to_wire() for frame in state.breath_animation]
    return attributes
