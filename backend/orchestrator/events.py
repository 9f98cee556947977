"""
Unified event definitions for the dispatcher.

Rules:
- Events describe facts that have occurred (a launch, a press, an intent).
- Events carry data only (no behavior).
- All dispatcher decisions are based on these events.
- Wire payloads are decoded into events by protocol.envelope; nothing
  downstream looks at raw request dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from protocol.slots import SlotValue


# =============================================================================
# Event Type Enumeration
# =============================================================================

class EventType(str, Enum):
    """
    Canonical event types understood by the dispatcher.

    Every event type must be explicitly handled or explicitly ignored
    (logged) by the dispatcher.
    """

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------
    LAUNCH = "LAUNCH"
    SESSION_ENDED = "SESSION_ENDED"
    EXCEPTION_ENCOUNTERED = "EXCEPTION_ENCOUNTERED"

    # ------------------------------------------------------------------
    # Input handler
    # ------------------------------------------------------------------
    INPUT_HANDLER_BATCH = "INPUT_HANDLER_BATCH"
    BUTTON_DOWN = "BUTTON_DOWN"
    INPUT_TIMEOUT = "INPUT_TIMEOUT"

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------
    FAVORITE_COLOR = "FAVORITE_COLOR"
    HELP = "HELP"
    STOP = "STOP"
    CANCEL = "CANCEL"

    # ------------------------------------------------------------------
    # Fallback
    # ------------------------------------------------------------------
    UNHANDLED = "UNHANDLED"


# =============================================================================
# Base Event
# =============================================================================

class Event:
    """
    Base event type.

    event_type is an explicit discriminant and must never be inferred
    from Python type identity.
    """

    event_type: EventType


# =============================================================================
# Input Handler Events
# =============================================================================

class InputEvent(Event):
    """One entry of an input handler batch (ButtonDown | InputTimeout)."""


@dataclass(frozen=True)
class ButtonDown(InputEvent):
    """A gadget button was pressed."""
    device_id: str
    event_type: EventType = EventType.BUTTON_DOWN


@dataclass(frozen=True)
class InputTimeout(InputEvent):
    """The listening window declared by StartInputHandler expired."""
    event_type: EventType = EventType.INPUT_TIMEOUT


@dataclass(frozen=True)
class InputHandlerBatch(Event):
    """
    Ordered input events delivered in one invocation.

    Malformed entries have already been dropped by the decoder.
    """
    events: tuple[InputEvent, ...] = ()
    event_type: EventType = EventType.INPUT_HANDLER_BATCH


# =============================================================================
# Session Lifecycle Events
# =============================================================================

@dataclass(frozen=True)
class Launch(Event):
    """User opened the skill."""
    event_type: EventType = EventType.LAUNCH


@dataclass(frozen=True)
class SessionEnded(Event):
    """Platform closed the session."""
    reason: str | None = None
    event_type: EventType = EventType.SESSION_ENDED


@dataclass(frozen=True)
class ExceptionEncountered(Event):
    """Platform reported that a previous response failed."""
    error: Mapping[str, object] | None = None
    cause: Mapping[str, object] | None = None
    event_type: EventType = EventType.EXCEPTION_ENCOUNTERED


# =============================================================================
# Intent Events
# =============================================================================

@dataclass(frozen=True)
class FavoriteColor(Event):
    """User named a color; slots are already resolved."""
    slots: Mapping[str, SlotValue] = field(default_factory=dict)
    event_type: EventType = EventType.FAVORITE_COLOR


@dataclass(frozen=True)
class Help(Event):
    event_type: EventType = EventType.HELP


@dataclass(frozen=True)
class Stop(Event):
    event_type: EventType = EventType.STOP


@dataclass(frozen=True)
class Cancel(Event):
    event_type: EventType = EventType.CANCEL


@dataclass(frozen=True)
class Unhandled(Event):
    """Anything we do not understand (unknown request type or intent)."""
    request_type: str | None = None
    event_type: EventType = EventType.UNHANDLED
