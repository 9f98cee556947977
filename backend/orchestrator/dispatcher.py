"""
Pure event dispatcher.

(state, event) -> DispatchResult(new_state, directives, speech, ...)

Rules:
- Pure: no I/O, no clocks. Log payloads are returned, not written.
- Deterministic: output depends only on inputs.
- Total: every event type is handled or explicitly ignored (logged).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping

from constants import (
    COLOR_SLOT,
    FALLBACK_COLOR_HEX,
    FALLBACK_COLOR_NAME,
    INPUT_HANDLER_TIMEOUT_MS,
    PLAY_BEHAVIOR_REPLACE_ALL,
    REPROMPT_WELCOME,
    SPEECH_BUTTON_HELLO,
    SPEECH_CANCEL,
    SPEECH_FAREWELL,
    SPEECH_FAVORITE_COLOR,
    SPEECH_HELP,
    SPEECH_STOP,
    SPEECH_UNHANDLED,
    SPEECH_WELCOME,
)
from lights.animation import favorite_color_breath
from lights.color import InvalidColorFormat
from lights.color_names import color_name_to_hex
from orchestrator.directives import (
    Directive,
    button_down_animation_directive,
    fadeout_animation_directive,
    idle_animation_directive,
    start_input_handler,
)
from orchestrator.events import (
    ButtonDown,
    Cancel,
    Event,
    EventType,
    ExceptionEncountered,
    FavoriteColor,
    Help,
    InputEvent,
    InputHandlerBatch,
    InputTimeout,
    Launch,
    SessionEnded,
    Stop,
    Unhandled,
)
from orchestrator.state_dataclass import SessionState
from orchestrator.tracker import on_button_down
from protocol.slots import SlotValue


# =============================================================================
# Result
# =============================================================================

@dataclass(frozen=True)
class DispatchResult:
    """
    Everything one invocation produces.

    speech / reprompt: None means "say nothing"
    play_behavior: None leaves the platform default (enqueue)
    end_session: True closes the session after this response
    logs: observability payloads; the caller writes them
    """
    state: SessionState
    directives: tuple[Directive, ...] = ()
    speech: str | None = None
    reprompt: str | None = None
    play_behavior: str | None = None
    end_session: bool = False
    logs: tuple[dict[str, Any], ...] = ()


# =============================================================================
# Small helpers
# =============================================================================

def _log(
    state: SessionState,
    event_type: EventType,
    decision: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return {
        "event_type": event_type.value,
        "decision": decision,
        "button_count": state.button_count,
        "details": details or {},
    }


# =============================================================================
# Session lifecycle
# =============================================================================

def handle_launch(
    state: SessionState,
    input_timeout_ms: int = INPUT_HANDLER_TIMEOUT_MS,
) -> DispatchResult:
    """
    Start listening and prime every awake gadget.

    Gadgets are not known yet, so the idle and button-down animations are
    broadcast (empty target list). Button tracking starts from zero.
    """
    new_state = replace(state, button_count=0, records={})

    return DispatchResult(
        state=new_state,
        directives=(
            start_input_handler(input_timeout_ms),
            idle_animation_directive((), new_state.breath_animation),
            button_down_animation_directive(()),
        ),
        speech=SPEECH_WELCOME,
        reprompt=REPROMPT_WELCOME,
        logs=(
            _log(new_state, EventType.LAUNCH, "input_handler_started", {
                "timeout_ms": input_timeout_ms,
            }),
        ),
    )


def handle_session_ended(state: SessionState, reason: str | None = None) -> DispatchResult:
    return DispatchResult(
        state=state,
        logs=(_log(state, EventType.SESSION_ENDED, "session_ended", {"reason": reason}),),
    )


def handle_exception(
    state: SessionState,
    error: Mapping[str, object] | None = None,
    cause: Mapping[str, object] | None = None,
) -> DispatchResult:
    return DispatchResult(
        state=state,
        logs=(
            _log(state, EventType.EXCEPTION_ENCOUNTERED, "exception_encountered", {
                "error": dict(error or {}),
                "cause": dict(cause or {}),
            }),
        ),
    )


# =============================================================================
# Input handler
# =============================================================================

def handle_input_handler_batch(
    state: SessionState,
    events: Iterable[InputEvent],
) -> DispatchResult:
    """
    Process one batch of input events in arrival order.

    - First press of a gadget: re-send idle + button-down animations to
      that gadget only (it may have been asleep at launch) and announce it.
      Announcements replace any speech already queued, so the last one in
      the batch is what is heard.
    - Repeat press: no state change, no directives, no speech.
    - Timeout: farewell, fadeout on all gadgets, end the session.
    """
    directives: list[Directive] = []
    logs: list[dict[str, Any]] = []
    speech: str | None = None
    play_behavior: str | None = None
    end_session = False

    for event in events:
        if isinstance(event, ButtonDown):
            state, is_new_device = on_button_down(state, event.device_id)

            if not is_new_device:
                logs.append(_log(state, event.event_type, "button_already_seen", {
                    "device_id": event.device_id,
                }))
                continue

            directives.append(idle_animation_directive((event.device_id,), state.breath_animation))
            directives.append(button_down_animation_directive((event.device_id,)))
            speech = SPEECH_BUTTON_HELLO.format(button_count=state.button_count)
            play_behavior = PLAY_BEHAVIOR_REPLACE_ALL
            logs.append(_log(state, event.event_type, "button_registered", {
                "device_id": event.device_id,
            }))

        elif isinstance(event, InputTimeout):
            speech = SPEECH_FAREWELL
            play_behavior = None
            directives.append(fadeout_animation_directive())
            end_session = True
            logs.append(_log(state, event.event_type, "input_handler_timed_out"))

        else:
            logs.append(_log(state, EventType.INPUT_HANDLER_BATCH, "input_event_ignored", {
                "event": type(event).__name__,
            }))

    return DispatchResult(
        state=state,
        directives=tuple(directives),
        speech=speech,
        play_behavior=play_behavior,
        end_session=end_session,
        logs=tuple(logs),
    )


# =============================================================================
# Intents
# =============================================================================

def handle_favorite_color(
    state: SessionState,
    slots: Mapping[str, SlotValue],
) -> DispatchResult:
    """
    Switch the idle breath to black <-> the named color.

    Takes effect for every idle directive sent later in this session.
    """
    slot = slots.get(COLOR_SLOT)
    color_name = slot.resolved if slot is not None and slot.resolved else FALLBACK_COLOR_NAME
    color_hex = color_name_to_hex(color_name)

    logs = [
        _log(state, EventType.FAVORITE_COLOR, "favorite_color_set", {
            "color": color_name,
            "hex": color_hex,
            "validated": slot.is_validated if slot is not None else False,
        }),
    ]

    try:
        breath = favorite_color_breath(color_hex)
    except InvalidColorFormat as exc:
        logs.append(_log(state, EventType.FAVORITE_COLOR, "invalid_color_fallback", {
            "hex": color_hex,
            "error": str(exc),
        }))
        breath = favorite_color_breath(FALLBACK_COLOR_HEX)

    return DispatchResult(
        state=replace(state, breath_animation=breath),
        speech=SPEECH_FAVORITE_COLOR.format(color=color_name),
        logs=tuple(logs),
    )


def handle_help(state: SessionState) -> DispatchResult:
    return DispatchResult(
        state=state,
        speech=SPEECH_HELP,
        end_session=True,
        logs=(_log(state, EventType.HELP, "help"),),
    )


def handle_stop(state: SessionState) -> DispatchResult:
    return DispatchResult(
        state=state,
        directives=(fadeout_animation_directive(),),
        speech=SPEECH_STOP,
        end_session=True,
        logs=(_log(state, EventType.STOP, "stop"),),
    )


def handle_cancel(state: SessionState) -> DispatchResult:
    return DispatchResult(
        state=state,
        directives=(fadeout_animation_directive(),),
        speech=SPEECH_CANCEL,
        end_session=True,
        logs=(_log(state, EventType.CANCEL, "cancel"),),
    )


def handle_unhandled(state: SessionState, request_type: str | None = None) -> DispatchResult:
    return DispatchResult(
        state=state,
        speech=SPEECH_UNHANDLED,
        reprompt=SPEECH_UNHANDLED,
        logs=(_log(state, EventType.UNHANDLED, "unhandled", {"request_type": request_type}),),
    )


# =============================================================================
# Entry point
# =============================================================================

def dispatch(
    state: SessionState,
    event: Event,
    *,
    input_timeout_ms: int = INPUT_HANDLER_TIMEOUT_MS,
) -> DispatchResult:
    """
    Route a single decoded event to its handler.

    Unknown event classes are answered like an unhandled request rather
    than raising; a live voice turn must always get a reply.
    """
    if isinstance(event, Launch):
        return handle_launch(state, input_timeout_ms)

    if isinstance(event, InputHandlerBatch):
        return handle_input_handler_batch(state, event.events)

    if isinstance(event, FavoriteColor):
        return handle_favorite_color(state, event.slots)

    if isinstance(event, Help):
        return handle_help(state)

    if isinstance(event, Stop):
        return handle_stop(state)

    if isinstance(event, Cancel):
        return handle_cancel(state)

    if isinstance(event, SessionEnded):
        return handle_session_ended(state, event.reason)

    if isinstance(event, ExceptionEncountered):
        return handle_exception(state, event.error, event.cause)

    if isinstance(event, Unhandled):
        return handle_unhandled(state, event.request_type)

    return handle_unhandled(state, type(event).__name__)
