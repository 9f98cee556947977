"""
Directive definitions and builders for the gadget protocol.

Rules:
- Directives are declarative instructions for a downstream executor.
- Directives are emitted by the dispatcher and never parsed back.
- No behavior beyond rendering the exact wire dict, no I/O.
Invariant:
    - All concrete Directive subclasses MUST be frozen dataclasses.
    - An empty target_gadgets tuple means "every awake gadget".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping

from constants import (
    BUTTON_DOWN_COLOR,
    BUTTON_DOWN_DURATION_MS,
    BUTTON_DOWN_EVENT,
    BUTTON_DOWN_RECOGNIZER,
    FADEOUT_FROM_COLOR,
    FADEOUT_FROM_DURATION_MS,
    FADEOUT_TO_COLOR,
    FADEOUT_TO_DURATION_MS,
    IDLE_ANIMATION_REPEAT,
    SET_LIGHT_VERSION,
    TARGET_LIGHTS,
    TIMED_OUT_RECOGNIZER,
    TIMEOUT_EVENT,
    TRIGGER_BUTTON_DOWN,
    TRIGGER_NONE,
)
from lights.animation import Animation, AnimationFrame

# =============================================================================
# Directive Type Enumeration
# =============================================================================

class DirectiveType(str, Enum):
    """
    Wire-level directive types.

    The value is emitted verbatim as the directive's "type" field.
    """

    START_INPUT_HANDLER = "GameEngine.StartInputHandler"
    SET_LIGHT = "GadgetController.SetLight"


# =============================================================================
# Base Directive
# =============================================================================

class Directive:
    """
    Base directive type.

    directive_type is an explicit discriminant and must never be inferred
    from Python type identity.
    """

    directive_type: DirectiveType

    def to_wire(self) -> dict[str, Any]:
        raise NotImplementedError


# =============================================================================
# GameEngine
# =============================================================================

@dataclass(frozen=True)
class Recognizer:
    """Pattern recognizer matched against the raw button history."""
    actions: tuple[str, ...]
    anchor: str = "end"
    fuzzy: bool = False

    def to_wire(self) -> dict[str, Any]:
        return {
            "type": "match",
            "fuzzy": self.fuzzy,
            "anchor": self.anchor,
            "pattern": [{"action": action} for action in self.actions],
        }


@dataclass(frozen=True)
class InputHandlerEvent:
    """
    Event the input handler reports back to us.

    meets: recognizer names (or "timed out") that fire this event
    reports: "matches" or "history"
    """
    meets: tuple[str, ...]
    reports: str
    should_end_input_handler: bool

    def to_wire(self) -> dict[str, Any]:
        return {
            "meets": list(self.meets),
            "reports": self.reports,
            "shouldEndInputHandler": self.should_end_input_handler,
        }


@dataclass(frozen=True)
class StartInputHandler(Directive):
    """Open a time-bounded listening window on all gadgets."""
    timeout_ms: int
    recognizers: tuple[tuple[str, Recognizer], ...]
    events: tuple[tuple[str, InputHandlerEvent], ...]
    directive_type: DirectiveType = DirectiveType.START_INPUT_HANDLER

    def to_wire(self) -> dict[str, Any]:
        return {
            "type": self.directive_type.value,
            "timeout": self.timeout_ms,
            "recognizers": {name: r.to_wire() for name, r in self.recognizers},
            "events": {name: e.to_wire() for name, e in self.events},
        }


# =============================================================================
# GadgetController
# =============================================================================

@dataclass(frozen=True)
class LightAnimation:
    """An animation bound to a repeat count and target lights."""
    sequence: Animation
    repeat: int = 1
    target_lights: tuple[str, ...] = TARGET_LIGHTS

    def to_wire(self) -> dict[str, Any]:
        return {
            "repeat": self.repeat,
            "targetLights": list(self.target_lights),
            "sequence": [frame.to_wire() for frame in self.sequence],
        }


@dataclass(frozen=True)
class SetLight(Directive):
    """
    Load light animations onto gadgets.

    trigger_event "none" plays immediately; "buttonDown" is stored on the
    gadget and fires locally on the next press.
    """
    target_gadgets: tuple[str, ...]
    animations: tuple[LightAnimation, ...]
    trigger_event: str = TRIGGER_NONE
    trigger_event_time_ms: int = 0
    version: int = SET_LIGHT_VERSION
    directive_type: DirectiveType = DirectiveType.SET_LIGHT

    def to_wire(self) -> dict[str, Any]:
        return {
            "type": self.directive_type.value,
            "version": self.version,
            "targetGadgets": list(self.target_gadgets),
            "parameters": {
                "animations": [a.to_wire() for a in self.animations],
                "triggerEvent": self.trigger_event,
                "triggerEventTimeMs": self.trigger_event_time_ms,
            },
        }


# =============================================================================
# Builders
# =============================================================================

DEFAULT_RECOGNIZERS: tuple[tuple[str, Recognizer], ...] = (
    (BUTTON_DOWN_RECOGNIZER, Recognizer(actions=("down",))),
)

DEFAULT_INPUT_EVENTS: tuple[tuple[str, InputHandlerEvent], ...] = (
    (
        BUTTON_DOWN_EVENT,
        InputHandlerEvent(
            meets=(BUTTON_DOWN_RECOGNIZER,),
            reports="matches",
            should_end_input_handler=False,
        ),
    ),
    (
        TIMEOUT_EVENT,
        InputHandlerEvent(
            meets=(TIMED_OUT_RECOGNIZER,),
            reports="history",
            should_end_input_handler=True,
        ),
    ),
)


def start_input_handler(
    timeout_ms: int,
    recognizers: Mapping[str, Recognizer] | None = None,
    events: Mapping[str, InputHandlerEvent] | None = None,
) -> StartInputHandler:
    """
    Listen for button presses for timeout_ms.

    Defaults: one "down" recognizer, a non-terminal button_down_event and
    a terminal timeout event reporting the full history.
    """
    return StartInputHandler(
        timeout_ms=timeout_ms,
        recognizers=tuple(recognizers.items()) if recognizers is not None else DEFAULT_RECOGNIZERS,
        events=tuple(events.items()) if events is not None else DEFAULT_INPUT_EVENTS,
    )


def idle_animation_directive(
    target_device_ids: Iterable[str],
    animation: Animation,
) -> SetLight:
    return SetLight(
        target_gadgets=tuple(target_device_ids),
        animations=(LightAnimation(sequence=animation, repeat=IDLE_ANIMATION_REPEAT),),
        trigger_event=TRIGGER_NONE,
    )


def button_down_animation_directive(target_device_ids: Iterable[str]) -> SetLight:
    """Flash yellow locally when the gadget detects a press."""
    flash = AnimationFrame(
        duration_ms=BUTTON_DOWN_DURATION_MS,
        color=BUTTON_DOWN_COLOR,
        blend=False,
    )
    return SetLight(
        target_gadgets=tuple(target_device_ids),
        animations=(LightAnimation(sequence=(flash,)),),
        trigger_event=TRIGGER_BUTTON_DOWN,
    )


def fadeout_animation_directive() -> SetLight:
    """White to black over one second, on every gadget."""
    return SetLight(
        target_gadgets=(),
        animations=(
            LightAnimation(sequence=(
                AnimationFrame(duration_ms=FADEOUT_FROM_DURATION_MS, color=FADEOUT_FROM_COLOR),
                AnimationFrame(duration_ms=FADEOUT_TO_DURATION_MS, color=FADEOUT_TO_COLOR),
            )),
        ),
        trigger_event=TRIGGER_NONE,
    )
