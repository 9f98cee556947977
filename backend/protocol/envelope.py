"""
Request / response envelope codec.

Inbound (one invocation):

    {
        "session": {"sessionId": "...", "application": {"applicationId": "..."},
                    "attributes": {...}},
        "context": {"System": {"application": {"applicationId": "..."}}},
        "request": {"type": "GameEngine.InputHandlerEvent",
                    "events": [{"name": "button_down_event",
                                "inputEvents": [{"gadgetId": "...", "action": "down"}]}]}
    }

Outbound:

    {
        "version": "1.0",
        "sessionAttributes": {...},
        "response": {
            "outputSpeech": {"type": "SSML", "ssml": "<speak>...</speak>",
                             "playBehavior": "REPLACE_ALL"},
            "reprompt": {"outputSpeech": {...}},
            "directives": [...],
            "shouldEndSession": true
        }
    }

Usage example:

    decoded = decode_request(payload)
    result = dispatch(state_from_attributes(decoded.attributes), decoded.event)
    body = encode_response(result, session_attributes=state_to_attributes(result.state))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping
from xml.sax.saxutils import escape

from constants import (
    BUTTON_DOWN_EVENT,
    CANCEL_INTENT,
    FAVORITE_COLOR_INTENT,
    HELP_INTENT,
    RESPONSE_VERSION,
    STOP_INTENT,
    TIMEOUT_EVENT,
)
from observability.logger import log_event
from orchestrator.dispatcher import DispatchResult
from orchestrator.events import (
    ButtonDown,
    Cancel,
    Event,
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
from protocol.slots import resolve_slots


# -------------------------
# Exceptions
# -------------------------

class EnvelopeError(Exception):
    """Base class for envelope decoding errors."""


class MalformedRequest(EnvelopeError):
    """
    Raised when the payload has no usable request.type.

    Nothing can be dispatched; the transport should reject the call.
    """


class MalformedEvent(EnvelopeError):
    """
    Raised when one input handler event lacks a name or a gadgetId.

    Only that event is dropped; the rest of the batch is still processed.
    """


# -------------------------
# Decoded request
# -------------------------

@dataclass(frozen=True)
class DecodedRequest:
    event: Event
    attributes: Mapping[str, Any] = field(default_factory=dict)
    session_id: str | None = None
    application_id: str | None = None
    request_type: str | None = None


# -------------------------
# Low-level helpers
# -------------------------

def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _application_id(payload: Mapping[str, Any]) -> str | None:
    session = _as_mapping(payload.get("session"))
    app_id = _as_mapping(session.get("application")).get("applicationId")
    if app_id is not None:
        return app_id

    system = _as_mapping(_as_mapping(payload.get("context")).get("System"))
    return _as_mapping(system.get("application")).get("applicationId")


def decode_input_event(raw: Any) -> InputEvent | None:
    """
    Decode one entry of request.events.

    Returns None for well-formed events we do not listen for.

    Raises:
        MalformedEvent if the name or the gadget id is missing.
    """
    raw = _as_mapping(raw)
    name = raw.get("name")
    if not name:
        raise MalformedEvent("input event has no name")

    if name == TIMEOUT_EVENT:
        return InputTimeout()

    if name == BUTTON_DOWN_EVENT:
        input_events = raw.get("inputEvents") or []
        if not isinstance(input_events, list):
            raise MalformedEvent(f"{name} inputEvents is not a list")
        first = _as_mapping(input_events[0]) if input_events else {}
        gadget_id = first.get("gadgetId")
        if not gadget_id:
            raise MalformedEvent(f"{name} has no gadgetId")
        return ButtonDown(device_id=gadget_id)

    return None


def decode_input_events(raw_events: Any) -> tuple[InputEvent, ...]:
    """Decode a batch, skipping (and logging) entries that cannot be used."""
    decoded: list[InputEvent] = []

    if raw_events is not None and not isinstance(raw_events, list):
        log_event({
            "event_type": "INPUT_HANDLER_BATCH",
            "level": "WARNING",
            "decision": "malformed_batch_skipped",
            "details": {"events_type": type(raw_events).__name__},
        })
        return ()

    for index, raw in enumerate(raw_events or []):
        try:
            event = decode_input_event(raw)
        except MalformedEvent as exc:
            log_event({
                "event_type": "INPUT_HANDLER_BATCH",
                "level": "WARNING",
                "decision": "malformed_event_skipped",
                "details": {"index": index, "error": str(exc)},
            })
            continue

        if event is None:
            log_event({
                "event_type": "INPUT_HANDLER_BATCH",
                "level": "WARNING",
                "decision": "unknown_event_skipped",
                "details": {"index": index, "name": _as_mapping(raw).get("name")},
            })
            continue

        decoded.append(event)

    return tuple(decoded)


def _decode_intent(request: Mapping[str, Any]) -> Event:
    intent = _as_mapping(request.get("intent"))
    name = intent.get("name")

    if name == FAVORITE_COLOR_INTENT:
        return FavoriteColor(slots=resolve_slots(_as_mapping(intent.get("slots"))))
    if name == HELP_INTENT:
        return Help()
    if name == STOP_INTENT:
        return Stop()
    if name == CANCEL_INTENT:
        return Cancel()

    return Unhandled(request_type=f"IntentRequest:{name}")


# -------------------------
# Public API
# -------------------------

def decode_request(payload: Mapping[str, Any]) -> DecodedRequest:
    """
    Decode a full request envelope into one dispatcher event.

    Raises:
        MalformedRequest if request.type is missing.
    """
    request = _as_mapping(_as_mapping(payload).get("request"))
    request_type = request.get("type")
    if not request_type:
        raise MalformedRequest("payload has no request.type")

    event: Event
    if request_type == "LaunchRequest":
        event = Launch()
    elif request_type == "GameEngine.InputHandlerEvent":
        event = InputHandlerBatch(events=decode_input_events(request.get("events")))
    elif request_type == "IntentRequest":
        event = _decode_intent(request)
    elif request_type == "SessionEndedRequest":
        event = SessionEnded(reason=request.get("reason"))
    elif request_type == "System.ExceptionEncountered":
        event = ExceptionEncountered(
            error=_as_mapping(request.get("error")),
            cause=_as_mapping(request.get("cause")),
        )
    else:
        event = Unhandled(request_type=request_type)

    session = _as_mapping(payload.get("session"))
    return DecodedRequest(
        event=event,
        attributes=_as_mapping(session.get("attributes")),
        session_id=session.get("sessionId"),
        application_id=_application_id(payload),
        request_type=request_type,
    )


def _ssml(text: str) -> dict[str, Any]:
    return {"type": "SSML", "ssml": f"<speak>{escape(text)}</speak>"}


def encode_response(
    result: DispatchResult,
    *,
    session_attributes: Mapping[str, Any],
) -> dict[str, Any]:
    """
    Render a DispatchResult as a response envelope.

    shouldEndSession is omitted unless the session ends or a reprompt
    opens the microphone; omitting it keeps a running input handler alive.
    """
    response: dict[str, Any] = {}

    if result.speech is not None:
        output_speech = _ssml(result.speech)
        if result.play_behavior is not None:
            output_speech["playBehavior"] = result.play_behavior
        response["outputSpeech"] = output_speech

    if result.reprompt is not None and not result.end_session:
        response["reprompt"] = {"outputSpeech": _ssml(result.reprompt)}

    if result.directives:
        response["directives"] = [d.to_wire() for d in result.directives]

    if result.end_session:
        response["shouldEndSession"] = True
    elif result.reprompt is not None:
        response["shouldEndSession"] = False

    return {
        "version": RESPONSE_VERSION,
        "sessionAttributes": dict(session_attributes),
        "response": response,
    }
