# pylint: disable=missing-module-docstring,missing-function-docstring

from dataclasses import replace

import pytest

import orchestrator.dispatcher as dispatcher_mod
from lights.animation import DEFAULT_BREATH_ANIMATION
from orchestrator.directives import SetLight, StartInputHandler
from orchestrator.dispatcher import (
    DispatchResult,
    dispatch,
    handle_favorite_color,
    handle_input_handler_batch,
    handle_launch,
)
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
from orchestrator.state_dataclass import ButtonRecord, SessionState
from protocol.slots import SlotValue


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def decisions(result: DispatchResult) -> list[str]:
    return [entry["decision"] for entry in result.logs]


def set_lights(result: DispatchResult) -> list[SetLight]:
    return [d for d in result.directives if isinstance(d, SetLight)]


def color_slot(resolved: str | None) -> dict[str, SlotValue]:
    return {"color": SlotValue(synonym=resolved, resolved=resolved, is_validated=True)}


# ---------------------------------------------------------------------
# Launch
# ---------------------------------------------------------------------

def test_launch_emits_handler_and_broadcast_animations():
    result = handle_launch(SessionState())

    assert len(result.directives) == 3
    handler, idle, down = result.directives
    assert isinstance(handler, StartInputHandler)
    assert handler.timeout_ms == 30000
    assert isinstance(idle, SetLight) and idle.trigger_event == "none"
    assert isinstance(down, SetLight) and down.trigger_event == "buttonDown"
    assert idle.target_gadgets == () and down.target_gadgets == ()


def test_launch_speech_asks_for_favorite_color():
    result = handle_launch(SessionState())

    assert result.speech is not None and "favorite color" in result.speech
    assert result.reprompt == "What is your favorite color?"
    assert result.end_session is False


def test_launch_resets_button_tracking():
    state = SessionState(button_count=2, records={
        "a": ButtonRecord(device_id="a"),
        "b": ButtonRecord(device_id="b"),
    })

    result = handle_launch(state)

    assert result.state.button_count == 0
    assert result.state.records == {}


def test_launch_uses_session_breath_animation():
    breath = DEFAULT_BREATH_ANIMATION[:2]
    result = handle_launch(SessionState(breath_animation=breath))

    idle = result.directives[1]
    assert isinstance(idle, SetLight)
    assert idle.animations[0].sequence == breath


def test_launch_honors_configured_timeout():
    result = dispatch(SessionState(), Launch(), input_timeout_ms=5000)

    handler = result.directives[0]
    assert isinstance(handler, StartInputHandler)
    assert handler.timeout_ms == 5000


# ---------------------------------------------------------------------
# Input handler batches
# ---------------------------------------------------------------------

def test_new_button_gets_targeted_directives_and_greeting():
    result = handle_input_handler_batch(SessionState(), [ButtonDown(device_id="g1")])

    idle, down = set_lights(result)
    assert idle.target_gadgets == ("g1",) and idle.trigger_event == "none"
    assert down.target_gadgets == ("g1",) and down.trigger_event == "buttonDown"
    assert result.speech == "hello, button 1"
    assert result.play_behavior == "REPLACE_ALL"
    assert result.end_session is False
    assert result.state.button_count == 1


def test_known_button_is_silent():
    state = SessionState(button_count=1, records={"g1": ButtonRecord(device_id="g1")})

    result = handle_input_handler_batch(state, [ButtonDown(device_id="g1")])

    assert result.directives == ()
    assert result.speech is None
    assert result.play_behavior is None
    assert result.state == state
    assert decisions(result) == ["button_already_seen"]


def test_batch_dedupes_and_last_announcement_wins():
    events = [
        ButtonDown(device_id="g1"),
        ButtonDown(device_id="g1"),
        ButtonDown(device_id="g2"),
    ]

    result = handle_input_handler_batch(SessionState(), events)

    assert result.state.button_count == 2
    targets = [d.target_gadgets for d in set_lights(result)]
    assert targets == [("g1",), ("g1",), ("g2",), ("g2",)]
    assert result.speech == "hello, button 2"
    assert result.play_behavior == "REPLACE_ALL"


def test_timeout_fades_out_and_ends_session():
    result = handle_input_handler_batch(SessionState(), [InputTimeout()])

    (fadeout,) = set_lights(result)
    assert fadeout.target_gadgets == ()
    assert [f.color for f in fadeout.animations[0].sequence] == ["FFFFFF", "000000"]
    assert result.speech == "Thank you for playing!"
    assert result.end_session is True


def test_timeout_after_presses_still_ends_session():
    events: list[InputEvent] = [
        ButtonDown(device_id="g1"),
        ButtonDown(device_id="g2"),
        ButtonDown(device_id="g3"),
        InputTimeout(),
    ]

    result = handle_input_handler_batch(SessionState(), events)

    assert result.end_session is True
    assert len(result.directives) == 7
    assert result.directives[-1].to_wire()["parameters"]["animations"][0]["sequence"][0]["color"] == "FFFFFF"
    assert result.speech == "Thank you for playing!"
    assert result.state.button_count == 3
    assert result.play_behavior is None


def test_new_button_uses_favorite_breath():
    state = handle_favorite_color(SessionState(), color_slot("red")).state

    result = handle_input_handler_batch(state, [ButtonDown(device_id="g1")])

    idle = set_lights(result)[0]
    assert idle.animations[0].sequence[15].color == "FF0000"


def test_unknown_input_event_is_ignored():
    class Mystery(InputEvent):
        pass

    result = handle_input_handler_batch(SessionState(), [Mystery()])

    assert result.directives == ()
    assert decisions(result) == ["input_event_ignored"]


def test_empty_batch_changes_nothing():
    state = SessionState()

    result = handle_input_handler_batch(state, [])

    assert result == DispatchResult(state=state)


# ---------------------------------------------------------------------
# Favorite color
# ---------------------------------------------------------------------

def test_favorite_color_rebuilds_breath():
    result = handle_favorite_color(SessionState(), color_slot("red"))

    assert result.state.breath_animation[0].color == "000000"
    assert result.state.breath_animation[15].color == "FF0000"
    assert result.speech == "Click on the button you wish to change to red"
    assert result.directives == ()


def test_favorite_color_unknown_name_breathes_white():
    result = handle_favorite_color(SessionState(), color_slot("taupe"))

    assert result.state.breath_animation == DEFAULT_BREATH_ANIMATION
    assert result.speech == "Click on the button you wish to change to taupe"


def test_favorite_color_without_slot_defaults_to_white():
    result = handle_favorite_color(SessionState(), {})

    assert result.state.breath_animation == DEFAULT_BREATH_ANIMATION
    assert result.speech == "Click on the button you wish to change to white"


def test_favorite_color_keeps_button_tracking():
    state = SessionState(button_count=1, records={"g1": ButtonRecord(device_id="g1")})

    result = handle_favorite_color(state, color_slot("blue"))

    assert result.state == replace(state, breath_animation=result.state.breath_animation)


def test_favorite_color_invalid_hex_falls_back_to_white(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(dispatcher_mod, "color_name_to_hex", lambda name: "nothex")

    result = handle_favorite_color(SessionState(), color_slot("red"))

    assert result.state.breath_animation == DEFAULT_BREATH_ANIMATION
    assert "invalid_color_fallback" in decisions(result)


# ---------------------------------------------------------------------
# Other intents and lifecycle
# ---------------------------------------------------------------------

def test_stop_and_cancel_fade_out_and_end():
    for event, speech in ((Stop(), "Good Bye!"), (Cancel(), "Alright, canceling")):
        result = dispatch(SessionState(), event)

        assert result.speech == speech
        assert result.end_session is True
        assert len(set_lights(result)) == 1


def test_help_tells_and_ends():
    result = dispatch(SessionState(), Help())

    assert result.speech == "Welcome to Hello Buttons skill. Press your buttons."
    assert result.reprompt is None
    assert result.end_session is True


def test_unhandled_asks_again():
    result = dispatch(SessionState(), Unhandled(request_type="Foo"))

    assert result.speech == "Sorry, I didn't get that."
    assert result.reprompt == "Sorry, I didn't get that."
    assert result.end_session is False


def test_session_ended_and_exception_only_log():
    state = SessionState(button_count=0)

    ended = dispatch(state, SessionEnded(reason="USER_INITIATED"))
    failed = dispatch(state, ExceptionEncountered(error={"type": "INVALID_RESPONSE"}))

    assert ended == DispatchResult(state=state, logs=ended.logs)
    assert decisions(ended) == ["session_ended"]
    assert failed.speech is None and failed.directives == ()
    assert failed.logs[0]["details"]["error"] == {"type": "INVALID_RESPONSE"}


def test_dispatch_routes_batches_and_intents():
    batch = dispatch(SessionState(), InputHandlerBatch(events=(ButtonDown(device_id="g1"),)))
    color = dispatch(SessionState(), FavoriteColor(slots=color_slot("green")))

    assert batch.state.button_count == 1
    assert color.state.breath_animation[15].color == "008000"


def test_dispatch_unknown_event_class_is_unhandled():
    class Strange(Event):
        pass

    result = dispatch(SessionState(), Strange())

    assert result.speech == "Sorry, I didn't get that."
    assert result.logs[0]["details"]["request_type"] == "Strange"


def test_dispatch_does_not_mutate_input_state():
    state = SessionState()

    dispatch(state, InputHandlerBatch(events=(ButtonDown(device_id="g1"),)))

    assert state == SessionState()
