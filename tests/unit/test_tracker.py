# pylint: disable=missing-module-docstring,missing-function-docstring

from orchestrator.state_dataclass import ButtonRecord, SessionState
from orchestrator.tracker import is_known, on_button_down


def test_first_press_registers_device():
    state, is_new = on_button_down(SessionState(), "g1")

    assert is_new is True
    assert state.button_count == 1
    assert state.records == {"g1": ButtonRecord(device_id="g1", seen=True)}
    assert is_known(state, "g1")


def test_repeat_press_is_a_no_op():
    state, _ = on_button_down(SessionState(), "g1")

    again, is_new = on_button_down(state, "g1")

    assert is_new is False
    assert again is state
    assert again.button_count == 1


def test_same_device_twice_counts_once():
    state = SessionState()
    flags = []
    for device_id in ("g1", "g1"):
        state, is_new = on_button_down(state, device_id)
        flags.append(is_new)

    assert flags == [True, False]
    assert state.button_count == 1


def test_count_matches_seen_records():
    state = SessionState()
    for device_id in ("a", "b", "a", "c", "b"):
        state, _ = on_button_down(state, device_id)

    assert state.button_count == 3
    assert state.button_count == sum(1 for r in state.records.values() if r.seen)


def test_input_state_is_not_mutated():
    original = SessionState()

    on_button_down(original, "g1")

    assert original.button_count == 0
    assert original.records == {}


def test_unknown_device_is_not_known():
    assert not is_known(SessionState(), "g1")
