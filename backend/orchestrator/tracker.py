"""
Button session tracker.

Per gadget id: Unseen -> Seen. Seen is terminal for the session; there is
no reverse transition and no removal.

Pure functions over SessionState; the caller owns persistence.
"""

from __future__ import annotations

from dataclasses import replace

from orchestrator.state_dataclass import ButtonRecord, SessionState


def is_known(state: SessionState, device_id: str) -> bool:
    record = state.records.get(device_id)
    return record is not None and record.seen


def on_button_down(state: SessionState, device_id: str) -> tuple[SessionState, bool]:
    """
    Record a button press.

    Returns (new_state, is_new_device). A press from a gadget that was
    already seen returns the input state unchanged and False.
    """
    if is_known(state, device_id):
        return state, False

    records = dict(state.records)
    records[device_id] = ButtonRecord(device_id=device_id, seen=True)

    return (
        replace(state, button_count=state.button_count + 1, records=records),
        True,
    )
