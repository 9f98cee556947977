"""
Intent slot resolution.

Turns the platform's raw slot dicts into SlotValue objects:

    {
        "name": "color",
        "value": "crimson",
        "resolutions": {
            "resolutionsPerAuthority": [{
                "status": {"code": "ER_SUCCESS_MATCH"},
                "values": [{"value": {"name": "red", "id": "..."}}]
            }]
        }
    }

Rules:
- ER_SUCCESS_MATCH -> catalog value, validated
- ER_SUCCESS_NO_MATCH, any other status, or no resolutions at all
  -> raw spoken synonym, not validated
- Never raises: an unresolvable slot fails over to what was said.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from constants import RESOLUTION_MATCH


@dataclass(frozen=True)
class SlotValue:
    """
    synonym: what the user actually said
    resolved: catalog value on a match, otherwise the synonym
    is_validated: True only when the catalog matched
    """
    synonym: str | None
    resolved: str | None
    is_validated: bool


def _first_of(items: Any) -> Mapping[str, Any] | None:
    if not isinstance(items, list) or not items:
        return None
    first = items[0]
    return first if isinstance(first, Mapping) else None


def _first_authority(slot: Mapping[str, Any]) -> Mapping[str, Any] | None:
    resolutions = slot.get("resolutions")
    if not isinstance(resolutions, Mapping):
        return None
    return _first_of(resolutions.get("resolutionsPerAuthority"))


def _matched_name(authority: Mapping[str, Any]) -> str | None:
    first = _first_of(authority.get("values"))
    if first is None:
        return None
    value = first.get("value")
    if not isinstance(value, Mapping):
        return None
    name = value.get("name")
    return name if isinstance(name, str) else None


def resolve_slot(slot: Mapping[str, Any]) -> SlotValue:
    synonym = slot.get("value")
    authority = _first_authority(slot)

    if authority is not None:
        status = authority.get("status")
        code = status.get("code") if isinstance(status, Mapping) else None
        if code == RESOLUTION_MATCH:
            name = _matched_name(authority)
            if name is not None:
                return SlotValue(synonym=synonym, resolved=name, is_validated=True)

    return SlotValue(synonym=synonym, resolved=synonym, is_validated=False)


def resolve_slots(filled_slots: Mapping[str, Any] | None) -> dict[str, SlotValue]:
    """Resolve every slot of an intent, keyed by slot name."""
    slot_values: dict[str, SlotValue] = {}
    for key, slot in (filled_slots or {}).items():
        if not isinstance(slot, Mapping):
            continue
        slot_values[slot.get("name", key)] = resolve_slot(slot)
    return slot_values
