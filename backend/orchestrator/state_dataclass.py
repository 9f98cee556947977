"""
Authoritative per-session state container.

Rules:
- This dataclass is a pure data model.
- It contains ALL state the dispatcher may ever need across invocations.
- Handlers receive it explicitly and return a new instance; nothing is
  held in module globals.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from lights.animation import DEFAULT_BREATH_ANIMATION, Animation


# =============================================================================
# Button records
# =============================================================================

@dataclass(frozen=True)
class ButtonRecord:
    """
    One gadget we have heard from in this session.

    Records are created on first sighting with seen=True and never removed.
    """
    device_id: str
    seen: bool = True


# =============================================================================
# Session State
# =============================================================================

@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of all session-owned state."""

    # ------------------------------------------------------------------
    # Button tracking
    # ------------------------------------------------------------------
    # Invariant: button_count == number of records with seen=True
    button_count: int = 0
    records: Mapping[str, ButtonRecord] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Lights
    # ------------------------------------------------------------------
    # Replaced by the favorite color intent; used for every idle directive
    breath_animation: Animation = DEFAULT_BREATH_ANIMATION
