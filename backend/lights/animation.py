"""
Timed color animations for SetLight directives.

Rules:
- Frames are immutable value objects.
- An Animation is a plain tuple of frames; repeat count belongs to the
  directive, not the animation.
- Pure: same inputs, same frames.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from constants import (
    BREATH_BASE_COLOR,
    BREATH_DEFAULT_TARGET_COLOR,
    BREATH_DURATION_MS,
    BREATH_STEPS,
    FULL_INTENSITY,
)
from lights.color import format_channels, lerp_channel, parse_hex


@dataclass(frozen=True)
class AnimationFrame:
    """One timed step of a light sequence."""
    duration_ms: int
    color: str  # RRGGBB, upper-case
    intensity: int = FULL_INTENSITY
    blend: bool = True

    def to_wire(self) -> dict[str, Any]:
        return {
            "durationMs": self.duration_ms,
            "color": self.color,
            "intensity": self.intensity,
            "blend": self.blend,
        }

    @staticmethod
    def from_wire(data: Mapping[str, Any]) -> AnimationFrame:
        """
        Inverse of to_wire().

        Raises:
            KeyError / TypeError / ValueError on malformed input
            (callers decide on the fallback).
        """
        return AnimationFrame(
            duration_ms=int(data["durationMs"]),
            color=str(data["color"]),
            intensity=int(data.get("intensity", FULL_INTENSITY)),
            blend=bool(data.get("blend", True)),
        )


Animation = Tuple[AnimationFrame, ...]


def sequential_animation(
    from_hex: str,
    to_hex: str,
    steps: int,
    total_duration_ms: float,
) -> Animation:
    """
    Linear fade from `from_hex` towards `to_hex` in exactly `steps` frames.

    Every frame lasts floor(total_duration_ms / steps). The first frame is
    `from_hex`; the last is one interpolation step short of `to_hex`.
    A non-positive step count yields an empty animation.
    """
    if steps <= 0:
        return ()

    start = parse_hex(from_hex)
    end = parse_hex(to_hex)
    step_duration_ms = math.floor(total_duration_ms / steps)

    return tuple(
        AnimationFrame(
            duration_ms=step_duration_ms,
            color=format_channels(
                lerp_channel(start.red, end.red, i, steps),
                lerp_channel(start.green, end.green, i, steps),
                lerp_channel(start.blue, end.blue, i, steps),
            ),
        )
        for i in range(steps)
    )


def breath_animation(
    from_hex: str,
    to_hex: str,
    steps: int,
    total_duration_ms: float,
) -> Animation:
    """
    Round trip: from -> to, then to -> from.

    Each half gets steps // 2 frames and half the duration, so the target
    color appears exactly at frame steps // 2. Odd step counts lose one
    frame to the integer split.
    """
    half_steps = steps // 2
    half_duration_ms = total_duration_ms / 2

    return (
        sequential_animation(from_hex, to_hex, half_steps, half_duration_ms)
        + sequential_animation(to_hex, from_hex, half_steps, half_duration_ms)
    )


def favorite_color_breath(color_hex: str) -> Animation:
    """Breath from black to the given color with the default timing."""
    return breath_animation(BREATH_BASE_COLOR, color_hex, BREATH_STEPS, BREATH_DURATION_MS)


DEFAULT_BREATH_ANIMATION: Animation = breath_animation(
    BREATH_BASE_COLOR,
    BREATH_DEFAULT_TARGET_COLOR,
    BREATH_STEPS,
    BREATH_DURATION_MS,
)
