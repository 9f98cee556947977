"""
RGB color arithmetic for light animations.

Responsibilities:
- Parse 6-digit hex strings into 8-bit channels
- Format channels back to upper-case hex (floored, never rounded)
- Linear per-channel interpolation

Non-responsibilities:
- No color names (see lights.color_names)
- No frame timing (see lights.animation)
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass


_HEX_RE = re.compile(r"[0-9a-fA-F]{6}")


class InvalidColorFormat(ValueError):
    """
    Raised when a color string is not exactly six hex digits.

    Only the curated color table and generator output reach this module,
    so this indicates a programming error rather than user input.
    """


@dataclass(frozen=True)
class Color:
    """Three 8-bit unsigned channels."""
    red: int
    green: int
    blue: int


def parse_hex(text: str) -> Color:
    """
    Parse "ff8800", "FF8800" or "#ff8800" into a Color.

    Raises:
        InvalidColorFormat if the normalized text is not 6 hex digits.
    """
    normalized = text.strip()
    if normalized.startswith("#"):
        normalized = normalized[1:]

    if not _HEX_RE.fullmatch(normalized):
        raise InvalidColorFormat(f"Invalid hex color: {text!r}")

    value = int(normalized, 16)
    return Color(
        red=(value >> 16) & 0xFF,
        green=(value >> 8) & 0xFF,
        blue=value & 0xFF,
    )


def format_channels(red: float, green: float, blue: float) -> str:
    """Render channels as RRGGBB; fractional values are truncated."""
    return "".join(f"{math.floor(c):02X}" for c in (red, green, blue))


def format_hex(color: Color) -> str:
    return format_channels(color.red, color.green, color.blue)


def lerp_channel(start: float, end: float, step_index: int, total_steps: int) -> float:
    """
    Value of one channel at step_index of a total_steps run.

    Step 0 is exactly `start`. The last step of a run is
    total_steps - 1, so `end` itself is never produced.
    """
    delta = (end - start) / total_steps
    return start + step_index * delta
