# pylint: disable=missing-module-docstring,missing-function-docstring

import pytest

from lights.animation import (
    DEFAULT_BREATH_ANIMATION,
    AnimationFrame,
    breath_animation,
    favorite_color_breath,
    sequential_animation,
)
from lights.color import InvalidColorFormat


def colors(animation: tuple[AnimationFrame, ...]) -> list[str]:
    return [frame.color for frame in animation]


# ---------------------------------------------------------------------
# Sequential
# ---------------------------------------------------------------------

@pytest.mark.parametrize("steps,duration", [(1, 100), (4, 1000), (7, 1000), (15, 600)])
def test_sequential_frame_count_and_duration(steps: int, duration: int):
    animation = sequential_animation("102030", "f0e0d0", steps, duration)

    assert len(animation) == steps
    assert all(frame.duration_ms == duration // steps for frame in animation)


def test_sequential_first_frame_is_from_color():
    animation = sequential_animation("102030", "f0e0d0", 5, 500)

    assert animation[0].color == "102030"


def test_sequential_colors_truncate_and_stop_short():
    animation = sequential_animation("000000", "ff0000", 4, 1000)

    assert colors(animation) == ["000000", "3F0000", "7F0000", "BF0000"]
    assert "FF0000" not in colors(animation)


def test_sequential_truncates_half_values():
    animation = sequential_animation("000000", "0000ff", 2, 100)

    assert colors(animation) == ["000000", "00007F"]
    assert animation[0].duration_ms == 50


def test_sequential_frames_are_full_intensity_blended():
    animation = sequential_animation("000000", "ffffff", 3, 300)

    assert all(frame.intensity == 255 and frame.blend for frame in animation)


def test_sequential_zero_steps_is_empty():
    assert sequential_animation("000000", "ffffff", 0, 1000) == ()


def test_sequential_rejects_bad_hex():
    with pytest.raises(InvalidColorFormat):
        sequential_animation("black", "ffffff", 2, 100)


# ---------------------------------------------------------------------
# Breath
# ---------------------------------------------------------------------

def test_breath_reaches_target_at_midpoint():
    animation = breath_animation("000000", "ff8000", 10, 1000)

    assert len(animation) == 10
    assert animation[0].color == "000000"
    assert animation[5].color == "FF8000"


def test_breath_halves_are_symmetric():
    animation = breath_animation("000000", "ffffff", 30, 1200)

    assert colors(animation[1:15]) == list(reversed(colors(animation[16:])))


def test_breath_frame_duration_uses_half_the_total():
    animation = breath_animation("000000", "ffffff", 30, 1200)

    assert {frame.duration_ms for frame in animation} == {40}


def test_breath_odd_steps_drop_one_frame():
    animation = breath_animation("000000", "ffffff", 31, 1200)

    assert len(animation) == 30


def test_default_breath_is_black_white_round_trip():
    assert len(DEFAULT_BREATH_ANIMATION) == 30
    assert DEFAULT_BREATH_ANIMATION[0].color == "000000"
    assert DEFAULT_BREATH_ANIMATION[1].color == "111111"
    assert DEFAULT_BREATH_ANIMATION[15].color == "FFFFFF"
    assert DEFAULT_BREATH_ANIMATION[29].color == "111111"


def test_favorite_color_breath_goes_black_to_color():
    animation = favorite_color_breath("ff0000")

    assert animation[0].color == "000000"
    assert animation[15].color == "FF0000"


# ---------------------------------------------------------------------
# Wire form
# ---------------------------------------------------------------------

def test_frame_wire_names():
    frame = AnimationFrame(duration_ms=300, color="FFFF00", blend=False)

    assert frame.to_wire() == {
        "durationMs": 300,
        "color": "FFFF00",
        "intensity": 255,
        "blend": False,
    }
    assert AnimationFrame.from_wire(frame.to_wire()) == frame
