"""
CONSTANTS
---------
Single source of truth for all behavioral constants in the system.

Rules:
- If changing a value changes emitted directives or speech, it belongs here.
- No magic numbers elsewhere in the codebase.
- Other modules MUST import from this file.
"""

from __future__ import annotations

from typing import Final, Tuple

# =============================================================================
# Input handler (GameEngine)
# =============================================================================

INPUT_HANDLER_TIMEOUT_MS: Final[int] = 30_000

BUTTON_DOWN_RECOGNIZER: Final[str] = "button_down_recognizer"
BUTTON_DOWN_EVENT: Final[str] = "button_down_event"
TIMEOUT_EVENT: Final[str] = "timeout"
TIMED_OUT_RECOGNIZER: Final[str] = "timed out"

# =============================================================================
# Light animations (GadgetController)
# =============================================================================

SET_LIGHT_VERSION: Final[int] = 1
TARGET_LIGHTS: Final[Tuple[str, ...]] = ("1",)
FULL_INTENSITY: Final[int] = 255

TRIGGER_NONE: Final[str] = "none"
TRIGGER_BUTTON_DOWN: Final[str] = "buttonDown"

IDLE_ANIMATION_REPEAT: Final[int] = 100

BUTTON_DOWN_COLOR: Final[str] = "FFFF00"
BUTTON_DOWN_DURATION_MS: Final[int] = 300

FADEOUT_FROM_COLOR: Final[str] = "FFFFFF"
FADEOUT_FROM_DURATION_MS: Final[int] = 1
FADEOUT_TO_COLOR: Final[str] = "000000"
FADEOUT_TO_DURATION_MS: Final[int] = 1_000

# =============================================================================
# Breath animation defaults
# =============================================================================

BREATH_BASE_COLOR: Final[str] = "000000"
BREATH_DEFAULT_TARGET_COLOR: Final[str] = "ffffff"
BREATH_STEPS: Final[int] = 30
BREATH_DURATION_MS: Final[int] = 1_200

# Unknown color names resolve here instead of failing
FALLBACK_COLOR_HEX: Final[str] = "ffffff"
FALLBACK_COLOR_NAME: Final[str] = "white"

# =============================================================================
# Speech
# =============================================================================

PLAY_BEHAVIOR_REPLACE_ALL: Final[str] = "REPLACE_ALL"

SPEECH_WELCOME: Final[str] = "Welcome to Hello Buttons Skill. Tell me your favorite color."
REPROMPT_WELCOME: Final[str] = "What is your favorite color?"
SPEECH_BUTTON_HELLO: Final[str] = "hello, button {button_count}"
SPEECH_FAREWELL: Final[str] = "Thank you for playing!"
SPEECH_FAVORITE_COLOR: Final[str] = "Click on the button you wish to change to {color}"
SPEECH_HELP: Final[str] = "Welcome to Hello Buttons skill. Press your buttons."
SPEECH_STOP: Final[str] = "Good Bye!"
SPEECH_CANCEL: Final[str] = "Alright, canceling"
SPEECH_UNHANDLED: Final[str] = "Sorry, I didn't get that."

# =============================================================================
# Session attributes
# =============================================================================

ATTR_BUTTON_COUNT: Final[str] = "buttonCount"
ATTR_BREATH_ANIMATION: Final[str] = "breathAnimation"
ATTR_INITIALIZED_SUFFIX: Final[str] = "_initialized"

# =============================================================================
# Request / response envelope
# =============================================================================

RESPONSE_VERSION: Final[str] = "1.0"

FAVORITE_COLOR_INTENT: Final[str] = "FavoriteColorIntent"
HELP_INTENT: Final[str] = "AMAZON.HelpIntent"
STOP_INTENT: Final[str] = "AMAZON.StopIntent"
CANCEL_INTENT: Final[str] = "AMAZON.CancelIntent"

COLOR_SLOT: Final[str] = "color"

RESOLUTION_MATCH: Final[str] = "ER_SUCCESS_MATCH"
RESOLUTION_NO_MATCH: Final[str] = "ER_SUCCESS_NO_MATCH"
