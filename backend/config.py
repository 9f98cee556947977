"""
Application configuration.

Responsibilities:
- Load deployment-specific configuration
- Read environment variables
- Provide a typed, immutable config object

Non-responsibilities:
- No dispatch logic
- No protocol constants (see constants.py)
- No runtime mutation
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from constants import INPUT_HANDLER_TIMEOUT_MS


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Constructed once at process startup.
    Passed downward to the gateway.
    """

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    env: str = "dev"
    log_level: str = "INFO"

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    enable_json_logs: bool = True

    # ------------------------------------------------------------------
    # Skill
    # ------------------------------------------------------------------

    # When set, requests carrying any other application id are rejected
    skill_id: str | None = None

    input_handler_timeout_ms: int = INPUT_HANDLER_TIMEOUT_MS

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def load_from_env() -> AppConfig:
        """
        Load configuration from environment variables.

        Raises:
            ValueError if INPUT_HANDLER_TIMEOUT_MS is not an integer.
        """
        return AppConfig(
            env=os.environ.get("ENV", "dev"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            enable_json_logs=os.environ.get("ENABLE_JSON_LOGS", "1") == "1",
            skill_id=os.environ.get("SKILL_ID") or None,
            input_handler_timeout_ms=int(
                os.environ.get("INPUT_HANDLER_TIMEOUT_MS", str(INPUT_HANDLER_TIMEOUT_MS))
            ),
        )
