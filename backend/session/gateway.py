"""
Skill gateway.

Responsibilities:
- Decode one request envelope into a dispatcher event
- Verify the application id (when configured)
- Rebuild SessionState from session attributes
- Call the pure dispatcher exactly once
- Flush the dispatcher's log payloads
- Encode the response envelope with the new session attributes

NOT responsible for:
- Any dispatch decisions (see orchestrator.dispatcher)
- Persistence or ordering between invocations (the session store owns those)
- HTTP concerns (see server.routes)
"""

from __future__ import annotations

from typing import Any, Mapping, TYPE_CHECKING

from observability.logger import log_event
from observability.metrics import timed
from orchestrator.dispatcher import dispatch
from protocol.envelope import EnvelopeError, decode_request, encode_response
from session.attributes import state_from_attributes, state_to_attributes

if TYPE_CHECKING:
    from config import AppConfig


class InvalidApplicationId(EnvelopeError):
    """Raised when a request targets a different skill than configured."""


class SkillGateway:
    """
    One gateway call == one invocation.

    The gateway holds configuration only; no session state survives
    between calls except through the attributes in the envelope.
    """

    def __init__(self, *, config: AppConfig) -> None:
        self._config = config

    def handle(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """
        Process one request envelope and return the response envelope.

        Raises:
            MalformedRequest if the payload has no request type
            InvalidApplicationId if SKILL_ID is set and does not match
        """
        decoded = decode_request(payload)

        if self._config.skill_id and decoded.application_id != self._config.skill_id:
            log_event({
                "event_type": "GATEWAY",
                "level": "WARNING",
                "decision": "application_id_rejected",
                "session_id": decoded.session_id,
                "details": {"application_id": decoded.application_id},
            })
            raise InvalidApplicationId(
                f"unexpected application id: {decoded.application_id!r}"
            )

        state = state_from_attributes(decoded.attributes)

        with timed(
            "dispatch",
            session_id=decoded.session_id,
            details={"request_type": decoded.request_type},
        ):
            result = dispatch(
                state,
                decoded.event,
                input_timeout_ms=self._config.input_handler_timeout_ms,
            )

        for entry in result.logs:
            log_event({"session_id": decoded.session_id, **entry})

        return encode_response(
            result,
            session_attributes=state_to_attributes(result.state),
        )
