"""
Route registration for the skill API.

Responsibilities:
- Define HTTP endpoints
- Hand request envelopes to the gateway
- Pull dependencies from app.state
"""

from __future__ import annotations

from typing import Any

from fastapi import Body, FastAPI
from fastapi.responses import JSONResponse

from observability.logger import log_event
from protocol.envelope import EnvelopeError
from session.gateway import SkillGateway


def register_routes(app: FastAPI) -> None:
    """Register all routes on the FastAPI app."""
    @app.get("/health")
    async def health() -> dict[str, str]: # pyright: ignore[reportUnusedFunction]
        return {"status": "ok"}

    @app.post("/skill")
    def skill(payload: dict[str, Any] = Body(...)) -> JSONResponse: # pyright: ignore[reportUnusedFunction]
        gateway: SkillGateway = app.state.gateway

        try:
            body = gateway.handle(payload)
        except EnvelopeError as exc:
            log_event({
                "event_type": "REQUEST_REJECTED",
                "exception": type(exc).__name__,
                "message": str(exc),
            })
            return JSONResponse(status_code=400, content={"error": str(exc)})

        return JSONResponse(content=body)
