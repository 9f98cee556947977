"""
FastAPI app factory.

Responsibilities:
- Create and configure FastAPI app
- Configure logging
- Build the gateway shared by all requests
- Register routes
"""

from __future__ import annotations

from fastapi import FastAPI

from config import AppConfig
from observability import logger
from session.gateway import SkillGateway

from server.routes import register_routes


def create_app(config: AppConfig | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    config defaults to the environment; tests pass their own.
    """
    config = config or AppConfig.load_from_env()

    logger.configure(enabled=config.enable_json_logs, level=config.log_level)

    app = FastAPI(title="Hello Buttons Skill API")

    app.state.config = config
    # Stateless apart from config; safe to share across requests
    app.state.gateway = SkillGateway(config=config)

    register_routes(app)

    return app
