"""
FastAPI Application Entry Point for the Hold'em table.

This module creates and configures the FastAPI application with:
- HTTP routes for game management
- CORS middleware for a local browser UI
- one HoldemGame per application, stored on ``app.state``
"""

import os
import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from holdem.core.game import HoldemGame
from holdem.core.rules import GameConfig
from holdem.server.routes import router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

THINK_DELAY_ENV = "HOLDEM_THINK_DELAY"


def config_from_env() -> GameConfig:
    """Table settings for the server; AI turns are instant unless a delay is set."""
    return GameConfig(think_delay=float(os.environ.get(THINK_DELAY_ENV, "0")))


def create_app(config: Optional[GameConfig] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Table settings, read from the environment when omitted

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Hold'em Arbiter",
        description="Texas Hold'em table with AI opponents",
        version="0.2.0",
    )

    # CORS middleware for a local UI
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.game = HoldemGame(config=config or config_from_env())
    app.include_router(router)

    logger.info(f"Table ready (think delay {app.state.game.config.think_delay}s)")
    return app


# Create the application instance
app = create_app()


def main():
    """Run the server (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "holdem.server.app:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
