"""
Hold'em Server - FastAPI layer exposing one local table to a UI
"""

from holdem.server.app import app, create_app

__all__ = ["app", "create_app"]
