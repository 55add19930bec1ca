"""
API Module for the Zobot chatbot.

FastAPI application with routes for:
- Chat interactions
- Conversation history and stats
- Widget upload support
"""

from .main import create_app, app

__all__ = ["create_app", "app"]
