"""
API Routes for the Zobot chatbot.
"""

from . import chat, widget

__all__ = ["chat", "widget"]
