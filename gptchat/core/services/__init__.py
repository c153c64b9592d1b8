"""Core business services."""
from .chat_session import ChatSession

__all__ = [
    "ChatSession",
]
