"""Domain models."""
from .chat import Role, Message, Transcript

__all__ = [
    "Role",
    "Message",
    "Transcript",
]
