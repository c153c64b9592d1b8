"""Chat domain models."""
from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class Role(str, Enum):
    """Role of a message author."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """Single role-tagged utterance."""
    role: Role
    content: str

    def to_dict(self) -> dict:
        """Convert to the wire shape used in request payloads."""
        return {"role": self.role.value, "content": self.content}


class Transcript:
    """Append-only ordered log of conversation messages.

    The order of messages is the conversation itself, so it is never
    changed once written. There is no size limit.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []

    def append(self, role: Role, content: str) -> None:
        """Add a message to the end of the transcript.

        Args:
            role: Author role.
            content: Message text (may be empty).
        """
        self._messages.append(Message(role=role, content=content))

    def all(self) -> tuple[Message, ...]:
        """Return every message in insertion order."""
        return tuple(self._messages)

    def last_by_role(self, role: Role) -> str | None:
        """Return content of the most recent message from ``role``.

        Args:
            role: Role to look for.

        Returns:
            Message content, or None if that role never spoke.
        """
        for message in reversed(self._messages):
            if message.role == role:
                return message.content
        return None

    def to_list(self) -> list[dict]:
        """Convert to list of dicts for LLM."""
        return [m.to_dict() for m in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.all())
