"""Errors raised by the chat core."""
from typing import Any, Optional


class ChatError(Exception):
    """Base exception for gptchat."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class TransportError(ChatError):
    """Request could not be delivered or the endpoint rejected it."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message, details=details)
        self.status_code = status_code


class ResponseShapeError(ChatError):
    """Response body lacks ``choices[0].message.content``."""

    def __init__(self, message: str, body: Any = None):
        super().__init__(message, details={"body": body})
        self.body = body
