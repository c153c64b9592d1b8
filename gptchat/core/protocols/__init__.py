"""Protocol interfaces for dependency injection."""
from .transport import TransportProtocol, TransportResponse

__all__ = [
    "TransportProtocol",
    "TransportResponse",
]
