"""Transport protocol for dependency injection."""
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TransportResponse(Protocol):
    """Response returned by a transport call."""

    status_code: int

    def json(self) -> Any:
        """Return the parsed JSON body."""
        ...


@runtime_checkable
class TransportProtocol(Protocol):
    """Protocol for the request/response channel to the completion endpoint."""

    async def call(
        self,
        url: str,
        headers: dict[str, str],
        json_body: dict,
        *,
        timeout: float | None = None,
    ) -> TransportResponse:
        """POST a JSON body and return the response.

        Args:
            url: Endpoint URL.
            headers: Request headers.
            json_body: Payload to encode as JSON.
            timeout: Per-call timeout in seconds (None uses the default).

        Returns:
            Response with a successful status.

        Raises:
            TransportError: On network failure or non-success status.
        """
        ...
