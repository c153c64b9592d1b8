import logging

import httpx

from gptchat.core.errors import TransportError

logger = logging.getLogger(__name__)

_BODY_SNIPPET = 200


class HttpxTransport:
    """Transport over httpx.AsyncClient."""

    def __init__(
        self,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize transport.

        Args:
            timeout: Default request timeout in seconds.
            client: Pre-built client (owned by the caller if given).
        """
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(timeout=timeout)
        self._client = client

    async def call(
        self,
        url: str,
        headers: dict[str, str],
        json_body: dict,
        *,
        timeout: float | None = None,
    ) -> httpx.Response:
        """POST JSON body to url.

        Args:
            url: Endpoint URL.
            headers: Request headers.
            json_body: JSON payload.
            timeout: Override for this call.

        Returns:
            Successful response.

        Raises:
            TransportError: Network error or non-2xx status.
        """
        kwargs = {}
        if timeout is not None:
            kwargs["timeout"] = timeout

        try:
            response = await self._client.post(
                url, headers=headers, json=json_body, **kwargs
            )
        except httpx.HTTPError as e:
            logger.error(f"[transport] Request to {url} failed: {e!r}")
            raise TransportError(f"Request to {url} failed: {e}") from e

        if not response.is_success:
            snippet = response.text[:_BODY_SNIPPET]
            logger.warning(
                f"[transport] {url} returned HTTP {response.status_code}: {snippet}"
            )
            raise TransportError(
                f"HTTP {response.status_code} from {url}",
                status_code=response.status_code,
                details={"body": snippet},
            )

        return response

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
