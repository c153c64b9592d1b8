"""Chat session - keeps the transcript and talks to the completion endpoint."""

import asyncio
import logging
from typing import Any

from ..errors import ResponseShapeError
from ..models.chat import Message, Role, Transcript
from ..protocols.transport import TransportProtocol, TransportResponse

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://api.openai.com/v1/chat/completions"


def extract_reply(body: Any) -> str:
    """Pull ``choices[0].message.content`` out of a completion body.

    Raises:
        ResponseShapeError: If the path is missing or not a string.
    """
    try:
        content = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise ResponseShapeError(
            f"Response has no choices[0].message.content: {e!r}", body=body
        ) from e

    if not isinstance(content, str):
        raise ResponseShapeError(
            f"Expected string content, got {type(content).__name__}", body=body
        )
    return content


class ChatSession:
    """Stateful conversation against a chat completion endpoint.

    Every request carries the full transcript as context. A failed request
    leaves the user message in the transcript; nothing is rolled back.
    """

    def __init__(
        self,
        token: str,
        model: str,
        transport: TransportProtocol,
        url: str = DEFAULT_URL,
        system_prompt: str | None = None,
    ):
        """Initialize chat session.

        Args:
            token: Bearer token for the endpoint.
            model: Model identifier.
            transport: Transport used for requests.
            url: Completion endpoint URL.
            system_prompt: Optional context-setting message placed first.
        """
        self._token = token
        self._model = model
        self._url = url
        self._transport = transport
        self._transcript = Transcript()
        self._lock = asyncio.Lock()
        self.last_response: TransportResponse | None = None

        if system_prompt is not None:
            self._transcript.append(Role.SYSTEM, system_prompt)

    @property
    def model(self) -> str:
        return self._model

    @property
    def url(self) -> str:
        return self._url

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._token}",
        }

    def _build_payload(self) -> dict:
        return {"model": self._model, "messages": self._transcript.to_list()}

    async def send(self, user_text: str, *, timeout: float | None = None) -> str:
        """Send a user message and return the assistant's reply.

        Concurrent calls on the same session are queued so that user and
        assistant turns never interleave.

        Args:
            user_text: User's message.
            timeout: Passed through to the transport.

        Returns:
            Reply text.

        Raises:
            TransportError: Request failed or endpoint returned an error status.
            ResponseShapeError: Reply could not be extracted from the body.
        """
        async with self._lock:
            self._transcript.append(Role.USER, user_text)
            payload = self._build_payload()

            logger.info(
                f"Sending turn to {self._model} "
                f"({len(self._transcript)} messages in context)"
            )
            if logger.isEnabledFor(logging.DEBUG):
                chars = sum(len(m["content"]) for m in payload["messages"])
                logger.debug(f"Payload: {len(payload['messages'])} messages, {chars} chars")

            response = await self._transport.call(
                self._url, self._headers(), payload, timeout=timeout
            )
            self.last_response = response

            try:
                body = response.json()
            except ValueError as e:
                logger.error(f"Response body is not JSON: {e}")
                raise ResponseShapeError("Response body is not valid JSON") from e

            reply = extract_reply(body)
            self._transcript.append(Role.ASSISTANT, reply)
            return reply

    def history(self) -> tuple[Message, ...]:
        """Return the conversation so far."""
        return self._transcript.all()

    def last_message(self, role: Role) -> str | None:
        """Return what ``role`` last said, if anything."""
        return self._transcript.last_by_role(role)
