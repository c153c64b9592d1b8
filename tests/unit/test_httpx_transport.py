"""
Unit tests for HttpxTransport using httpx.MockTransport.
"""

import json

import httpx
import pytest

from gptchat.core.errors import TransportError
from gptchat.core.services.chat_session import ChatSession
from gptchat.infrastructure.transport.httpx_transport import HttpxTransport

URL = "https://llm.test/v1/chat/completions"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_call_posts_json_with_headers() -> None:
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["Authorization"]
        captured["content_type"] = request.headers["Content-Type"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"ok": True})

    async with _client(handler) as client:
        transport = HttpxTransport(client=client)
        response = await transport.call(
            URL,
            {"Content-Type": "application/json", "Authorization": "Bearer sk-x"},
            {"model": "m", "messages": []},
        )

    assert response.json() == {"ok": True}
    assert captured == {
        "method": "POST",
        "url": URL,
        "auth": "Bearer sk-x",
        "content_type": "application/json",
        "body": {"model": "m", "messages": []},
    }


@pytest.mark.asyncio
async def test_error_status_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"message": "Incorrect API key"}})

    async with _client(handler) as client:
        transport = HttpxTransport(client=client)
        with pytest.raises(TransportError) as exc_info:
            await transport.call(URL, {}, {"model": "m", "messages": []})

    assert exc_info.value.status_code == 401
    assert "Incorrect API key" in exc_info.value.details["body"]


@pytest.mark.asyncio
async def test_network_error_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        transport = HttpxTransport(client=client)
        with pytest.raises(TransportError) as exc_info:
            await transport.call(URL, {}, {"model": "m", "messages": []})

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_timeout_override_reaches_request() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["timeout"] = request.extensions["timeout"]
        return httpx.Response(200, json={})

    async with _client(handler) as client:
        transport = HttpxTransport(client=client)
        await transport.call(URL, {}, {"model": "m", "messages": []}, timeout=2.0)

    assert seen["timeout"]["read"] == 2.0


@pytest.mark.asyncio
async def test_injected_client_is_not_closed() -> None:
    client = _client(lambda request: httpx.Response(200, json={}))
    transport = HttpxTransport(client=client)

    await transport.aclose()

    assert not client.is_closed
    await client.aclose()


@pytest.mark.asyncio
async def test_session_round_trip_over_httpx() -> None:
    requests: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        requests.append(body)
        last = body["messages"][-1]["content"]
        return httpx.Response(
            200,
            json={"choices": [{"message": {"role": "assistant", "content": last.upper()}}]},
        )

    async with _client(handler) as client:
        session = ChatSession("sk-x", "gpt-test", HttpxTransport(client=client), url=URL)
        assert await session.send("hello") == "HELLO"
        assert await session.send("again") == "AGAIN"

    assert requests[1]["messages"] == [
        {"role": "user", "content": "hello"},
        {"role": "assistant", "content": "HELLO"},
        {"role": "user", "content": "again"},
    ]
    assert session.last_response.status_code == 200


@pytest.mark.asyncio
async def test_session_keeps_user_message_on_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="overloaded")

    async with _client(handler) as client:
        session = ChatSession("sk-x", "gpt-test", HttpxTransport(client=client), url=URL)
        with pytest.raises(TransportError):
            await session.send("hello")

    assert [m.content for m in session.history()] == ["hello"]
