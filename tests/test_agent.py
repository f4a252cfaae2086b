"""Unit tests for the agent (reply client) module."""
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from hypothesis import given
from hypothesis import strategies as st
from openai import OpenAIError

from threadline.agent import (
    HistoryEntry,
    HttpReplyClient,
    OpenAIReplyClient,
    ReplyClient,
    ReplyFormatError,
    ReplyRequest,
    ReplyResponse,
    ReplyTransportError,
    create_reply_client,
)
from threadline.agent.providers.openai import _request_to_messages
from threadline.config import EMPTY_REPLY_MESSAGE, ERROR_REPLY_MESSAGE
from threadline.conversation import InMemoryConversationStore


def make_request(message: str = "Hello") -> ReplyRequest:
    return ReplyRequest(
        message=message,
        agent_id="agent-1",
        conversation_history=[HistoryEntry(role="assistant", content="Welcome")],
    )


def make_http_client(handler) -> HttpReplyClient:
    return HttpReplyClient(
        base_url="http://agent.test",
        transport=httpx.MockTransport(handler),
    )


class TestReplyClientInterface:
    """Tests for the abstract ReplyClient interface."""

    def test_client_is_abstract(self):
        """Test that ReplyClient cannot be instantiated directly."""
        with pytest.raises(TypeError):
            ReplyClient()  # type: ignore


class TestReplyModels:
    """Tests for request and response models."""

    def test_request_wire_format(self):
        request = make_request()

        assert request.model_dump() == {
            "message": "Hello",
            "agent_id": "agent-1",
            "conversation_history": [{"role": "assistant", "content": "Welcome"}],
        }

    def test_history_entry_rejects_unknown_role(self):
        with pytest.raises(ValueError):
            HistoryEntry(role="system", content="x")  # type: ignore

    def test_response_from_payload(self):
        assert ReplyResponse.from_payload({"response": "Hi"}).response == "Hi"

    @pytest.mark.parametrize("payload", [{}, {"response": None}, {"response": 42}, {"response": ["a"]}])
    def test_response_without_text(self, payload):
        assert ReplyResponse.from_payload(payload).response is None

    @given(st.one_of(st.integers(), st.text(), st.lists(st.integers()), st.none()))
    def test_non_object_payload_raises(self, payload):
        """Property test: anything but a JSON object is a format error."""
        with pytest.raises(ReplyFormatError):
            ReplyResponse.from_payload(payload)


class TestHttpReplyClient:
    """Tests for HttpReplyClient with a mocked transport."""

    def test_endpoint(self):
        client = HttpReplyClient(base_url="http://agent.test/")

        assert client.endpoint == "http://agent.test/api/agent"

    @pytest.mark.asyncio
    async def test_posts_request_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"response": "Hi"})

        async with make_http_client(handler) as client:
            response = await client.generate_reply(make_request())

        assert response.response == "Hi"
        assert seen["method"] == "POST"
        assert seen["path"] == "/api/agent"
        assert seen["body"] == make_request().model_dump()

    @pytest.mark.asyncio
    async def test_missing_response_field(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"error": "nothing"})

        async with make_http_client(handler) as client:
            response = await client.generate_reply(make_request())

        assert response.response is None

    @pytest.mark.asyncio
    async def test_error_status_with_json_body_is_decoded(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "agent crashed"})

        async with make_http_client(handler) as client:
            response = await client.generate_reply(make_request())

        assert response.response is None

    @pytest.mark.asyncio
    async def test_error_status_with_reply_text_is_used(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={"response": "Try later"})

        async with make_http_client(handler) as client:
            response = await client.generate_reply(make_request())

        assert response.response == "Try later"

    @pytest.mark.asyncio
    async def test_error_status_without_json_raises_format_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="bad gateway")

        async with make_http_client(handler) as client:
            with pytest.raises(ReplyFormatError) as exc_info:
                await client.generate_reply(make_request())

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_network_error_raises_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_http_client(handler) as client:
            with pytest.raises(ReplyTransportError) as exc_info:
                await client.generate_reply(make_request())

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_invalid_json_raises_format_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>oops</html>")

        async with make_http_client(handler) as client:
            with pytest.raises(ReplyFormatError):
                await client.generate_reply(make_request())

    @pytest.mark.asyncio
    async def test_non_object_body_records_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json=["not", "found"])

        async with make_http_client(handler) as client:
            with pytest.raises(ReplyFormatError) as exc_info:
                await client.generate_reply(make_request())

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_store_uses_fallback_for_error_status_with_json(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "agent crashed"})

        async with make_http_client(handler) as client:
            store = InMemoryConversationStore(client)
            store.create_conversation()
            reply = await store.send_message("Hello")

        assert reply.content == EMPTY_REPLY_MESSAGE
        assert [m.content for m in store.active_conversation.messages[1:]] == [
            "Hello",
            EMPTY_REPLY_MESSAGE,
        ]
        assert store.busy is False

    @pytest.mark.asyncio
    async def test_store_recovers_from_unparseable_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="bad gateway")

        async with make_http_client(handler) as client:
            store = InMemoryConversationStore(client)
            store.create_conversation()
            await store.send_message("Hello")

        assert store.active_conversation.messages[-1].content == ERROR_REPLY_MESSAGE
        assert store.busy is False

    @pytest.mark.asyncio
    @pytest.mark.integration
    async def test_real_agent_service(self, agent_service_url):
        """Integration test: ask a running agent service."""
        if not agent_service_url:
            pytest.skip("THREADLINE_BASE_URL not set")

        async with HttpReplyClient(base_url=agent_service_url) as client:
            response = await client.generate_reply(make_request("Say hello"))

        assert isinstance(response, ReplyResponse)


class TestOpenAIReplyClient:
    """Tests for OpenAIReplyClient."""

    def test_model_property(self):
        client = OpenAIReplyClient(api_key="fake-key", model="gpt-4o")

        assert client.model == "gpt-4o"

    def test_request_to_messages(self):
        messages = _request_to_messages(make_request(), system_prompt="Be brief")

        assert messages == [
            {"role": "system", "content": "Be brief"},
            {"role": "assistant", "content": "Welcome"},
            {"role": "user", "content": "Hello"},
        ]

    def test_request_to_messages_without_system_prompt(self):
        messages = _request_to_messages(make_request())

        assert messages[0] == {"role": "assistant", "content": "Welcome"}

    @pytest.mark.asyncio
    async def test_generate_reply(self):
        client = OpenAIReplyClient(api_key="fake-key")
        completion = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content="Hi"))]
        )

        with patch.object(
            client._client.chat.completions, "create", new=AsyncMock(return_value=completion)
        ) as create:
            response = await client.generate_reply(make_request())

        assert response.response == "Hi"
        assert create.await_args.kwargs["messages"][-1] == {"role": "user", "content": "Hello"}
        await client.close()

    @pytest.mark.asyncio
    async def test_empty_completion(self):
        client = OpenAIReplyClient(api_key="fake-key")
        completion = SimpleNamespace(choices=[])

        with patch.object(
            client._client.chat.completions, "create", new=AsyncMock(return_value=completion)
        ):
            response = await client.generate_reply(make_request())

        assert response.response is None
        await client.close()

    @pytest.mark.asyncio
    async def test_api_error_raises_transport_error(self):
        client = OpenAIReplyClient(api_key="fake-key")

        with patch.object(
            client._client.chat.completions, "create", new=AsyncMock(side_effect=OpenAIError("quota"))
        ):
            with pytest.raises(ReplyTransportError):
                await client.generate_reply(make_request())

        await client.close()


class TestReplyClientFactory:
    """Tests for reply client factory."""

    @pytest.mark.asyncio
    async def test_create_http_client(self):
        client = create_reply_client("http", base_url="http://agent.test")

        assert isinstance(client, HttpReplyClient)
        await client.close()

    @pytest.mark.asyncio
    async def test_create_openai_client(self):
        client = create_reply_client("OpenAI", api_key="fake-key")

        assert isinstance(client, OpenAIReplyClient)
        await client.close()

    def test_openai_requires_api_key(self):
        with pytest.raises(TypeError, match="api_key"):
            create_reply_client("openai")

    def test_unknown_client_raises(self):
        with pytest.raises(ValueError, match="Unsupported reply client"):
            create_reply_client("carrier-pigeon")
