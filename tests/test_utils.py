import asyncio

import httpx
import pytest

from llm_relay.features.relay.command import parse_relay_request
from llm_relay.features.relay.stream import relay_stream
from llm_relay.shared.errors import InvalidJsonError, MissingFieldsError, ProxyError
from llm_relay.shared.utils import describe_error, mask_key


class TestDescribeError:
    def test_exception_message(self):
        assert describe_error(ConnectionResetError("ECONNRESET")) == "ECONNRESET"

    def test_plain_text(self):
        assert describe_error("socket hang up") == "socket hang up"

    def test_message_attribute(self):
        assert describe_error(ProxyError("boom")) == "Error proxying to OpenRouter: boom"

    @pytest.mark.parametrize("value", [None, 42, {"code": 1}, "", RuntimeError()])
    def test_fallback(self, value):
        assert describe_error(value) == "An unknown error occurred"


def test_mask_key():
    assert mask_key("sk-or-v1-abcdef123456") == "sk-o...3456"
    assert mask_key("short") == "****"
    assert mask_key("") == "<none>"


class TestParseRelayRequest:
    def test_parses_optional_fields(self):
        request = parse_relay_request(
            b'{"prompt": "Hi", "model_name": "m", "stream": true, "referer": "r", "title": "t"}'
        )

        assert request.is_streaming is True
        assert request.referer == "r"
        assert request.title == "t"
        assert request.to_upstream().model_dump() == {
            "messages": [{"role": "user", "content": "Hi"}],
            "model": "m",
            "stream": True,
        }

    def test_stream_defaults_to_false(self):
        assert parse_relay_request(b'{"prompt": "Hi", "model_name": "m"}').is_streaming is False

    def test_invalid_utf8_is_invalid_json(self):
        with pytest.raises(InvalidJsonError):
            parse_relay_request(b"\x80abc")

    def test_null_body_is_missing_fields(self):
        with pytest.raises(MissingFieldsError):
            parse_relay_request(b"null")


def test_relay_stream_copies_and_closes():
    chunks = [b"data: 1\n\n", b"data: 2\n\n"]

    async def body():
        for chunk in chunks:
            yield chunk

    async def consume():
        response = httpx.Response(200, content=body())
        received = [chunk async for chunk in relay_stream(response, "m")]
        return response, received

    response, received = asyncio.run(consume())

    assert b"".join(received) == b"".join(chunks)
    assert response.is_closed


def test_relay_stream_ends_quietly_on_transport_error():
    async def body():
        yield b"data: 1\n\n"
        raise httpx.ReadError("connection reset")

    async def consume():
        response = httpx.Response(200, content=body())
        return response, [chunk async for chunk in relay_stream(response, "m")]

    response, received = asyncio.run(consume())

    assert received == [b"data: 1\n\n"]
    assert response.is_closed
