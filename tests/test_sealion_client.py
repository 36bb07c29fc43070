import asyncio
import json

import httpx

from api.sealion_client import SeaLionClient


def _client(handler):
    return SeaLionClient(
        "sl-key",
        base_url="https://sealion.test/v1",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def _completion(content):
    return {
        "id": "cmpl-1",
        "object": "chat.completion",
        "created": 0,
        "model": "sea-lion",
        "choices": [
            {"index": 0, "finish_reason": "stop", "message": {"role": "assistant", "content": content}}
        ],
    }


def test_unconfigured_client_short_circuits():
    client = SeaLionClient(None)
    assert client.enabled is False
    assert asyncio.run(client.enhance("ang bao rates for wedding")) is None


def test_enhance_returns_cultural_context():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion("Chinese weddings: ang bao in even amounts."))

    text = asyncio.run(_client(handler).enhance("ang bao rates for wedding", "Name: Tan"))

    assert text == "Chinese weddings: ang bao in even amounts."
    assert seen["url"] == "https://sealion.test/v1/chat/completions"
    assert seen["body"]["max_tokens"] == 500
    assert seen["body"]["temperature"] == 0.7
    prompt = seen["body"]["messages"][0]["content"]
    assert 'User Query: "ang bao rates for wedding"' in prompt
    assert "User Profile:\nName: Tan" in prompt


def test_non_2xx_degrades_to_none():
    client = _client(lambda request: httpx.Response(503, json={"error": "overloaded"}))
    assert asyncio.run(client.enhance("hi")) is None


def test_transport_error_degrades_to_none():
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    assert asyncio.run(_client(handler).enhance("hi")) is None


def test_empty_content_is_none():
    client = _client(lambda request: httpx.Response(200, json=_completion("")))
    assert asyncio.run(client.enhance("hi")) is None
