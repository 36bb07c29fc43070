"""
FastAPI contract tests for the guide endpoint.

A FakeOrchestrator is injected through dependency overrides, so no search,
SEA-LION or gateway call is made.
"""

import json

import pytest
from fastapi.testclient import TestClient

from models.errors import RATE_LIMIT_MESSAGE, UNAVAILABLE_MESSAGE, ConfigurationError, GatewayError
from models.guide_reply import GuideReply
from models.preferences import InferredPreference, PreferenceSignals
from server.app import create_app
from server.dependencies import get_orchestrator

URL = "/v1/sg-life-guide"
SSE_BODY = b'data: {"choices":[{"delta":{"content":"Can lah!"}}]}\n\ndata: [DONE]\n\n'


class FakeOrchestrator:
    def __init__(self, signals=None, error=None):
        self.signals = signals or PreferenceSignals()
        self.error = error
        self.requests = []

    async def answer(self, request):
        self.requests.append(request)
        if self.error:
            raise self.error

        async def stream():
            yield SSE_BODY

        return GuideReply(stream=stream(), signals=self.signals)


@pytest.fixture
def fake():
    return FakeOrchestrator()


@pytest.fixture
def client(fake):
    app = create_app()
    app.dependency_overrides[get_orchestrator] = lambda: fake
    return TestClient(app)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "healthy"
    assert data["retrieval_profile"] == "2025.1"
    assert "X-Request-ID" in r.headers


def test_stream_is_relayed(client, fake):
    r = client.post(URL, json={"message": "How do I apply for BTO?"})

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/event-stream")
    assert r.content == SSE_BODY
    assert fake.requests[0].message == "How do I apply for BTO?"
    assert "X-Missing-Preference" not in r.headers
    assert "X-Inferred-Preferences" not in r.headers


def test_request_fields_are_sanitized(client, fake):
    history = [{"role": "user", "content": f"t{i}"} for i in range(25)] + [{"role": "robot", "content": "x"}]
    client.post(URL, json={"message": " hi\x00 ", "conversationHistory": history, "userContext": "Name: Lim"})

    request = fake.requests[0]
    assert request.message == "hi"
    assert [m.content for m in request.history] == [f"t{i}" for i in range(6, 25)]
    assert request.user_context == "Name: Lim"


@pytest.mark.parametrize(
    "body, error",
    [
        ({}, "Message must be a string"),
        ({"message": 5}, "Message must be a string"),
        ({"message": "   "}, "Message cannot be empty"),
        ({"message": "x" * 5001}, "Message exceeds maximum length of 5000 characters"),
        (["message"], "Invalid JSON request body"),
    ],
)
def test_invalid_input_is_400_without_downstream_calls(client, fake, body, error):
    r = client.post(URL, json=body)

    assert r.status_code == 400
    assert r.json() == {"error": error}
    assert fake.requests == []


def test_malformed_json_is_400(client, fake):
    r = client.post(URL, content=b"{not json", headers={"Content-Type": "application/json"})

    assert r.status_code == 400
    assert r.json() == {"error": "Invalid JSON request body"}
    assert fake.requests == []


@pytest.mark.parametrize(
    "upstream, status, message",
    [(429, 429, RATE_LIMIT_MESSAGE), (402, 402, UNAVAILABLE_MESSAGE), (503, 500, "Failed to generate response")],
)
def test_gateway_errors_are_json_not_stream(fake, client, upstream, status, message):
    fake.error = GatewayError(upstream, "upstream body")

    r = client.post(URL, json={"message": "hi"})

    assert r.status_code == status
    assert r.headers["content-type"].startswith("application/json")
    assert r.json() == {"error": message}


def test_configuration_error_is_500(fake, client):
    fake.error = ConfigurationError("LOVABLE_API_KEY is not configured")

    r = client.post(URL, json={"message": "hi"})

    assert r.status_code == 500
    assert r.json() == {"error": "LOVABLE_API_KEY is not configured"}


def test_unexpected_error_is_500_with_message(fake, client):
    fake.error = RuntimeError("kaboom")

    r = client.post(URL, json={"message": "hi"})

    assert r.status_code == 500
    assert r.json() == {"error": "kaboom"}


def test_unexpected_error_without_message(fake, client):
    fake.error = RuntimeError()

    r = client.post(URL, json={"message": "hi"})

    assert r.json() == {"error": "Unknown error"}


def test_signal_headers(client, fake):
    fake.signals = PreferenceSignals(
        missing_preference="housing_status",
        inferred_preferences=[InferredPreference(f"k{i}", f"v{i}", f"L{i}") for i in range(7)],
    )

    r = client.post(URL, json={"message": "hdb"})

    assert r.headers["X-Missing-Preference"] == "housing_status"
    inferred = json.loads(r.headers["X-Inferred-Preferences"])
    assert len(inferred) == 5
    assert inferred[0] == {"key": "k0", "value": "v0", "label": "L0"}


def test_non_ascii_inference_is_header_safe(client, fake):
    fake.signals = PreferenceSignals(inferred_preferences=[InferredPreference("likes_kopi", "kopi ☕", "Likes kopi ☕")])

    r = client.post(URL, json={"message": "I like kopi ☕"})

    assert json.loads(r.headers["X-Inferred-Preferences"])[0]["value"] == "kopi ☕"


def test_cors_exposes_signal_headers(client):
    r = client.post(URL, json={"message": "hi"}, headers={"Origin": "https://app.example"})

    assert r.headers["access-control-allow-origin"] == "*"
    exposed = r.headers["access-control-expose-headers"]
    assert "X-Missing-Preference" in exposed
    assert "X-Inferred-Preferences" in exposed


def _assert_permissive_204(r):
    assert r.status_code == 204
    assert r.content == b""
    assert r.headers["access-control-allow-origin"] == "*"
    assert "content-type" in r.headers["access-control-allow-headers"]
    assert "POST" in r.headers["access-control-allow-methods"]
    assert "X-Missing-Preference" in r.headers["access-control-expose-headers"]
    assert "X-Inferred-Preferences" in r.headers["access-control-expose-headers"]


def test_plain_options_is_204_with_cors_headers(client, fake):
    r = client.options(URL)

    _assert_permissive_204(r)
    assert fake.requests == []


def test_cors_preflight_is_204_with_cors_headers(client):
    r = client.options(
        URL,
        headers={
            "Origin": "https://app.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )

    _assert_permissive_204(r)


def test_openapi_documents_request_body(client):
    schema = client.get("/openapi.json").json()
    body = schema["paths"][URL]["post"]["requestBody"]["content"]["application/json"]["schema"]
    assert set(body["properties"]) == {"message", "conversationHistory", "userContext", "preferencesContext"}


def test_caller_request_id_is_echoed(client):
    r = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert r.headers["X-Request-ID"] == "req-123"


def test_lone_surrogate_in_message_is_stripped(client, fake):
    r = client.post(
        URL,
        content=b'{"message": "hello \\ud83d there"}',
        headers={"Content-Type": "application/json"},
    )

    assert r.status_code == 200
    assert fake.requests[0].message == "hello  there"
    fake.requests[0].message.encode("utf-8")


def test_stream_is_closed_after_response(client, fake):
    closed = []

    class ClosingStream:
        def __aiter__(self):
            return self._chunks()

        async def _chunks(self):
            yield SSE_BODY

        async def aclose(self):
            closed.append(True)

    async def answer(request):
        fake.requests.append(request)
        return GuideReply(stream=ClosingStream(), signals=PreferenceSignals())

    fake.answer = answer

    r = client.post(URL, json={"message": "hi"})

    assert r.content == SSE_BODY
    assert closed == [True]
