"""Streaming client for the primary chat-completion gateway.

The gateway speaks the OpenAI chat-completions wire format. Its event stream
is relayed byte-for-byte, so this client uses httpx streaming directly
instead of an SDK that would parse and re-serialize the chunks.
"""

from collections.abc import AsyncIterator

import httpx

from models.errors import ConfigurationError, GatewayError
from utils.logger import get_logger, request_id_var

logger = get_logger(__name__)

GATEWAY_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"
GATEWAY_MODEL = "google/gemini-2.5-flash"
LOG_BODY_CHARS = 500


class ChatGatewayClient:
    """
    Opens one streaming completion per call.

    Status is checked before any byte is relayed, so callers either get a
    complete error or a live stream, never a half-written body.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        url: str = GATEWAY_URL,
        model_name: str = GATEWAY_MODEL,
        timeout_s: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the gateway client.

        Args:
            api_key: Gateway API key; required at call time
            url: Chat-completions endpoint
            model_name: Model requested from the gateway
            timeout_s: Connect/read timeout in seconds (applies per chunk read)
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.api_key = api_key
        self.url = url
        self.model_name = model_name
        self.timeout_s = timeout_s
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def stream_chat(self, messages: list[dict[str, str]]) -> "GatewayStream":
        """
        Start a streaming completion.

        Args:
            messages: Full message sequence (system, history, user)

        Returns:
            GatewayStream over the upstream event-stream bytes. Exhausting
            or closing it releases the upstream connection.

        Raises:
            ConfigurationError: no API key
            GatewayError: non-2xx status or transport failure
        """
        if not self.configured:
            raise ConfigurationError("LOVABLE_API_KEY is not configured")

        client = httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport)

        logger.info(
            "Sending request to AI gateway",
            extra={"extra_fields": {"model": self.model_name, "messages": len(messages)}},
        )

        # Until a GatewayStream owns the client, every exit path closes it
        try:
            request = client.build_request(
                "POST",
                self.url,
                json={"model": self.model_name, "messages": messages, "stream": True},
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
            response = await client.send(request, stream=True)
        except httpx.HTTPError as e:
            await client.aclose()
            logger.error(
                f"❌ AI gateway request failed: {e}",
                extra={"extra_fields": {"error_type": type(e).__name__}},
            )
            raise GatewayError(0, str(e)) from e
        except BaseException:
            await client.aclose()
            raise

        if not response.is_success:
            try:
                body = (await response.aread()).decode("utf-8", errors="replace")
            finally:
                await response.aclose()
                await client.aclose()
            logger.error(
                "AI gateway error",
                extra={"extra_fields": {"status": response.status_code, "body": body[:LOG_BODY_CHARS]}},
            )
            raise GatewayError(response.status_code, body[:LOG_BODY_CHARS])

        return GatewayStream(client, response)


class GatewayStream:
    """
    Owns one open upstream response and relays its bytes.

    ``aclose()`` is idempotent and releases the connection whether or not
    iteration ever started. The request ID is captured at creation because
    the body is usually sent after the request handler has returned.
    """

    def __init__(self, client: httpx.AsyncClient, response: httpx.Response):
        self._client = client
        self._response = response
        self._request_id = request_id_var.get()
        self.bytes_relayed = 0
        self.closed = False

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self._relay()

    async def _relay(self) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._response.aiter_bytes():
                self.bytes_relayed += len(chunk)
                yield chunk
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            await self._response.aclose()
        finally:
            await self._client.aclose()
        fields = {"bytes": self.bytes_relayed}
        if self._request_id:
            fields["request_id"] = self._request_id
        logger.info("AI gateway stream closed", extra={"extra_fields": fields})
