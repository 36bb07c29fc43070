"""Reading the relayed chat-completion event stream.

The guide relays the gateway's OpenAI-style SSE stream untouched; these
helpers turn it back into text for the CLI and for tests.
"""

import json
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator

from utils.logger import get_logger

logger = get_logger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


def _delta_content(payload: str) -> str | None:
    try:
        parsed = json.loads(payload)
    except json.JSONDecodeError:
        logger.debug("Skipping non-JSON stream line", extra={"extra_fields": {"line": payload[:200]}})
        return None

    choices = parsed.get("choices") if isinstance(parsed, dict) else None
    if not choices or not isinstance(choices[0], dict):
        return None
    delta = choices[0].get("delta") or {}
    content = delta.get("content") if isinstance(delta, dict) else None
    return content if isinstance(content, str) and content else None


def iter_stream_deltas(lines: Iterable[str]) -> Iterator[str]:
    """
    Yield content deltas from SSE lines.

    Comment lines (``:``), blank lines and non-data fields are skipped;
    iteration stops at ``data: [DONE]``.
    """
    for line in lines:
        line = line.rstrip("\r\n")
        if not line.strip() or line.startswith(":"):
            continue
        if not line.startswith(DATA_PREFIX):
            continue
        payload = line[len(DATA_PREFIX):].strip()
        if payload == DONE_SENTINEL:
            return
        content = _delta_content(payload)
        if content:
            yield content


def collect_stream_text(lines: Iterable[str]) -> str:
    return "".join(iter_stream_deltas(lines))


async def iter_stream_lines(chunks: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """Re-split a byte stream into decoded lines; chunk boundaries may fall anywhere."""
    buffer = ""
    async for chunk in chunks:
        buffer += chunk.decode("utf-8", errors="replace")
        while "\n" in buffer:
            line, buffer = buffer.split("\n", 1)
            yield line
    if buffer:
        yield buffer
