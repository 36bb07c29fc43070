from collections.abc import AsyncIterable
from dataclasses import dataclass, field

from models.preferences import PreferenceSignals


@dataclass(frozen=True)
class GuideReply:
    """
    Result of composing one answer.

    ``stream`` yields the gateway's event-stream bytes unmodified; iterate it
    exactly once. ``signals`` carries the preference side channel.
    """

    stream: AsyncIterable[bytes]
    signals: PreferenceSignals = field(default_factory=PreferenceSignals)

    async def aclose(self) -> None:
        """Release the upstream stream, even if it was never iterated."""
        close = getattr(self.stream, "aclose", None)
        if close is not None:
            await close()
