"""Data contracts for web retrieval."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SearchResult:
    """One page returned by a search provider."""

    title: str
    url: str
    excerpt: str = ""


@dataclass(frozen=True)
class RetrievedContext:
    """
    Results of one retrieval pass, one list per source tier.

    Lists keep provider order. A failed tier is an empty list, never None.
    """

    official: list[SearchResult] = field(default_factory=list)
    news: list[SearchResult] = field(default_factory=list)
    community: list[SearchResult] = field(default_factory=list)
    business: list[SearchResult] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.official or self.news or self.community or self.business)

    def counts(self) -> dict[str, int]:
        return {
            "official": len(self.official),
            "news": len(self.news),
            "community": len(self.community),
            "business": len(self.business),
        }


def clip_excerpt(text: str | None, limit: int) -> str:
    """Cut provider text to ``limit`` characters."""
    return (text or "")[:limit]
