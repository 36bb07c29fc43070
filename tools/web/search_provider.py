"""Search provider interface shared by the retrieval tiers."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from utils.logger import get_logger

from .contracts import SearchResult

logger = get_logger(__name__)


def build_site_query(query: str, sites: Sequence[str]) -> str:
    """
    Scope a query to a list of sites with search operators.

    >>> build_site_query("bto grant", ["hdb.gov.sg", "cpf.gov.sg"])
    'bto grant (site:hdb.gov.sg OR site:cpf.gov.sg)'
    """
    if not sites:
        return query
    site_filter = " OR ".join(f"site:{site}" for site in sites)
    return f"{query} ({site_filter})"


class SearchProvider(ABC):
    """
    A web search-and-scrape backend.

    Implementations must not raise for provider-side failures: a failed
    search returns an empty list and logs the reason.
    """

    name: str = "unknown"

    @abstractmethod
    async def search(
        self,
        query: str,
        *,
        sites: Sequence[str] = (),
        limit: int = 3,
        excerpt_chars: int = 500,
    ) -> list[SearchResult]:
        """
        Search the web.

        Args:
            query: Search query without site operators
            sites: Domains (optionally with a path) to restrict results to;
                empty for an open search
            limit: Maximum number of results to request
            excerpt_chars: Maximum excerpt length per result

        Returns:
            Results in provider ranking order
        """


class DisabledSearchProvider(SearchProvider):
    """Stands in when no search API key is configured."""

    name = "disabled"

    def __init__(self, reason: str = "search provider API key is not configured"):
        self.reason = reason

    async def search(self, query, *, sites=(), limit=3, excerpt_chars=500) -> list[SearchResult]:
        logger.warning(
            "Search skipped",
            extra={"extra_fields": {"reason": self.reason, "sites": len(sites)}},
        )
        return []
