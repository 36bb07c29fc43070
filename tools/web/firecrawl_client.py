"""Firecrawl search client.

Firecrawl searches the web and scrapes each hit in the same call, returning
the page's main content as markdown. That is what the tiers need: one request
per tier, with text dense enough to quote opening hours or eligibility rules.
"""

from collections.abc import Sequence

import httpx

from config.profile import SEARCH_COUNTRY, SEARCH_LANG
from utils.logger import get_logger

from .contracts import SearchResult, clip_excerpt
from .search_provider import SearchProvider, build_site_query

logger = get_logger(__name__)

FIRECRAWL_SEARCH_URL = "https://api.firecrawl.dev/v1/search"
DEFAULT_TIMEOUT_S = 15.0
LOG_BODY_CHARS = 500


class FirecrawlSearchProvider(SearchProvider):
    """
    Firecrawl-powered search provider.

    A fresh ``httpx.AsyncClient`` is opened per call so concurrent tiers
    share nothing but configuration.
    """

    name = "firecrawl"

    def __init__(
        self,
        api_key: str,
        *,
        search_url: str = FIRECRAWL_SEARCH_URL,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the Firecrawl provider.

        Args:
            api_key: Firecrawl API key
            search_url: Search endpoint (overridable for self-hosted Firecrawl)
            timeout_s: Per-request timeout in seconds
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        if not api_key:
            raise ValueError("FIRECRAWL_API_KEY not found in environment")

        self.api_key = api_key
        self.search_url = search_url
        self.timeout_s = timeout_s
        self._transport = transport

    def _build_payload(self, query: str, limit: int) -> dict:
        return {
            "query": query,
            "limit": limit,
            "lang": SEARCH_LANG,
            "country": SEARCH_COUNTRY,
            "scrapeOptions": {
                "formats": ["markdown"],
                "onlyMainContent": True,
            },
        }

    async def search(
        self,
        query: str,
        *,
        sites: Sequence[str] = (),
        limit: int = 3,
        excerpt_chars: int = 500,
    ) -> list[SearchResult]:
        search_query = build_site_query(query, sites)
        logger.info(
            "Firecrawl search",
            extra={"extra_fields": {"query": search_query[:300], "limit": limit}},
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                response = await client.post(
                    self.search_url,
                    json=self._build_payload(search_query, limit),
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as exc:
            logger.warning(
                "Firecrawl search failed",
                extra={"extra_fields": {"error": str(exc), "error_type": type(exc).__name__}},
            )
            return []

        if not response.is_success:
            logger.warning(
                "Firecrawl search error",
                extra={
                    "extra_fields": {
                        "status": response.status_code,
                        "body": response.text[:LOG_BODY_CHARS],
                    }
                },
            )
            return []

        try:
            payload = response.json()
        except ValueError:
            logger.warning("Firecrawl returned a non-JSON body")
            return []

        if not isinstance(payload, dict) or not payload.get("success") or not payload.get("data"):
            return []

        results = _normalize_results(payload["data"], excerpt_chars)
        logger.info(f"✅ Firecrawl returned {len(results)} results")
        return results


def _normalize_results(items, excerpt_chars: int) -> list[SearchResult]:
    results: list[SearchResult] = []
    if not isinstance(items, list):
        return results

    for item in items:
        if not isinstance(item, dict):
            continue
        url = str(item.get("url") or "").strip()
        if not url:
            continue
        results.append(
            SearchResult(
                title=str(item.get("title") or "").strip() or url,
                url=url,
                excerpt=clip_excerpt(item.get("markdown") or item.get("description"), excerpt_chars),
            )
        )
    return results
