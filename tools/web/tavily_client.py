"""Tavily search client.

Alternative provider selected with SEARCH_PROVIDER=tavily. Site scoping uses
Tavily's ``include_domains`` filter instead of query operators.
"""

import asyncio
from collections.abc import Sequence

from utils.logger import get_logger

from .contracts import SearchResult, clip_excerpt
from .search_provider import SearchProvider

logger = get_logger(__name__)


def site_domains(sites: Sequence[str]) -> list[str]:
    """
    Reduce site entries to bare domains, keeping order.

    "reddit.com/r/singapore" and "reddit.com/r/askSingapore" both become
    "reddit.com".
    """
    domains: list[str] = []
    for site in sites:
        domain = site.split("/", 1)[0]
        if domain and domain not in domains:
            domains.append(domain)
    return domains


class TavilySearchProvider(SearchProvider):
    """
    Tavily-powered search provider.
    """

    name = "tavily"

    def __init__(self, api_key: str, *, timeout_s: float = 15.0, client=None):
        """
        Initialize the Tavily provider.

        Args:
            api_key: Tavily API key
            timeout_s: Per-request timeout in seconds
            client: Optional pre-built async client exposing ``search``
        """
        if not api_key:
            raise ValueError("TAVILY_API_KEY not found in environment")

        self.timeout_s = timeout_s

        if client is None:
            try:
                from tavily import AsyncTavilyClient
            except ModuleNotFoundError as e:
                raise ModuleNotFoundError(
                    "Optional dependency 'tavily' is not installed. "
                    "Install it to use SEARCH_PROVIDER=tavily: pip install tavily-python"
                ) from e
            client = AsyncTavilyClient(api_key=api_key)

        self.client = client

    async def search(
        self,
        query: str,
        *,
        sites: Sequence[str] = (),
        limit: int = 3,
        excerpt_chars: int = 500,
    ) -> list[SearchResult]:
        domains = site_domains(sites)
        logger.info(
            "Tavily search",
            extra={"extra_fields": {"query": query[:300], "limit": limit, "domains": domains}},
        )

        try:
            response = await asyncio.wait_for(
                self.client.search(
                    query=query,
                    max_results=limit,
                    search_depth="advanced",
                    include_domains=domains or None,
                    include_answer=False,
                    include_raw_content=False,
                ),
                timeout=self.timeout_s,
            )
        except asyncio.TimeoutError:
            logger.warning("Tavily search timed out", extra={"extra_fields": {"timeout_s": self.timeout_s}})
            return []
        except Exception as e:
            logger.warning(
                "Tavily search failed",
                extra={"extra_fields": {"error": str(e), "error_type": type(e).__name__}},
            )
            return []

        results: list[SearchResult] = []
        for item in (response or {}).get("results", [])[:limit]:
            url = str(item.get("url") or "").strip()
            if not url:
                continue
            results.append(
                SearchResult(
                    title=str(item.get("title") or "").strip() or url,
                    url=url,
                    excerpt=clip_excerpt(item.get("content"), excerpt_chars),
                )
            )

        logger.info(f"✅ Tavily returned {len(results)} results")
        return results
