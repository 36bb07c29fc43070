"""Multi-tier retrieval across official, news, community and business sources."""

import asyncio

from config.profile import BUSINESS_TIER, SITE_SCOPED_TIERS, TierSpec
from utils.logger import get_logger

from .contracts import RetrievedContext, SearchResult
from .intent import is_location_query
from .search_provider import SearchProvider

logger = get_logger(__name__)


async def _no_results() -> list[SearchResult]:
    return []


class MultiTierRetriever:
    """
    Runs one search per tier concurrently and joins them.

    The business tier only runs for location-oriented queries; otherwise it
    resolves to an empty list without network I/O. The join waits for every
    branch, so ``timeout_s`` bounds how long a slow tier can hold the rest.
    """

    def __init__(self, provider: SearchProvider, timeout_s: float | None = 15.0):
        """
        Args:
            provider: Search backend shared by all tiers
            timeout_s: Upper bound for each tier's search; None waits forever
        """
        self.provider = provider
        self.timeout_s = timeout_s

    async def retrieve_information(self, query: str) -> RetrievedContext:
        """
        Retrieve context for a query from all tiers.

        This method NEVER raises for upstream failures; each failed tier
        contributes an empty list.
        """
        location_based = is_location_query(query)
        logger.info(
            "Starting retrieval",
            extra={"extra_fields": {"provider": self.provider.name, "location_based": location_based}},
        )

        official, news, community, business = await asyncio.gather(
            *(self._search_tier(query, tier) for tier in SITE_SCOPED_TIERS),
            self._search_tier(query, BUSINESS_TIER) if location_based else _no_results(),
        )

        context = RetrievedContext(official=official, news=news, community=community, business=business)
        logger.info("Retrieval complete", extra={"extra_fields": context.counts()})
        return context

    async def _search_tier(self, query: str, tier: TierSpec) -> list[SearchResult]:
        tier_query = f"{query} {tier.query_suffix}" if tier.query_suffix else query

        try:
            results = await asyncio.wait_for(
                self.provider.search(
                    tier_query,
                    sites=tier.sites,
                    limit=tier.limit,
                    excerpt_chars=tier.excerpt_chars,
                ),
                timeout=self.timeout_s,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Search tier timed out",
                extra={"extra_fields": {"tier": tier.name, "timeout_s": self.timeout_s}},
            )
            return []
        except Exception as e:
            logger.error(
                f"❌ Search tier failed: {e}",
                exc_info=True,
                extra={"extra_fields": {"tier": tier.name}},
            )
            return []

        return list(results or [])[: tier.limit]
