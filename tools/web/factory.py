"""Factory for creating the search provider and retriever from configuration."""

from config.config import Config, SearchProviderType
from utils.logger import get_logger

from .firecrawl_client import FirecrawlSearchProvider
from .retriever import MultiTierRetriever
from .search_provider import DisabledSearchProvider, SearchProvider

logger = get_logger(__name__)


def create_search_provider(config: Config) -> SearchProvider:
    """
    Create the configured search provider.

    A missing API key yields a DisabledSearchProvider, so retrieval degrades
    to empty tiers instead of failing requests.
    """
    provider_type = config.SEARCH_PROVIDER

    if provider_type == SearchProviderType.TAVILY.value:
        if not config.TAVILY_API_KEY:
            logger.warning("TAVILY_API_KEY not set; web retrieval disabled")
            return DisabledSearchProvider("TAVILY_API_KEY is not configured")

        from .tavily_client import TavilySearchProvider

        logger.info("🚀 Using Tavily for web retrieval")
        return TavilySearchProvider(api_key=config.TAVILY_API_KEY, timeout_s=config.SEARCH_TIMEOUT_S)

    if provider_type != SearchProviderType.FIRECRAWL.value:
        logger.warning(f"Unknown SEARCH_PROVIDER '{provider_type}', falling back to firecrawl")

    if not config.FIRECRAWL_API_KEY:
        logger.warning("FIRECRAWL_API_KEY not set; web retrieval disabled")
        return DisabledSearchProvider("FIRECRAWL_API_KEY is not configured")

    logger.info("🚀 Using Firecrawl for web retrieval (markdown scraping enabled)")
    return FirecrawlSearchProvider(
        api_key=config.FIRECRAWL_API_KEY,
        search_url=config.FIRECRAWL_SEARCH_URL,
        timeout_s=config.SEARCH_TIMEOUT_S,
    )


def create_retriever_from_env(config: Config | None = None) -> MultiTierRetriever:
    """
    Create the multi-tier retriever from environment configuration.

    Environment variables:
        SEARCH_PROVIDER: "firecrawl" (default) or "tavily"
        FIRECRAWL_API_KEY / TAVILY_API_KEY: key for the selected provider
        SEARCH_TIMEOUT_S: per-tier timeout in seconds (default: 15)
    """
    config = config or Config()
    provider = create_search_provider(config)
    return MultiTierRetriever(provider, timeout_s=config.SEARCH_TIMEOUT_S)
