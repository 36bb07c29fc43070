import os
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv


class SearchProviderType(Enum):
    """Supported web search providers."""
    FIRECRAWL = "firecrawl"
    TAVILY = "tavily"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


class Config:
    """Configuration management for the application."""

    def __init__(self):
        """Initialize configuration with environment variables."""
        # Load environment variables from .env file if it exists
        env_path = Path(__file__).parent.parent / '.env'
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

        # Web search
        self.SEARCH_PROVIDER = os.getenv('SEARCH_PROVIDER', SearchProviderType.FIRECRAWL.value).lower()
        self.FIRECRAWL_API_KEY = os.getenv('FIRECRAWL_API_KEY')
        self.FIRECRAWL_SEARCH_URL = os.getenv('FIRECRAWL_SEARCH_URL', 'https://api.firecrawl.dev/v1/search')
        self.TAVILY_API_KEY = os.getenv('TAVILY_API_KEY')
        self.SEARCH_TIMEOUT_S = _float_env('SEARCH_TIMEOUT_S', 15.0)

        # SEA-LION cultural enhancement (OpenAI-compatible)
        self.SEALION_API_KEY = os.getenv('SEALION_API_KEY')
        self.SEALION_BASE_URL = os.getenv('SEALION_BASE_URL', 'https://api.sea-lion.ai/v1')
        self.SEALION_MODEL = os.getenv('SEALION_MODEL', 'aisingapore/Llama-SEA-LION-v3.5-8B-R')
        self.SEALION_TIMEOUT_S = _float_env('SEALION_TIMEOUT_S', 20.0)

        # Primary chat-completion gateway
        self.LOVABLE_API_KEY = os.getenv('LOVABLE_API_KEY')
        self.GATEWAY_URL = os.getenv('GATEWAY_URL', 'https://ai.gateway.lovable.dev/v1/chat/completions')
        self.GATEWAY_MODEL = os.getenv('GATEWAY_MODEL', 'google/gemini-2.5-flash')
        self.GATEWAY_TIMEOUT_S = _float_env('GATEWAY_TIMEOUT_S', 60.0)

    def validate(self) -> list[str]:
        """
        Check the configuration and describe what is missing or degraded.

        Returns:
            list[str]: Human-readable problems; empty when fully configured
        """
        problems = []
        if not self.LOVABLE_API_KEY:
            problems.append("LOVABLE_API_KEY is not set; chat requests will fail.")
        if self.SEARCH_PROVIDER not in {e.value for e in SearchProviderType}:
            problems.append(
                f"Unknown SEARCH_PROVIDER '{self.SEARCH_PROVIDER}'. "
                f"Must be one of: {', '.join(e.value for e in SearchProviderType)}"
            )
        elif not self.search_api_key():
            problems.append(f"No API key for search provider '{self.SEARCH_PROVIDER}'; retrieval is disabled.")
        if not self.SEALION_API_KEY:
            problems.append("SEALION_API_KEY is not set; cultural enhancement is skipped.")
        return problems

    def search_api_key(self) -> str | None:
        """Return the API key of the selected search provider."""
        if self.SEARCH_PROVIDER == SearchProviderType.TAVILY.value:
            return self.TAVILY_API_KEY
        return self.FIRECRAWL_API_KEY
