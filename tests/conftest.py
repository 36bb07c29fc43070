import pytest
from dotenv import load_dotenv

from tools.web.contracts import RetrievedContext, SearchResult

# Load environment variables from .env file for tests
load_dotenv()

CONFIG_ENV_VARS = (
    "SEARCH_PROVIDER",
    "FIRECRAWL_API_KEY",
    "FIRECRAWL_SEARCH_URL",
    "TAVILY_API_KEY",
    "SEARCH_TIMEOUT_S",
    "SEALION_API_KEY",
    "SEALION_BASE_URL",
    "SEALION_MODEL",
    "SEALION_TIMEOUT_S",
    "LOVABLE_API_KEY",
    "GATEWAY_URL",
    "GATEWAY_MODEL",
    "GATEWAY_TIMEOUT_S",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every configuration variable so Config sees defaults only."""
    for key in CONFIG_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def mock_env(clean_env):
    """Fixture to mock environment variables for testing."""
    env_vars = {
        "SEARCH_PROVIDER": "firecrawl",
        "FIRECRAWL_API_KEY": "fc-test-key",
        "SEALION_API_KEY": "sealion-test-key",
        "LOVABLE_API_KEY": "gateway-test-key",
    }
    for key, value in env_vars.items():
        clean_env.setenv(key, value)
    return env_vars


@pytest.fixture
def sample_context():
    return RetrievedContext(
        official=[
            SearchResult(title="BTO eligibility", url="https://www.hdb.gov.sg/bto", excerpt="You must be 21..."),
        ],
        news=[
            SearchResult(title="BTO launch", url="https://www.straitstimes.com/bto", excerpt="The May launch..."),
        ],
        community=[],
        business=[],
    )
