"""Web retrieval tools for SG Life Guide."""

from .contracts import RetrievedContext, SearchResult
from .factory import create_retriever_from_env
from .intent import is_location_query
from .research_pack import build_retrieved_context
from .retriever import MultiTierRetriever

__all__ = [
    "MultiTierRetriever",
    "RetrievedContext",
    "SearchResult",
    "build_retrieved_context",
    "create_retriever_from_env",
    "is_location_query",
]
