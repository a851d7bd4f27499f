"""
API Clients module for the treatment finder.

Provides the HTTP client for the web search provider.
"""

from src.treatment_finder.api_clients.base_client import (
    BaseAPIClient,
    SearchProviderError,
    SearchThrottledError,
)
from src.treatment_finder.api_clients.brave_search_client import BraveSearchClient

__all__ = [
    "BaseAPIClient",
    "BraveSearchClient",
    "SearchProviderError",
    "SearchThrottledError",
]
