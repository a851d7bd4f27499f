"""
Brave Search API Client

Client for the Brave web search endpoint used for every treatment,
guide and pricing lookup.
"""

import logging
from typing import Dict, List, Optional, Any

import requests

from src.treatment_finder.api_clients.base_client import BaseAPIClient, SearchProviderError
from src.treatment_finder.config import SearchConfig

logger = logging.getLogger(__name__)


class BraveSearchClient(BaseAPIClient):
    """
    Client for the Brave Search REST API.

    Requires a subscription token; pacing is handled by the SearchGateway.
    """

    BASE_URL = "https://api.search.brave.com/res/v1"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: Optional[str] = None,
        timeout: int = 10,
        search_lang: str = "en",
        safesearch: str = "moderate",
        session: Optional[requests.Session] = None
    ):
        """
        Initialize Brave search client.

        Args:
            api_key: Brave Search subscription token
            base_url: Override API base URL
            timeout: Request timeout in seconds
            search_lang: Result language
            safesearch: Safe-search level
            session: Optional requests session
        """
        super().__init__(
            base_url=base_url or self.BASE_URL,
            timeout=timeout,
            name="BraveSearch",
            session=session
        )
        self.api_key = api_key
        self.search_lang = search_lang
        self.safesearch = safesearch

    @classmethod
    def from_config(cls, config: SearchConfig) -> "BraveSearchClient":
        return cls(
            api_key=config.search_api_key,
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            search_lang=config.search_lang,
            safesearch=config.safesearch,
        )

    def fetch_results(self, query: str, count: int = 5) -> List[Dict[str, Any]]:
        """
        Run one web search.

        Args:
            query: Search query
            count: Maximum number of results

        Returns:
            List of raw result dicts (title, description/snippet, url)

        Raises:
            SearchThrottledError: On HTTP 429
            SearchProviderError: On any other failure
        """
        if not self.api_key:
            raise SearchProviderError("search API key is not configured")

        headers = {
            "Accept-Encoding": "gzip",
            "X-Subscription-Token": self.api_key,
        }
        params = {
            "q": query,
            "count": count,
            "search_lang": self.search_lang,
            "safesearch": self.safesearch,
        }

        data = self.get("/web/search", params=params, headers=headers)

        web = data.get("web") or {}
        results = web.get("results") or []
        logger.info(f"Found {len(results)} results for: {query}")
        return results

    def health_check(self) -> bool:
        """Check if the search API answers a minimal query."""
        try:
            self.fetch_results("metformin", count=1)
            return True
        except SearchProviderError as e:
            logger.error(f"[{self.name}] Health check failed: {e}")
            return False
