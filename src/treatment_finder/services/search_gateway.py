"""
Search Gateway

Issues throttled queries to the web search collaborator and collapses each
hit into a single descriptive line. Provider failures never escape this
boundary: they come back as a one-element list holding an error line.
"""

import logging
from typing import Any, Dict, List

from src.treatment_finder.api_clients.base_client import SearchProviderError, SearchThrottledError
from src.treatment_finder.models import ERROR_LINE_PREFIX, NO_RESULTS_LINE, SearchSnippet
from src.treatment_finder.protocols import SearchBackend, Throttle

logger = logging.getLogger(__name__)


class SearchGateway:
    """
    Rate-limited search front end.

    Every call waits the throttle's fixed delay first. An HTTP 429 adds the
    throttle's retry delay and re-issues the same query exactly once.
    """

    def __init__(self, backend: SearchBackend, throttle: Throttle, max_results: int = 5):
        """
        Initialize gateway.

        Args:
            backend: Search collaborator (e.g. BraveSearchClient)
            throttle: Fixed-delay policy applied before every call
            max_results: Maximum lines returned per query
        """
        self.backend = backend
        self.throttle = throttle
        self.max_results = max_results

    def search(self, query: str) -> List[str]:
        """
        Run a query and return formatted result lines (at most max_results).

        Args:
            query: Search query

        Returns:
            Result lines, or a single "no results" / error line
        """
        return self._search(query, retried=False)

    def _search(self, query: str, retried: bool) -> List[str]:
        logger.info(f"Searching for: {query}")
        self.throttle.wait()

        try:
            results = self.backend.fetch_results(query, count=self.max_results)
        except SearchThrottledError as e:
            if not retried:
                logger.warning(f"Search throttled for '{query}', retrying once")
                self.throttle.wait_after_throttle()
                return self._search(query, retried=True)
            logger.error(f"Search throttled twice for '{query}': {e}")
            return [f"{ERROR_LINE_PREFIX}: {e}"]
        except SearchProviderError as e:
            logger.error(f"Search failed for '{query}': {e}")
            return [f"{ERROR_LINE_PREFIX}: {e}"]

        if not results:
            return [NO_RESULTS_LINE]

        return [self._to_snippet(r).to_line() for r in results[:self.max_results]]

    @staticmethod
    def _to_snippet(result: Dict[str, Any]) -> SearchSnippet:
        return SearchSnippet(
            title=result.get("title") or "",
            description=result.get("description") or result.get("snippet") or "",
            source_url=result.get("url") or "",
        )
