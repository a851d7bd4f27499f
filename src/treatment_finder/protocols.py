"""
Protocol definitions for dependency injection.

These protocols define the interfaces the gateway and aggregator depend on,
allowing the HTTP client and the throttle to be swapped or mocked in tests.
"""

from typing import Protocol, List, Dict, Any


class SearchBackend(Protocol):
    """Protocol for web search collaborators (e.g., Brave)."""

    def fetch_results(self, query: str, count: int = 5) -> List[Dict[str, Any]]:
        """
        Run one search request.

        Args:
            query: Search query
            count: Maximum results to request

        Returns:
            Ordered list of result dicts with keys:
            - title: Page title
            - description (or snippet): Result snippet
            - url: Result URL

        Raises:
            SearchThrottledError: Provider answered HTTP 429
            SearchProviderError: Any other failure
        """
        ...


class Throttle(Protocol):
    """Protocol for the fixed-delay policy applied around search calls."""

    def wait(self) -> None:
        """Block for the fixed pre-call delay."""
        ...

    def wait_after_throttle(self) -> None:
        """Block for the extra interval after a throttled response."""
        ...


class TextSearcher(Protocol):
    """Protocol for anything that turns a query into formatted result lines."""

    def search(self, query: str) -> List[str]:
        ...
