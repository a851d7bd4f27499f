"""
Base API Client

Provides common functionality for API clients including:
- Shared requests session
- Typed errors for throttling and other provider failures
- Health check contract
"""

import logging
from typing import Dict, Optional, Any
from abc import ABC, abstractmethod
import requests

logger = logging.getLogger(__name__)


class SearchProviderError(Exception):
    """Raised when a provider request fails (timeout, connection, HTTP error, bad payload)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SearchThrottledError(SearchProviderError):
    """Raised when the provider answers HTTP 429."""

    def __init__(self, message: str = "Request failed with status code 429"):
        super().__init__(message, status_code=429)


class BaseAPIClient(ABC):
    """
    Base class for API clients.

    Retry and pacing belong to the caller: a 429 is
    surfaced as SearchThrottledError instead of being retried here.
    """

    def __init__(
        self,
        base_url: str,
        timeout: int = 10,
        name: Optional[str] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize API client.

        Args:
            base_url: Base URL for API endpoints
            timeout: Request timeout in seconds
            name: Client name for logging
            session: Optional pre-built requests session
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.name = name or self.__class__.__name__
        self.session = session or requests.Session()

    def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict] = None,
        json: Optional[Dict] = None,
        headers: Optional[Dict] = None,
        timeout: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Make HTTP request.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (appended to base_url)
            params: URL parameters
            json: JSON body
            headers: Additional headers
            timeout: Override default timeout

        Returns:
            Response JSON (empty dict for an empty body)

        Raises:
            SearchThrottledError: On HTTP 429
            SearchProviderError: On any other failure
        """
        url = f"{self.base_url}{endpoint}" if not endpoint.startswith('http') else endpoint

        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)

        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json,
                headers=request_headers,
                timeout=timeout or self.timeout
            )
        except requests.exceptions.Timeout:
            logger.error(f"[{self.name}] Request timeout: {url}")
            raise SearchProviderError(f"timeout of {(timeout or self.timeout) * 1000}ms exceeded")
        except requests.exceptions.RequestException as e:
            logger.error(f"[{self.name}] Request failed: {e}")
            raise SearchProviderError(str(e))

        if response.status_code == 429:
            logger.warning(f"[{self.name}] Rate limited (HTTP 429)")
            raise SearchThrottledError()

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            logger.error(f"[{self.name}] HTTP error: {e}")
            raise SearchProviderError(
                f"Request failed with status code {response.status_code}",
                status_code=response.status_code,
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"[{self.name}] Invalid JSON response: {e}")
            raise SearchProviderError(f"Invalid JSON response: {e}", status_code=response.status_code)

    def get(self, endpoint: str, params: Optional[Dict] = None, **kwargs) -> Dict[str, Any]:
        """Make GET request."""
        return self._make_request("GET", endpoint, params=params, **kwargs)

    @abstractmethod
    def health_check(self) -> bool:
        """Check if API is accessible."""
        pass
