"""
Shared fixtures for the treatment finder tests.

No test sleeps or touches the network: searches go to a scripted fake
backend and the throttle records its waits instead of blocking.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.treatment_finder.services.search_gateway import SearchGateway
from src.treatment_finder.utils.rate_limiter import RequestThrottle


def result(title: str, description: str, url: str) -> Dict[str, str]:
    """Build one raw search hit the way the provider returns it."""
    return {"title": title, "description": description, "url": url}


class FakeSearchBackend:
    """
    Scripted search collaborator.

    ``responses`` maps a query substring to the raw hits returned for any
    query containing it (first matching key wins, case-sensitive). Queries
    with no matching key get no hits. Exceptions queued in ``failures`` are
    raised, one per call, before any scripted response is served. ``errors``
    maps a query substring to an exception raised on every matching call.
    """

    def __init__(self, responses: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.responses = responses or {}
        self.failures: List[Exception] = []
        self.errors: Dict[str, Exception] = {}
        self.queries: List[str] = []

    def fetch_results(self, query: str, count: int = 5) -> List[Dict[str, Any]]:
        self.queries.append(query)
        if self.failures:
            raise self.failures.pop(0)
        for key, error in self.errors.items():
            if key in query:
                raise error
        for key, hits in self.responses.items():
            if key in query:
                return list(hits)
        return []


class RecordingSleep:
    """Stands in for time.sleep and remembers every requested wait."""

    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def fake_backend():
    return FakeSearchBackend()


@pytest.fixture
def throttle(recording_sleep):
    return RequestThrottle(delay_seconds=1.2, retry_delay_seconds=2.0, sleep=recording_sleep)


@pytest.fixture
def gateway(fake_backend, throttle):
    return SearchGateway(fake_backend, throttle)


@pytest.fixture
def diabetes_search_results():
    """Scripted hits for a complete Type 2 Diabetes aggregation run."""
    return {
        "most common first-line medications for Type 2 Diabetes": [
            result(
                "Diabetes medications",
                "Metformin is usually first. Sitagliptin (Januvia) is often added.",
                "https://www.mayoclinic.org/diseases-conditions/diabetes/treatment",
            ),
        ],
        "Metformin medication guide information": [
            result(
                "Metformin: MedlinePlus Drug Information",
                "Metformin costs about $4 for a month supply.",
                "https://medlineplus.gov/druginfo/meds/a696005.html",
            ),
        ],
        "goodrx.com Metformin price coupon": [
            result(
                "Metformin Coupon",
                "Compare metformin prices and save.",
                "https://www.goodrx.com/metformin",
            ),
        ],
        "goodrx.com/metformin price range": [
            result(
                "Metformin Prices",
                "Metformin prices range from $4 to $12 with a coupon.",
                "https://www.goodrx.com/metformin",
            ),
        ],
        "alternative or natural treatments for Type 2 Diabetes": [
            result(
                "Natural Remedies for Diabetes",
                "Cinnamon and Berberine may help lower blood sugar.",
                "https://www.healthline.com/nutrition/natural-remedies",
            ),
        ],
        "Cinnamon Type 2 Diabetes treatment guide": [
            result(
                "Cinnamon supplements",
                "A bottle typically costs $8 to $15.",
                "https://www.nccih.nih.gov/health/cinnamon",
            ),
        ],
    }
