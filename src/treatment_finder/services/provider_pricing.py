"""
Provider Pricing

Looks up prices from one named pricing provider (GoodRx by default). The
provider has no API of its own: its pages are discovered through the web
search gateway by URL pattern, and a second search seeded with the page URL
supplies the text the price patterns run against.
"""

import re
import logging
from decimal import Decimal

from src.treatment_finder.extractors.price_extractor import (
    AMOUNT,
    format_price_range,
    parse_amount,
    synthesize_range,
)
from src.treatment_finder.models import ProviderPrice
from src.treatment_finder.protocols import TextSearcher

logger = logging.getLogger(__name__)

PROVIDER_RANGE_PATTERN = re.compile(
    r'prices range from ' + AMOUNT + r'\s*(?:-|to|and)\s*' + AMOUNT, re.IGNORECASE
)
PROVIDER_LOW_PATTERN = re.compile(r'as low as ' + AMOUNT, re.IGNORECASE)
PROVIDER_AVERAGE_PATTERN = re.compile(r'average price (?:of|is|about) ' + AMOUNT, re.IGNORECASE)


class ProviderPricer:
    """
    Provider-specific price lookup.

    Returns ProviderPrice(price, source):
    - both set when a provider page and a price were found
    - price None, source set when a page was found without a usable price
    - both None when no provider page was found
    """

    def __init__(self, searcher: TextSearcher, provider_domain: str = "goodrx.com"):
        """
        Initialize pricer.

        Args:
            searcher: Search gateway used for both lookups
            provider_domain: Domain of the pricing provider
        """
        self.searcher = searcher
        self.provider_domain = provider_domain.lower()
        self._url_pattern = re.compile(
            rf'https?://(?:www\.)?{re.escape(self.provider_domain)}/[a-zA-Z0-9-]+'
        )

    def lookup(self, medication: str) -> ProviderPrice:
        """
        Find a provider price for a medication.

        Args:
            medication: Medication name

        Returns:
            ProviderPrice
        """
        results = self.searcher.search(f"{self.provider_domain} {medication} price coupon")
        url = self.find_provider_url(" ".join(results), medication)
        if not url:
            logger.debug(f"No {self.provider_domain} page found for {medication}")
            return ProviderPrice()

        pricing_results = self.searcher.search(f"{url} price range lowest cost average")
        price = self.parse_provider_price(" ".join(pricing_results))
        if price:
            logger.info(f"Provider price for {medication}: {price} ({url})")
        else:
            logger.debug(f"Provider page found for {medication} but no price: {url}")
        return ProviderPrice(price=price, source=url)

    def find_provider_url(self, text: str, medication: str) -> str:
        """
        Return the provider URL best matching the medication, or "".

        Prefers URLs containing the hyphenated or space-free medication name.
        """
        urls = self._url_pattern.findall(text)
        if not urls:
            return ""

        hyphenated = re.sub(r'\s+', '-', medication.lower())
        joined = re.sub(r'\s+', '', medication.lower())
        for url in urls:
            lowered = url.lower()
            if hyphenated in lowered or joined in lowered:
                return url
        return urls[0]

    @staticmethod
    def parse_provider_price(text: str):
        """Apply the provider price patterns in order; None if none match."""
        match = PROVIDER_RANGE_PATTERN.search(text)
        if match:
            low, high = parse_amount(match.group(1)), parse_amount(match.group(2))
            if low is not None and high is not None:
                return format_price_range(low, high)

        match = PROVIDER_LOW_PATTERN.search(text)
        if match:
            low = parse_amount(match.group(1))
            if low is not None:
                return format_price_range(low, low * 3)

        match = PROVIDER_AVERAGE_PATTERN.search(text)
        if match:
            average = parse_amount(match.group(1))
            if average is not None:
                return synthesize_range(average, Decimal("0.7"), Decimal("1.3"))

        return None
