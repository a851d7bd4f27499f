"""
Services module for the treatment finder.

Provides the search gateway, provider pricing, price categorization and
per-condition treatment aggregation.
"""

from src.treatment_finder.services.search_gateway import SearchGateway
from src.treatment_finder.services.provider_pricing import ProviderPricer
from src.treatment_finder.services.price_categorizer import categorize_medication, price_tier
from src.treatment_finder.services.treatment_aggregator import TreatmentAggregator

__all__ = [
    "SearchGateway",
    "ProviderPricer",
    "categorize_medication",
    "price_tier",
    "TreatmentAggregator",
]
