"""
Price tier categorization.
"""

import re

from src.treatment_finder.models import PriceTier, TreatmentOption

LOWER_BOUND_PATTERN = re.compile(r'\$(\d+)')


def price_tier(price: str) -> PriceTier:
    """Map a price string to a tier using its first "$<digits>" token (0 if absent)."""
    match = LOWER_BOUND_PATTERN.search(price or "")
    low = int(match.group(1)) if match else 0

    if low < 25:
        return PriceTier.AFFORDABLE
    if low < 75:
        return PriceTier.MODERATE
    if low < 300:
        return PriceTier.EXPENSIVE
    return PriceTier.VERY_EXPENSIVE


def categorize_medication(option: TreatmentOption) -> TreatmentOption:
    """Return a copy of the option with its price tier attached."""
    return option.model_copy(update={"price_category": price_tier(option.price)})
