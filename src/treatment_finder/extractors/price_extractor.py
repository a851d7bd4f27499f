"""
Price Extractor

Derives a "$<low>-$<high>" price range from free text.

Strategies, first match wins:
1. Explicit range: "$X - $Y", "$X to $Y", "$X and $Y"
2. Cost-indicator phrases: "cost is about $X", "price of $X", ...
3. Bare dollar amounts in (0, 10000)
4. Fixed default (differs for standard vs. alternative treatments)

Never raises: every path ends in a usable range.
"""

import re
import logging
from decimal import Decimal, InvalidOperation, ROUND_CEILING, ROUND_FLOOR
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

AMOUNT = r'\$([\d,]+(?:\.\d+)?)'

PRICE_RANGE_PATTERN = re.compile(AMOUNT + r'\s*(?:-|to|and)\s*' + AMOUNT, re.IGNORECASE)
PRICE_INDICATOR_PATTERN = re.compile(
    r'(?:cost|price|costs|priced|pricing|fee|charge|payment)s?\s+'
    r'(?:(?:of|is|are|about|around|approximately)\s+)*' + AMOUNT,
    re.IGNORECASE
)
SINGLE_PRICE_PATTERN = re.compile(AMOUNT)

# Defaults when there is no text at all
EMPTY_TEXT_PRICE = "$10-$50"
EMPTY_TEXT_ALTERNATIVE_PRICE = "$30-$90"

# Defaults when text is present but no price could be parsed
DEFAULT_PRICE = "$15-$60"
DEFAULT_ALTERNATIVE_PRICE = "$10-$35"

MAX_BARE_AMOUNT = Decimal("10000")
LOW_FACTOR = Decimal("0.7")
HIGH_FACTOR = Decimal("1.3")

Number = Union[Decimal, int]


def parse_amount(raw: str) -> Optional[Decimal]:
    """Parse '1,250.50' into a Decimal; None for junk such as ','."""
    cleaned = raw.replace(",", "")
    if not cleaned:
        return None
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None


def _floor(value: Number) -> int:
    return int(Decimal(value).to_integral_value(rounding=ROUND_FLOOR))


def _ceil(value: Number) -> int:
    return int(Decimal(value).to_integral_value(rounding=ROUND_CEILING))


def format_price_range(low: Number, high: Number) -> str:
    """
    Format a PriceRange: integers, low floored and clamped to >= 1,
    high ceiled, low <= high.
    """
    if low > high:
        low, high = high, low
    low_int = max(1, _floor(low))
    high_int = max(low_int, _ceil(high))
    return f"${low_int}-${high_int}"


def synthesize_range(
    base: Decimal,
    low_factor: Decimal = LOW_FACTOR,
    high_factor: Decimal = HIGH_FACTOR
) -> str:
    """Build a range around a single price, e.g. $50 -> $35-$65."""
    return format_price_range(base * low_factor, base * high_factor)


def _amounts(pattern: re.Pattern, text: str) -> List[Decimal]:
    values = []
    for match in pattern.finditer(text):
        value = parse_amount(match.group(1))
        if value is not None:
            values.append(value)
    return values


def extract_price(text: Optional[str], is_alternative: bool = False) -> str:
    """
    Extract a price range from text.

    Args:
        text: Free text (usually joined search-result lines)
        is_alternative: Use the conservative-treatment defaults

    Returns:
        Price range string "$<low>-$<high>"
    """
    if not text:
        return EMPTY_TEXT_ALTERNATIVE_PRICE if is_alternative else EMPTY_TEXT_PRICE

    # 1. Explicit range
    for match in PRICE_RANGE_PATTERN.finditer(text):
        low = parse_amount(match.group(1))
        high = parse_amount(match.group(2))
        if low is not None and high is not None:
            return format_price_range(low, high)

    # 2. Prices near cost words
    indicated = _amounts(PRICE_INDICATOR_PATTERN, text)
    if len(indicated) >= 2:
        return format_price_range(min(indicated), max(indicated))
    if len(indicated) == 1:
        return synthesize_range(indicated[0])

    # 3. Any dollar amounts
    amounts = [a for a in _amounts(SINGLE_PRICE_PATTERN, text) if 0 < a < MAX_BARE_AMOUNT]
    if len(amounts) >= 2:
        lowest, highest = min(amounts), max(amounts)
        filtered = sorted(a for a in amounts if lowest * Decimal("0.5") <= a <= highest * 2)
        if len(filtered) >= 2:
            return format_price_range(filtered[0], filtered[-1])
    elif len(amounts) == 1:
        return synthesize_range(amounts[0])

    logger.debug("No price found in text, using default range")
    return DEFAULT_ALTERNATIVE_PRICE if is_alternative else DEFAULT_PRICE
