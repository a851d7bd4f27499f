"""
Extractors module for the treatment finder.

Provides medication, price and link extraction from search-result text.
"""

from src.treatment_finder.extractors.medication_extractor import (
    MedicationExtractor,
    is_valid_medication,
    matches_known_medication,
)
from src.treatment_finder.extractors.price_extractor import extract_price, format_price_range
from src.treatment_finder.extractors.link_extractor import extract_medical_link

__all__ = [
    "MedicationExtractor",
    "is_valid_medication",
    "matches_known_medication",
    "extract_price",
    "format_price_range",
    "extract_medical_link",
]
