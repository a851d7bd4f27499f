"""
Treatment Finder

Turns a free-text medical concern (or pre-identified condition/medication
labels) into a structured comparison of treatment options.

Features:
- Condition normalization and extraction from free text
- Rate-limited web search with a single retry on throttling
- Medication-name extraction and heuristic validation
- Price-range extraction (generic text and one named pricing provider)
- Price-tier categorization and deterministic per-condition fallbacks
"""

__version__ = "1.0.0"

from src.treatment_finder.models import TreatmentRequest, TreatmentResponse

__all__ = [
    "TreatmentRequest",
    "TreatmentResponse",
    "__version__",
]
