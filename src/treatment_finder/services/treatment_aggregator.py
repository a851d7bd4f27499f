"""
Treatment Aggregator

Finds two standard (pharmaceutical) and up to two conservative options for a
condition, attaches description, link and price to each, and tags the price
tier. All searches for a condition run one after another through the
gateway so its fixed delay applies to every call.
"""

import logging
from typing import List, Optional, Sequence

from src.treatment_finder.extractors.link_extractor import extract_medical_link
from src.treatment_finder.extractors.medication_extractor import (
    MedicationExtractor,
    is_valid_medication,
    matches_known_medication,
)
from src.treatment_finder.extractors.price_extractor import extract_price
from src.treatment_finder.models import (
    AggregationOutcome,
    AggregationStatus,
    ESTIMATED_PRICE_SOURCE,
    TreatmentCategory,
    TreatmentOption,
)
from src.treatment_finder.protocols import TextSearcher
from src.treatment_finder.services.price_categorizer import categorize_medication
from src.treatment_finder.services.provider_pricing import ProviderPricer
from src.treatment_finder.services.treatment_defaults import (
    default_alternatives,
    default_standard,
    fallback_options,
)

logger = logging.getLogger(__name__)


class TreatmentAggregator:
    """
    Builds the option list for one condition at a time.

    find_options never raises: an unexpected failure yields the condition's
    fixed fallback pair with status FALLBACK and the error message attached.
    """

    def __init__(
        self,
        searcher: TextSearcher,
        extractor: Optional[MedicationExtractor] = None,
        pricer: Optional[ProviderPricer] = None,
        pool_size: int = 4,
        options_per_category: int = 2
    ):
        """
        Initialize aggregator.

        Args:
            searcher: Search gateway
            extractor: Medication extractor (created if not provided)
            pricer: Provider pricer (created on the same searcher if not provided)
            pool_size: Candidates pulled from each search before filtering
            options_per_category: Options kept per category
        """
        self.searcher = searcher
        self.extractor = extractor or MedicationExtractor()
        self.pricer = pricer or ProviderPricer(searcher)
        self.pool_size = pool_size
        self.options_per_category = options_per_category

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def find_options(self, condition: str) -> AggregationOutcome:
        """
        Find standard and conservative options for a condition.

        Args:
            condition: Canonical condition label (or passthrough text)

        Returns:
            AggregationOutcome with categorized options
        """
        try:
            standard = self._find_standard_names(condition)
            options = [self._resolve_standard(name, condition) for name in standard]
            alternatives = self._find_alternative_names(condition)
            options += [self._resolve_alternative(name, condition) for name in alternatives]
        except Exception as e:
            return self._fallback(condition, e)

        return self._complete(condition, options)

    def find_options_for_medications(
        self,
        condition: str,
        medications: Sequence[str]
    ) -> AggregationOutcome:
        """
        Build options around medications the caller already identified.

        Standard-medication search is skipped when at least one of the given
        medications is valid; provider pricing and alternative search still run.
        """
        valid = [
            m.strip() for m in medications
            if m and m.strip() and (is_valid_medication(m) or matches_known_medication(m))
        ][:self.options_per_category]

        if not valid:
            logger.info(f"No valid pre-identified medications for {condition}, searching instead")
            return self.find_options(condition)

        logger.info(f"Using pre-identified medications for {condition}: {valid}")
        try:
            standard = self._pad_with_defaults(valid, default_standard(condition))
            options = [self._resolve_standard(name, condition) for name in standard]

            alternatives: List[str] = []
            for medication in valid:
                lines = self.searcher.search(
                    f"natural alternative to {medication} for {condition} without medication"
                )
                found = self.extractor.extract_alternative_candidates(
                    lines, limit=self.pool_size, condition=condition
                )
                fresh = [a for a in found if a not in alternatives]
                if fresh:
                    alternatives.append(fresh[0])

            if not alternatives:
                alternatives = default_alternatives(condition)[:self.options_per_category]
            options += [self._resolve_alternative(name, condition) for name in alternatives]
        except Exception as e:
            return self._fallback(condition, e)

        return self._complete(condition, options)

    # ------------------------------------------------------------------
    # Candidate discovery
    # ------------------------------------------------------------------

    def _find_standard_names(self, condition: str) -> List[str]:
        lines = self.searcher.search(f"most common first-line medications for {condition} treatment")
        names = self.extractor.extract_valid(lines, self.pool_size, self.options_per_category)

        if not names:
            lines = self.searcher.search(f"FDA approved medications for {condition}")
            names = self.extractor.extract_valid(lines, self.pool_size, self.options_per_category)

        if not names:
            logger.warning(f"No medications found in search for {condition}, using defaults")

        # Always hand back a full pair
        return self._pad_with_defaults(names, default_standard(condition))

    def _find_alternative_names(self, condition: str) -> List[str]:
        lines = self.searcher.search(
            f"alternative or natural treatments for {condition} without medication"
        )
        names = self.extractor.extract_alternative_candidates(
            lines, limit=self.options_per_category, condition=condition
        )
        if not names:
            logger.warning(f"No alternatives found in search for {condition}, using defaults")
            names = default_alternatives(condition)[:self.options_per_category]
        return names

    def _pad_with_defaults(self, names: List[str], defaults: List[str]) -> List[str]:
        padded = list(names)
        for default in defaults:
            if len(padded) >= self.options_per_category:
                break
            if default.lower() not in (n.lower() for n in padded):
                padded.append(default)
        return padded[:self.options_per_category]

    # ------------------------------------------------------------------
    # Option detail resolution
    # ------------------------------------------------------------------

    def _resolve_standard(self, name: str, condition: str) -> TreatmentOption:
        lines = self.searcher.search(f"{name} medication guide information {condition}")
        full_text = " ".join(lines)
        link = extract_medical_link(full_text)
        description = f"[Learn about {name}]({link})" if link else f"{name} is a medication used for {condition}"

        provider = self.pricer.lookup(name)
        if provider.has_price:
            price = provider.price
            price_source = provider.source
            if not link:
                link = provider.source
                description = f"[Check {name} pricing]({provider.source})"
        else:
            price = extract_price(full_text)
            price_source = ESTIMATED_PRICE_SOURCE

        return TreatmentOption(
            name=name,
            description=description,
            link=link,
            price=price,
            price_source=price_source,
            category=TreatmentCategory.STANDARD,
        )

    def _resolve_alternative(self, name: str, condition: str) -> TreatmentOption:
        lines = self.searcher.search(f"{name} {condition} treatment guide information")
        full_text = " ".join(lines)
        link = extract_medical_link(full_text)
        description = (
            f"[Learn about {name}]({link})" if link
            else f"{name} is an alternative treatment for {condition}"
        )

        return TreatmentOption(
            name=name,
            description=description,
            link=link,
            price=extract_price(full_text, is_alternative=True),
            category=TreatmentCategory.CONSERVATIVE,
        )

    # ------------------------------------------------------------------
    # Outcomes
    # ------------------------------------------------------------------

    @staticmethod
    def _complete(condition: str, options: List[TreatmentOption]) -> AggregationOutcome:
        return AggregationOutcome(
            condition=condition,
            options=[categorize_medication(o) for o in options],
            status=AggregationStatus.COMPLETE,
        )

    @staticmethod
    def _fallback(condition: str, error: Exception) -> AggregationOutcome:
        logger.error(f"Error finding treatments for {condition}: {error}", exc_info=True)
        logger.warning(f"Using fallback treatments for {condition}")
        return AggregationOutcome(
            condition=condition,
            options=[categorize_medication(o) for o in fallback_options(condition)],
            status=AggregationStatus.FALLBACK,
            error=str(error),
        )
