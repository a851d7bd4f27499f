"""
Response Assembler

Turns per-condition aggregation outcomes into the output envelope: the
plain data schema (conditions, treatmentOptions, searchedTimestamp), the
summary text, and a markdown comparison card.
"""

import logging
from typing import List, Sequence, Tuple

from src.treatment_finder.models import (
    AggregationOutcome,
    ConditionTreatmentPlan,
    ConditionTreatments,
    ConservativePlan,
    OptionSummary,
    PriceTier,
    TreatmentComparison,
    TreatmentOption,
    TreatmentResponse,
)

logger = logging.getLogger(__name__)

CARD_TITLE = "Medication Comparison"
ERROR_CARD_TITLE = "Analysis Error"

ERROR_GUIDANCE = (
    'Please try again with specific condition names like "Type 2 Diabetes" or "Hypertension".'
)

PRICE_LEGEND = [
    f"* {PriceTier.AFFORDABLE.symbol} = Affordable (Less than $25)",
    f"* {PriceTier.MODERATE.symbol} = Moderate cost ($25-$75)",
    f"* {PriceTier.EXPENSIVE.symbol} = Expensive ($75-$300)",
    f"* {PriceTier.VERY_EXPENSIVE.symbol} = Very expensive (Over $300)",
]

DISCLAIMER = (
    "*Disclaimer: Prices are approximate and may vary based on location, insurance, "
    "and pharmacy. Generic medications typically cost less than brand-name versions. "
    "Consult your healthcare provider for medical advice.*"
)

CATEGORY_NOTE = (
    "*Standard treatments are common first-line medications, while Conservative options "
    "represent alternatives that may have different mechanisms, side effect profiles, "
    "or natural approaches.*"
)


def _tier_label(option: TreatmentOption) -> str:
    return option.price_category.value if option.price_category else "Unknown"


class ResponseAssembler:
    """Builds caller-facing responses from aggregation outcomes."""

    def __init__(self, provider_domain: str = "goodrx.com", provider_label: str = "GoodRx"):
        """
        Args:
            provider_domain: Pricing provider domain (used to tag provider prices)
            provider_label: Display name of the pricing provider
        """
        self.provider_domain = provider_domain.lower()
        self.provider_label = provider_label

    # ------------------------------------------------------------------
    # Data schema
    # ------------------------------------------------------------------

    @staticmethod
    def to_condition_treatments(outcome: AggregationOutcome) -> ConditionTreatments:
        """Aggregator -> assembler contract for one condition."""

        def summarize(options: List[TreatmentOption]) -> List[OptionSummary]:
            return [
                OptionSummary(
                    name=o.name,
                    description=o.description,
                    price=o.price,
                    price_category=_tier_label(o),
                )
                for o in options
            ]

        return ConditionTreatments(
            condition=outcome.condition,
            standard_options=summarize(outcome.standard_options),
            conservative_options=summarize(outcome.conservative_options),
        )

    @staticmethod
    def build_condition_plan(treatments: ConditionTreatments) -> ConditionTreatmentPlan:
        """Build the per-condition output entry; radical options are always empty."""
        condition = treatments.condition

        def lines(options: List[OptionSummary]) -> List[str]:
            return [f"{o.name}: {o.description} ({o.price_category} - {o.price})" for o in options]

        standard = lines(treatments.standard_options) or [f"Standard treatment for {condition}"]
        alternatives = lines(treatments.conservative_options) or [f"Conservative option for {condition}"]

        return ConditionTreatmentPlan(
            condition=condition,
            conservative=ConservativePlan(
                treatments=standard,
                lifestyle=[
                    f"Diet: Appropriate nutrition can help manage {condition}",
                    "Exercise: Regular physical activity tailored to your health status",
                ],
                alternatives=alternatives,
            ),
            radical=[],
        )

    # ------------------------------------------------------------------
    # Markdown card
    # ------------------------------------------------------------------

    def _info_cell(self, option: TreatmentOption, condition: str) -> str:
        if "](" in option.description:
            return option.description
        if option.link.startswith("http"):
            return f"[Learn about {option.name}]({option.link})"
        return f"Used for {condition}"

    def _price_cell(self, option: TreatmentOption) -> str:
        if option.is_provider_priced and self.provider_domain in option.price_source.lower():
            return f"{option.price} [{self.provider_label}]"
        return option.price

    def build_medication_card(self, outcomes: Sequence[AggregationOutcome]) -> Tuple[str, str]:
        """
        Render the comparison card.

        Returns:
            Tuple of (title, markdown content)
        """
        parts = ["# Medication Options\n"]

        for outcome in outcomes:
            parts.append(f"## {outcome.condition}\n")
            parts.append("| Medication | Information | Treatment Type | Price Category | Price |")
            parts.append("|------------|-------------|---------------|----------------|-------|")
            for option in outcome.options:
                tier = option.price_category
                tier_cell = f"{tier.symbol} {tier.value}" if tier else "Unknown"
                parts.append(
                    f"| **{option.name}** | {self._info_cell(option, outcome.condition)} | "
                    f"{option.category.value} | {tier_cell} | {self._price_cell(option)} |"
                )
            parts.append("")

        parts.append("## Price Legend")
        parts.extend(PRICE_LEGEND)
        parts.append(f"* [{self.provider_label}] = Price data sourced from {self.provider_label}")
        parts.append("")
        parts.append(DISCLAIMER)
        parts.append("")
        parts.append(CATEGORY_NOTE)

        return CARD_TITLE, "\n".join(parts)

    @staticmethod
    def build_error_card(message: str) -> Tuple[str, str]:
        """Render the error card with guidance to name specific conditions."""
        return ERROR_CARD_TITLE, f"{message}\n\n{ERROR_GUIDANCE}"

    # ------------------------------------------------------------------
    # Envelopes
    # ------------------------------------------------------------------

    def assemble(self, outcomes: Sequence[AggregationOutcome]) -> TreatmentResponse:
        """Build the success response for the processed conditions."""
        conditions = [o.condition for o in outcomes]
        plans = [self.build_condition_plan(self.to_condition_treatments(o)) for o in outcomes]
        title, content = self.build_medication_card(outcomes)

        return TreatmentResponse(
            success=True,
            text=f"Analysis of {len(conditions)} conditions complete: {', '.join(conditions)}",
            card_title=title,
            card_content=content,
            data=TreatmentComparison(conditions=conditions, treatment_options=plans),
            outcomes=list(outcomes),
        )

    def assemble_error(self, message: str) -> TreatmentResponse:
        """Build a well-formed empty-result response for a failed request."""
        title, content = self.build_error_card(message)
        return TreatmentResponse(
            success=False,
            text=f"Error analyzing medical conditions: {message}",
            card_title=title,
            card_content=content,
            data=TreatmentComparison(),
        )
