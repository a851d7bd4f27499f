"""
Pydantic models for the treatment comparison pipeline.

Covers:
- Search snippets and provider price lookups (per external call)
- Treatment options and per-condition aggregation outcomes
- The caller input contract and the output envelope
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TreatmentCategory(str, Enum):
    """Kind of treatment option."""
    STANDARD = "Standard"
    CONSERVATIVE = "Conservative"


class PriceTier(str, Enum):
    """Ordinal cost category derived from a price range's lower bound."""
    AFFORDABLE = "Affordable"
    MODERATE = "Moderate"
    EXPENSIVE = "Expensive"
    VERY_EXPENSIVE = "Very Expensive"

    @property
    def symbol(self) -> str:
        return {
            PriceTier.AFFORDABLE: "💰",
            PriceTier.MODERATE: "💰💰",
            PriceTier.EXPENSIVE: "💰💰💰",
            PriceTier.VERY_EXPENSIVE: "💰💰💰💰",
        }[self]


class AggregationStatus(str, Enum):
    """How a condition's option list was produced."""
    COMPLETE = "complete"
    FALLBACK = "fallback"


ESTIMATED_PRICE_SOURCE = "estimated"

# Lines the search gateway emits in place of hits
NO_RESULTS_LINE = "No search results found."
ERROR_LINE_PREFIX = "Error searching"


def is_status_line(line: str) -> bool:
    """True for a "no results" or error line, which carries no search hits."""
    return line == NO_RESULTS_LINE or line.startswith(ERROR_LINE_PREFIX)


class SearchSnippet(BaseModel):
    """One hit returned by the search collaborator."""
    title: str = ""
    description: str = ""
    source_url: str = ""

    def to_line(self) -> str:
        """Collapse the hit into the single line the extractors consume."""
        return f"{self.title}: {self.description} [Source: {self.source_url}]"


class ProviderPrice(BaseModel):
    """Result of a pricing-provider lookup."""
    price: Optional[str] = Field(None, description="Price range such as '$4-$12'")
    source: Optional[str] = Field(None, description="Provider page URL the price came from")

    @property
    def has_price(self) -> bool:
        return bool(self.source and self.price)


class TreatmentOption(BaseModel):
    """A single treatment candidate for one condition."""
    model_config = ConfigDict(frozen=True)

    name: str
    description: str = Field(..., description="Markdown, optionally containing one link")
    link: str = ""
    price: str = Field(..., description="Price range '$<low>-$<high>'")
    price_source: str = Field(
        default=ESTIMATED_PRICE_SOURCE,
        description="'estimated' or the provider URL the price came from",
    )
    category: TreatmentCategory
    price_category: Optional[PriceTier] = None

    @property
    def is_provider_priced(self) -> bool:
        return self.price_source != ESTIMATED_PRICE_SOURCE


class AggregationOutcome(BaseModel):
    """
    Options found for one condition.

    ``status`` distinguishes a genuine search-driven result from the fixed
    fallback pair returned after an unexpected failure; ``error`` carries the
    failure message in the latter case.
    """
    condition: str
    options: List[TreatmentOption] = Field(default_factory=list)
    status: AggregationStatus = AggregationStatus.COMPLETE
    error: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.status == AggregationStatus.FALLBACK

    @property
    def standard_options(self) -> List[TreatmentOption]:
        return [o for o in self.options if o.category == TreatmentCategory.STANDARD]

    @property
    def conservative_options(self) -> List[TreatmentOption]:
        return [o for o in self.options if o.category == TreatmentCategory.CONSERVATIVE]


class OptionSummary(BaseModel):
    """Option fields handed to the response assembler."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    price: str
    price_category: str = Field(..., alias="priceCategory")


class ConditionTreatments(BaseModel):
    """Aggregator -> assembler contract for one condition."""
    model_config = ConfigDict(populate_by_name=True)

    condition: str
    standard_options: List[OptionSummary] = Field(default_factory=list, alias="standardOptions")
    conservative_options: List[OptionSummary] = Field(default_factory=list, alias="conservativeOptions")


class TreatmentRequest(BaseModel):
    """Caller input. Pre-identified conditions take precedence over the free-text concern."""
    model_config = ConfigDict(populate_by_name=True)

    primary_concern: Optional[str] = Field(None, alias="primaryConcern")
    pre_identified_conditions: List[str] = Field(default_factory=list, alias="preIdentifiedConditions")
    pre_identified_medications: List[str] = Field(default_factory=list, alias="preIdentifiedMedications")


class ConservativePlan(BaseModel):
    treatments: List[str] = Field(default_factory=list, description="Standard treatment options")
    lifestyle: List[str] = Field(default_factory=list, description="Lifestyle recommendations")
    alternatives: List[str] = Field(default_factory=list, description="Conservative alternatives")


class ConditionTreatmentPlan(BaseModel):
    condition: str
    conservative: ConservativePlan
    radical: List[str] = Field(default_factory=list, description="Always empty; advanced options are disabled")


class TreatmentComparison(BaseModel):
    """Top-level data envelope returned to the caller."""
    model_config = ConfigDict(populate_by_name=True)

    conditions: List[str] = Field(default_factory=list)
    treatment_options: List[ConditionTreatmentPlan] = Field(default_factory=list, alias="treatmentOptions")
    searched_timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        alias="searchedTimestamp",
    )


class TreatmentResponse(BaseModel):
    """Full response: summary text, a markdown card, and the data envelope."""
    success: bool
    text: str
    card_title: str
    card_content: str
    data: TreatmentComparison
    outcomes: List[AggregationOutcome] = Field(default_factory=list)

    def to_payload(self) -> dict:
        """Serializable payload with camelCase data keys."""
        return {
            "text": self.text,
            "ui": {"title": self.card_title, "content": self.card_content},
            "data": self.data.model_dump(by_alias=True),
        }
