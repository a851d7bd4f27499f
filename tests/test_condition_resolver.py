"""
Tests for condition normalization and extraction.

Tests:
- normalize() synonym dispatch and passthrough
- extract_conditions() mention counting and positional fallback
- resolve() input precedence and the no-condition error
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.treatment_finder.models import TreatmentRequest
from src.treatment_finder.resolvers.condition_resolver import (
    ConditionResolver,
    NoConditionsFoundError,
    NO_CONDITIONS_MESSAGE,
)


@pytest.fixture
def resolver():
    return ConditionResolver()


class TestNormalize:
    """Tests for normalize()."""

    @pytest.mark.parametrize("text,expected", [
        ("high blood pressure", "Hypertension"),
        ("Hypertension", "Hypertension"),
        ("HYPERTENSION", "Hypertension"),
        ("diabetes", "Type 2 Diabetes"),
        ("type ii", "Type 2 Diabetes"),
        ("Type 2 diabetes mellitus", "Type 2 Diabetes"),
        ("high cholesterol", "Hyperlipidemia"),
        ("elevated lipids", "Hyperlipidemia"),
        ("acid reflux", "GERD"),
        ("heartburn", "GERD"),
        ("sleep apnea", "Sleep Apnea"),
        ("OSA", "Sleep Apnea"),
        ("joint pain", "Osteoarthritis"),
        ("knee arthritis", "Osteoarthritis"),
    ])
    def test_synonyms_map_to_canonical_label(self, resolver, text, expected):
        """Every supported synonym resolves to the same canonical label."""
        assert resolver.normalize(text) == expected

    def test_unmatched_text_passes_through(self, resolver):
        """Unknown conditions come back unchanged (stripped)."""
        assert resolver.normalize("  Migraine ") == "Migraine"

    def test_osa_requires_whole_word(self, resolver):
        """'osa' inside an ordinary word does not mean sleep apnea."""
        assert resolver.normalize("dosage question") == "dosage question"
        assert resolver.normalize("severe osa") == "Sleep Apnea"

    def test_first_table_entry_wins(self, resolver):
        """When several synonyms match, the earliest table entry is used."""
        assert resolver.normalize("diabetes with hypertension") == "Type 2 Diabetes"


class TestExtractConditions:
    """Tests for extract_conditions()."""

    def test_ranked_by_mention_count(self, resolver):
        """A condition mentioned three times ranks above one mentioned once."""
        text = (
            "I have GERD. Hypertension runs in my family, my hypertension got worse, "
            "and hypertension medication is expensive."
        )
        assert resolver.extract_conditions(text) == ["Hypertension", "GERD"]

    def test_synonyms_count_as_mentions(self, resolver):
        """Lay terms are found in the first pass."""
        text = "I have type 2 diabetes and high cholesterol"
        assert resolver.extract_conditions(text) == ["Type 2 Diabetes", "Hyperlipidemia"]

    def test_long_synonym_is_one_mention(self, resolver):
        """'type 2 diabetes' counts once, not once per overlapping synonym."""
        text = "Type 2 diabetes. Heartburn, heartburn."
        assert resolver.extract_conditions(text) == ["GERD", "Type 2 Diabetes"]

    def test_at_most_two_conditions(self, resolver):
        """Only the top two conditions are returned."""
        text = "hypertension, GERD and sleep apnea"
        assert len(resolver.extract_conditions(text)) == 2

    def test_ties_keep_table_order(self, resolver):
        """Equal counts keep the order of the known-condition list."""
        text = "sleep apnea and hypertension"
        assert resolver.extract_conditions(text) == ["Hypertension", "Sleep Apnea"]

    def test_fragment_pass_ranks_by_position(self, resolver):
        """Without word-bounded mentions, fragments are ranked by position."""
        assert resolver.extract_conditions("Worried about prediabetes, also hyperlipidemias") == [
            "Type 2 Diabetes", "Hyperlipidemia"
        ]
        assert resolver.extract_conditions("hyperlipidemias and prediabetes") == [
            "Hyperlipidemia", "Type 2 Diabetes"
        ]

    def test_no_conditions(self, resolver):
        """Text without any condition yields an empty list."""
        assert resolver.extract_conditions("I feel a bit tired lately") == []
        assert resolver.extract_conditions("") == []


class TestResolve:
    """Tests for resolve()."""

    def test_pre_identified_conditions_take_precedence(self, resolver):
        """Pre-identified labels win over the free-text concern."""
        request = TreatmentRequest(
            primary_concern="I have GERD",
            pre_identified_conditions=["high blood pressure"],
        )
        assert resolver.resolve(request) == ["Hypertension"]

    def test_pre_identified_conditions_normalized_and_deduplicated(self, resolver):
        """Synonyms of the same condition collapse into one entry."""
        request = TreatmentRequest(
            pre_identified_conditions=["high blood pressure", "Hypertension", "acid reflux", "OSA"]
        )
        assert resolver.resolve(request) == ["Hypertension", "GERD"]

    def test_falls_back_to_primary_concern(self, resolver):
        """An empty pre-identified list falls through to extraction."""
        request = TreatmentRequest(primary_concern="my arthritis hurts", pre_identified_conditions=[])
        assert resolver.resolve(request) == ["Osteoarthritis"]

    def test_no_conditions_raises(self, resolver):
        """No input path yielding a condition is an error."""
        with pytest.raises(NoConditionsFoundError) as exc_info:
            resolver.resolve(TreatmentRequest(primary_concern="just checking in"))
        assert str(exc_info.value) == NO_CONDITIONS_MESSAGE

        with pytest.raises(NoConditionsFoundError):
            resolver.resolve(TreatmentRequest())
