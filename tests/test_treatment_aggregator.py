"""
Tests for the per-condition treatment aggregator.

Tests:
- Search-driven aggregation with provider and text pricing
- Per-condition defaults when search yields nothing
- Typed fallback outcome on unexpected failures (and its determinism)
- Pre-identified medication path
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import MagicMock

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from conftest import result
from src.treatment_finder.api_clients.base_client import SearchProviderError, SearchThrottledError
from src.treatment_finder.extractors.medication_extractor import MedicationExtractor
from src.treatment_finder.models import AggregationStatus, PriceTier, TreatmentCategory
from src.treatment_finder.services.treatment_aggregator import TreatmentAggregator


@pytest.fixture
def aggregator(gateway):
    return TreatmentAggregator(gateway)


class TestFindOptions:
    """Tests for find_options() driven by search results."""

    def test_search_driven_options(self, aggregator, fake_backend, recording_sleep, diabetes_search_results):
        """Two standard and two conservative options, fully resolved."""
        fake_backend.responses = diabetes_search_results

        outcome = aggregator.find_options("Type 2 Diabetes")

        assert outcome.status == AggregationStatus.COMPLETE
        assert outcome.error is None
        assert [o.name for o in outcome.standard_options] == ["Metformin", "Sitagliptin"]
        assert [o.name for o in outcome.conservative_options] == ["Cinnamon", "Berberine"]

        metformin, sitagliptin = outcome.standard_options
        assert metformin.price == "$4-$12"
        assert metformin.price_source == "https://www.goodrx.com/metformin"
        assert metformin.link == "https://medlineplus.gov/druginfo/meds/a696005.html"
        assert metformin.description == (
            "[Learn about Metformin](https://medlineplus.gov/druginfo/meds/a696005.html)"
        )
        assert metformin.price_category == PriceTier.AFFORDABLE

        assert sitagliptin.price == "$15-$60"
        assert sitagliptin.price_source == "estimated"
        assert sitagliptin.description == "Sitagliptin is a medication used for Type 2 Diabetes"
        assert sitagliptin.price_category == PriceTier.AFFORDABLE

        cinnamon, berberine = outcome.conservative_options
        assert cinnamon.price == "$8-$15"
        assert cinnamon.link == "https://www.nccih.nih.gov/health/cinnamon"
        assert berberine.price == "$10-$35"
        assert berberine.description == "Berberine is an alternative treatment for Type 2 Diabetes"

        # Every search paid the fixed delay, one call at a time
        assert len(fake_backend.queries) == 9
        assert recording_sleep.calls == [1.2] * 9

    def test_query_sequence(self, aggregator, fake_backend, diabetes_search_results):
        """Queries are issued in the documented order."""
        fake_backend.responses = diabetes_search_results
        aggregator.find_options("Type 2 Diabetes")

        assert fake_backend.queries == [
            "most common first-line medications for Type 2 Diabetes treatment",
            "Metformin medication guide information Type 2 Diabetes",
            "goodrx.com Metformin price coupon",
            "https://www.goodrx.com/metformin price range lowest cost average",
            "Sitagliptin medication guide information Type 2 Diabetes",
            "goodrx.com Sitagliptin price coupon",
            "alternative or natural treatments for Type 2 Diabetes without medication",
            "Cinnamon Type 2 Diabetes treatment guide information",
            "Berberine Type 2 Diabetes treatment guide information",
        ]

    def test_provider_url_used_when_no_guide_link(self, aggregator, fake_backend):
        """Without a guide link the provider page becomes the link."""
        fake_backend.responses = {
            "first-line medications for Hypertension": [
                result("BP drugs", "lisinopril and losartan", "https://example.org/bp"),
            ],
            "goodrx.com Lisinopril price coupon": [
                result("Lisinopril", "coupon", "https://www.goodrx.com/lisinopril"),
            ],
            "goodrx.com/lisinopril price range": [
                result("Lisinopril", "as low as $5 today", "https://www.goodrx.com/lisinopril"),
            ],
        }

        outcome = aggregator.find_options("Hypertension")
        lisinopril = outcome.standard_options[0]

        assert lisinopril.name == "Lisinopril"
        assert lisinopril.link == "https://www.goodrx.com/lisinopril"
        assert lisinopril.description == "[Check Lisinopril pricing](https://www.goodrx.com/lisinopril)"
        assert lisinopril.price == "$5-$15"

    def test_fda_search_when_first_search_empty(self, aggregator, fake_backend):
        fake_backend.responses = {
            "FDA approved medications for GERD": [
                result("PPIs", "omeprazole and pantoprazole", "https://www.fda.gov/gerd"),
            ],
        }
        outcome = aggregator.find_options("GERD")

        assert [o.name for o in outcome.standard_options] == ["Omeprazole", "Pantoprazole"]
        assert fake_backend.queries[1] == "FDA approved medications for GERD"

    def test_defaults_when_search_yields_nothing(self, aggregator, fake_backend):
        """Condition-specific default pairs fill both categories."""
        outcome = aggregator.find_options("Hyperlipidemia")

        assert outcome.status == AggregationStatus.COMPLETE
        assert [o.name for o in outcome.standard_options] == ["Atorvastatin", "Rosuvastatin"]
        assert [o.name for o in outcome.conservative_options] == ["Fish Oil", "Plant Sterols"]
        assert all(o.price == "$15-$60" for o in outcome.standard_options)
        assert all(o.price == "$10-$35" for o in outcome.conservative_options)

    def test_unknown_condition_placeholders(self, aggregator):
        outcome = aggregator.find_options("Migraine")

        assert [o.name for o in outcome.standard_options] == ["Medication 1", "Medication 2"]
        assert [o.name for o in outcome.conservative_options] == ["Supplement", "Lifestyle Change"]

    def test_single_search_hit_padded_to_pair(self, aggregator, fake_backend):
        """One valid medication from search is topped up from the defaults."""
        fake_backend.responses = {
            "first-line medications for Hypertension": [result("BP", "amlodipine", "https://x.org")],
        }
        outcome = aggregator.find_options("Hypertension")
        assert [o.name for o in outcome.standard_options] == ["Amlodipine", "Lisinopril"]

    def test_search_errors_degrade_to_defaults(self, aggregator, fake_backend):
        """Provider failures surface as error lines that match nothing."""
        fake_backend.failures = [
            SearchProviderError("Failed to establish a new connection: Connection refused")
        ] * 3
        outcome = aggregator.find_options("GERD")

        assert outcome.status == AggregationStatus.COMPLETE
        assert [o.name for o in outcome.standard_options] == ["Omeprazole", "Famotidine"]

    def test_alternative_search_throttled_twice_uses_defaults(self, aggregator, fake_backend):
        """A double 429 on the alternatives search falls back to the default pair."""
        query = "alternative or natural treatments for GERD without medication"
        fake_backend.errors = {query: SearchThrottledError()}

        outcome = aggregator.find_options("GERD")

        assert fake_backend.queries.count(query) == 2
        assert outcome.status == AggregationStatus.COMPLETE
        assert [o.name for o in outcome.conservative_options] == ["Ginger", "Probiotics"]

    def test_alternative_search_http_error_uses_defaults(self, aggregator, fake_backend):
        """An HTTP 5xx on the alternatives search falls back to the default pair."""
        fake_backend.errors = {
            "alternative or natural treatments for Hypertension": SearchProviderError(
                "Request failed with status code 500", status_code=500
            ),
        }

        outcome = aggregator.find_options("Hypertension")

        assert [o.name for o in outcome.conservative_options] == ["Potassium", "CoQ10"]
        assert all(o.price == "$10-$35" for o in outcome.conservative_options)


class TestFallback:
    """Tests for the typed fallback outcome."""

    def _failing_aggregator(self, gateway):
        extractor = MagicMock(spec=MedicationExtractor)
        extractor.extract_valid.side_effect = RuntimeError("extractor exploded")
        return TreatmentAggregator(gateway, extractor=extractor)

    def test_failure_returns_fallback_pair(self, gateway):
        outcome = self._failing_aggregator(gateway).find_options("Type 2 Diabetes")

        assert outcome.status == AggregationStatus.FALLBACK
        assert outcome.is_fallback
        assert outcome.error == "extractor exploded"
        assert [(o.name, o.category, o.price) for o in outcome.options] == [
            ("Metformin", TreatmentCategory.STANDARD, "$4-$25"),
            ("Cinnamon Supplements", TreatmentCategory.CONSERVATIVE, "$15-$35"),
        ]
        assert outcome.options[0].link == "https://medlineplus.gov/druginfo/meds/"
        assert outcome.options[1].description == (
            "[Learn about Cinnamon Supplements](https://www.nccih.nih.gov/health/)"
        )
        assert all(o.price_category == PriceTier.AFFORDABLE for o in outcome.options)

    def test_fallback_is_deterministic(self, gateway):
        """Two forced failures produce byte-identical output."""
        aggregator = self._failing_aggregator(gateway)
        first = aggregator.find_options("Sleep Apnea")
        second = aggregator.find_options("Sleep Apnea")

        assert first.model_dump_json() == second.model_dump_json()
        assert first.options[0].price_category == PriceTier.VERY_EXPENSIVE

    def test_unknown_condition_fallback(self, gateway):
        outcome = self._failing_aggregator(gateway).find_options("Migraine")
        assert [o.name for o in outcome.options] == ["Medication for Migraine", "Alternative for Migraine"]
        assert [o.price for o in outcome.options] == ["$15-$60", "$20-$45"]


class TestPreIdentifiedMedications:
    """Tests for find_options_for_medications()."""

    def test_valid_medications_skip_standard_search(self, aggregator, fake_backend):
        fake_backend.responses = {
            "natural alternative to Lisinopril for Hypertension": [
                result("Natural options", "Hibiscus tea and Garlic", "https://www.healthline.com/bp"),
            ],
        }

        outcome = aggregator.find_options_for_medications("Hypertension", ["Lisinopril", "Banana"])

        assert not any("first-line" in q for q in fake_backend.queries)
        assert [o.name for o in outcome.standard_options] == ["Lisinopril", "Amlodipine"]
        assert [o.name for o in outcome.conservative_options] == ["Hibiscus"]
        assert "goodrx.com Lisinopril price coupon" in fake_backend.queries

    def test_no_valid_medications_searches(self, aggregator, fake_backend):
        outcome = aggregator.find_options_for_medications("GERD", ["Banana"])

        assert fake_backend.queries[0] == "most common first-line medications for GERD treatment"
        assert [o.name for o in outcome.standard_options] == ["Omeprazole", "Famotidine"]

    def test_default_alternatives_when_none_found(self, aggregator):
        outcome = aggregator.find_options_for_medications("Osteoarthritis", ["Meloxicam", "Celecoxib"])

        assert [o.name for o in outcome.standard_options] == ["Meloxicam", "Celecoxib"]
        assert [o.name for o in outcome.conservative_options] == ["Glucosamine", "Turmeric"]

    @pytest.mark.parametrize("error", [
        SearchThrottledError(),
        SearchProviderError("Request failed with status code 503", status_code=503),
        SearchProviderError("Failed to establish a new connection: Connection refused"),
    ])
    def test_alternative_search_errors_use_defaults(self, aggregator, fake_backend, error):
        """Error lines from the per-medication alternative search are not treatments."""
        fake_backend.errors = {"natural alternative to Lisinopril": error}

        outcome = aggregator.find_options_for_medications("Hypertension", ["Lisinopril"])

        assert outcome.status == AggregationStatus.COMPLETE
        assert [o.name for o in outcome.standard_options] == ["Lisinopril", "Amlodipine"]
        assert [o.name for o in outcome.conservative_options] == ["Potassium", "CoQ10"]
