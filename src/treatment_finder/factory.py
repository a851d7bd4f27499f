"""
Factory Functions for the Treatment Finder

Provides factory functions to create a fully-wired TreatmentProcessor
with all required dependencies.
"""

import logging
import time
from typing import Callable, Optional

from src.treatment_finder.api_clients.brave_search_client import BraveSearchClient
from src.treatment_finder.config import Config, get_config
from src.treatment_finder.extractors.medication_extractor import MedicationExtractor
from src.treatment_finder.processors.response_assembler import ResponseAssembler
from src.treatment_finder.processors.treatment_processor import TreatmentProcessor
from src.treatment_finder.protocols import SearchBackend
from src.treatment_finder.resolvers.condition_resolver import ConditionResolver
from src.treatment_finder.services.provider_pricing import ProviderPricer
from src.treatment_finder.services.search_gateway import SearchGateway
from src.treatment_finder.services.treatment_aggregator import TreatmentAggregator
from src.treatment_finder.utils.rate_limiter import RequestThrottle

logger = logging.getLogger(__name__)


def create_search_gateway(
    config: Optional[Config] = None,
    backend: Optional[SearchBackend] = None,
    sleep: Callable[[float], None] = time.sleep
) -> SearchGateway:
    """
    Create a throttled search gateway.

    Args:
        config: Configuration (defaults to the global config)
        backend: Search collaborator (defaults to a BraveSearchClient built from config)
        sleep: Blocking function used by the throttle

    Returns:
        Configured SearchGateway
    """
    config = config or get_config()
    backend = backend or BraveSearchClient.from_config(config.search)
    throttle = RequestThrottle.from_milliseconds(
        config.search.request_delay_ms,
        config.search.throttle_retry_delay_ms,
        sleep=sleep,
    )
    return SearchGateway(backend, throttle, max_results=config.search.result_count)


def create_treatment_processor(
    config: Optional[Config] = None,
    backend: Optional[SearchBackend] = None,
    sleep: Callable[[float], None] = time.sleep
) -> TreatmentProcessor:
    """
    Create a fully-wired TreatmentProcessor.

    Args:
        config: Configuration (defaults to the global config)
        backend: Search collaborator override (tests pass a scripted fake)
        sleep: Blocking function used by the throttle

    Returns:
        Configured TreatmentProcessor
    """
    config = config or get_config()
    gateway = create_search_gateway(config, backend=backend, sleep=sleep)

    aggregator = TreatmentAggregator(
        searcher=gateway,
        extractor=MedicationExtractor(),
        pricer=ProviderPricer(gateway, provider_domain=config.pricing.provider_domain),
        pool_size=config.processing.candidate_pool_size,
        options_per_category=config.processing.options_per_category,
    )

    assembler = ResponseAssembler(
        provider_domain=config.pricing.provider_domain,
        provider_label=config.pricing.provider_label,
    )

    logger.info(
        f"Created TreatmentProcessor (provider={config.pricing.provider_domain}, "
        f"delay={config.search.request_delay_ms}ms, workers={config.processing.max_workers})"
    )

    return TreatmentProcessor(
        resolver=ConditionResolver(max_conditions=config.processing.max_conditions),
        aggregator=aggregator,
        assembler=assembler,
        max_conditions=config.processing.max_conditions,
        max_workers=config.processing.max_workers,
    )
