"""
Treatment Processor

Drives one treatment-comparison request end to end:
resolve conditions -> aggregate options per condition -> assemble response.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Sequence, Union
from uuid import uuid4

from src.treatment_finder.models import AggregationOutcome, TreatmentRequest, TreatmentResponse
from src.treatment_finder.processors.response_assembler import ResponseAssembler
from src.treatment_finder.resolvers.condition_resolver import ConditionResolver, NoConditionsFoundError
from src.treatment_finder.services.treatment_aggregator import TreatmentAggregator
from src.treatment_finder.utils.logger import log_condition_result, log_request_end, log_request_start

logger = logging.getLogger(__name__)


class TreatmentProcessor:
    """
    Processes treatment comparison requests.

    Features:
    - Pre-identified conditions take precedence over free-text extraction
    - At most ``max_conditions`` conditions per request
    - Per-condition failures degrade to fallback options, never abort the request
    - Optional thread pool across conditions (searches within a condition stay sequential)
    """

    def __init__(
        self,
        resolver: ConditionResolver,
        aggregator: TreatmentAggregator,
        assembler: ResponseAssembler,
        max_conditions: int = 2,
        max_workers: int = 1
    ):
        """
        Initialize processor.

        Args:
            resolver: Condition resolver
            aggregator: Per-condition treatment aggregator
            assembler: Response assembler
            max_conditions: Maximum conditions processed per request
            max_workers: Parallel condition workers (1 = sequential)
        """
        self.resolver = resolver
        self.aggregator = aggregator
        self.assembler = assembler
        self.max_conditions = max_conditions
        self.max_workers = max(1, max_workers)

    def process(self, request: Union[TreatmentRequest, Dict]) -> TreatmentResponse:
        """
        Process one request.

        Args:
            request: TreatmentRequest or a dict using the camelCase input keys

        Returns:
            TreatmentResponse (success=False with an error card when no
            condition could be identified)
        """
        if isinstance(request, dict):
            request = TreatmentRequest.model_validate(request)

        request_id = str(uuid4())[:8]

        try:
            conditions = self.resolver.resolve(request)[:self.max_conditions]
        except NoConditionsFoundError as e:
            logger.warning(f"[{request_id}] {e}")
            return self.assembler.assemble_error(str(e))

        log_request_start(request_id, conditions, logger=logger)

        outcomes = self._aggregate(conditions, request.pre_identified_medications)

        for outcome in outcomes:
            log_condition_result(
                outcome.condition,
                outcome.status.value,
                option_count=len(outcome.options),
                error=outcome.error,
                logger=logger
            )

        log_request_end(request_id, {
            "conditions": len(outcomes),
            "complete": sum(1 for o in outcomes if not o.is_fallback),
            "fallback": sum(1 for o in outcomes if o.is_fallback),
        }, logger=logger)

        return self.assembler.assemble(outcomes)

    def _aggregate(self, conditions: List[str], medications: Sequence[str]) -> List[AggregationOutcome]:
        def run(condition: str) -> AggregationOutcome:
            if medications:
                return self.aggregator.find_options_for_medications(condition, medications)
            return self.aggregator.find_options(condition)

        if self.max_workers == 1 or len(conditions) < 2:
            return [run(c) for c in conditions]

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(run, conditions))
