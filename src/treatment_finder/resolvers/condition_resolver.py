"""
Condition Resolver

Normalizes free-text condition names to canonical labels and pulls up to
two ranked condition mentions out of unstructured text.
"""

import re
import logging
from typing import Dict, List, Optional, Pattern

from src.treatment_finder.lexicon import (
    CONDITION_SYNONYMS,
    KNOWN_CONDITIONS,
    WHOLE_WORD_SYNONYMS,
    synonym_index,
)
from src.treatment_finder.models import TreatmentRequest

logger = logging.getLogger(__name__)

NO_CONDITIONS_MESSAGE = "No medical conditions identified. Please provide specific conditions."

# Fragment separators for the positional (second) pass
FRAGMENT_SEPARATOR = re.compile(r',|;|\band\b|\.|treating|\bfor\b', re.IGNORECASE)


class NoConditionsFoundError(Exception):
    """Raised when no condition can be identified from any input path."""

    def __init__(self, message: str = NO_CONDITIONS_MESSAGE):
        super().__init__(message)


def _mention_pattern(terms: List[str]) -> Pattern:
    # Longest first so "type 2 diabetes" is one mention, not two
    ordered = sorted(set(terms), key=len, reverse=True)
    alternation = "|".join(re.escape(t) for t in ordered)
    return re.compile(rf'\b(?:{alternation})\b', re.IGNORECASE)


class ConditionResolver:
    """
    Resolves condition labels.

    Matching is a pure function of the lexicon tables; unmatched text is
    passed through unchanged so free-text conditions still flow downstream.
    """

    def __init__(self, max_conditions: int = 2):
        self.max_conditions = max_conditions
        self._mention_patterns: Dict[str, Pattern] = {
            condition: _mention_pattern(terms)
            for condition, terms in synonym_index().items()
        }

    def normalize(self, text: str) -> str:
        """
        Map free text to a canonical condition label.

        Case-insensitive substring test against the synonym table, first
        match wins. Returns the stripped input when nothing matches.
        """
        cleaned = text.strip()
        lowered = cleaned.lower()

        for condition, synonyms in CONDITION_SYNONYMS:
            for synonym in synonyms:
                if synonym in WHOLE_WORD_SYNONYMS:
                    if re.search(rf'\b{re.escape(synonym)}\b', lowered):
                        return condition
                elif synonym in lowered:
                    return condition

        return cleaned

    def extract_conditions(self, text: str, limit: Optional[int] = None) -> List[str]:
        """
        Extract up to ``limit`` condition labels from text, best first.

        First pass ranks known conditions by mention count. The second pass
        only runs when the first finds nothing: it splits the text into
        fragments and ranks normalizable fragments by position.
        """
        limit = limit or self.max_conditions
        if not text or not text.strip():
            return []

        scores = self._count_mentions(text)
        if not scores:
            scores = self._score_fragments(text)
            if scores:
                logger.debug(f"Conditions found by fragment pass: {list(scores)}")

        # dicts keep encounter order, and sorted() is stable for ties
        ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
        conditions = [condition for condition, _ in ranked[:limit]]
        logger.info(f"Extracted conditions: {conditions}")
        return conditions

    def _count_mentions(self, text: str) -> Dict[str, int]:
        counts = {}
        for condition in KNOWN_CONDITIONS:
            hits = len(self._mention_patterns[condition].findall(text))
            if hits:
                counts[condition] = hits
        return counts

    def _score_fragments(self, text: str) -> Dict[str, int]:
        scores = {}
        start = 0
        for separator in list(FRAGMENT_SEPARATOR.finditer(text)) + [None]:
            end = separator.start() if separator else len(text)
            fragment = text[start:end]
            stripped = fragment.strip()
            if stripped:
                offset = start + (len(fragment) - len(fragment.lstrip()))
                condition = self.normalize(stripped)
                if condition in KNOWN_CONDITIONS and condition not in scores:
                    scores[condition] = 1000 - offset
            if separator:
                start = separator.end()
        return scores

    def resolve(self, request: TreatmentRequest) -> List[str]:
        """
        Determine the conditions to process for a request.

        Pre-identified conditions take precedence over extraction from the
        primary concern.

        Raises:
            NoConditionsFoundError: If neither path yields a condition
        """
        if request.pre_identified_conditions:
            conditions = []
            for raw in request.pre_identified_conditions:
                if not raw or not raw.strip():
                    continue
                condition = self.normalize(raw)
                if condition.lower() not in (c.lower() for c in conditions):
                    conditions.append(condition)
            if conditions:
                logger.info(f"Using pre-identified conditions: {conditions}")
                return conditions[:self.max_conditions]

        if request.primary_concern:
            conditions = self.extract_conditions(request.primary_concern)
            if conditions:
                return conditions

        raise NoConditionsFoundError()
