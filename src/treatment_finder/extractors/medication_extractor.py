"""
Medication Extractor

Pulls medication-like names out of search-result lines.

Two strategies:
1. Known drug-name tokens (word-bounded, case-insensitive), title-cased
2. Any capitalized word, minus stop words and short words (fallback)

The gateway's "no results" and error lines are skipped, so a failed
search yields no candidates.

Validity is a heuristic: a known medication, or a name with a
pharmacological suffix. The suffix test is permissive and accepts ordinary
words such as "Protein" or "Alcohol".
"""

import re
import logging
from typing import Iterable, List, Optional

from src.treatment_finder.lexicon import (
    ALTERNATIVE_STOP_WORDS,
    DRUG_NAME_TOKENS,
    KNOWN_MEDICATIONS,
    MEDICATION_SUFFIXES,
    SEARCH_NOISE_WORDS,
    STOP_WORDS,
)
from src.treatment_finder.models import is_status_line

logger = logging.getLogger(__name__)

DRUG_TOKEN_PATTERN = re.compile(
    r'\b(' + "|".join(re.escape(t) for t in DRUG_NAME_TOKENS) + r')\b',
    re.IGNORECASE
)
CAPITALIZED_WORD_PATTERN = re.compile(r'\b[A-Z][a-z]+\b')
ALTERNATIVE_WORD_PATTERN = re.compile(r'\b([A-Z][a-z]{2,})\b')

_KNOWN_LOWER = {m.lower() for m in KNOWN_MEDICATIONS}


def is_valid_medication(name: str) -> bool:
    """True if the name is a known medication or ends in a pharmacological suffix."""
    lowered = name.strip().lower()
    if not lowered:
        return False
    if lowered in _KNOWN_LOWER:
        return True
    return any(lowered.endswith(suffix) for suffix in MEDICATION_SUFFIXES)


def matches_known_medication(name: str) -> bool:
    """True if any known medication name appears inside ``name``."""
    lowered = name.lower()
    return any(known in lowered for known in _KNOWN_LOWER)


def _title_case(token: str) -> str:
    return token[0].upper() + token[1:].lower()


class MedicationExtractor:
    """Extracts treatment candidates from formatted search lines."""

    def extract_candidates(self, lines: Iterable[str], limit: int = 2) -> List[str]:
        """
        Extract up to ``limit`` candidate names, first-seen order.

        Args:
            lines: Formatted search-result lines
            limit: Maximum number of candidates

        Returns:
            Candidate names, deduplicated case-insensitively
        """
        lines = [line for line in lines if not is_status_line(line)]
        candidates: List[str] = []
        seen = set()

        def add(name: str):
            key = name.lower()
            if key not in seen:
                seen.add(key)
                candidates.append(name)

        for line in lines:
            for match in DRUG_TOKEN_PATTERN.finditer(line):
                add(_title_case(match.group(1)))

        if len(candidates) < limit:
            for line in lines:
                for word in CAPITALIZED_WORD_PATTERN.findall(line):
                    if word.lower() in STOP_WORDS or len(word) <= 3:
                        continue
                    add(word)

        logger.debug(f"Medication candidates: {candidates[:limit]}")
        return candidates[:limit]

    def extract_valid(self, lines: Iterable[str], pool_size: int = 4, limit: int = 2) -> List[str]:
        """Pull ``pool_size`` candidates, keep the valid ones, return the first ``limit``."""
        candidates = self.extract_candidates(lines, pool_size)
        return [c for c in candidates if is_valid_medication(c)][:limit]

    def extract_alternative_candidates(
        self,
        lines: Iterable[str],
        limit: int = 2,
        condition: Optional[str] = None
    ) -> List[str]:
        """
        Extract plausible non-pharmaceutical treatment names.

        Capitalized words of three or more letters, excluding stop words,
        search boilerplate and the words of the condition label itself.
        """
        excluded = set(ALTERNATIVE_STOP_WORDS) | SEARCH_NOISE_WORDS
        if condition:
            excluded |= {w.capitalize() for w in re.findall(r'[A-Za-z]+', condition)}

        alternatives: List[str] = []
        for line in lines:
            if is_status_line(line):
                continue
            for word in ALTERNATIVE_WORD_PATTERN.findall(line):
                if len(word) <= 3 or word in excluded or word in alternatives:
                    continue
                alternatives.append(word)

        return alternatives[:limit]
