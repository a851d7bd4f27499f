"""
Resolvers module for the treatment finder.

Provides condition normalization and extraction.
"""

from src.treatment_finder.resolvers.condition_resolver import (
    ConditionResolver,
    NoConditionsFoundError,
)

__all__ = [
    "ConditionResolver",
    "NoConditionsFoundError",
]
