"""
Processors module for the treatment finder.

Provides request processing and response assembly.
"""

from src.treatment_finder.processors.response_assembler import ResponseAssembler
from src.treatment_finder.processors.treatment_processor import TreatmentProcessor

__all__ = [
    "ResponseAssembler",
    "TreatmentProcessor",
]
