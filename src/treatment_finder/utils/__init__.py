"""
Utilities module for the treatment finder.

Provides request throttling and logging helpers.
"""

from src.treatment_finder.utils.rate_limiter import RequestThrottle
from src.treatment_finder.utils.logger import configure_logging, get_logger

__all__ = [
    "RequestThrottle",
    "configure_logging",
    "get_logger",
]
