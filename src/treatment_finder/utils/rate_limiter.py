"""
Rate Limiter

Implements the fixed-delay throttle applied before every search call.
"""

import time
import threading
from typing import Callable, Dict
import logging

logger = logging.getLogger(__name__)


class RequestThrottle:
    """
    Fixed-interval throttle for search API calls.

    The delay is unconditional: every call waits ``delay_seconds`` first,
    regardless of how long ago the previous call happened. A throttled
    response adds ``retry_delay_seconds`` before the single retry.

    Thread-safe counters; the sleep function is injectable so tests can
    record waits instead of blocking.
    """

    def __init__(
        self,
        delay_seconds: float = 1.2,
        retry_delay_seconds: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
        name: str = "search"
    ):
        """
        Initialize throttle.

        Args:
            delay_seconds: Fixed wait before every call (default: 1.2)
            retry_delay_seconds: Extra wait after a throttled response (default: 2.0)
            sleep: Function used to block (default: time.sleep)
            name: Name for logging purposes
        """
        self.delay_seconds = delay_seconds
        self.retry_delay_seconds = retry_delay_seconds
        self.name = name
        self._sleep = sleep

        self._lock = threading.Lock()
        self.calls = 0
        self.throttle_waits = 0

    @classmethod
    def from_milliseconds(
        cls,
        delay_ms: int,
        retry_delay_ms: int,
        sleep: Callable[[float], None] = time.sleep,
        name: str = "search"
    ) -> "RequestThrottle":
        return cls(delay_ms / 1000.0, retry_delay_ms / 1000.0, sleep=sleep, name=name)

    def wait(self) -> None:
        """Block for the fixed pre-call delay."""
        with self._lock:
            self.calls += 1
        if self.delay_seconds > 0:
            logger.debug(f"[{self.name}] Waiting {self.delay_seconds:.2f}s before request")
            self._sleep(self.delay_seconds)

    def wait_after_throttle(self) -> None:
        """Block for the extra interval after an HTTP 429."""
        with self._lock:
            self.throttle_waits += 1
        logger.info(f"[{self.name}] Rate limited, waiting {self.retry_delay_seconds:.2f}s and retrying")
        if self.retry_delay_seconds > 0:
            self._sleep(self.retry_delay_seconds)

    def get_status(self) -> Dict:
        """Get current throttle status."""
        with self._lock:
            return {
                "name": self.name,
                "calls": self.calls,
                "throttle_waits": self.throttle_waits,
                "delay_seconds": self.delay_seconds,
                "retry_delay_seconds": self.retry_delay_seconds,
            }
