import logging
import time
from typing import Any, Awaitable, Callable

from fastapi import HTTPException

from .errors import Internal
from .settings import settings

logger = logging.getLogger(__name__)


class CircuitBreaker:
    """Fail fast while the store keeps failing.

    Only infrastructure failures count towards opening the circuit;
    ``HTTPException`` (and so every domain error) passes through untouched.
    Nothing is retried: a failed call is reported to the caller as is.
    """

    def __init__(
        self,
        failure_threshold: int = 3,
        base_recovery_time: int = 10,
        max_recovery_time: int = 60,
    ):
        self.failure_count = 0
        self.failure_threshold = failure_threshold
        self.base_recovery_time = base_recovery_time
        self.max_recovery_time = max_recovery_time
        self.last_failure_time = 0.0
        self.state = "CLOSED"

    @property
    def current_recovery_time(self):
        return min(
            self.base_recovery_time
            * (2 ** max(self.failure_count - self.failure_threshold, 0)),
            self.max_recovery_time,
        )

    def _open(self):
        self.state = "OPEN"
        self.last_failure_time = time.time()
        logger.warning(f"Circuit opened after {self.failure_count} failures.")

    def _half_open(self):
        self.state = "HALF_OPEN"
        logger.info("Circuit half-open: testing...")

    def _close(self):
        if self.state != "CLOSED":
            logger.info("Circuit closed: stable again.")
        self.state = "CLOSED"
        self.failure_count = 0

    def reset(self):
        self.state = "CLOSED"
        self.failure_count = 0
        self.last_failure_time = 0.0

    async def call(self, func: Callable[..., Awaitable[Any]], *args, **kwargs) -> Any:
        now = time.time()

        if self.state == "OPEN":
            cooldown = self.current_recovery_time
            if now - self.last_failure_time < cooldown:
                raise Internal(
                    "Service temporarily unavailable. Please try again shortly."
                )
            self._half_open()

        try:
            result = await func(*args, **kwargs)
        except HTTPException:
            self._close()
            raise
        except Exception as e:
            self.failure_count += 1
            logger.error(f"CircuitBreaker call failed ({self.failure_count}): {e}")

            if self.state == "HALF_OPEN" or self.failure_count >= self.failure_threshold:
                self._open()
            raise

        self._close()
        return result


breaker = CircuitBreaker(
    failure_threshold=settings.BREAKER_FAILURE_THRESHOLD,
    base_recovery_time=settings.BREAKER_RECOVERY_SECONDS,
)
