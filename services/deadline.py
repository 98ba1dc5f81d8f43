# services/deadline.py
import logging
import time
from concurrent import futures
from typing import Any, Callable

from .errors import RequestTimeout

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0

class Deadline:
    """
    One timeout budget shared by every network call of a single operation.

    The clock starts on construction. Each call runs on a private worker thread
    and is abandoned once the budget is spent; the operation then fails with
    RequestTimeout. Use it as a context manager so the worker is released.
    """

    def __init__(self, budget: float = DEFAULT_TIMEOUT):
        self.budget = budget
        self._expires_at = time.monotonic() + budget
        self._pool = futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="weather-call")

    def remaining(self) -> float:
        return max(0.0, self._expires_at - time.monotonic())

    def call(self, fn: Callable[..., Any], *args, **kwargs) -> Any:
        left = self.remaining()
        if left <= 0.0:
            raise RequestTimeout()
        future = self._pool.submit(fn, *args, **kwargs)
        try:
            return future.result(timeout=left)
        except futures.TimeoutError:
            # The worker cannot be interrupted; it is left to finish on its own.
            future.cancel()
            logger.warning("Budget of %.2fs exhausted, abandoning in-flight call", self.budget)
            raise RequestTimeout() from None

    def close(self) -> None:
        self._pool.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "Deadline":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
