"""
Retry policy shared by every collaborator call site.

One RetryPolicy is built from Settings and injected into the Gmail,
Calendar and LLM clients, so backoff behaviour is defined in one place.
"""

import logging
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, TypeVar

import openai
from googleapiclient.errors import HttpError

from inbox_triage.config import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# HTTP statuses worth retrying (rate limits and transient server errors)
RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})

RETRYABLE_OPENAI_ERRORS = (
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.RateLimitError,
    openai.InternalServerError,
)

# time.monotonic() deadline of the run the current node belongs to
_run_deadline: ContextVar[float | None] = ContextVar("run_deadline", default=None)


@contextmanager
def run_deadline(deadline: float | None) -> Iterator[None]:
    """
    Bound retries made inside the block by a run deadline.

    Graph nodes enter this around their work so every collaborator call
    they make stops retrying once another attempt would start past the
    deadline.
    """
    token = _run_deadline.set(deadline)
    try:
        yield
    finally:
        _run_deadline.reset(token)


def current_deadline() -> float | None:
    """Deadline set by the innermost enclosing run_deadline, if any."""
    return _run_deadline.get()


def is_retryable_error(error: BaseException) -> bool:
    """
    Decide whether a failed collaborator call is worth retrying.

    Args:
        error: The exception raised by the call.

    Returns:
        True for rate limits, transient 5xx responses and network errors.
    """
    if isinstance(error, HttpError):
        return error.resp.status in RETRYABLE_STATUS_CODES
    if isinstance(error, RETRYABLE_OPENAI_ERRORS):
        return True
    return isinstance(error, (TimeoutError, ConnectionError))


@dataclass
class RetryPolicy:
    """Max attempts, exponential backoff curve and retryable-error predicate."""

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    multiplier: float = 2.0
    retry_on: Callable[[BaseException], bool] = is_retryable_error
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        """Build the policy configured for this process."""
        return cls(
            max_attempts=settings.retry_max_attempts,
            base_delay=settings.retry_base_delay,
            max_delay=settings.retry_max_delay,
        )

    def delay_for(self, attempt: int) -> float:
        """Backoff before retry number `attempt` (1-based)."""
        return min(self.base_delay * (self.multiplier ** (attempt - 1)), self.max_delay)

    def call(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """
        Call fn, retrying retryable failures with exponential backoff.

        Non-retryable errors and the final failure are re-raised unchanged.
        Inside a run_deadline block no retry starts after the deadline.

        Args:
            fn: The collaborator call.
            *args: Positional arguments for fn.
            **kwargs: Keyword arguments for fn.

        Returns:
            Whatever fn returns.
        """
        attempt = 1
        while True:
            try:
                return fn(*args, **kwargs)
            except Exception as e:
                if attempt >= self.max_attempts or not self.retry_on(e):
                    raise
                delay = self.delay_for(attempt)
                deadline = current_deadline()
                if deadline is not None and self.clock() + delay >= deadline:
                    logger.warning(
                        f"{getattr(fn, '__name__', 'call')} failed ({e}) and the run "
                        f"deadline leaves no time to retry"
                    )
                    raise
                logger.warning(
                    f"Attempt {attempt}/{self.max_attempts} of "
                    f"{getattr(fn, '__name__', 'call')} failed ({e}), "
                    f"retrying in {delay:.1f}s"
                )
                self.sleep(delay)
                attempt += 1


# Used where no policy is injected (tests, one-off scripts)
NO_RETRY = RetryPolicy(max_attempts=1)
