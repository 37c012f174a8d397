"""Retry policy for transient database failures.

Repositories receive a :class:`RetryPolicy` and route their statements
through :func:`execute_with_retry`. Only errors the policy classifies as
retryable are retried; anything else propagates on the first attempt.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from sqlalchemy.exc import DBAPIError, DisconnectionError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from app.boudoir.core.config import settings
from app.boudoir.core.logging import log_json
from app.boudoir.core.metrics import metrics

logger = logging.getLogger("boudoir.db.retry")

T = TypeVar("T")

_CONNECTION_TOKENS = (
    "connection",
    "timeout",
    "timed out",
    "network",
    "econnrefused",
    "enotfound",
    "connection refused",
    "too many connections",
    "server closed",
    "database is locked",
)


def is_connection_error(exc: BaseException) -> bool:
    if isinstance(exc, (DisconnectionError, PoolTimeoutError)):
        return True
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    if isinstance(exc, (ConnectionError, TimeoutError)):
        return True
    message = str(exc).lower()
    return any(token in message for token in _CONNECTION_TOKENS)


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    delay_seconds: float = 1.0
    backoff: str = "fixed"
    max_delay_seconds: float = 5.0
    retryable: Callable[[BaseException], bool] = field(default=is_connection_error)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        if self.backoff not in {"fixed", "exponential"}:
            raise ValueError("backoff must be 'fixed' or 'exponential'")

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(
            max_attempts=settings.DB_RETRY_MAX_ATTEMPTS,
            delay_seconds=settings.DB_RETRY_DELAY_SECONDS,
            backoff=settings.DB_RETRY_BACKOFF,
            max_delay_seconds=settings.DB_RETRY_MAX_DELAY_SECONDS,
        )

    def delay_for(self, attempt: int) -> float:
        if self.backoff == "exponential":
            return min(self.delay_seconds * (2 ** (attempt - 1)), self.max_delay_seconds)
        return self.delay_seconds


def execute_with_retry(
    operation: Callable[[], T],
    policy: RetryPolicy | None = None,
    *,
    operation_name: str = "database-operation",
    on_retry: Callable[[BaseException], None] | None = None,
    sleeper: Callable[[float], None] | None = None,
) -> T:
    policy = policy or RetryPolicy.from_settings()
    sleep = sleeper or time.sleep
    for attempt in range(1, policy.max_attempts + 1):
        try:
            return operation()
        except Exception as exc:
            retryable = policy.retryable(exc)
            log_json(
                logger,
                {
                    "event": "db_operation_failed",
                    "operation": operation_name,
                    "attempt": attempt,
                    "retries_left": policy.max_attempts - attempt,
                    "retryable": retryable,
                    "error_class": exc.__class__.__name__,
                    "error": str(exc),
                },
                level=logging.WARNING,
            )
            if not retryable or attempt >= policy.max_attempts:
                raise
            if on_retry is not None:
                on_retry(exc)
            metrics.increment_db_retry(operation_name)
            sleep(policy.delay_for(attempt))
    raise RuntimeError(f"{operation_name}: max retry attempts reached")
