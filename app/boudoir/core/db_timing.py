from __future__ import annotations

from contextvars import ContextVar

_elapsed_ms: ContextVar[float | None] = ContextVar("boudoir_db_elapsed_ms", default=None)


class DbTimeWindow:
    """Accumulates SQL execution time for the current request."""

    def __init__(self) -> None:
        self.elapsed_ms: float | None = None
        self._token = None

    def __enter__(self) -> "DbTimeWindow":
        self._token = _elapsed_ms.set(0.0)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed_ms = _elapsed_ms.get()
        _elapsed_ms.reset(self._token)


def is_tracking() -> bool:
    return _elapsed_ms.get() is not None


def record_query_time(delta_ms: float) -> None:
    current = _elapsed_ms.get()
    if current is None:
        return
    _elapsed_ms.set(current + delta_ms)
