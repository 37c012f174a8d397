from collections.abc import Callable
from typing import TypeVar

from app.boudoir.core.retry import RetryPolicy, execute_with_retry

T = TypeVar("T")


class Repository:
    """Session holder that routes every statement through the retry policy.

    Writes are expressed as an ``apply`` callable so that a retried commit
    replays the mutations against a freshly rolled back session.
    """

    def __init__(self, db, retry_policy: RetryPolicy | None = None):
        self.db = db
        self.retry_policy = retry_policy or RetryPolicy.from_settings()

    def _rollback(self, _exc: BaseException) -> None:
        self.db.rollback()

    def _run(self, operation_name: str, operation: Callable[[], T]) -> T:
        return execute_with_retry(
            operation,
            self.retry_policy,
            operation_name=operation_name,
            on_retry=self._rollback,
        )

    def _commit(self, operation_name: str, apply: Callable[[], T]) -> T:
        def operation():
            result = apply()
            self.db.commit()
            return result

        try:
            return self._run(operation_name, operation)
        except Exception:
            self.db.rollback()
            raise

    def _save(self, operation_name: str, instance):
        def apply():
            self.db.add(instance)
            return instance

        saved = self._commit(operation_name, apply)
        self.db.refresh(saved)
        return saved

    def _update(self, operation_name: str, instance, **changes):
        def apply():
            for key, value in changes.items():
                setattr(instance, key, value)
            self.db.add(instance)
            return instance

        updated = self._commit(operation_name, apply)
        self.db.refresh(updated)
        return updated
