from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

from boudoir_console.app.infrastructure.errors.error_mapper import ErrorMapper
from boudoir_console.app.infrastructure.logging.logger import get_logger, log_action
from boudoir_console.app.ui.filters import FilterConfig, FilterState, clean_filters, debounce_text
from boudoir_console.app.ui.pagination import DEFAULT_PAGE_SIZE_OPTIONS, PaginationState
from boudoir_console.app.ui.sorting import SortState

ListingStatus = Literal["idle", "loading", "success", "error"]
PageFetcher = Callable[[dict[str, Any]], dict[str, Any]]
Notifier = Callable[[str], None]
SortQuery = Callable[[SortState], dict[str, Any]]

logger = get_logger(__name__)


class RemoteListing:
    """Server-paginated listing.

    ``idle -> loading -> success | error``. Every change to filters, sort,
    page or page size refetches. Responses are matched to the sequence
    number of the request that produced them and only the latest one is
    applied; a failure keeps the rows already on screen and goes to the
    notifier.
    """

    def __init__(
        self,
        *,
        module: str,
        fetch_page: PageFetcher,
        items_key: str = "items",
        filter_configs: list[FilterConfig] | None = None,
        page_size: int = 20,
        page_size_options: tuple[int, ...] = DEFAULT_PAGE_SIZE_OPTIONS,
        notify: Notifier | None = None,
        sort_query: SortQuery | None = None,
        search_debounce_ms: int = 0,
        sleeper: Callable[[float], None] | None = None,
    ) -> None:
        self.module = module
        self.fetch_page = fetch_page
        self.items_key = items_key
        self.notify = notify
        self.sort_query = sort_query or SortState.to_query
        self.search_debounce_ms = search_debounce_ms
        self.sleeper = sleeper
        self.filters = FilterState(configs=list(filter_configs or []))
        self.sort = SortState()
        self.pagination = PaginationState(page_size=page_size, page_size_options=tuple(page_size_options))
        self.status: ListingStatus = "idle"
        self.rows: list[dict[str, Any]] = []
        self.error: str | None = None
        self._sequence = 0

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    def query(self) -> dict[str, Any]:
        query: dict[str, Any] = clean_filters(self.filters.to_query())
        query.update(self.sort_query(self.sort))
        query.update(self.pagination.to_query())
        return query

    def begin(self) -> tuple[int, dict[str, Any]]:
        self._sequence += 1
        self.status = "loading"
        self.pagination.loading = True
        return self._sequence, self.query()

    def resolve(self, sequence: int, payload: dict[str, Any]) -> bool:
        if sequence != self._sequence:
            return False
        rows = payload.get(self.items_key)
        self.rows = list(rows) if isinstance(rows, list) else []
        meta = payload.get("pagination") or {}
        self.pagination.loading = False
        self.pagination.set_total_items(int(meta.get("total", len(self.rows))))
        self.status = "success"
        self.error = None
        return True

    def reject(self, sequence: int, error: Exception) -> bool:
        if sequence != self._sequence:
            return False
        self.pagination.loading = False
        self.status = "error"
        self.error = ErrorMapper.to_display_message(error)
        log_action(logger, module=self.module, action="fetch", actor_role=None, trace_id=getattr(error, "trace_id", None), outcome="error")
        if self.notify is not None:
            self.notify(self.error)
        return True

    def fetch(self) -> bool:
        sequence, query = self.begin()
        try:
            payload = self.fetch_page(query)
        except Exception as exc:
            return self.reject(sequence, exc)
        return self.resolve(sequence, payload)

    def reset(self) -> None:
        self.status = "idle"
        self.error = None

    def _changed_text_key(self, values: dict[str, Any]) -> str | None:
        for config in self.filters.configs:
            if config.type == "text" and values.get(config.key) != self.filters.values.get(config.key):
                return config.key
        return None

    def set_filters(self, values: dict[str, Any]) -> bool:
        values = dict(values)
        text_key = self._changed_text_key(values)
        if text_key is not None and isinstance(values.get(text_key), str):
            values[text_key] = debounce_text(values[text_key], wait_ms=self.search_debounce_ms, sleeper=self.sleeper)
        self.filters.on_change(values)
        self.pagination.current_page = 1
        return self.fetch()

    def clear_filters(self) -> bool:
        self.filters.clear_all()
        self.pagination.current_page = 1
        return self.fetch()

    def handle_sort(self, key: str) -> bool:
        self.sort.handle_sort(key)
        return self.fetch()

    def set_page(self, page: int) -> bool:
        if not self.pagination.set_page(page):
            return False
        return self.fetch()

    def set_page_size(self, page_size: int) -> bool:
        if page_size not in self.pagination.page_size_options:
            return False
        if not self.pagination.set_page_size(page_size):
            return False
        return self.fetch()
