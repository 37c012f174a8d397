"""In-memory table composition.

Rows flow through filter, then sort, then the pagination slice, then the
per-column render callbacks. Row and bulk actions call back into the
page-level handlers supplied by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal

from boudoir_console.app.ui.filters import FilterConfig, FilterState
from boudoir_console.app.ui.pagination import PaginationState
from boudoir_console.app.ui.selection import KeyExtractor, SelectionState, default_row_key
from boudoir_console.app.ui.sorting import SortState

Row = dict[str, Any]
Renderer = Callable[[Any, Row, int], Any]


@dataclass(frozen=True)
class ColumnDef:
    key: str
    label: str
    sortable: bool = False
    filterable: bool = False
    render: Renderer | None = None
    align: Literal["left", "center", "right"] = "left"


@dataclass(frozen=True)
class RowAction:
    label: str
    on_click: Callable[[Row], Any]
    hidden: Callable[[Row], bool] | None = None
    disabled: Callable[[Row], bool] | None = None


@dataclass(frozen=True)
class BulkAction:
    label: str
    on_click: Callable[[list[Row]], Any]
    disabled: Callable[[list[Row]], bool] | None = None


@dataclass
class DataTable:
    columns: list[ColumnDef]
    rows: list[Row] = field(default_factory=list)
    filter_configs: list[FilterConfig] = field(default_factory=list)
    row_actions: list[RowAction] = field(default_factory=list)
    bulk_actions: list[BulkAction] = field(default_factory=list)
    key_extractor: KeyExtractor = default_row_key
    page_size: int = 25
    loading: bool = False
    on_export: Callable[[list[Row], dict[str, Any]], Any] | None = None
    on_refresh: Callable[[], Any] | None = None

    def __post_init__(self) -> None:
        self.filters = FilterState(configs=list(self.filter_configs))
        self.sort = SortState()
        self.selection = SelectionState(key_extractor=self.key_extractor)
        self.pagination = PaginationState(page_size=self.page_size)
        self._sync_total()

    @property
    def column_keys(self) -> list[str]:
        return [column.key for column in self.columns]

    def _sync_total(self) -> None:
        self.pagination.set_total_items(len(self.processed_rows()))

    def set_rows(self, rows: list[Row]) -> None:
        self.rows = list(rows)
        self.selection.clear()
        self._sync_total()

    def set_loading(self, loading: bool) -> None:
        self.loading = loading
        self.pagination.loading = loading

    def processed_rows(self) -> list[Row]:
        """Every row that passes the filters, in sort order."""
        filtered = self.filters.apply(self.rows, column_keys=self.column_keys)
        return self.sort.apply(filtered)

    def visible_rows(self) -> list[Row]:
        start = self.pagination.offset
        return self.processed_rows()[start : start + self.pagination.page_size]

    def rendered_rows(self) -> list[dict[str, Any]]:
        rendered = []
        for index, row in enumerate(self.visible_rows()):
            cells = {}
            for column in self.columns:
                value = row.get(column.key)
                cells[column.key] = column.render(value, row, index) if column.render else value
            rendered.append(cells)
        return rendered

    def on_filters_change(self, values: dict[str, Any]) -> None:
        self.filters.on_change(values)
        self.selection.clear()
        self._sync_total()
        self.pagination.current_page = 1

    def handle_sort(self, key: str) -> None:
        column = next((column for column in self.columns if column.key == key), None)
        if column is None or not column.sortable:
            return
        self.sort.handle_sort(key)

    def set_page(self, page: int) -> bool:
        return self.pagination.set_page(page)

    def set_page_size(self, page_size: int) -> bool:
        return self.pagination.set_page_size(page_size)

    def toggle_row(self, row: Row, index: int, checked: bool | None = None) -> None:
        self.selection.toggle(self.key_extractor(row, index), checked)

    def select_all(self, checked: bool) -> None:
        self.selection.select_all(self.visible_rows(), checked)

    def header_state(self) -> str:
        return self.selection.header_state(self.visible_rows())

    def selected_rows(self) -> list[Row]:
        return self.selection.selected_rows(self.visible_rows())

    def bulk_action_disabled(self, action: BulkAction) -> bool:
        rows = self.selected_rows()
        if not rows or self.loading:
            return True
        return bool(action.disabled and action.disabled(rows))

    def run_bulk_action(self, action: BulkAction) -> Any:
        if self.bulk_action_disabled(action):
            return None
        return action.on_click(self.selected_rows())

    def actions_for(self, row: Row) -> list[tuple[RowAction, bool]]:
        """Row actions that are not hidden for ``row``, each paired with its disabled flag."""
        actions = []
        for action in self.row_actions:
            if action.hidden and action.hidden(row):
                continue
            disabled = self.loading or bool(action.disabled and action.disabled(row))
            actions.append((action, disabled))
        return actions

    def run_row_action(self, action: RowAction, row: Row) -> Any:
        if self.loading or (action.hidden and action.hidden(row)) or (action.disabled and action.disabled(row)):
            return None
        return action.on_click(row)

    def export(self) -> Any:
        if self.on_export is None:
            return None
        return self.on_export(self.processed_rows(), dict(self.filters.values))

    def refresh(self) -> Any:
        if self.on_refresh is None:
            return None
        return self.on_refresh()
