from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Literal

HeaderState = Literal["all", "none", "indeterminate"]
KeyExtractor = Callable[[dict[str, Any], int], Hashable]


def default_row_key(row: dict[str, Any], index: int) -> Hashable:
    row_id = row.get("id")
    return row_id if row_id is not None else index


@dataclass
class SelectionState:
    """Selected row ids, scoped by the caller to the rows of the current page."""

    key_extractor: KeyExtractor = default_row_key
    selected: set[Hashable] = field(default_factory=set)

    def page_keys(self, page_rows: list[dict[str, Any]]) -> list[Hashable]:
        return [self.key_extractor(row, index) for index, row in enumerate(page_rows)]

    def toggle(self, row_key: Hashable, checked: bool | None = None) -> None:
        should_select = (row_key not in self.selected) if checked is None else checked
        if should_select:
            self.selected.add(row_key)
        else:
            self.selected.discard(row_key)

    def is_selected(self, row_key: Hashable) -> bool:
        return row_key in self.selected

    def select_all(self, page_rows: list[dict[str, Any]], checked: bool) -> None:
        self.selected = set(self.page_keys(page_rows)) if checked else set()

    def clear(self) -> None:
        self.selected = set()

    def header_state(self, page_rows: list[dict[str, Any]]) -> HeaderState:
        keys = self.page_keys(page_rows)
        if not keys:
            return "none"
        chosen = sum(1 for key in keys if key in self.selected)
        if chosen == 0:
            return "none"
        if chosen == len(keys):
            return "all"
        return "indeterminate"

    def selected_rows(self, page_rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return [
            row for index, row in enumerate(page_rows) if self.key_extractor(row, index) in self.selected
        ]
