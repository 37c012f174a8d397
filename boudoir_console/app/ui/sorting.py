from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Literal

SortDirection = Literal["asc", "desc"]


@dataclass
class SortState:
    key: str | None = None
    direction: SortDirection | None = None

    @property
    def active(self) -> bool:
        return self.key is not None and self.direction is not None

    def handle_sort(self, key: str) -> None:
        """Cycle ``key`` through asc, desc and unsorted; another key restarts at asc."""
        if self.key != key:
            self.key, self.direction = key, "asc"
        elif self.direction == "asc":
            self.direction = "desc"
        elif self.direction == "desc":
            self.key, self.direction = None, None
        else:
            self.direction = "asc"

    def reset(self) -> None:
        self.key, self.direction = None, None

    def apply(self, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        if not self.active:
            return list(rows)
        return sort_rows(rows, self.key, self.direction)

    def to_query(self) -> dict[str, str]:
        if not self.active:
            return {}
        return {"sortBy": self.key, "sortOrder": self.direction}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _comparable(value: Any) -> tuple[int, Any]:
    if _is_number(value):
        return 0, value
    if isinstance(value, datetime):
        return 1, (value if value.tzinfo else value.replace(tzinfo=timezone.utc)).timestamp()
    if isinstance(value, date):
        return 1, datetime(value.year, value.month, value.day, tzinfo=timezone.utc).timestamp()
    return 2, str(value).lower()


def sort_rows(rows: list[dict[str, Any]], key: str, direction: SortDirection) -> list[dict[str, Any]]:
    """Stable sort on ``key``; rows whose value is ``None`` stay last in both directions."""
    present = [row for row in rows if row.get(key) is not None]
    missing = [row for row in rows if row.get(key) is None]
    ordered = sorted(present, key=lambda row: _comparable(row.get(key)), reverse=direction == "desc")
    return ordered + missing
