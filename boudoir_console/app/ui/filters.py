"""Filter value set for listings.

Values are replaced wholesale through :meth:`FilterState.on_change`. The
sentinels ``None``, ``""`` and ``"ALL"`` mean "no constraint": they are not
counted as active and never reach a query string. A date range for ``key``
is stored as the two derived keys ``keyFrom`` / ``keyTo`` (``YYYY-MM-DD``).
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Literal

ALL = "ALL"
SEARCH_KEY = "search"
RANGE_SUFFIXES = ("From", "To")
DATE_FORMAT = "%Y-%m-%d"

FilterType = Literal["text", "select", "number", "date"]


@dataclass(frozen=True)
class FilterOption:
    value: str
    label: str


@dataclass(frozen=True)
class FilterConfig:
    key: str
    label: str
    type: FilterType = "text"
    options: tuple[FilterOption, ...] = ()


def is_unset(value: Any) -> bool:
    return value is None or value == "" or value == ALL


def clean_filters(filters: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in filters.items() if not is_unset(value)}


def format_date(value: date | datetime | str | None) -> str | None:
    if value is None or value == "":
        return None
    if isinstance(value, (date, datetime)):
        return value.strftime(DATE_FORMAT)
    parsed = parse_date(value)
    return parsed.strftime(DATE_FORMAT) if parsed is not None else None


def parse_date(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError:
        return None


def _range_base(key: str) -> str | None:
    for suffix in RANGE_SUFFIXES:
        if key.endswith(suffix) and len(key) > len(suffix):
            return key[: -len(suffix)]
    return None


def _as_number(value: Any) -> Decimal | None:
    if isinstance(value, bool):
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


@dataclass
class FilterState:
    configs: list[FilterConfig] = field(default_factory=list)
    values: dict[str, Any] = field(default_factory=dict)

    def _config(self, key: str) -> FilterConfig | None:
        for config in self.configs:
            if config.key == key:
                return config
        return None

    def on_change(self, new_values: dict[str, Any]) -> None:
        self.values = dict(new_values)

    def set_value(self, key: str, value: Any) -> None:
        self.on_change({**self.values, key: value})

    def set_date_range(self, key: str, start: date | datetime | str | None, end: date | datetime | str | None) -> None:
        values = dict(self.values)
        values[f"{key}From"] = format_date(start)
        values[f"{key}To"] = format_date(end)
        self.on_change(values)

    def clear(self, key: str) -> None:
        siblings = {key, f"{key}From", f"{key}To"}
        self.on_change({name: value for name, value in self.values.items() if name not in siblings})

    def clear_all(self) -> None:
        self.on_change({})

    @property
    def active_count(self) -> int:
        return sum(1 for value in self.values.values() if not is_unset(value))

    def to_query(self) -> dict[str, str]:
        return {key: str(value) for key, value in clean_filters(self.values).items()}

    def matches(self, row: dict[str, Any], column_keys: list[str] | None = None) -> bool:
        for key, expected in clean_filters(self.values).items():
            if key == SEARCH_KEY:
                if not self._matches_search(row, str(expected), column_keys):
                    return False
                continue

            base = self._date_bound_base(key, row)
            if base is not None:
                if not self._matches_date_bound(row.get(base), expected, key.endswith("From")):
                    return False
                continue

            if not self._matches_value(row.get(key), expected, self._config(key)):
                return False
        return True

    def _date_bound_base(self, key: str, row: dict[str, Any]) -> str | None:
        base = _range_base(key)
        if base is None or self._config(key) is not None:
            return None
        config = self._config(base)
        if (config is not None and config.type == "date") or base in row:
            return base
        return None

    def apply(self, rows: list[dict[str, Any]], column_keys: list[str] | None = None) -> list[dict[str, Any]]:
        return [row for row in rows if self.matches(row, column_keys)]

    @staticmethod
    def _matches_search(row: dict[str, Any], term: str, column_keys: list[str] | None) -> bool:
        needle = term.strip().lower()
        if not needle:
            return True
        keys = column_keys if column_keys is not None else list(row.keys())
        return any(needle in str(row.get(key)).lower() for key in keys if row.get(key) is not None)

    @staticmethod
    def _matches_date_bound(value: Any, bound: Any, is_lower: bool) -> bool:
        row_value = parse_date(value)
        limit = parse_date(bound)
        if limit is None:
            return True
        if row_value is None:
            return False
        if is_lower:
            return row_value >= limit
        # upper bound is inclusive of the whole day
        return row_value.date() <= limit.date()

    @staticmethod
    def _matches_value(value: Any, expected: Any, config: FilterConfig | None) -> bool:
        if value is None:
            return False
        if config is not None and config.type == "select":
            return str(value) == str(expected)
        is_numeric = isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)
        if (config is not None and config.type == "number") or (config is None and is_numeric):
            left, right = _as_number(value), _as_number(expected)
            return left is not None and right is not None and left == right
        return str(expected).lower() in str(value).lower()


def debounce_text(term: str, wait_ms: int = 350, sleeper: Callable[[float], None] | None = None) -> str:
    if wait_ms <= 0:
        return term
    (sleeper or time.sleep)(wait_ms / 1000)
    return term
