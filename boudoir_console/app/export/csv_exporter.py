from __future__ import annotations

import csv
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

EMPTY_VALUE = "—"
SENSITIVE_KEYS = {"token", "secret", "password", "hashed_password"}


def normalize_value(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, str):
        clean = value.strip()
        return clean or EMPTY_VALUE
    if isinstance(value, bool):
        return "oui" if value else "non"
    if isinstance(value, datetime):
        return value.astimezone().strftime("%Y-%m-%d %H:%M:%S %z")
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    if isinstance(value, (list, tuple)):
        return " | ".join(str(item) for item in value) or EMPTY_VALUE
    if isinstance(value, dict):
        return str(value.get("name") or value.get("title") or value.get("id") or EMPTY_VALUE)
    return str(value)


def sanitize_row(row: dict[str, Any], headers: list[str]) -> dict[str, str]:
    sanitized: dict[str, str] = {}
    for header in headers:
        if any(token in header.lower() for token in SENSITIVE_KEYS):
            sanitized[header] = EMPTY_VALUE
            continue
        sanitized[header] = normalize_value(row.get(header))
    return sanitized


def export_current_view(
    *,
    module: str,
    rows: list[dict[str, Any]],
    headers: list[str],
    output_dir: str = "out/exports",
    filters: dict[str, Any] | None = None,
) -> Path:
    destination = Path(output_dir)
    destination.mkdir(parents=True, exist_ok=True)

    now = datetime.now().astimezone()
    path = destination / f"{module}_{now.strftime('%Y%m%d_%H%M%S')}.csv"

    with path.open("w", newline="", encoding="utf-8-sig") as handle:
        handle.write(f"# timestamp_local: {now.isoformat()}\n")
        handle.write(f"# module: {module}\n")
        handle.write(f"# filters: {filters or {}}\n")
        writer = csv.DictWriter(handle, fieldnames=headers, extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow(sanitize_row(row, headers=headers))

    return path


def table_exporter(module: str, headers: list[str], output_dir: str = "out/exports"):
    """Build an ``on_export`` hook for :class:`DataTable` writing the current view."""

    def _export(rows: list[dict[str, Any]], filters: dict[str, Any]) -> Path:
        return export_current_view(module=module, rows=rows, headers=headers, output_dir=output_dir, filters=filters)

    return _export
