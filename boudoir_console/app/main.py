from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from time import perf_counter

import httpx

from boudoir_console.app.analytics_cache import AnalyticsCache
from boudoir_console.app.config import AppConfig
from boudoir_console.app.drafts.draft_store import DraftRepository, JsonFileDraftRepository
from boudoir_console.app.export.csv_exporter import table_exporter
from boudoir_console.app.infrastructure.errors.error_mapper import ErrorMapper
from boudoir_console.app.infrastructure.logging.logger import get_logger, log_action
from boudoir_console.app.remote_listing import Notifier, RemoteListing
from boudoir_console.app.ui.data_table import BulkAction, ColumnDef, DataTable, RowAction
from boudoir_console.app.ui.filters import FilterConfig, FilterOption
from boudoir_console.app.ui.sorting import SortState
from boudoir_console.clients.boudoir_client_sdk import (
    AnalyticsClient,
    APIError,
    ArticlesClient,
    AuthClient,
    AuthStore,
    HttpClient,
    ModerationClient,
    NotificationsClient,
    UsersClient,
)

logger = get_logger(__name__)

ARTICLE_FILTERS = [
    FilterConfig(key="search", label="Recherche", type="text"),
    FilterConfig(
        key="condition",
        label="État",
        type="select",
        options=(
            FilterOption(value="EXCELLENT", label="Excellent état"),
            FilterOption(value="GOOD", label="Bon état"),
            FilterOption(value="FAIR", label="État correct"),
        ),
    ),
    FilterConfig(key="minPrice", label="Prix min", type="number"),
    FilterConfig(key="maxPrice", label="Prix max", type="number"),
]

ARTICLE_SORTS = {
    ("created_at", "desc"): "newest",
    ("created_at", "asc"): "oldest",
    ("price", "asc"): "price-asc",
    ("price", "desc"): "price-desc",
    ("favorites_count", "desc"): "popular",
}

# /api/articles caps limit at 50
ARTICLE_PAGE_SIZES = (12, 24, 48)

MODERATION_COLUMNS = [
    ColumnDef(key="title", label="Titre", sortable=True, filterable=True),
    ColumnDef(key="price", label="Prix", sortable=True, align="right", render=lambda value, row, index: f"{value} FCFA"),
    ColumnDef(key="condition", label="État", filterable=True),
    ColumnDef(key="seller", label="Vendeur", render=lambda value, row, index: (value or {}).get("name")),
    ColumnDef(key="created_at", label="Soumis le", sortable=True),
]


@dataclass
class Console:
    config: AppConfig
    http: HttpClient
    auth_store: AuthStore
    auth: AuthClient
    articles: ArticlesClient
    moderation: ModerationClient
    analytics: AnalyticsCache
    notifications: NotificationsClient
    users: UsersClient
    drafts: DraftRepository


def build_console(
    config: AppConfig,
    transport: Callable[..., httpx.Response] | None = None,
    drafts: DraftRepository | None = None,
) -> Console:
    store = AuthStore()
    http = HttpClient(
        config.base_url,
        timeout_seconds=config.timeout_seconds,
        verify_ssl=config.verify_ssl,
        retry_max_attempts=config.retry_max_attempts,
        retry_backoff_ms=config.retry_backoff_ms,
        transport=transport,
        on_unauthorized=lambda error: store.clear(),
    )
    analytics_client = AnalyticsClient(http, store)
    return Console(
        config=config,
        http=http,
        auth_store=store,
        auth=AuthClient(http, store),
        articles=ArticlesClient(http, store),
        moderation=ModerationClient(http, store),
        analytics=AnalyticsCache(fetch=analytics_client.fetch),
        notifications=NotificationsClient(http, store),
        users=UsersClient(http, store),
        drafts=drafts if drafts is not None else JsonFileDraftRepository(config.drafts_path),
    )


def article_sort_query(sort: SortState) -> dict[str, str]:
    """Map the column sort onto the ``sortBy`` values ``GET /api/articles`` accepts."""
    if not sort.active:
        return {}
    value = ARTICLE_SORTS.get((sort.key, sort.direction))
    return {"sortBy": value} if value else {}


def articles_listing(
    console: Console,
    notify: Notifier | None = None,
    page_size: int = 12,
    search_debounce_ms: int = 350,
    sleeper: Callable[[float], None] | None = None,
) -> RemoteListing:
    return RemoteListing(
        module="articles",
        fetch_page=console.articles.list,
        items_key="articles",
        filter_configs=ARTICLE_FILTERS,
        page_size=page_size,
        page_size_options=ARTICLE_PAGE_SIZES,
        notify=notify,
        sort_query=article_sort_query,
        search_debounce_ms=search_debounce_ms,
        sleeper=sleeper,
    )


def moderation_table(
    console: Console,
    notify: Notifier | None = None,
    reason_provider: Callable[[dict], str | None] | None = None,
) -> DataTable:
    """Pending-moderation queue with approve/reject actions.

    A failed refresh keeps the rows already loaded and sends the mapped
    message to ``notify``. Rejecting asks ``reason_provider`` for a reason and
    does nothing when it returns a blank one.
    """

    def _notify_error(action: str, error: APIError) -> None:
        log_action(logger, module="moderation", action=action, actor_role=console.auth_store.role, trace_id=error.trace_id, outcome="error")
        if notify is not None:
            notify(ErrorMapper.to_display_message(error))

    def _refresh() -> bool:
        table.set_loading(True)
        try:
            rows = console.moderation.pending()
        except APIError as error:
            _notify_error("refresh", error)
            return False
        finally:
            table.set_loading(False)
        table.set_rows(rows)
        return True

    def _decided() -> None:
        console.analytics.invalidate()
        _refresh()

    def _approve(row: dict) -> dict | None:
        try:
            result = console.moderation.approve(str(row["id"]))
        except APIError as error:
            _notify_error("approve", error)
            return None
        _decided()
        return result

    def _reject(row: dict) -> dict | None:
        reason = (reason_provider(row) if reason_provider is not None else None) or ""
        if not reason.strip():
            return None
        try:
            result = console.moderation.reject(str(row["id"]), reason.strip())
        except APIError as error:
            _notify_error("reject", error)
            return None
        _decided()
        return result

    def _approve_all(rows: list[dict]) -> list[dict]:
        results = []
        for row in rows:
            try:
                results.append(console.moderation.approve(str(row["id"])))
            except APIError as error:
                _notify_error("approve", error)
                break
        _decided()
        return results

    table = DataTable(
        columns=MODERATION_COLUMNS,
        row_actions=[
            RowAction(label="Approuver", on_click=_approve),
            RowAction(label="Rejeter", on_click=_reject, hidden=lambda row: reason_provider is None),
        ],
        bulk_actions=[BulkAction(label="Approuver la sélection", on_click=_approve_all)],
        page_size=10,
        on_export=table_exporter("moderation", [column.key for column in MODERATION_COLUMNS], console.config.export_dir),
        on_refresh=_refresh,
    )
    return table


def api_diagnostics(http_client: HttpClient) -> list[dict[str, str]]:
    results: list[dict[str, str]] = []
    for name, path in (("health", "/health"), ("ready", "/ready")):
        started = perf_counter()
        try:
            payload = http_client.request("GET", path)
            status, details = "OK", str(payload)
        except APIError as error:
            status, details = "ERROR", f"{error.code} ({error.status_code}) trace_id={error.trace_id}"
        elapsed_ms = int((perf_counter() - started) * 1000)
        results.append({"check": name, "status": status, "latency_ms": str(elapsed_ms), "details": details})
    return results


def main() -> None:
    config = AppConfig.from_env()
    console = build_console(config)
    print("Le Boudoir du Boubou - console")
    print(f"API: {config.base_url}")
    print(f"Timeout: {config.timeout_seconds}s")
    print(f"Brouillons: {config.drafts_path}")
    for check in api_diagnostics(console.http):
        print(f"{check['check']}: {check['status']} ({check['latency_ms']}ms) {check['details']}")


if __name__ == "__main__":
    main()
