from boudoir_console.app.ui.data_table import BulkAction, ColumnDef, DataTable, RowAction

COLUMNS = [
    ColumnDef(key="title", label="Titre", sortable=True),
    ColumnDef(key="price", label="Prix", sortable=True, render=lambda value, row, index: f"{value} FCFA"),
    ColumnDef(key="status", label="Statut"),
]


def _rows(count: int) -> list[dict]:
    return [
        {"id": f"a{index}", "title": f"Article {index:02d}", "price": 1000 + index, "status": "PENDING_MODERATION"}
        for index in range(count)
    ]


def test_rows_flow_through_filter_sort_and_page_slice() -> None:
    table = DataTable(columns=COLUMNS, rows=_rows(30), page_size=10)

    assert table.pagination.total_pages == 3
    table.handle_sort("price")
    table.handle_sort("price")
    assert [row["id"] for row in table.visible_rows()][:2] == ["a29", "a28"]

    table.set_page(3)
    table.on_filters_change({"search": "Article 0"})

    assert table.pagination.current_page == 1
    assert table.pagination.total_items == 10
    assert table.rendered_rows()[0] == {"title": "Article 09", "price": "1009 FCFA", "status": "PENDING_MODERATION"}


def test_unsortable_column_is_ignored() -> None:
    table = DataTable(columns=COLUMNS, rows=_rows(3))

    table.handle_sort("status")
    table.handle_sort("unknown")

    assert not table.sort.active


def test_selection_is_scoped_to_visible_rows_and_cleared_on_new_rows() -> None:
    table = DataTable(columns=COLUMNS, rows=_rows(15), page_size=10)

    table.select_all(True)
    assert table.header_state() == "all"
    assert len(table.selected_rows()) == 10

    table.set_rows(_rows(2))
    assert table.header_state() == "none"


def test_bulk_action_disabled_without_selection_or_while_loading() -> None:
    calls = []
    action = BulkAction(label="Approuver", on_click=calls.append, disabled=lambda rows: len(rows) > 2)
    table = DataTable(columns=COLUMNS, rows=_rows(5), bulk_actions=[action])

    assert table.bulk_action_disabled(action)
    assert table.run_bulk_action(action) is None

    table.toggle_row(table.visible_rows()[0], 0)
    table.set_loading(True)
    assert table.bulk_action_disabled(action)
    table.set_loading(False)

    table.run_bulk_action(action)
    assert calls == [[table.visible_rows()[0]]]

    table.select_all(True)
    assert table.bulk_action_disabled(action)


def test_row_actions_hidden_and_disabled() -> None:
    clicked = []
    approve = RowAction(label="Approuver", on_click=clicked.append, disabled=lambda row: row["price"] > 1001)
    delete = RowAction(label="Supprimer", on_click=clicked.append, hidden=lambda row: row["status"] != "REJECTED")
    table = DataTable(columns=COLUMNS, rows=_rows(3), row_actions=[approve, delete])
    first, last = table.rows[0], table.rows[2]

    assert table.actions_for(first) == [(approve, False)]
    assert table.actions_for(last) == [(approve, True)]

    table.run_row_action(approve, last)
    table.run_row_action(delete, first)
    table.run_row_action(approve, first)
    assert clicked == [first]


def test_export_and_refresh_hooks() -> None:
    exported = []
    table = DataTable(
        columns=COLUMNS,
        rows=_rows(3),
        on_export=lambda rows, filters: exported.append((len(rows), filters)),
        on_refresh=lambda: "rafraîchi",
    )
    table.on_filters_change({"search": "Article 01"})

    table.export()

    assert exported == [(1, {"search": "Article 01"})]
    assert table.refresh() == "rafraîchi"
    assert DataTable(columns=COLUMNS).export() is None


def test_select_all_on_second_page_only_takes_that_page() -> None:
    table = DataTable(columns=COLUMNS, rows=_rows(25), page_size=10)
    first_page = table.visible_rows()
    table.toggle_row(first_page[0], 0, True)
    table.toggle_row(first_page[1], 1, True)
    assert table.header_state() == "indeterminate"

    assert table.set_page(2)
    assert table.header_state() == "none"
    assert table.selected_rows() == []

    table.select_all(True)
    assert table.header_state() == "all"
    assert [row["id"] for row in table.selected_rows()] == [f"a{index}" for index in range(10, 20)]
    assert table.selection.selected == {f"a{index}" for index in range(10, 20)}

    assert table.set_page(1)
    assert table.header_state() == "none"
