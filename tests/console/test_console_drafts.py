import json
from itertools import count

from boudoir_console.app.drafts.draft_store import (
    CURRENT_DRAFT_KEY,
    DRAFTS_KEY,
    MAX_DRAFTS,
    ArticleDraft,
    InMemoryDraftRepository,
    JsonFileDraftRepository,
)


def _clock():
    ticks = count(1)
    return lambda: f"2024-05-01T10:00:{next(ticks):02d}+00:00"


def test_save_keeps_at_most_ten_drafts_evicting_oldest() -> None:
    repo = InMemoryDraftRepository(now=_clock())

    for index in range(MAX_DRAFTS + 2):
        repo.save(ArticleDraft(id=f"d{index}", title=f"Brouillon {index}"))

    ids = [draft.id for draft in repo.list()]
    assert len(ids) == MAX_DRAFTS
    assert "d0" not in ids and "d1" not in ids
    assert ids[-1] == "d11"


def test_saving_existing_id_replaces_in_place() -> None:
    repo = InMemoryDraftRepository(now=_clock())
    repo.save(ArticleDraft(id="a", title="Boubou"))
    repo.save(ArticleDraft(id="b", title="Pagne"))

    saved = repo.save(ArticleDraft(id="a", title="Boubou brodé", price="8500"))

    assert [draft.id for draft in repo.list()] == ["a", "b"]
    assert repo.get("a").title == "Boubou brodé"
    assert repo.get("a").saved_at == saved.saved_at == "2024-05-01T10:00:03+00:00"


def test_delete_reports_whether_a_draft_was_removed() -> None:
    repo = InMemoryDraftRepository()
    repo.save(ArticleDraft(id="a"))

    assert repo.delete("a")
    assert not repo.delete("a")
    assert repo.list() == []


def test_current_draft_round_trip() -> None:
    repo = InMemoryDraftRepository(now=_clock())

    assert repo.get_current() is None
    repo.set_current(ArticleDraft(id="en-cours", title="Caftan", images=["https://cdn.example.com/c.jpg"]))
    assert repo.get_current().images == ["https://cdn.example.com/c.jpg"]

    repo.clear_current()
    assert repo.get_current() is None


def test_json_file_layout_and_unreadable_file(tmp_path) -> None:
    path = tmp_path / "drafts.json"
    repo = JsonFileDraftRepository(path, now=_clock())
    repo.save(ArticleDraft(id="a", title="Boubou"))
    repo.set_current(ArticleDraft(id="b", title="Pagne"))

    state = json.loads(path.read_text(encoding="utf-8"))
    assert state[DRAFTS_KEY][0]["title"] == "Boubou"
    assert state[CURRENT_DRAFT_KEY]["id"] == "b"

    path.write_text("{pas du json", encoding="utf-8")
    assert repo.list() == []
    assert repo.get_current() is None


def test_malformed_entries_are_skipped(tmp_path) -> None:
    path = tmp_path / "drafts.json"
    path.write_text(
        json.dumps({DRAFTS_KEY: [{"title": "sans id"}, {"id": "ok", "images": ["x.jpg", 4]}, "texte"]}),
        encoding="utf-8",
    )

    drafts = JsonFileDraftRepository(path).list()

    assert [draft.id for draft in drafts] == ["ok"]
    assert drafts[0].images == ["x.jpg"]
