"""Unpublished article forms kept on the operator's machine.

The JSON file mirrors what the web client keeps in local storage: the
in-progress form under ``article-draft`` and the saved drafts under
``article-drafts``.
"""

from __future__ import annotations

import json
import os
import uuid
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

CURRENT_DRAFT_KEY = "article-draft"
DRAFTS_KEY = "article-drafts"
MAX_DRAFTS = 10
DEFAULT_DRAFTS_FILE = Path.home() / ".boudoir_article_drafts.json"


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class ArticleDraft:
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    saved_at: str = field(default_factory=_utcnow)
    title: str = ""
    description: str = ""
    price: str | None = None
    category_id: str | None = None
    condition: str | None = None
    size: str | None = None
    brand: str | None = None
    color: str | None = None
    images: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "ArticleDraft | None":
        if not isinstance(payload, dict) or not payload.get("id"):
            return None
        known = {name: payload[name] for name in cls.__dataclass_fields__ if name in payload}
        images = known.get("images")
        known["images"] = [item for item in images if isinstance(item, str)] if isinstance(images, list) else []
        known["id"] = str(known["id"])
        known.setdefault("saved_at", _utcnow())
        return cls(**known)


class DraftRepository(ABC):
    """Bounded FIFO of saved drafts plus the single in-progress draft."""

    def __init__(self, capacity: int = MAX_DRAFTS, now: Callable[[], str] | None = None) -> None:
        self.capacity = max(1, capacity)
        self._now = now or _utcnow

    @abstractmethod
    def _read(self) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def _write(self, state: dict[str, Any]) -> None:
        raise NotImplementedError

    def _drafts(self, state: dict[str, Any]) -> list[ArticleDraft]:
        raw = state.get(DRAFTS_KEY)
        if not isinstance(raw, list):
            return []
        drafts = [ArticleDraft.from_dict(item) for item in raw]
        return [draft for draft in drafts if draft is not None]

    def list(self) -> list[ArticleDraft]:
        return self._drafts(self._read())

    def get(self, draft_id: str) -> ArticleDraft | None:
        return next((draft for draft in self.list() if draft.id == draft_id), None)

    def save(self, draft: ArticleDraft) -> ArticleDraft:
        """Store ``draft``; an existing id is replaced in place, and past capacity
        the drafts with the oldest ``saved_at`` are evicted."""
        state = self._read()
        drafts = self._drafts(state)
        stamped = replace(draft, saved_at=self._now())
        index = next((position for position, item in enumerate(drafts) if item.id == stamped.id), None)
        if index is None:
            drafts.append(stamped)
        else:
            drafts[index] = stamped
        while len(drafts) > self.capacity:
            oldest = min(drafts, key=lambda item: item.saved_at)
            drafts.remove(oldest)
        state[DRAFTS_KEY] = [item.to_dict() for item in drafts]
        self._write(state)
        return stamped

    def delete(self, draft_id: str) -> bool:
        state = self._read()
        drafts = self._drafts(state)
        remaining = [item for item in drafts if item.id != draft_id]
        if len(remaining) == len(drafts):
            return False
        state[DRAFTS_KEY] = [item.to_dict() for item in remaining]
        self._write(state)
        return True

    def get_current(self) -> ArticleDraft | None:
        return ArticleDraft.from_dict(self._read().get(CURRENT_DRAFT_KEY))

    def set_current(self, draft: ArticleDraft) -> None:
        state = self._read()
        state[CURRENT_DRAFT_KEY] = replace(draft, saved_at=self._now()).to_dict()
        self._write(state)

    def clear_current(self) -> None:
        state = self._read()
        if state.pop(CURRENT_DRAFT_KEY, None) is not None:
            self._write(state)


class InMemoryDraftRepository(DraftRepository):
    def __init__(self, capacity: int = MAX_DRAFTS, now: Callable[[], str] | None = None) -> None:
        super().__init__(capacity=capacity, now=now)
        self._state: dict[str, Any] = {}

    def _read(self) -> dict[str, Any]:
        return json.loads(json.dumps(self._state))

    def _write(self, state: dict[str, Any]) -> None:
        self._state = json.loads(json.dumps(state))


def drafts_path() -> Path:
    configured = os.getenv("BOUDOIR_DRAFTS_PATH", "").strip()
    return Path(configured) if configured else DEFAULT_DRAFTS_FILE


class JsonFileDraftRepository(DraftRepository):
    def __init__(self, path: Path | str | None = None, capacity: int = MAX_DRAFTS, now: Callable[[], str] | None = None) -> None:
        super().__init__(capacity=capacity, now=now)
        self.path = Path(path) if path is not None else drafts_path()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
            return payload if isinstance(payload, dict) else {}
        except (ValueError, OSError):
            return {}

    def _write(self, state: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(state, ensure_ascii=False, indent=2), encoding="utf-8")
