"""Codec for the article ``images`` column.

The column stores a JSON-encoded array of URL strings. Every read goes
through :func:`parse_images` and every write through
:func:`serialize_images`, so callers only ever see ``list[str]``.
"""

from __future__ import annotations

import json
from collections.abc import Iterable

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator


def parse_images(raw: str | bytes | None) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    if not raw.strip():
        return []
    try:
        payload = json.loads(raw)
    except ValueError:
        return []
    if not isinstance(payload, list):
        return []
    return [item for item in payload if isinstance(item, str)]


def serialize_images(images: Iterable[str] | None) -> str:
    if images is None:
        return "[]"
    if isinstance(images, str):
        images = [images]
    return json.dumps([str(item) for item in images], ensure_ascii=False)


class ImageList(TypeDecorator):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return serialize_images(value)

    def process_result_value(self, value, dialect):
        return parse_images(value)
