"""
models.py — Entidades del blog: Draft y Article.

Ambas se guardan como listas de objetos JSON. Las keys del JSON usan
camelCase (lastSaved, rawContent) para que los stores existentes
sigan siendo legibles; en Python los campos usan snake_case.

Draft:   contenido sin publicar, editable. `content` es markdown crudo.
Article: contenido publicado. `content` es el HTML renderizado y
         `raw_content` el markdown original (para poder re-editarlo).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_TAG = "Uncategorized"


def _default_tags() -> list[str]:
    return [DEFAULT_TAG]


def _as_text(value: Any) -> str:
    """null/ausente en el JSON → string vacío."""
    if value is None:
        return ""
    return str(value)


def _as_tags(value: Any) -> list[str]:
    if isinstance(value, list):
        tags = [str(t) for t in value if str(t).strip()]
        if tags:
            return tags
    return _default_tags()


@dataclass
class Draft:
    """
    Borrador guardado por el autor.

    Attributes:
        id: Entero positivo, único entre drafts.
        title, excerpt, content, author: Texto (content es markdown).
        date: Fecha ISO (YYYY-MM-DD) del último guardado.
        tags: Lista ordenada, nunca vacía.
        last_saved: Timestamp legible del último guardado.
    """
    id: int
    title: str = ""
    excerpt: str = ""
    content: str = ""
    author: str = ""
    date: str = ""
    tags: list[str] = field(default_factory=_default_tags)
    last_saved: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "excerpt": self.excerpt,
            "content": self.content,
            "author": self.author,
            "date": self.date,
            "tags": list(self.tags),
            "lastSaved": self.last_saved,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Draft:
        return cls(
            id=int(data["id"]),
            title=_as_text(data.get("title")),
            excerpt=_as_text(data.get("excerpt")),
            content=_as_text(data.get("content")),
            author=_as_text(data.get("author")),
            date=_as_text(data.get("date")),
            tags=_as_tags(data.get("tags")),
            last_saved=_as_text(data.get("lastSaved")),
        )


@dataclass
class Article:
    """
    Post publicado.

    `content` siempre es render(raw_content) cuando raw_content no está
    vacío; solo divergen si una actualización no trajo contenido nuevo
    (en ese caso se conserva el par anterior completo).
    """
    id: int
    title: str = ""
    excerpt: str = ""
    content: str = ""
    raw_content: str = ""
    author: str = ""
    date: str = ""
    tags: list[str] = field(default_factory=_default_tags)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "excerpt": self.excerpt,
            "content": self.content,
            "rawContent": self.raw_content,
            "author": self.author,
            "date": self.date,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Article:
        return cls(
            id=int(data["id"]),
            title=_as_text(data.get("title")),
            excerpt=_as_text(data.get("excerpt")),
            content=_as_text(data.get("content")),
            raw_content=_as_text(data.get("rawContent")),
            author=_as_text(data.get("author")),
            date=_as_text(data.get("date")),
            tags=_as_tags(data.get("tags")),
        )
