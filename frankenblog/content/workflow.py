"""
workflow.py — Flujo de publicación: drafts → artículos.

Orquesta todo lo que pasa cuando el autor guarda o publica:

    normalizar input → renderizar markdown → fusionar con la entidad
    existente o crear una nueva → guardar colecciones → devolver el id

Operaciones:
    save_draft()    → crea o reemplaza un draft
    publish_post()  → crea o actualiza un artículo (y borra el draft origen)
    delete_draft()  → borra un draft (id inexistente = no-op)
    delete_post()   → borra un artículo (id inexistente = no-op)

Comportamientos que parecen bugs pero son intencionales:
    - Actualizar un artículo con un id que no existe crea uno NUEVO
      con id fresco (no es error).
    - Borrar un id inexistente no falla; la colección se reescribe igual.

Cada operación hace load → modificar → save completo sin locks
(ver repository.py para la limitación de lost updates).

Uso:
    workflow = PublishingWorkflow(JsonFileRepository("data"))
    data = PostInput.from_form({"title": "Hola", "content": "# Hola"})
    post_id = workflow.publish_post(session, data)
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping

from frankenblog.auth import Session
from frankenblog.config import AppConfig
from frankenblog.content.models import DEFAULT_TAG, Article, Draft
from frankenblog.content.repository import (
    CollectionKind,
    ContentRepository,
    next_id,
)
from frankenblog.rendering.markdown import render
from frankenblog.utils.logger import get_logger

logger = get_logger("frankenblog.content.workflow")


# ============================================================
# Input
# ============================================================

def _clean(value: Any) -> str | None:
    """String vacío y ausencia significan lo mismo: sin valor."""
    if value is None:
        return None
    text = str(value)
    return text if text != "" else None


def parse_id(value: Any) -> int | None:
    """
    Convierte un id que viene del formulario a int.

    Ids vacíos o no numéricos se tratan como "no proporcionado".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


@dataclass(frozen=True)
class PostInput:
    """
    Datos que llegan del editor. Todos los campos son opcionales.

    Attributes:
        title, excerpt, content, author: Texto libre (content en markdown).
        tags: Tags separados por coma ("ai, python").
        draft_id: Draft del que viene el contenido.
        post_id: Artículo que se está editando.
    """
    title: str | None = None
    excerpt: str | None = None
    content: str | None = None
    author: str | None = None
    tags: str | None = None
    draft_id: int | None = None
    post_id: int | None = None

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> PostInput:
        """Construye el input desde un mapa libre (form HTTP, dict, etc.)."""
        return cls(
            title=_clean(form.get("title")),
            excerpt=_clean(form.get("excerpt")),
            content=_clean(form.get("content")),
            author=_clean(form.get("author")),
            tags=_clean(form.get("tags")),
            draft_id=parse_id(_clean(form.get("draftId"))),
            post_id=parse_id(_clean(form.get("postId"))),
        )


def normalize_tags(raw: str | None, default: str = DEFAULT_TAG) -> list[str]:
    """
    Convierte "a, b ,, c" en ["a", "b", "c"].

    Si no queda ningún tag (input vacío, ausente o solo comas),
    devuelve [default].
    """
    if not raw:
        return [default]
    tags = [tag.strip() for tag in raw.split(",")]
    tags = [tag for tag in tags if tag]
    return tags or [default]


def format_timestamp(moment: datetime) -> str:
    """Timestamp legible: '10/19/2026, 9:15:02 AM'."""
    hora = moment.hour % 12 or 12
    return (
        f"{moment.month}/{moment.day}/{moment.year}, "
        f"{hora}:{moment:%M:%S} {'AM' if moment.hour < 12 else 'PM'}"
    )


def _first_id(*candidates: int | None) -> int | None:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


# ============================================================
# Workflow
# ============================================================

class PublishingWorkflow:
    """
    Orquesta drafts y artículos sobre un ContentRepository.

    Args:
        repository: Persistencia de las dos colecciones.
        config: Defaults del blog (autor, tag, título de drafts).
        clock: Fuente de la hora actual (inyectable para tests).
    """

    def __init__(
        self,
        repository: ContentRepository,
        config: AppConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._repo = repository
        self._config = config or AppConfig()
        self._clock = clock or datetime.now

    @property
    def repository(self) -> ContentRepository:
        return self._repo

    def _tags(self, raw: str | None) -> list[str]:
        return normalize_tags(raw, self._config.blog.default_tag)

    # --------------------------------------------------------
    # Lectura
    # --------------------------------------------------------

    def list_articles(self) -> list[Article]:
        """Artículos publicados (públicos, no requieren sesión)."""
        return self._repo.load_all(CollectionKind.ARTICLES)

    def get_article(self, post_id: int) -> Article | None:
        for article in self.list_articles():
            if article.id == post_id:
                return article
        return None

    def list_drafts(self, session: Session) -> list[Draft]:
        session.require("ver drafts")
        return self._repo.load_all(CollectionKind.DRAFTS)

    def get_draft(self, session: Session, draft_id: int) -> Draft | None:
        for draft in self.list_drafts(session):
            if draft.id == draft_id:
                return draft
        return None

    # --------------------------------------------------------
    # Drafts
    # --------------------------------------------------------

    def save_draft(
        self,
        session: Session,
        data: PostInput,
        existing_draft_id: int | None = None,
    ) -> int:
        """
        Crea o reemplaza un draft.

        Si el id (explícito o data.draft_id) ya existe, el draft se
        reemplaza completo en su misma posición; si no, se agrega al final.

        Returns:
            Id del draft guardado.
        """
        session.require("guardar drafts")
        drafts = self._repo.load_all(CollectionKind.DRAFTS)

        tags = self._tags(data.tags)
        draft_id = _first_id(existing_draft_id, data.draft_id)
        if draft_id is None:
            draft_id = next_id(drafts)

        now = self._clock()
        blog = self._config.blog
        draft = Draft(
            id=draft_id,
            title=data.title or blog.untitled_draft,
            excerpt=data.excerpt or "",
            content=data.content or "",
            author=data.author or blog.default_author,
            date=now.date().isoformat(),
            tags=tags,
            last_saved=format_timestamp(now),
        )

        for index, existing in enumerate(drafts):
            if existing.id == draft_id:
                drafts[index] = draft
                break
        else:
            drafts.append(draft)

        self._repo.save_all(CollectionKind.DRAFTS, drafts)
        logger.success(f"Draft {draft_id} guardado: {draft.title}")
        return draft_id

    def delete_draft(self, session: Session, draft_id: int) -> None:
        """Borra un draft. Un id inexistente no es error."""
        session.require("borrar drafts")
        drafts = self._repo.load_all(CollectionKind.DRAFTS)
        restantes = [d for d in drafts if d.id != draft_id]
        self._repo.save_all(CollectionKind.DRAFTS, restantes)
        if len(restantes) < len(drafts):
            logger.info(f"Draft {draft_id} eliminado")

    # --------------------------------------------------------
    # Artículos
    # --------------------------------------------------------

    def publish_post(
        self,
        session: Session,
        data: PostInput,
        existing_post_id: int | None = None,
        source_draft_id: int | None = None,
    ) -> int:
        """
        Publica un artículo nuevo o actualiza uno existente.

        Actualización (el id existe): cada campo de texto usa el valor
        nuevo solo si no está vacío; content/raw_content se conservan
        como par si no llegó contenido; la fecha se refresca y los tags
        SIEMPRE se reemplazan.

        Creación (sin id, o id inexistente): artículo nuevo con id fresco
        y los campos tal como llegaron.

        Si hay draft de origen, se elimina después de guardar el artículo.

        Returns:
            Id del artículo resultante.
        """
        session.require("publicar")
        articles = self._repo.load_all(CollectionKind.ARTICLES)
        drafts = self._repo.load_all(CollectionKind.DRAFTS)

        tags = self._tags(data.tags)
        raw_content = data.content or ""
        content_html = render(raw_content) if raw_content else ""
        today = self._clock().date().isoformat()

        post_id = _first_id(existing_post_id, data.post_id)
        article = None
        if post_id is not None:
            for index, previo in enumerate(articles):
                if previo.id == post_id:
                    article = dataclasses.replace(
                        previo,
                        title=data.title or previo.title,
                        excerpt=data.excerpt or previo.excerpt,
                        content=content_html or previo.content,
                        raw_content=raw_content or previo.raw_content or "",
                        author=data.author or previo.author,
                        date=today,
                        tags=tags,
                    )
                    articles[index] = article
                    logger.info(f"Actualizando artículo {post_id}")
                    break
            else:
                logger.warning(
                    f"Artículo {post_id} no existe, se publicará como nuevo"
                )

        if article is None:
            article = Article(
                id=next_id(articles),
                title=data.title or "",
                excerpt=data.excerpt or "",
                content=content_html,
                raw_content=raw_content,
                author=data.author or "",
                date=today,
                tags=tags,
            )
            articles.append(article)

        self._repo.save_all(CollectionKind.ARTICLES, articles)

        draft_id = _first_id(source_draft_id, data.draft_id)
        if draft_id is not None:
            restantes = [d for d in drafts if d.id != draft_id]
            self._repo.save_all(CollectionKind.DRAFTS, restantes)

        logger.success(f"Artículo {article.id} publicado: {article.title}")
        return article.id

    def delete_post(self, session: Session, post_id: int) -> None:
        """Borra un artículo. Un id inexistente no es error."""
        session.require("borrar artículos")
        articles = self._repo.load_all(CollectionKind.ARTICLES)
        restantes = [a for a in articles if a.id != post_id]
        self._repo.save_all(CollectionKind.ARTICLES, restantes)
        if len(restantes) < len(articles):
            logger.info(f"Artículo {post_id} eliminado")
