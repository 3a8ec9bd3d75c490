"""
repository.py — Persistencia de las dos colecciones del blog.

El repositorio es el único que lee y escribe los stores. Expone un
contrato mínimo para que el workflow no sepa cómo se guardan las cosas:

    load_all(kind)            → lista de entidades (nunca falla)
    save_all(kind, entities)  → reemplaza el documento completo

Políticas de error:
- Lectura: store ausente o corrupto → se registra en el log y se
  devuelve una colección vacía. Preferimos mostrar "sin contenido"
  a tumbar la página.
- Escritura: cualquier OSError o texto no codificable se propaga como
  StorageWriteError. Perder un publish en silencio no es aceptable.
  Se escribe a un temporal y se reemplaza el archivo al final, así
  un save fallido deja intacto el documento anterior.

Limitación conocida:
    No hay locks ni transacciones. Cada operación del workflow hace
    load → modificar en memoria → save completo; dos operaciones
    simultáneas sobre la misma colección pueden pisarse y el último
    save_all gana (lost update). Se asume un solo editor.

Uso:
    from frankenblog.content.repository import JsonFileRepository, CollectionKind
    repo = JsonFileRepository("data")
    drafts = repo.load_all(CollectionKind.DRAFTS)
"""

from __future__ import annotations

import copy
import json
import os
import tempfile
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Iterable, Sequence, Union

from frankenblog.content.errors import StorageWriteError
from frankenblog.content.models import Article, Draft
from frankenblog.utils.logger import get_logger

logger = get_logger("frankenblog.content.repository")

Entity = Union[Draft, Article]


class CollectionKind(Enum):
    """Las dos colecciones durables del blog."""
    DRAFTS = "drafts"
    ARTICLES = "articles"

    @property
    def model(self) -> type:
        return Draft if self is CollectionKind.DRAFTS else Article

    @property
    def filename(self) -> str:
        return f"{self.value}.json"


def next_id(entities: Iterable[Entity]) -> int:
    """
    Siguiente id disponible: max(ids) + 1, o 1 si la colección está vacía.

    Ejemplo:
        next_id([])          → 1
        ids {1, 3, 5}        → 6
    """
    return max((e.id for e in entities), default=0) + 1


class ContentRepository(ABC):
    """
    Interfaz de persistencia.

    Una implementación transaccional o con locks puede reemplazar a
    JsonFileRepository sin tocar el workflow.
    """

    @abstractmethod
    def load_all(self, kind: CollectionKind) -> list:
        """Lee la colección completa. Nunca lanza excepciones."""
        ...

    @abstractmethod
    def save_all(self, kind: CollectionKind, entities: Sequence[Entity]) -> None:
        """Sobrescribe la colección completa. Lanza StorageWriteError si falla."""
        ...


class JsonFileRepository(ContentRepository):
    """
    Guarda cada colección en un archivo JSON con formato legible.

    Args:
        data_dir: Directorio donde viven drafts.json y articles.json.
    """

    def __init__(self, data_dir: str | Path):
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, kind: CollectionKind) -> Path:
        return self._data_dir / kind.filename

    def load_all(self, kind: CollectionKind) -> list:
        path = self.path_for(kind)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.warning(f"No existe {path}, usando colección vacía")
            return []
        except (OSError, ValueError, RecursionError) as e:
            # ValueError cubre JSONDecodeError, UnicodeDecodeError y el límite de dígitos
            logger.error(f"Error leyendo {kind.value} ({path}): {e}")
            return []

        if not isinstance(raw, list):
            logger.error(
                f"Error leyendo {kind.value} ({path}): se esperaba una lista, "
                f"se encontró {type(raw).__name__}"
            )
            return []

        return _parse_entities(kind, raw)

    def save_all(self, kind: CollectionKind, entities: Sequence[Entity]) -> None:
        path = self.path_for(kind)
        tmp_name: str | None = None
        try:
            # Codificar antes de tocar disco: un surrogate suelto falla aquí
            documento = json.dumps(
                [e.to_dict() for e in entities], indent=2, ensure_ascii=False
            ).encode("utf-8")
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._data_dir, prefix=f".{kind.value}-", suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as f:
                f.write(documento)
            os.replace(tmp_name, path)
        except (OSError, ValueError) as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            logger.error(f"Error guardando {kind.value} en {path}: {e}")
            raise StorageWriteError(kind.value, str(path), str(e)) from e


class InMemoryRepository(ContentRepository):
    """
    Repositorio en memoria con el mismo contrato.

    Guarda copias para que mutar una entidad cargada no cambie
    el "store" sin pasar por save_all.
    """

    def __init__(self) -> None:
        self._stores: dict[CollectionKind, list] = {
            CollectionKind.DRAFTS: [],
            CollectionKind.ARTICLES: [],
        }

    def load_all(self, kind: CollectionKind) -> list:
        return copy.deepcopy(self._stores[kind])

    def save_all(self, kind: CollectionKind, entities: Sequence[Entity]) -> None:
        self._stores[kind] = copy.deepcopy(list(entities))


def _parse_entities(kind: CollectionKind, raw: list) -> list:
    """Convierte dicts a entidades, saltando entradas sin id válido."""
    entidades = []
    for index, item in enumerate(raw):
        try:
            entidades.append(kind.model.from_dict(item))
        except (
            KeyError, TypeError, ValueError, AttributeError, OverflowError
        ) as e:
            logger.warning(f"Entrada {index} de {kind.value} ignorada: {e!r}")
    return entidades
