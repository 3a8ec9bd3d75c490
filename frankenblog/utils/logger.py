"""
logger.py — Logging para Frankenblog usando Rich + archivo.

Dual output:
- Rich console: colores y formato para uso interactivo (CLI, servidor)
- Archivo rotativo: logs/frankenblog.log para debugging post-mortem

Uso:
    from frankenblog.utils.logger import get_logger, console
    logger = get_logger("frankenblog.content")
    logger.info("Cargando drafts...")
    logger.success("Draft guardado")
    logger.error("No se pudo escribir articles.json")
"""

from __future__ import annotations

import io
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

# Fix para Windows: forzar encoding UTF-8 en stdout/stderr.
# NOTA: No aplicar si estamos en pytest (conflicto con capture system)
_in_pytest = "pytest" in sys.modules or "PYTEST_CURRENT_TEST" in os.environ
if sys.platform == "win32" and not _in_pytest:
    if hasattr(sys.stdout, "buffer"):
        sys.stdout = io.TextIOWrapper(
            sys.stdout.buffer, encoding="utf-8", errors="replace"
        )
    if hasattr(sys.stderr, "buffer"):
        sys.stderr = io.TextIOWrapper(
            sys.stderr.buffer, encoding="utf-8", errors="replace"
        )

# Tema del blog para la consola
blog_theme = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
})

# Consola global — se usa en todo el proyecto
console = Console(theme=blog_theme)

# ================================================================
# File logging setup
# ================================================================

_file_logger: logging.Logger | None = None


def _setup_file_logger() -> logging.Logger:
    """Configura el logger de archivo con rotacion."""
    global _file_logger
    if _file_logger is not None:
        return _file_logger

    # No crear logs en pytest
    if _in_pytest:
        _file_logger = logging.getLogger("frankenblog.null")
        _file_logger.addHandler(logging.NullHandler())
        return _file_logger

    log_dir = Path(os.environ.get("FRANKENBLOG_LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    _file_logger = logging.getLogger("frankenblog.file")
    _file_logger.setLevel(logging.DEBUG)

    # Evitar handlers duplicados
    if not _file_logger.handlers:
        handler = RotatingFileHandler(
            log_dir / "frankenblog.log",
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=5,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        _file_logger.addHandler(handler)

    return _file_logger


class BlogLogger:
    """
    Logger que usa Rich para la consola + archivo rotativo.

    Cada módulo crea su propio logger con un nombre para
    identificar de dónde viene cada mensaje.

    Args:
        name: Nombre del módulo (ej: "frankenblog.content")
    """

    def __init__(self, name: str):
        self._name = name
        self._file = _setup_file_logger()

    def info(self, message: str) -> None:
        """Mensaje informativo (cyan)."""
        console.print(f"[info]i  {escape(message)}[/info]", highlight=False)
        self._file.info(f"[{self._name}] {message}")

    def success(self, message: str) -> None:
        """Mensaje de éxito (verde)."""
        console.print(f"[success][OK] {escape(message)}[/success]", highlight=False)
        self._file.info(f"[{self._name}] OK: {message}")

    def warning(self, message: str) -> None:
        """Mensaje de advertencia (amarillo)."""
        console.print(f"[warning][!] {escape(message)}[/warning]", highlight=False)
        self._file.warning(f"[{self._name}] {message}")

    def error(self, message: str) -> None:
        """Mensaje de error (rojo)."""
        console.print(f"[error][X] {escape(message)}[/error]", highlight=False)
        self._file.error(f"[{self._name}] {message}")


def get_logger(name: str = "frankenblog") -> BlogLogger:
    """
    Obtiene un logger para el módulo especificado.

    Ejemplo:
        logger = get_logger("frankenblog.rendering")
        logger.info("Renderizando post...")
    """
    return BlogLogger(name)
