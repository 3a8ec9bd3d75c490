"""
config.py — Carga y gestiona la configuración de Frankenblog.

Se encarga de:
1. Cargar config.yaml (configuración general)
2. Cargar .env (secretos: password del blog)
3. Resolver variables de entorno en los valores de config
4. Aplicar overrides del entorno (PORT, BLOG_PASSWORD)

¿Por qué separar config.yaml de .env?
    - config.yaml: Valores que SÍ se suben a Git (nombre, rutas, defaults)
    - .env: Valores que NUNCA se suben a Git (BLOG_PASSWORD)

Uso:
    from frankenblog.config import load_config
    config = load_config()
    print(config.blog.data_dir)  # "data"
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

DEFAULT_PASSWORD = "change-in-production"


# ============================================================
# Dataclasses de configuración
# ============================================================
# Cada sección de config.yaml tiene su propia dataclass.
# ============================================================

@dataclass
class BlogConfig:
    """Configuración del contenido del blog."""
    name: str = "Frankenstein blog"
    data_dir: str = "data"
    default_author: str = "Mustjaab"
    default_tag: str = "Uncategorized"
    untitled_draft: str = "Untitled Draft"


@dataclass
class ServerConfig:
    """Configuración del servidor HTTP."""
    host: str = "0.0.0.0"
    port: int = 3000


@dataclass
class AppConfig:
    """Configuración completa de la aplicación."""
    blog: BlogConfig = field(default_factory=BlogConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    # Valores del .env (no están en config.yaml)
    blog_password: str = DEFAULT_PASSWORD

    @property
    def data_path(self) -> Path:
        """Directorio donde viven drafts.json y articles.json."""
        return Path(self.blog.data_dir)


# ============================================================
# Funciones de carga
# ============================================================

def _resolve_env_vars(value: str) -> str:
    """
    Resuelve variables de entorno en un string.

    Ejemplo:
        "${BLOG_DATA_DIR}" → "/srv/blog/data"

    Si la variable no existe se deja el placeholder tal cual.
    """
    patron = re.compile(r"\$\{(\w+)\}")

    def reemplazar(match: re.Match) -> str:
        nombre_var = match.group(1)
        return os.environ.get(nombre_var, match.group(0))

    return patron.sub(reemplazar, value)


def _resolve_env_recursive(data: Any) -> Any:
    """Resuelve variables de entorno recursivamente en un dict/list."""
    if isinstance(data, str):
        return _resolve_env_vars(data)
    elif isinstance(data, dict):
        return {k: _resolve_env_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_recursive(item) for item in data]
    return data


def _dict_to_dataclass(data: dict, cls: type) -> Any:
    """
    Convierte un diccionario a una dataclass, ignorando keys desconocidas.

    El YAML podría tener keys que no existen en la dataclass;
    en vez de explotar, simplemente se ignoran.
    """
    campos_validos = {f.name for f in cls.__dataclass_fields__.values()}
    datos_filtrados = {k: v for k, v in data.items() if k in campos_validos}
    return cls(**datos_filtrados)


def _find_config_dir() -> Path:
    """
    Encuentra el directorio raíz del proyecto (donde está config.yaml).

    Busca hacia arriba desde el directorio actual. Si no lo encuentra,
    usa el directorio actual.
    """
    current = Path.cwd()
    for parent in [current] + list(current.parents):
        if (parent / "config.yaml").exists():
            return parent
    return current


def load_config(config_path: Path | None = None) -> AppConfig:
    """
    Carga la configuración completa de Frankenblog.

    Pasos:
    1. Carga .env para tener las variables de entorno disponibles
    2. Lee config.yaml
    3. Resuelve ${VARIABLES} en los valores del YAML
    4. Convierte cada sección a su dataclass correspondiente
    5. Aplica los valores del entorno (BLOG_PASSWORD, PORT)

    Args:
        config_path: Ruta al config.yaml. Si es None, busca automáticamente.

    Returns:
        AppConfig con toda la configuración lista para usar.
    """
    # Paso 1: Cargar .env
    proyecto_dir = _find_config_dir()
    env_path = proyecto_dir / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    # Paso 2: Leer config.yaml
    if config_path is None:
        config_path = proyecto_dir / "config.yaml"

    raw_config: dict = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}

    # Paso 3: Resolver variables de entorno
    config_resuelto = _resolve_env_recursive(raw_config)

    # Paso 4: Convertir cada sección a su dataclass
    app_config = AppConfig(
        blog=_dict_to_dataclass(config_resuelto.get("blog", {}), BlogConfig),
        server=_dict_to_dataclass(config_resuelto.get("server", {}), ServerConfig),
    )

    # Paso 5: Valores del entorno
    app_config.blog_password = os.environ.get("BLOG_PASSWORD", DEFAULT_PASSWORD)
    if os.environ.get("PORT"):
        app_config.server.port = int(os.environ["PORT"])
    if os.environ.get("BLOG_DATA_DIR"):
        app_config.blog.data_dir = os.environ["BLOG_DATA_DIR"]

    return app_config
