"""
Frankenblog — Motor minimo de publicacion de contenido.

Este paquete contiene todo el codigo del blog:
- rendering/  → Conversion de markdown ligero a HTML
- content/    → Drafts, articulos, repositorio y flujo de publicacion
- auth.py     → Sesiones explicitas (login/logout)
- api.py      → Servidor FastAPI con las rutas del blog
- utils/      → Utilidades compartidas (logger)

Uso:
    python -m frankenblog serve
    python -m frankenblog render post.md
    python -m frankenblog drafts
"""

__version__ = "1.0.0"
__author__ = "Mustjaab"
