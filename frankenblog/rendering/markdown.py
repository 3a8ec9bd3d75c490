"""
markdown.py — Convierte markdown ligero a HTML.

No es un parser de markdown completo: es una cadena ordenada de
reescrituras de texto, cada una una función pura. El orden importa
porque las etapas posteriores no deben volver a reconocer el HTML
que producen las anteriores:

    1. headers     ("# ", "## ", "### " al inicio de línea)
    2. bold        (**texto**)
    3. italic      (*texto*), siempre después de bold
    4. links       ([label](url))
    5. line break  (newline final → <br>)
    6. paragraphs  (bloques separados por líneas vacías → <p>)

Markup malformado se queda como texto literal; render() nunca falla.

Uso:
    from frankenblog.rendering.markdown import render
    html = render("# Hola\\n\\nEsto es **importante**.")
"""

from __future__ import annotations

import re
from typing import Callable

# ============================================================
# Patrones
# ============================================================

# Del prefijo más largo al más corto, para que "### " no lo capture la regla de "# "
_HEADER_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^### (.*)$", re.MULTILINE), r"<h3>\1</h3>"),
    (re.compile(r"^## (.*)$", re.MULTILINE), r"<h2>\1</h2>"),
    (re.compile(r"^# (.*)$", re.MULTILINE), r"<h1>\1</h1>"),
)

_LINE_ENDING = re.compile(r"\r\n?")
_BOLD = re.compile(r"\*\*(.*?)\*\*")
_ITALIC = re.compile(r"\*(.*?)\*")
_LINK = re.compile(r"\[([^\[]+)\]\(([^\)]+)\)")
_TRAILING_NEWLINE = re.compile(r"\n\Z")
_PARAGRAPH_BREAK = re.compile(r"\n\n+")
# Bloques que ya son HTML de bloque; los tags inline (<strong>, <a>...) sí se envuelven
_BLOCK_TAG = re.compile(
    r"</?(?:h[1-6]|p|div|ul|ol|li|blockquote|pre|table|hr|section|article|header|footer|nav|figure)\b",
    re.IGNORECASE,
)


# ============================================================
# Etapas
# ============================================================

def headers(text: str) -> str:
    """Líneas con 1-3 '#' seguidos de espacio → <h1>/<h2>/<h3>."""
    for pattern, replacement in _HEADER_RULES:
        text = pattern.sub(replacement, text)
    return text


def bold(text: str) -> str:
    """**texto** → <strong>texto</strong> (match no-greedy)."""
    return _BOLD.sub(r"<strong>\1</strong>", text)


def italic(text: str) -> str:
    """*texto* → <em>texto</em>. Asume que bold ya consumió los '**'."""
    return _ITALIC.sub(r"<em>\1</em>", text)


def links(text: str) -> str:
    """[label](url) → <a href="url">label</a>."""
    return _LINK.sub(r'<a href="\2">\1</a>', text)


def line_breaks(text: str) -> str:
    """El newline al final del texto → <br>."""
    return _TRAILING_NEWLINE.sub("<br>", text)


def paragraphs(text: str) -> str:
    """
    Separa en bloques por 2+ newlines y envuelve cada uno en <p>.

    Los bloques que ya empiezan con un tag de bloque (headers, por
    ejemplo) pasan sin envolver. Se vuelven a unir con un solo newline.
    """
    bloques = []
    for segment in _PARAGRAPH_BREAK.split(text):
        if _BLOCK_TAG.match(segment.strip()):
            bloques.append(segment)
        else:
            bloques.append(f"<p>{segment}</p>")
    return "\n".join(bloques)


# Orden de ejecución; cada etapa recibe la salida de la anterior
PIPELINE: tuple[Callable[[str], str], ...] = (
    headers,
    bold,
    italic,
    links,
    line_breaks,
    paragraphs,
)


def render(markup: str | None) -> str:
    """
    Convierte markdown ligero a HTML aplicando PIPELINE en orden.

    Args:
        markup: Texto markdown. None se trata como texto vacío.

    Returns:
        String HTML. Texto sin sintaxis reconocida queda en un solo <p>.

    Ejemplo:
        render("**bold** and *italic*")
        → "<p><strong>bold</strong> and <em>italic</em></p>"
    """
    # Los textarea de los formularios mandan CRLF
    html = _LINE_ENDING.sub("\n", markup or "")
    for stage in PIPELINE:
        html = stage(html)
    return html
