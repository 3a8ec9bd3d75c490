"""
rendering/ — Conversión de markdown ligero a HTML.

Módulos:
- markdown.py → Pipeline ordenado de etapas puras (headers, bold, italic, links...)
"""
