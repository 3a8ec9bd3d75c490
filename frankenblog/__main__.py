"""
__main__.py — Permite ejecutar Frankenblog como módulo.

Esto hace posible ejecutar:
    python -m frankenblog serve --port 3000

En vez de tener que especificar el archivo:
    python frankenblog/cli.py serve --port 3000
"""

from frankenblog.cli import main

if __name__ == "__main__":
    main()
