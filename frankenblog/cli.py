"""
cli.py — Punto de entrada de Frankenblog.

Comandos disponibles:
    python -m frankenblog serve                → Levanta el servidor HTTP
    python -m frankenblog serve --port 8080    → En otro puerto
    python -m frankenblog render post.md       → Imprime el HTML de un markdown
    python -m frankenblog articles             → Lista artículos publicados
    python -m frankenblog drafts               → Lista drafts
    python -m frankenblog config --show        → Muestra configuración

Uso desde código (testing):
    from click.testing import CliRunner
    from frankenblog.cli import main
    CliRunner().invoke(main, ["render", "post.md"])
"""

from __future__ import annotations

import click
from rich.markup import escape
from rich.table import Table

from frankenblog import __version__
from frankenblog.auth import Session
from frankenblog.config import DEFAULT_PASSWORD, load_config
from frankenblog.content.repository import JsonFileRepository
from frankenblog.content.workflow import PublishingWorkflow
from frankenblog.rendering.markdown import render
from frankenblog.utils.logger import console as rich_console, get_logger

logger = get_logger("frankenblog.cli")


@click.group()
@click.version_option(version=__version__, prog_name="Frankenblog")
def main():
    """Frankenblog — drafts, artículos y markdown → HTML."""
    pass


@main.command()
@click.option("--host", default=None, help="Host (default: server.host de config)")
@click.option("--port", "-p", type=int, default=None, help="Puerto (default: 3000 o $PORT)")
def serve(host: str | None, port: int | None):
    """Levanta el servidor HTTP del blog."""
    import uvicorn

    from frankenblog.api import create_app

    cfg = load_config()
    host = host or cfg.server.host
    port = port or cfg.server.port

    if cfg.blog_password == DEFAULT_PASSWORD:
        logger.warning("BLOG_PASSWORD no configurado, usando el password por defecto")

    logger.info(f"{cfg.blog.name} corriendo en el puerto {port}")
    uvicorn.run(create_app(cfg), host=host, port=port)


@main.command(name="render")
@click.argument("source", type=click.File("r", encoding="utf-8"))
def render_command(source):
    """Convierte un archivo markdown a HTML ("-" lee de stdin)."""
    click.echo(render(source.read()))


@main.command()
def articles():
    """Lista los artículos publicados."""
    cfg = load_config()
    workflow = PublishingWorkflow(JsonFileRepository(cfg.data_path), cfg)

    tabla = Table(title="Artículos")
    tabla.add_column("ID", style="cyan", justify="right")
    tabla.add_column("Título", style="green")
    tabla.add_column("Autor")
    tabla.add_column("Fecha")
    tabla.add_column("Tags")

    for article in workflow.list_articles():
        tabla.add_row(
            str(article.id),
            escape(article.title) or "(sin título)",
            escape(article.author),
            article.date,
            ", ".join(article.tags),
        )

    rich_console.print(tabla)


@main.command()
def drafts():
    """Lista los drafts guardados."""
    cfg = load_config()
    workflow = PublishingWorkflow(JsonFileRepository(cfg.data_path), cfg)

    tabla = Table(title="Drafts")
    tabla.add_column("ID", style="cyan", justify="right")
    tabla.add_column("Título", style="green")
    tabla.add_column("Autor")
    tabla.add_column("Último guardado")
    tabla.add_column("Tags")

    # La CLI corre en la máquina del autor: sesión local de confianza
    for draft in workflow.list_drafts(Session.trusted()):
        tabla.add_row(
            str(draft.id),
            escape(draft.title),
            escape(draft.author),
            draft.last_saved,
            ", ".join(draft.tags),
        )

    rich_console.print(tabla)


@main.command()
@click.option("--show", is_flag=True, help="Muestra la configuración actual")
def config(show: bool):
    """Gestiona la configuración del blog."""
    cfg = load_config()

    if not show:
        click.echo(click.get_current_context().get_help())
        return

    tabla = Table(title="Configuración de Frankenblog")
    tabla.add_column("Parámetro", style="cyan")
    tabla.add_column("Valor", style="green")

    tabla.add_row("Nombre", cfg.blog.name)
    tabla.add_row("Directorio de datos", str(cfg.data_path))
    tabla.add_row("Autor por defecto", cfg.blog.default_author)
    tabla.add_row("Tag por defecto", cfg.blog.default_tag)
    tabla.add_row("Servidor", f"{cfg.server.host}:{cfg.server.port}")
    tabla.add_row(
        "Password",
        "Por defecto (cambiar)" if cfg.blog_password == DEFAULT_PASSWORD else "Configurado",
    )

    rich_console.print(tabla)


if __name__ == "__main__":
    main()
