"""
test_cli.py — Tests para los comandos de la CLI.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from frankenblog.cli import main
from frankenblog.config import AppConfig, BlogConfig
from frankenblog.content.models import Article, Draft
from frankenblog.content.repository import CollectionKind, JsonFileRepository


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config(tmp_path):
    return AppConfig(blog=BlogConfig(data_dir=str(tmp_path / "data")))


class TestRender:
    def test_render_archivo(self, runner, tmp_path):
        fuente = tmp_path / "post.md"
        fuente.write_text("# Hola\n\n**mundo**", encoding="utf-8")

        result = runner.invoke(main, ["render", str(fuente)])

        assert result.exit_code == 0
        assert "<h1>Hola</h1>\n<p><strong>mundo</strong></p>" in result.output

    def test_render_stdin(self, runner):
        result = runner.invoke(main, ["render", "-"], input="*x*")
        assert result.exit_code == 0
        assert "<p><em>x</em></p>" in result.output


class TestListados:
    def test_articles(self, runner, config):
        JsonFileRepository(config.data_path).save_all(
            CollectionKind.ARTICLES, [Article(id=1, title="Publicado")]
        )
        with patch("frankenblog.cli.load_config", return_value=config):
            result = runner.invoke(main, ["articles"])

        assert result.exit_code == 0
        assert "Publicado" in result.output

    def test_drafts(self, runner, config):
        JsonFileRepository(config.data_path).save_all(
            CollectionKind.DRAFTS, [Draft(id=1, title="Borrador")]
        )
        with patch("frankenblog.cli.load_config", return_value=config):
            result = runner.invoke(main, ["drafts"])

        assert result.exit_code == 0
        assert "Borrador" in result.output

    def test_store_vacio(self, runner, config):
        with patch("frankenblog.cli.load_config", return_value=config):
            result = runner.invoke(main, ["articles"])
        assert result.exit_code == 0


class TestConfig:
    def test_show(self, runner, config):
        with patch("frankenblog.cli.load_config", return_value=config):
            result = runner.invoke(main, ["config", "--show"])
        assert result.exit_code == 0
        assert "Mustjaab" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert "1.0.0" in result.output
