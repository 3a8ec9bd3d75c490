"""
test_markdown.py — Tests para el renderer de markdown ligero.

Verificamos que:
1. Cada etapa del pipeline hace solo su transformación
2. El orden de las etapas es el correcto (bold antes que italic)
3. render() combina todo y nunca falla con markup malformado
"""

from __future__ import annotations

import pytest

from frankenblog.rendering.markdown import (
    PIPELINE,
    bold,
    headers,
    italic,
    line_breaks,
    links,
    paragraphs,
    render,
)


# ================================================================
# Etapas individuales
# ================================================================

class TestHeaders:
    @pytest.mark.parametrize("markup, esperado", [
        ("# Title", "<h1>Title</h1>"),
        ("## Title", "<h2>Title</h2>"),
        ("### Title", "<h3>Title</h3>"),
    ])
    def test_niveles(self, markup, esperado):
        assert headers(markup) == esperado

    def test_triple_hash_no_cae_en_h1(self):
        """### se evalúa antes que #."""
        assert headers("### Deep") == "<h3>Deep</h3>"

    def test_requiere_espacio(self):
        assert headers("#NoSpace") == "#NoSpace"

    def test_solo_al_inicio_de_linea(self):
        assert headers("texto # no header") == "texto # no header"

    def test_multilinea(self):
        resultado = headers("# Uno\ntexto\n## Dos")
        assert resultado == "<h1>Uno</h1>\ntexto\n<h2>Dos</h2>"

    def test_cuatro_hashes_no_es_header(self):
        assert headers("#### Cuatro") == "#### Cuatro"


class TestBold:
    def test_basico(self):
        assert bold("**bold**") == "<strong>bold</strong>"

    def test_no_greedy(self):
        assert bold("**a** y **b**") == "<strong>a</strong> y <strong>b</strong>"

    def test_sin_cerrar_queda_literal(self):
        assert bold("**abierto") == "**abierto"


class TestItalic:
    def test_basico(self):
        assert italic("*italic*") == "<em>italic</em>"

    def test_asterisco_suelto_queda_literal(self):
        assert italic("2 * 3") == "2 * 3"

    def test_no_greedy(self):
        assert italic("*a* b *c*") == "<em>a</em> b <em>c</em>"


class TestLinks:
    def test_basico(self):
        assert links("[x](http://y)") == '<a href="http://y">x</a>'

    def test_dentro_de_texto(self):
        resultado = links("ver [docs](https://example.com/a) aquí")
        assert resultado == 'ver <a href="https://example.com/a">docs</a> aquí'

    def test_label_vacio_no_es_link(self):
        assert links("[](http://y)") == "[](http://y)"


class TestLineBreaks:
    def test_newline_final(self):
        assert line_breaks("hola\n") == "hola<br>"

    def test_solo_el_ultimo_newline(self):
        assert line_breaks("a\nb\n") == "a\nb<br>"

    def test_sin_newline_final(self):
        assert line_breaks("a\nb") == "a\nb"


class TestParagraphs:
    def test_texto_plano(self):
        assert paragraphs("hola") == "<p>hola</p>"

    def test_varios_bloques(self):
        assert paragraphs("uno\n\ndos") == "<p>uno</p>\n<p>dos</p>"

    def test_tres_newlines_son_un_solo_corte(self):
        assert paragraphs("uno\n\n\ndos") == "<p>uno</p>\n<p>dos</p>"

    def test_bloque_html_pasa_sin_envolver(self):
        assert paragraphs("<h1>T</h1>\n\ntexto") == "<h1>T</h1>\n<p>texto</p>"

    def test_bloque_con_espacios_antes_de_tag(self):
        assert paragraphs("  <h2>T</h2>") == "  <h2>T</h2>"

    def test_newline_simple_no_separa(self):
        assert paragraphs("a\nb") == "<p>a\nb</p>"

    def test_tag_inline_si_se_envuelve(self):
        assert paragraphs("<strong>x</strong> y") == "<p><strong>x</strong> y</p>"

    def test_parrafo_html_existente_pasa(self):
        assert paragraphs("<p>ya</p>") == "<p>ya</p>"


# ================================================================
# render() completo
# ================================================================

class TestRender:
    def test_pipeline_en_orden(self):
        assert PIPELINE == (headers, bold, italic, links, line_breaks, paragraphs)

    @pytest.mark.parametrize("texto", [
        "hola mundo",
        "sin sintaxis\ncon dos lineas",
        "numeros 1 2 3 y simbolos !?",
    ])
    def test_texto_sin_sintaxis_es_un_parrafo(self, texto):
        assert render(texto) == f"<p>{texto}</p>"

    def test_header_no_se_envuelve(self):
        assert render("# Title") == "<h1>Title</h1>"

    def test_bold_e_italic_en_un_parrafo(self):
        assert render("**bold** and *italic*") == (
            "<p><strong>bold</strong> and <em>italic</em></p>"
        )

    def test_link(self):
        assert render("[x](http://y)") == '<p><a href="http://y">x</a></p>'

    def test_documento_completo(self):
        markup = "# Hola\n\nEsto es **importante**.\n\nVer [link](http://a.b)\n"
        esperado = (
            "<h1>Hola</h1>\n"
            "<p>Esto es <strong>importante</strong>.</p>\n"
            '<p>Ver <a href="http://a.b">link</a><br></p>'
        )
        assert render(markup) == esperado

    def test_bold_no_se_fragmenta_por_italic(self):
        assert "<strong>fuerte</strong>" in render("**fuerte**")
        assert "<em>" not in render("**fuerte**")

    def test_asteriscos_desbalanceados_no_fallan(self):
        assert render("a * b") == "<p>a * b</p>"

    def test_header_sin_espacio_es_parrafo(self):
        assert render("#NoSpace") == "<p>#NoSpace</p>"

    def test_vacio(self):
        assert render("") == "<p></p>"

    def test_none(self):
        assert render(None) == "<p></p>"

    def test_saltos_crlf_del_formulario(self):
        assert render("# Title\r\n\r\nBody") == "<h1>Title</h1>\n<p>Body</p>"

    def test_saltos_cr_solos(self):
        assert render("uno\r\rdos\r") == "<p>uno</p>\n<p>dos<br></p>"

    def test_determinista(self):
        markup = "## A\n\n*b* **c**"
        assert render(markup) == render(markup)
