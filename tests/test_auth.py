"""
test_auth.py — Tests para sesiones explícitas.
"""

from __future__ import annotations

import pytest

from frankenblog.auth import Session, SessionStore
from frankenblog.content.errors import AuthenticationRequired


@pytest.fixture
def store():
    return SessionStore(password="secreto")


class TestSession:
    def test_anonima(self):
        session = Session.anonymous()
        assert not session.authenticated
        with pytest.raises(AuthenticationRequired):
            session.require("publicar")

    def test_mensaje_incluye_operacion(self):
        with pytest.raises(AuthenticationRequired, match="publicar"):
            Session.anonymous().require("publicar")

    def test_autenticada_no_lanza(self):
        Session(authenticated=True, token="t").require()

    def test_trusted(self):
        assert Session.trusted().authenticated


class TestSessionStore:
    def test_login_correcto(self, store):
        session = store.login("secreto")
        assert session is not None
        assert session.authenticated
        assert session.token

    def test_login_incorrecto(self, store):
        assert store.login("otro") is None
        assert store.login(None) is None

    def test_get_devuelve_la_sesion(self, store):
        session = store.login("secreto")
        assert store.get(session.token) == session

    def test_token_desconocido_es_anonimo(self, store):
        assert not store.get("inventado").authenticated
        assert not store.get(None).authenticated

    def test_logout(self, store):
        session = store.login("secreto")
        store.logout(session.token)
        assert not store.get(session.token).authenticated

    def test_logout_token_desconocido(self, store):
        store.logout("nada")

    def test_tokens_distintos_por_login(self, store):
        assert store.login("secreto").token != store.login("secreto").token
