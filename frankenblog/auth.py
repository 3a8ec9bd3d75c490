"""
auth.py — Sesiones explícitas para el blog.

En vez de una bandera global "estoy autenticado", cada request obtiene
un objeto Session y lo pasa al workflow. El workflow nunca consulta
estado global: solo mira la sesión que recibe.

Un solo password compartido, sin usuarios ni roles.

Uso:
    store = SessionStore(password=config.blog_password)
    session = store.login("secreto")     # None si el password no coincide
    store.get(session.token)             # misma sesión
    store.logout(session.token)
"""

from __future__ import annotations

import hmac
import secrets
from dataclasses import dataclass

from frankenblog.content.errors import AuthenticationRequired
from frankenblog.utils.logger import get_logger

logger = get_logger("frankenblog.auth")


@dataclass(frozen=True)
class Session:
    """
    Sesión de un request.

    Attributes:
        authenticated: Si quien llama inició sesión.
        token: Identificador opaco (vacío para sesiones anónimas).
    """
    authenticated: bool = False
    token: str = ""

    @classmethod
    def anonymous(cls) -> Session:
        return cls(authenticated=False, token="")

    @classmethod
    def trusted(cls) -> Session:
        """Sesión autenticada para uso local (CLI, scripts)."""
        return cls(authenticated=True, token="local")

    def require(self, operation: str = "") -> None:
        """Lanza AuthenticationRequired si la sesión es anónima."""
        if not self.authenticated:
            raise AuthenticationRequired(operation)


class SessionStore:
    """
    Emite y recuerda sesiones en memoria.

    Los tokens viven mientras viva el proceso; reiniciar el servidor
    cierra todas las sesiones.

    Args:
        password: Password compartido del blog.
    """

    def __init__(self, password: str):
        self._password = password
        self._sessions: dict[str, Session] = {}

    def login(self, password: str | None) -> Session | None:
        """Crea una sesión autenticada si el password coincide."""
        candidato = (password or "").encode("utf-8")
        if not hmac.compare_digest(candidato, self._password.encode("utf-8")):
            logger.warning("Intento de login con password incorrecto")
            return None

        session = Session(authenticated=True, token=secrets.token_urlsafe(32))
        self._sessions[session.token] = session
        logger.info("Sesión iniciada")
        return session

    def get(self, token: str | None) -> Session:
        """Sesión asociada al token, o una anónima si no existe."""
        if not token:
            return Session.anonymous()
        return self._sessions.get(token, Session.anonymous())

    def logout(self, token: str | None) -> None:
        """Cierra la sesión; tokens desconocidos se ignoran."""
        if token and self._sessions.pop(token, None) is not None:
            logger.info("Sesión cerrada")
