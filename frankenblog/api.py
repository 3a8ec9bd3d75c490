"""
api.py — Servidor FastAPI del blog.

Capa delgada sobre el workflow: lee el form, obtiene la sesión de la
cookie y decide a dónde redirigir. Toda la lógica vive en
content/workflow.py.

Endpoints:
    GET  /                  — Artículos publicados
    GET  /post/{id}         — Un artículo
    GET  /edit-post/{id}    — Artículo para precargar el editor
    GET  /login             — Estado del login (error=1 si falló)
    POST /login             — Inicia sesión (form: password)
    GET  /logout            — Cierra sesión
    GET  /drafts            — Lista de drafts
    GET  /new-post          — Editor vacío o con ?draft=N
    POST /save-draft        — Guarda draft → /drafts?saved=1
    POST /save-post         — Publica o actualiza → /post/{id}
    POST /delete-draft/{id} — Borra draft → /drafts
    POST /delete-post/{id}  — Borra artículo → /
    GET  /health            — Health check

Rutas protegidas sin sesión redirigen a /login. Si un store no se
puede escribir, la respuesta es 500 con el error (nunca se ignora).

Uso:
    python -m frankenblog serve
    python -m frankenblog serve --port 8080
"""

from __future__ import annotations

import time
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from frankenblog.auth import Session, SessionStore
from frankenblog.config import AppConfig, load_config
from frankenblog.content.errors import AuthenticationRequired, StorageWriteError
from frankenblog.content.repository import ContentRepository, JsonFileRepository
from frankenblog.content.workflow import PostInput, PublishingWorkflow, parse_id
from frankenblog.utils.logger import get_logger

logger = get_logger("frankenblog.api")

SESSION_COOKIE = "session"

# ================================================================
# App factory
# ================================================================

_start_time: float = 0.0


def create_app(
    config: AppConfig | None = None,
    repository: ContentRepository | None = None,
) -> FastAPI:
    """
    Crea la app FastAPI del blog.

    Args:
        config: Configuración (si es None se carga de config.yaml/.env).
        repository: Persistencia; por defecto JSON en config.blog.data_dir.

    Returns:
        FastAPI app lista para servir.
    """
    global _start_time
    _start_time = time.time()

    config = config or load_config()
    repository = repository or JsonFileRepository(config.data_path)

    app = FastAPI(
        title=config.blog.name,
        description="Drafts, artículos y markdown → HTML",
        version="1.0.0",
    )

    app.state.config = config
    app.state.workflow = PublishingWorkflow(repository, config)
    app.state.sessions = SessionStore(config.blog_password)

    _register_error_handlers(app)
    _register_routes(app)

    return app


def _session(request: Request) -> Session:
    store: SessionStore = request.app.state.sessions
    return store.get(request.cookies.get(SESSION_COOKIE))


def _redirect(url: str) -> RedirectResponse:
    # 303 para que el navegador siga con GET después de un POST
    return RedirectResponse(url=url, status_code=303)


# ================================================================
# Errores
# ================================================================


def _register_error_handlers(app: FastAPI) -> None:
    """Traduce excepciones del dominio a respuestas HTTP."""

    @app.exception_handler(AuthenticationRequired)
    async def auth_required(request: Request, exc: AuthenticationRequired):
        return _redirect("/login")

    @app.exception_handler(StorageWriteError)
    async def storage_write_failed(request: Request, exc: StorageWriteError):
        logger.error(f"{request.method} {request.url.path}: {exc}")
        return JSONResponse(
            content={"error": str(exc), "collection": exc.kind},
            status_code=500,
        )


# ================================================================
# Routes
# ================================================================


def _register_routes(app: FastAPI) -> None:
    """Registra todos los endpoints."""

    workflow: PublishingWorkflow = app.state.workflow
    sessions: SessionStore = app.state.sessions

    @app.get("/")
    async def index(request: Request):
        """Artículos publicados."""
        return {
            "posts": [a.to_dict() for a in workflow.list_articles()],
            "isAuthenticated": _session(request).authenticated,
        }

    @app.get("/post/{post_id}")
    async def show_post(post_id: str, request: Request):
        """Un artículo (post=null si no existe o el id no es numérico)."""
        article_id = parse_id(post_id)
        article = workflow.get_article(article_id) if article_id is not None else None
        return {
            "post": article.to_dict() if article else None,
            "isAuthenticated": _session(request).authenticated,
        }

    @app.get("/edit-post/{post_id}")
    async def edit_post(post_id: int, request: Request):
        """Artículo publicado para precargar el editor con su rawContent."""
        session = _session(request)
        session.require("editar artículos")
        article = workflow.get_article(post_id)
        if article is None:
            return _redirect("/")
        return {
            "draft": None,
            "post": article.to_dict(),
            "isAuthenticated": True,
        }

    # ============================================================
    # Autenticación
    # ============================================================

    @app.get("/login")
    async def login_page(request: Request):
        return {"error": request.query_params.get("error") == "1"}

    @app.post("/login")
    async def login(request: Request):
        form = await request.form()
        session = sessions.login(form.get("password"))
        if session is None:
            return _redirect("/login?error=1")

        response = _redirect("/")
        response.set_cookie(SESSION_COOKIE, session.token, httponly=True, samesite="lax")
        return response

    @app.get("/logout")
    async def logout(request: Request):
        sessions.logout(request.cookies.get(SESSION_COOKIE))
        response = _redirect("/")
        response.delete_cookie(SESSION_COOKIE)
        return response

    # ============================================================
    # Drafts
    # ============================================================

    @app.get("/drafts")
    async def drafts(request: Request):
        session = _session(request)
        return {
            "drafts": [d.to_dict() for d in workflow.list_drafts(session)],
            "saved": request.query_params.get("saved") == "1",
            "isAuthenticated": True,
        }

    @app.get("/new-post")
    async def new_post(request: Request):
        """Editor vacío, o precargado con ?draft=N."""
        session = _session(request)
        session.require("escribir posts")

        draft = None
        draft_id = parse_id(request.query_params.get("draft"))
        if draft_id is not None:
            draft = workflow.get_draft(session, draft_id)

        return {
            "draft": draft.to_dict() if draft else None,
            "post": None,
            "isAuthenticated": True,
        }

    @app.post("/save-draft")
    async def save_draft(request: Request):
        session = _session(request)
        session.require("guardar drafts")
        form = await request.form()
        workflow.save_draft(session, PostInput.from_form(form))
        return _redirect("/drafts?saved=1")

    @app.post("/delete-draft/{draft_id}")
    async def delete_draft(draft_id: int, request: Request):
        workflow.delete_draft(_session(request), draft_id)
        return _redirect("/drafts")

    # ============================================================
    # Artículos
    # ============================================================

    @app.post("/save-post")
    async def save_post(request: Request):
        session = _session(request)
        session.require("publicar")
        form = await request.form()
        post_id = workflow.publish_post(session, PostInput.from_form(form))
        return _redirect(f"/post/{post_id}")

    @app.post("/delete-post/{post_id}")
    async def delete_post(post_id: int, request: Request):
        workflow.delete_post(_session(request), post_id)
        return _redirect("/")

    # ============================================================
    # Monitoreo
    # ============================================================

    @app.get("/health")
    async def health():
        """Health check: uptime y conteo de artículos."""
        return {
            "status": "healthy",
            "articles": len(workflow.list_articles()),
            "uptime_seconds": int(time.time() - _start_time),
            "timestamp": datetime.now().isoformat(),
        }
