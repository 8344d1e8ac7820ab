# forum/main.py
import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from forum.core.config import Settings, settings as default_settings
from forum.core.errors import install_error_handlers
from forum.core.json import UTF8JSONResponse
from forum.core.sessions import SessionStore
from forum.db.init_db import ensure_admin, init_models
from forum.db.session import build_engine, build_sessionmaker
from forum.media.storage import UPLOADS_URL

# routers
from forum.auth.router import router as auth_router
from forum.users.router import router as users_router
from forum.topics.router import router as topics_router
from forum.comments.router import router as comments_router
from forum.likes.router import router as likes_router

log = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Estado del proceso: engine + pool, sessionmaker y almacén de sesiones.
    Se crean aquí, viven en app.state y se cierran al apagar.
    """
    cfg: Settings = app.state.settings
    log.info("🚀 Iniciando servicio…")

    engine = build_engine(cfg)
    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)
    app.state.sessions = SessionStore(ttl_seconds=cfg.SESSION_TTL_SECONDS)

    try:
        if cfg.DB_CREATE_ALL:
            await init_models(engine)
        await ensure_admin(app.state.sessionmaker, cfg)

        app.state.sessions.start(cfg.SESSION_PRUNE_SECONDS)
        log.info("✅ Startup listo.")
        yield
    finally:
        await app.state.sessions.stop()
        await engine.dispose()
        log.info("👋 Servicio detenido.")


def create_app(cfg: Settings | None = None) -> FastAPI:
    cfg = cfg or default_settings

    app = FastAPI(
        title="Forum API",
        default_response_class=UTF8JSONResponse,
        lifespan=lifespan,
    )
    app.state.settings = cfg

    # CORS (cookies de sesión → allow_credentials)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    install_error_handlers(app)

    # ficheros subidos: /uploads/<nombre>
    os.makedirs(cfg.UPLOAD_DIR, exist_ok=True)
    app.mount(UPLOADS_URL, StaticFiles(directory=cfg.UPLOAD_DIR, html=False), name="uploads")

    @app.get("/api/health/")
    async def health():
        return {"ok": True, "service": "forum", "msg": "healthy ✨"}

    app.include_router(auth_router)      # /api/register, /api/login, ...
    app.include_router(users_router)     # /api/users/...
    app.include_router(topics_router)    # /api/topics/...
    app.include_router(comments_router)  # /api/topics/{id}/comments
    app.include_router(likes_router)     # /api/topics|comments/{id}/like(s)
    return app


app = create_app()
