# commerce/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from commerce import __version__
from commerce.api.errors import install_error_handlers
from commerce.core.config import AppSettings, get_settings
from commerce.core.logging import setup_logging
from commerce.db.base import init_models
from commerce.db.session import build_engine, build_session_factory, create_all

logger = logging.getLogger("commerce")


def mount_routers(app: FastAPI) -> None:
    from commerce.api.routers.orders import router as orders_router
    from commerce.api.routers.users import router as users_router

    app.include_router(orders_router)
    app.include_router(users_router)

    @app.get("/healthz", tags=["meta"])
    async def healthz():
        return {"status": "ok"}


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """
    应用工厂：配置 / 引擎 / 会话工厂都挂在 app.state 上，由依赖注入给各 handler。
    """
    settings = settings or get_settings()
    settings.check_secrets()

    init_models()
    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # dev 环境直接按 metadata 建表；其他环境由外部迁移负责
        if settings.ENV == "dev":
            await create_all(engine)
        yield
        await engine.dispose()

    app = FastAPI(
        title="commerce",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    install_error_handlers(app)
    mount_routers(app)
    logger.info("commerce app created (env=%s, admin_group=%s)", settings.ENV, settings.JWT_ADMIN_GROUP)
    return app


def _build_default_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, json=settings.JSON_LOG)
    return create_app(settings)


app = _build_default_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("commerce.main:app", host="0.0.0.0", port=8000, reload=False)
