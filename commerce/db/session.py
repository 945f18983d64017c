# commerce/db/session.py
# 异步引擎 / 会话工厂 + FastAPI 依赖（get_session）
# 工厂挂在 app.state 上，由 create_app 注入，不使用进程级全局句柄
from __future__ import annotations

import logging
import re
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from commerce.core.config import AppSettings
from commerce.db.base import Base, init_models

log = logging.getLogger("commerce.db")


# ---- DSN 归一：async 场景统一到 psycopg3 与 aiosqlite ----
def normalize_async_dsn(url: str) -> str:
    url = (url or "").strip()
    # 有些环境会把值写成 '"postgresql+psycopg://..."'，统一剥掉两侧引号
    if len(url) >= 2 and url[0] == url[-1] and url[0] in "\"'":
        url = url[1:-1].strip()
    if not url:
        raise ValueError("DATABASE_URL is empty")
    # sqlite:/// → sqlite+aiosqlite:///
    if url.startswith("sqlite:///"):
        return "sqlite+aiosqlite://" + url[len("sqlite:///") - 1 :]
    # postgres/postgresql(+*) → postgresql+psycopg
    if url.startswith("postgresql+asyncpg://") or url.startswith("postgres+asyncpg://"):
        return re.sub(r"^postgres(?:ql)?\+asyncpg://", "postgresql+psycopg://", url)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def _connect_args_for(url_str: str) -> dict[str, Any]:
    """SQLite 仅带 check_same_thread；其他后端不额外传参。"""
    backend = make_url(url_str).get_backend_name()
    if backend.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def build_engine(settings: AppSettings) -> AsyncEngine:
    url = normalize_async_dsn(settings.DATABASE_URL)
    kwargs: dict[str, Any] = {"echo": settings.SQL_ECHO}
    if make_url(url).get_backend_name().startswith("postgresql"):
        kwargs["pool_pre_ping"] = True
    connect_args = _connect_args_for(url)
    if connect_args:
        kwargs["connect_args"] = connect_args

    log.info("[DB] Using DSN (async): %s", make_url(url).render_as_string(hide_password=True))
    return create_async_engine(url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """按 metadata 建表（测试 / 本地开发用；迁移不在本服务职责内）。"""
    init_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ---- FastAPI 依赖 ----
async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with factory() as session:
        yield session
