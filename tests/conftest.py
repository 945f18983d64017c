# tests/conftest.py
from __future__ import annotations

from typing import AsyncGenerator, Callable, Dict, List, Optional

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession

from commerce.core.config import AppSettings
from commerce.core.security import create_access_token
from commerce.db.session import create_all
from commerce.main import create_app
from tests.factories import seed_world

ADMIN_GROUP = "admin"


# =========================================
# 每用例独立 SQLite 文件库 + 独立 app
# =========================================
@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(
        ENV="test",
        DATABASE_URL=f"sqlite:///{tmp_path / 'commerce-test.db'}",
        JWT_SECRET="unit-test-secret-not-for-prod",
        JWT_ADMIN_GROUP=ADMIN_GROUP,
        SHIPPING_FLAT_CENTS=0,
        DEFAULT_VAT_PERCENT=0,
    )


@pytest_asyncio.fixture
async def app(settings: AppSettings) -> AsyncGenerator[FastAPI, None]:
    application = create_app(settings)
    await create_all(application.state.engine)
    try:
        yield application
    finally:
        await application.state.engine.dispose()


@pytest_asyncio.fixture
async def session(app: FastAPI) -> AsyncGenerator[AsyncSession, None]:
    """
    直连测试库的 Session（断言落库结果用）
    """
    async with app.state.session_factory() as sess:
        yield sess


@pytest_asyncio.fixture
async def seeded(app: FastAPI) -> None:
    async with app.state.session_factory() as sess:
        await seed_world(sess)


@pytest_asyncio.fixture
async def client(app: FastAPI, seeded) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


@pytest.fixture
def auth(settings: AppSettings) -> Callable[..., Dict[str, str]]:
    """auth("sub", email=..., groups=[...]) -> Authorization 头"""

    def _make(subject: str, email: Optional[str] = None, groups: Optional[List[str]] = None) -> Dict[str, str]:
        token = create_access_token(settings, subject, email=email, groups=groups)
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def admin_headers(auth) -> Dict[str, str]:
    return auth("admin-yo", email="admin@wayneindustries.com", groups=[ADMIN_GROUP])
