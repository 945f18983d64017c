# commerce/api/deps.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from commerce.api.claims import Claims, extract_claims
from commerce.core.config import AppSettings
from commerce.db.session import get_session


@dataclass
class RequestContext:
    """
    显式的请求上下文：claims / 配置 / 会话都通过参数传给服务层，
    不走全局变量。
    """

    claims: Optional[Claims]
    settings: AppSettings
    session: AsyncSession
    ip: str = ""

    @property
    def admin_group(self) -> str:
        return self.settings.JWT_ADMIN_GROUP


def get_settings_dep(request: Request) -> AppSettings:
    return request.app.state.settings


def get_claims(
    authorization: Optional[str] = Header(default=None),
    settings: AppSettings = Depends(get_settings_dep),
) -> Optional[Claims]:
    return extract_claims(authorization, settings)


async def get_request_context(
    request: Request,
    claims: Optional[Claims] = Depends(get_claims),
    settings: AppSettings = Depends(get_settings_dep),
    session: AsyncSession = Depends(get_session),
) -> RequestContext:
    ip = request.client.host if request.client else ""
    return RequestContext(claims=claims, settings=settings, session=session, ip=ip)


__all__ = (
    "RequestContext",
    "get_claims",
    "get_request_context",
    "get_settings_dep",
)
