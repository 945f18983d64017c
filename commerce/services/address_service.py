# commerce/services/address_service.py
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from commerce.api.deps import RequestContext
from commerce.api.errors import BadRequestError, NotFoundError
from commerce.models.address import Address, new_address_id
from commerce.models.user import User
from commerce.schemas.address import AddressIn
from commerce.services.authz import authorize

logger = logging.getLogger("commerce.addresses")


# =======================================================
# 订单侧使用的地址工具（事务由调用方负责）
# =======================================================
async def load_owned_address(session: AsyncSession, address_id: str, user_id: Optional[str]) -> Address:
    """按 id 取地址，必须属于订单用户；否则 400。游客订单不能引用已有地址。"""
    addr = await session.get(Address, address_id)
    if addr is None or not user_id or addr.user_id != user_id:
        raise BadRequestError(f"Address {address_id!r} not found for this order's user")
    return addr


def build_address(payload: AddressIn, user_id: Optional[str]) -> Address:
    """内联地址 → Address（未 add）；不合法 400。"""
    addr = Address(
        id=new_address_id(),
        user_id=user_id,
        **payload.model_dump(exclude={"id"}),
    )
    # 原样保存；去空白只用于合法性判定
    if not addr.valid():
        missing = [f for f in Address.REQUIRED_FIELDS if not (getattr(addr, f) or "").strip()]
        raise BadRequestError(f"Invalid address: missing {', '.join(missing)}")
    return addr


async def create_address(session: AsyncSession, payload: AddressIn, user_id: Optional[str]) -> Address:
    addr = build_address(payload, user_id)
    session.add(addr)
    await session.flush()
    logger.info("created address %s for user %s", addr.id, user_id)
    return addr


# =======================================================
# /users/{user_id}/addresses 查询
# =======================================================
class AddressService:
    def __init__(self, ctx: RequestContext):
        self.ctx = ctx
        self.session: AsyncSession = ctx.session

    async def _require_user(self, user_id: str) -> User:
        authorize(self.ctx.claims, user_id, self.ctx.admin_group)
        user = await self.session.get(User, user_id)
        if user is None:
            raise NotFoundError(f"User {user_id!r} not found")
        return user

    async def list_addresses(self, user_id: str) -> List[Address]:
        await self._require_user(user_id)
        rows = await self.session.execute(
            select(Address).where(Address.user_id == user_id).order_by(Address.created_at, Address.id)
        )
        return list(rows.scalars().all())

    async def get_address(self, user_id: str, address_id: str) -> Address:
        await self._require_user(user_id)
        addr = await self.session.get(Address, address_id)
        if addr is None or addr.user_id != user_id:
            raise NotFoundError(f"Address {address_id!r} not found")
        return addr
