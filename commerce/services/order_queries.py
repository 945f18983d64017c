# commerce/services/order_queries.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from commerce.api.deps import RequestContext
from commerce.api.errors import NotFoundError
from commerce.models.order import Order
from commerce.services.authz import authorize, authorize_filter, require_claims


def _with_details(stmt):
    # 行项目 + 两个地址 + 元数据一次性带出；用户对象不加载
    return stmt.options(
        selectinload(Order.line_items),
        selectinload(Order.billing_address),
        selectinload(Order.shipping_address),
        selectinload(Order.data),
    )


async def load_order(session: AsyncSession, order_id: str, *, fresh: bool = False) -> Optional[Order]:
    """fresh=True：忽略 identity map 中的旧值，以库里为准（写后回读用）。"""
    stmt = _with_details(select(Order).where(Order.id == order_id))
    if fresh:
        stmt = stmt.execution_options(populate_existing=True)
    return (await session.execute(stmt)).scalars().first()


async def list_orders(ctx: RequestContext, user_id: Optional[str] = None) -> List[Order]:
    """
    - 无 claims → 401
    - 带 user_id 且既非本人也非管理员 → 400
    - 只返回目标用户（过滤值或调用者本人）的订单，新单在前；无结果为 []
    """
    claims = require_claims(ctx.claims)
    if user_id:
        authorize_filter(claims, user_id, ctx.admin_group)
    target = user_id or claims.subject_id

    stmt = _with_details(
        select(Order).where(Order.user_id == target).order_by(Order.created_at.desc(), Order.id)
    )
    return list((await ctx.session.execute(stmt)).scalars().all())


async def get_order(ctx: RequestContext, order_id: str) -> Order:
    """无 claims 401（不查库）；不存在 404；非本人非管理员 401。"""
    claims = require_claims(ctx.claims)
    order = await load_order(ctx.session, order_id)
    if order is None:
        raise NotFoundError(f"Order {order_id!r} not found")
    authorize(claims, order.user_id, ctx.admin_group)
    return order
