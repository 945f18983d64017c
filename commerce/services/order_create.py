# commerce/services/order_create.py
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from commerce.api.deps import RequestContext
from commerce.api.errors import InternalError
from commerce.db.uow import UnitOfWork
from commerce.models.address import Address
from commerce.models.line_item import LineItem
from commerce.models.order import Order, new_order_id
from commerce.models.user import User
from commerce.schemas.address import OrderAddressIn
from commerce.schemas.order import LineItemIn, OrderCreateIn
from commerce.services.address_service import create_address, load_owned_address
from commerce.services.order_email import resolve_order_email
from commerce.services.order_pricing import calculate
from commerce.services.order_queries import load_order

logger = logging.getLogger("commerce.orders")


async def _resolve_address(session: AsyncSession, payload: OrderAddressIn, user_id: Optional[str]) -> Address:
    if payload.id:
        return await load_owned_address(session, payload.id, user_id)
    return await create_address(session, payload, user_id)


def _build_line_item(li: LineItemIn, default_vat: int) -> LineItem:
    return LineItem(
        sku=li.sku,
        path=li.path,
        title=li.title,
        description=li.description,
        type=li.type,
        price=li.price,
        quantity=li.quantity,
        vat=default_vat if li.vat is None else li.vat,
    )


async def _persist_order(ctx: RequestContext, payload: OrderCreateIn) -> Order:
    session = ctx.session

    async with UnitOfWork(session):
        order = Order(
            id=new_order_id(),
            session_id=payload.session_id,
            ip=ctx.ip,
            email=payload.email,
            currency=payload.currency or "USD",
            vat_number=payload.vat_number,
        )

        await resolve_order_email(session, order, ctx.claims)

        billing = await _resolve_address(session, payload.billing_address, order.user_id)
        if payload.shipping_address is None:
            shipping = billing
        else:
            shipping = await _resolve_address(session, payload.shipping_address, order.user_id)
        order.billing_address_id = billing.id
        order.shipping_address_id = shipping.id

        default_vat = ctx.settings.DEFAULT_VAT_PERCENT
        order.line_items = [_build_line_item(li, default_vat) for li in payload.line_items]

        totals = calculate(order.line_items, ctx.settings)
        order.sub_total = totals.sub_total
        order.taxes = totals.taxes
        order.shipping = totals.shipping
        order.total = totals.total

        session.add(order)
        await session.flush()

    return order


async def create_order(ctx: RequestContext, payload: OrderCreateIn) -> Order:
    """
    下单（允许游客）：
      1) 邮箱 / 归属用户判定（可能新建用户）
      2) 账单地址（必填）/ 收货地址（缺省同账单）
      3) 订单行 + 计价
    整个过程一个事务：任何一步失败，用户 / 地址 / 订单 / 行都不落库。
    同一 subject 并发首单时，后提交的一方主键冲突，按已存在用户重做一次。
    """
    session = ctx.session

    try:
        order = await _persist_order(ctx, payload)
    except IntegrityError:
        if ctx.claims is None or await session.get(User, ctx.claims.subject_id) is None:
            raise
        logger.warning("user %s was created concurrently, retrying order", ctx.claims.subject_id)
        order = await _persist_order(ctx, payload)

    logger.info(
        "order created: id=%s user=%s items=%d total=%d %s",
        order.id,
        order.user_id,
        len(payload.line_items),
        order.total,
        order.currency,
    )

    saved = await load_order(session, order.id, fresh=True)
    if saved is None:
        raise InternalError("Order vanished after commit")
    return saved
