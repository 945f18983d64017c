# commerce/services/order_update.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from commerce.api.deps import RequestContext
from commerce.api.errors import BadRequestError, InternalError, NotFoundError
from commerce.db.uow import UnitOfWork
from commerce.models.address import Address
from commerce.models.order import Order
from commerce.schemas.address import AddressIn
from commerce.schemas.order import OrderUpdateIn
from commerce.services.address_service import create_address, load_owned_address
from commerce.services.authz import authorize, require_claims
from commerce.services.order_data import apply_data, parse_data_map
from commerce.services.order_queries import load_order

logger = logging.getLogger("commerce.orders")


def _address_change(
    current_id: Optional[str],
    new_id: Optional[str],
    inline: Optional[AddressIn],
) -> bool:
    if new_id:
        return new_id != current_id
    return inline is not None


def check_locks(order: Order, payload: OrderUpdateIn) -> None:
    """
    状态锁：
      - 已支付：不可改币种 / 账单地址
      - 履约已开始：不可改收货地址
    """
    if order.is_paid:
        if payload.currency and payload.currency != order.currency:
            raise BadRequestError("Can't update the currency after payment has been processed")
        if _address_change(order.billing_address_id, payload.billing_address_id, payload.billing_address):
            raise BadRequestError("Can't update the billing address after payment has been processed")

    if order.is_shipping_locked:
        if _address_change(order.shipping_address_id, payload.shipping_address_id, payload.shipping_address):
            raise BadRequestError("Can't update the shipping address after the order has shipped")


async def _pick_address(
    session: AsyncSession,
    order: Order,
    address_id: Optional[str],
    inline: Optional[AddressIn],
) -> Optional[Address]:
    # id 优先；其次内联地址新建（归属订单用户）
    if address_id:
        return await load_owned_address(session, address_id, order.user_id)
    if inline is not None:
        return await create_address(session, inline, order.user_id)
    return None


async def update_order(ctx: RequestContext, order_id: str, payload: OrderUpdateIn) -> Order:
    """
    部分更新订单：
    - 无 claims 401；不存在 404；非本人非管理员 401
    - 状态锁 / 地址归属 / 元数据类型不合法 → 400
    - 所有写入一个事务；返回值为提交后回读的订单
    """
    claims = require_claims(ctx.claims)
    session = ctx.session

    order = await load_order(session, order_id)
    if order is None:
        raise NotFoundError(f"Order {order_id!r} not found")
    authorize(claims, order.user_id, ctx.admin_group)

    check_locks(order, payload)
    # 元数据先整体校验，再进事务
    data = parse_data_map(payload.data) if payload.data else {}

    async with UnitOfWork(session):
        changed = []
        if payload.email:
            order.email = payload.email
            changed.append("email")
        if payload.currency:
            order.currency = payload.currency
            changed.append("currency")
        if payload.vat_number is not None:
            order.vat_number = payload.vat_number
            changed.append("vat_number")

        billing = await _pick_address(session, order, payload.billing_address_id, payload.billing_address)
        if billing is not None:
            order.billing_address_id = billing.id
            changed.append("billing_address")

        shipping = await _pick_address(session, order, payload.shipping_address_id, payload.shipping_address)
        if shipping is not None:
            order.shipping_address_id = shipping.id
            changed.append("shipping_address")

        if data:
            await apply_data(session, order, data)
            changed.append("data")

        order.updated_at = datetime.now(timezone.utc)
        await session.flush()

    logger.info("order updated: id=%s by=%s fields=%s", order.id, claims.subject_id, ",".join(changed) or "-")

    saved = await load_order(session, order.id, fresh=True)
    if saved is None:
        raise InternalError("Order vanished after commit")
    return saved
