# commerce/services/order_email.py
"""
订单邮箱 / 归属用户判定：

1) 无 claims（游客）：订单自身必须带 email，否则 400；不关联用户
2) claims.sub 已存在：订单归属该用户；
   email 取 订单 email > claims.email > 用户已存 email，全空 → 400
3) claims.sub 不存在：新建用户（id = sub，email = claims.email 或订单 email，全空 → 400），
   订单 email 同 2) 的优先级，订单归属新用户

订单 email 与用户存档 email 可以不同：请求里的 email 只影响订单。
新用户只 add 到 session，提交由调用方的事务边界负责。
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from commerce.api.claims import Claims
from commerce.api.errors import BadRequestError
from commerce.models.order import Order
from commerce.models.user import User

logger = logging.getLogger("commerce.orders")


def _first_non_empty(*values: Optional[str]) -> str:
    for v in values:
        s = (v or "").strip()
        if s:
            return s
    return ""


async def resolve_order_email(
    session: AsyncSession,
    order: Order,
    claims: Optional[Claims],
) -> Optional[User]:
    """返回订单归属用户（游客为 None）；必要时新建用户。"""
    if claims is None:
        if not (order.email or "").strip():
            raise BadRequestError("Email is required for guest orders")
        order.email = order.email.strip()
        order.user_id = None
        return None

    user = await session.get(User, claims.subject_id)
    if user is None:
        user_email = _first_non_empty(claims.email, order.email)
        if not user_email:
            raise BadRequestError("Email is required: neither the order nor the token provides one")
        user = User(id=claims.subject_id, email=user_email)
        session.add(user)
        logger.info("created user %s on first order", claims.subject_id)

    email = _first_non_empty(order.email, claims.email, user.email)
    if not email:
        raise BadRequestError("Email is required: no email on the order, the token or the user")

    order.email = email
    order.user_id = user.id
    return user
