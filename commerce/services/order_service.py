# commerce/services/order_service.py
from __future__ import annotations

from typing import List, Optional

from commerce.api.deps import RequestContext
from commerce.models.order import Order
from commerce.schemas.order import OrderCreateIn, OrderUpdateIn
from commerce.services.order_create import create_order as _create_order
from commerce.services.order_queries import get_order as _get_order
from commerce.services.order_queries import list_orders as _list_orders
from commerce.services.order_update import update_order as _update_order


class OrderService:
    """
    订单服务（薄门面）：
    - list_orders(): 调用者本人 / 管理员按 user_id 过滤
    - get_order():   本人或管理员
    - create_order(): 允许游客；邮箱 / 归属用户判定 + 地址 + 行 + 计价，一个事务
    - update_order(): 部分字段更新，受支付 / 履约状态锁约束
    """

    def __init__(self, ctx: RequestContext):
        self.ctx = ctx

    async def list_orders(self, user_id: Optional[str] = None) -> List[Order]:
        return await _list_orders(self.ctx, user_id)

    async def get_order(self, order_id: str) -> Order:
        return await _get_order(self.ctx, order_id)

    async def create_order(self, payload: OrderCreateIn) -> Order:
        return await _create_order(self.ctx, payload)

    async def update_order(self, order_id: str, payload: OrderUpdateIn) -> Order:
        return await _update_order(self.ctx, order_id, payload)
