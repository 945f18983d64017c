# commerce/api/routers/orders.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from commerce.api.deps import RequestContext, get_request_context
from commerce.schemas.order import OrderCreateIn, OrderOut, OrderUpdateIn
from commerce.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=List[OrderOut])
async def list_orders(
    user_id: Optional[str] = Query(default=None, description="按用户过滤（仅管理员可查他人）"),
    ctx: RequestContext = Depends(get_request_context),
):
    orders = await OrderService(ctx).list_orders(user_id=user_id)
    return [OrderOut.model_validate(o) for o in orders]


@router.get("/{order_id}", response_model=OrderOut)
async def view_order(
    order_id: str = Path(..., min_length=1),
    ctx: RequestContext = Depends(get_request_context),
):
    order = await OrderService(ctx).get_order(order_id)
    return OrderOut.model_validate(order)


@router.put("", response_model=OrderOut)
async def create_order(
    payload: OrderCreateIn,
    ctx: RequestContext = Depends(get_request_context),
):
    order = await OrderService(ctx).create_order(payload)
    return OrderOut.model_validate(order)


@router.post("/{order_id}", response_model=OrderOut)
async def update_order(
    payload: OrderUpdateIn,
    order_id: str = Path(..., min_length=1),
    ctx: RequestContext = Depends(get_request_context),
):
    order = await OrderService(ctx).update_order(order_id, payload)
    return OrderOut.model_validate(order)
