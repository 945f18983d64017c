# commerce/api/routers/users.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from commerce.api.deps import RequestContext, get_request_context
from commerce.schemas.address import AddressOut
from commerce.schemas.user import UserOut
from commerce.services.address_service import AddressService
from commerce.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserOut])
async def list_users(
    email: Optional[str] = Query(default=None, description="按 email 精确过滤"),
    ctx: RequestContext = Depends(get_request_context),
):
    return await UserService(ctx).list_users(email=email)


@router.get("/{user_id}", response_model=UserOut)
async def get_user(
    user_id: str = Path(..., min_length=1),
    ctx: RequestContext = Depends(get_request_context),
):
    return await UserService(ctx).get_user(user_id)


@router.get("/{user_id}/addresses", response_model=List[AddressOut])
async def list_addresses(
    user_id: str = Path(..., min_length=1),
    ctx: RequestContext = Depends(get_request_context),
):
    addrs = await AddressService(ctx).list_addresses(user_id)
    return [AddressOut.model_validate(a) for a in addrs]


@router.get("/{user_id}/addresses/{address_id}", response_model=AddressOut)
async def get_address(
    user_id: str = Path(..., min_length=1),
    address_id: str = Path(..., min_length=1),
    ctx: RequestContext = Depends(get_request_context),
):
    addr = await AddressService(ctx).get_address(user_id, address_id)
    return AddressOut.model_validate(addr)
