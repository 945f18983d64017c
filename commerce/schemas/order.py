# commerce/schemas/order.py
from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from commerce.schemas.address import AddressIn, AddressOut, OrderAddressIn
from commerce.schemas.common import UtcDatetime
from commerce.services.order_data import data_as_dict


# ===== 通用基类：允许 ORM、忽略多余字段 =====
class _Base(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="ignore")


# ===== 行项目 入参 =====
class LineItemIn(_Base):
    """
    行项目：sku 必填；price 单位为分；vat 为百分比，缺省走配置默认税率。
    """

    sku: Annotated[str, Field(min_length=1, max_length=128)]
    path: str = ""
    title: str = ""
    description: str = ""
    type: str = ""
    price: Annotated[int, Field(ge=0)] = 0
    quantity: Annotated[int, Field(ge=1)] = 1
    vat: Annotated[Optional[int], Field(default=None, ge=0, le=100)] = None

    @field_validator("sku")
    @classmethod
    def _trim_sku(cls, v: str) -> str:
        s = v.strip()
        if not s:
            raise ValueError("sku must not be blank")
        return s


# ===== 创建订单 入参 =====
class OrderCreateIn(_Base):
    session_id: str = ""
    email: str = ""
    currency: str = "USD"
    vat_number: str = ""
    line_items: List[LineItemIn]
    billing_address: OrderAddressIn
    shipping_address: Optional[OrderAddressIn] = None

    @field_validator("line_items")
    @classmethod
    def _lines_non_empty(cls, v: List[LineItemIn]):
        if not v:
            raise ValueError("an order needs at least one line item")
        return v

    @field_validator("email", "currency", "session_id", "vat_number", mode="before")
    @classmethod
    def _strip(cls, v):
        return (v or "").strip() if isinstance(v, str) or v is None else v


# ===== 更新订单 入参（部分字段；空串视为未提供）=====
class OrderUpdateIn(_Base):
    email: Optional[str] = None
    currency: Optional[str] = None
    vat_number: Optional[str] = None

    billing_address_id: Optional[str] = None
    billing_address: Optional[AddressIn] = None
    shipping_address_id: Optional[str] = None
    shipping_address: Optional[AddressIn] = None

    # 值类型在服务层按 string / number / bool 校验
    data: Optional[Dict[str, Any]] = None

    @field_validator(
        "email", "currency", "vat_number", "billing_address_id", "shipping_address_id", mode="before"
    )
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


# ===== 出参 =====
class LineItemOut(_Base):
    id: int
    title: str
    sku: str
    type: str
    description: str
    vat: int
    path: str
    price: int
    quantity: int


class OrderOut(_Base):
    """订单出参：只带 user_id，不内嵌用户对象。"""

    id: str
    user_id: Optional[str] = None
    session_id: str
    ip: str
    email: str
    currency: str

    sub_total: int
    taxes: int
    shipping: int
    total: int

    payment_state: str
    fulfillment_state: str
    state: str

    billing_address_id: Optional[str] = None
    billing_address: Optional[AddressOut] = None
    shipping_address_id: Optional[str] = None
    shipping_address: Optional[AddressOut] = None

    vat_number: str
    line_items: List[LineItemOut] = Field(default_factory=list)
    data: Dict[str, Any] = Field(default_factory=dict)

    created_at: UtcDatetime
    updated_at: UtcDatetime

    @field_validator("data", mode="before")
    @classmethod
    def _rows_to_map(cls, v):
        if isinstance(v, dict) or v is None:
            return v or {}
        return data_as_dict(v)
