# commerce/schemas/address.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from commerce.schemas.common import UtcDatetime


class _Base(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="ignore")


class AddressIn(_Base):
    """内联地址：字段全部可缺省，合法性由 Address.valid() 判定。"""

    name: str = ""
    company: str = ""
    address1: str = ""
    address2: str = ""
    city: str = ""
    country: str = ""
    state: str = ""
    zip: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v


class OrderAddressIn(AddressIn):
    """下单用：给 id 则引用已有地址，否则按内联地址新建。"""

    id: Optional[str] = None


class AddressOut(_Base):
    id: str
    user_id: Optional[str] = None
    name: str
    company: str
    address1: str
    address2: str
    city: str
    country: str
    state: str
    zip: str
    created_at: UtcDatetime
    updated_at: UtcDatetime
