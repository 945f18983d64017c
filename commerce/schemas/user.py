# commerce/schemas/user.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from commerce.schemas.common import UtcDatetime


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: str
    email: str
    order_count: int = 0
    created_at: UtcDatetime
    updated_at: UtcDatetime
