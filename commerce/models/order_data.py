# commerce/models/order_data.py
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from commerce.db.base import Base
from commerce.models.enums import DataType

if TYPE_CHECKING:
    from commerce.models.order import Order


class OrderData(Base):
    """
    订单元数据（order_id + key 唯一）

    值按类型落到对应列：string_value / numeric_value / bool_value，
    type 列记录当前生效的是哪一列。
    """

    __tablename__ = "order_data"

    order_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("orders.id", ondelete="CASCADE"),
        primary_key=True,
    )
    key: Mapped[str] = mapped_column(String(255), primary_key=True)

    type: Mapped[str] = mapped_column(String(16), nullable=False)
    string_value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    numeric_value: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    bool_value: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    order: Mapped["Order"] = relationship("Order", back_populates="data")

    @property
    def value(self):
        if self.type == DataType.STRING:
            return self.string_value
        if self.type == DataType.NUMBER:
            n = self.numeric_value
            # 整数值按 int 输出，避免 1 → 1.0
            if n is not None and float(n).is_integer():
                return int(n)
            return n
        if self.type == DataType.BOOL:
            return self.bool_value
        return None

    def __repr__(self) -> str:
        return f"<OrderData order_id={self.order_id!r} key={self.key!r} type={self.type}>"
