# commerce/models/order.py
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import BigInteger, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from commerce.db.base import Base
from commerce.models.enums import FulfillmentState, OrderState, PaymentState

if TYPE_CHECKING:
    from commerce.models.address import Address
    from commerce.models.line_item import LineItem
    from commerce.models.order_data import OrderData
    from commerce.models.user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_order_id() -> str:
    return str(uuid.uuid4())


class Order(Base):
    """
    订单主档

    - user_id 为空即游客订单
    - 金额字段统一为分（minor units），由计价规则从订单行计算
    - payment_state=paid 之后：币种 / 账单地址 / 金额不可再改
    - fulfillment_state 离开 pending 之后：收货地址不可再改
    """

    __tablename__ = "orders"
    __table_args__ = (Index("ix_orders_user_created", "user_id", "created_at"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_order_id)

    user_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        ForeignKey("users.id", name="fk_orders_user", ondelete="SET NULL"),
        nullable=True,
    )
    session_id: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    ip: Mapped[str] = mapped_column(String(64), nullable=False, default="")

    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    currency: Mapped[str] = mapped_column(String(16), nullable=False, default="USD")

    sub_total: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    taxes: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    shipping: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    total: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    payment_state: Mapped[str] = mapped_column(String(32), nullable=False, default=PaymentState.PENDING)
    fulfillment_state: Mapped[str] = mapped_column(String(32), nullable=False, default=FulfillmentState.PENDING)
    state: Mapped[str] = mapped_column(String(32), nullable=False, default=OrderState.PENDING)

    billing_address_id: Mapped[Optional[str]] = mapped_column(
        String(64), ForeignKey("addresses.id", name="fk_orders_billing_address"), nullable=True
    )
    shipping_address_id: Mapped[Optional[str]] = mapped_column(
        String(64), ForeignKey("addresses.id", name="fk_orders_shipping_address"), nullable=True
    )

    vat_number: Mapped[str] = mapped_column(String(64), nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    user: Mapped[Optional["User"]] = relationship("User", back_populates="orders")

    line_items: Mapped[List["LineItem"]] = relationship(
        "LineItem",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="LineItem.id",
        lazy="selectin",
    )
    billing_address: Mapped[Optional["Address"]] = relationship(
        "Address", foreign_keys=[billing_address_id], lazy="selectin"
    )
    shipping_address: Mapped[Optional["Address"]] = relationship(
        "Address", foreign_keys=[shipping_address_id], lazy="selectin"
    )
    data: Mapped[List["OrderData"]] = relationship(
        "OrderData",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderData.key",
        lazy="selectin",
    )

    @property
    def is_paid(self) -> bool:
        return self.payment_state == PaymentState.PAID

    @property
    def is_shipping_locked(self) -> bool:
        return (self.fulfillment_state or FulfillmentState.PENDING) != FulfillmentState.PENDING

    def __repr__(self) -> str:
        return (
            f"<Order id={self.id!r} user_id={self.user_id!r} payment={self.payment_state} "
            f"fulfillment={self.fulfillment_state}>"
        )
