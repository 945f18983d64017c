# commerce/models/address.py
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from commerce.db.base import Base

if TYPE_CHECKING:
    from commerce.models.user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_address_id() -> str:
    return str(uuid.uuid4())


class Address(Base):
    """
    地址表 addresses（账单 / 收货共用）

    设计要点：
      - 属于某个用户；游客订单的地址 user_id 为空
      - 订单通过 billing_address_id / shipping_address_id 引用，同一地址可被多单复用
    """

    __tablename__ = "addresses"
    __table_args__ = (Index("ix_addresses_user_id", "user_id"),)

    REQUIRED_FIELDS = ("name", "address1", "city", "country", "zip")

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_address_id)
    user_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        ForeignKey("users.id", name="fk_addresses_user", ondelete="SET NULL"),
        nullable=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    company: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    address1: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    address2: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    city: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    country: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    state: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    zip: Mapped[str] = mapped_column(String(32), nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    user: Mapped[Optional["User"]] = relationship("User", back_populates="addresses")

    def valid(self) -> bool:
        """必填字段全部非空（去空白后）即合法。"""
        return all((getattr(self, f) or "").strip() for f in self.REQUIRED_FIELDS)

    def __repr__(self) -> str:
        return f"<Address id={self.id!r} user_id={self.user_id!r} city={self.city!r}>"
