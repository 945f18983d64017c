# commerce/models/user.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from commerce.db.base import Base

if TYPE_CHECKING:
    from commerce.models.address import Address
    from commerce.models.order import Order


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    用户，对应 users 表。

    - id: 外部身份服务的 subject id（不透明字符串），本服务不生成
    - email: 首次下单时写入，可为空串
    - 首次以未知 subject 下单时惰性创建
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="", index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    addresses: Mapped[List["Address"]] = relationship("Address", back_populates="user")
    orders: Mapped[List["Order"]] = relationship("Order", back_populates="user")

    def __repr__(self) -> str:
        return f"<User id={self.id!r} email={self.email!r}>"
