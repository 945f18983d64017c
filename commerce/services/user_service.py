# commerce/services/user_service.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from commerce.api.deps import RequestContext
from commerce.api.errors import NotFoundError
from commerce.models.order import Order
from commerce.models.user import User
from commerce.schemas.user import UserOut
from commerce.services.authz import authorize, require_admin


def _order_counts():
    return (
        select(Order.user_id.label("user_id"), func.count(Order.id).label("n"))
        .group_by(Order.user_id)
        .subquery()
    )


def _to_out(user: User, n: Optional[int]) -> UserOut:
    return UserOut(
        id=user.id,
        email=user.email,
        order_count=int(n or 0),
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class UserService:
    """
    用户查询：
    - 列表：仅管理员；可按 email 精确过滤
    - 单个：本人或管理员
    """

    def __init__(self, ctx: RequestContext):
        self.ctx = ctx
        self.session: AsyncSession = ctx.session

    async def list_users(self, email: Optional[str] = None) -> List[UserOut]:
        require_admin(self.ctx.claims, self.ctx.admin_group)

        counts = _order_counts()
        stmt = select(User, counts.c.n).outerjoin(counts, counts.c.user_id == User.id)
        if email:
            stmt = stmt.where(User.email == email)
        stmt = stmt.order_by(User.id)

        rows = (await self.session.execute(stmt)).all()
        return [_to_out(u, n) for u, n in rows]

    async def get_user(self, user_id: str) -> UserOut:
        authorize(self.ctx.claims, user_id, self.ctx.admin_group)

        counts = _order_counts()
        row = (
            await self.session.execute(
                select(User, counts.c.n)
                .outerjoin(counts, counts.c.user_id == User.id)
                .where(User.id == user_id)
            )
        ).first()
        if row is None:
            raise NotFoundError(f"User {user_id!r} not found")
        return _to_out(row[0], row[1])
