# commerce/services/authz.py
"""
鉴权策略（self / admin 两种放行）：

- 无 claims                      → 401
- claims.subject_id == owner_id  → 放行（本人）
- claims.groups 含管理员组       → 放行（管理员）
- 其他                           → 拒绝

拒绝时的状态码按入口区分：直接访问资源为 401；
列表接口带显式 user_id 过滤时为 400（沿用现有行为，不做统一）。
"""

from __future__ import annotations

import logging
from typing import Optional

from commerce.api.claims import Claims
from commerce.api.errors import BadRequestError, BizError, UnauthorizedError

logger = logging.getLogger("commerce.authz")


def require_claims(claims: Optional[Claims]) -> Claims:
    if claims is None:
        raise UnauthorizedError("You must be logged in")
    return claims


def is_admin(claims: Optional[Claims], admin_group: str) -> bool:
    return claims is not None and claims.in_group(admin_group)


def can_access(claims: Optional[Claims], owner_id: Optional[str], admin_group: str) -> bool:
    if claims is None:
        return False
    if owner_id and claims.subject_id == owner_id:
        return True
    return is_admin(claims, admin_group)


def _authorize(
    claims: Optional[Claims],
    owner_id: Optional[str],
    admin_group: str,
    denied: type[BizError],
) -> Claims:
    c = require_claims(claims)
    if can_access(c, owner_id, admin_group):
        return c
    logger.info("access denied: subject=%s owner=%s", c.subject_id, owner_id)
    raise denied("You don't have access to this resource")


def authorize(claims: Optional[Claims], owner_id: Optional[str], admin_group: str) -> Claims:
    """直接访问某个资源：越权为 401。"""
    return _authorize(claims, owner_id, admin_group, UnauthorizedError)


def authorize_filter(claims: Optional[Claims], owner_id: Optional[str], admin_group: str) -> Claims:
    """列表接口的显式 user_id 过滤：越权为 400。"""
    return _authorize(claims, owner_id, admin_group, BadRequestError)


def require_admin(claims: Optional[Claims], admin_group: str) -> Claims:
    c = require_claims(claims)
    if not is_admin(c, admin_group):
        logger.info("admin required: subject=%s", c.subject_id)
        raise UnauthorizedError("Admin permissions required")
    return c
