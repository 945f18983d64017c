# commerce/core/security.py
"""
JWT 工具（PyJWT，HS256）：

- decode_access_token：校验签名 / exp，返回 payload；无效一律返回 None
- create_access_token：仅供测试与本地开发签发 token（正式签发由外部身份服务负责）
- 任何环境禁止 alg=none
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

import jwt

from commerce.core.config import AppSettings


def create_access_token(
    settings: AppSettings,
    subject: str,
    *,
    email: Optional[str] = None,
    groups: Optional[List[str]] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    payload: Dict[str, Any] = {"sub": subject}
    if email is not None:
        payload["email"] = email
    if groups is not None:
        payload["app_metadata"] = {"groups": list(groups)}
    payload["exp"] = int(time.time()) + 60 * (expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(settings: AppSettings, token: str) -> Optional[Dict[str, Any]]:
    if settings.JWT_ALGORITHM.lower() == "none":
        return None
    try:
        out = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None
    return out if isinstance(out, dict) else None
