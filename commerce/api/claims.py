# commerce/api/claims.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from commerce.api.errors import UnauthorizedError
from commerce.core.config import AppSettings
from commerce.core.security import decode_access_token


@dataclass(frozen=True)
class Claims:
    """
    请求级身份事实（来自已校验的 token），不落库。
    """

    subject_id: str
    email: str = ""
    groups: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Claims":
        sub = str(payload.get("sub") or "").strip()
        if not sub:
            raise UnauthorizedError("token has no subject")

        meta = payload.get("app_metadata")
        groups = meta.get("groups") if isinstance(meta, dict) else None
        if groups is None:
            groups = payload.get("groups")
        if not isinstance(groups, (list, tuple)):
            groups = []

        return cls(
            subject_id=sub,
            email=str(payload.get("email") or "").strip(),
            groups=tuple(str(g) for g in groups if g),
        )

    def in_group(self, name: str) -> bool:
        return bool(name) and name in self.groups


def extract_claims(authorization: Optional[str], settings: AppSettings) -> Optional[Claims]:
    """
    - 没有 Authorization 头 → None（游客）
    - 头格式不对 / token 无效 / 过期 → 401
    """
    raw = (authorization or "").strip()
    if not raw:
        return None

    scheme, _, token = raw.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise UnauthorizedError("Bad authentication header")

    payload = decode_access_token(settings, token)
    if payload is None:
        raise UnauthorizedError("Invalid or expired token")

    return Claims.from_payload(payload)
