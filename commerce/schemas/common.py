# commerce/schemas/common.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator


def _as_utc(v: datetime) -> datetime:
    # SQLite 读回的是无时区值（写入时即 UTC）；PostgreSQL 读回带时区值，统一转成 UTC
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]
