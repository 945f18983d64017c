# commerce/core/logging.py
"""
统一日志出口（stdlib logging）：

- 根 logger 单一 stdout handler，重复调用 setup_logging 不会叠加输出
- JSON_LOG=true 时每行一条 JSON（字段：ts / level / logger / msg，附带 extra 里的标量字段）
- SQL 日志只在 DEBUG 下打开
"""

from __future__ import annotations

import json as _json
import logging
import sys
from datetime import datetime, timezone

# LogRecord 自带字段，不作为 extra 输出
_RESERVED = set(vars(logging.LogRecord("x", logging.INFO, "", 0, "", None, None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        out = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for k, v in record.__dict__.items():
            if k not in _RESERVED and isinstance(v, (str, int, float, bool)):
                out[k] = v
        if record.exc_info:
            out["exc"] = self.formatException(record.exc_info)
        return _json.dumps(out, ensure_ascii=False)


def setup_logging(level: str = "INFO", json: bool = False) -> None:
    lvl = (level or "INFO").upper()
    root = logging.getLogger()
    root.setLevel(lvl)

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    if json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root.addHandler(handler)

    logging.getLogger("commerce").setLevel(lvl)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if lvl == "DEBUG" else logging.WARNING)
