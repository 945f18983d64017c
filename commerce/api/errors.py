# commerce/api/errors.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger("commerce.api")


class BizError(Exception):
    """
    业务错误基类：code 即 HTTP 状态码，响应体统一为 {"code": int, "message": str}。
    """

    code = 400

    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        if code:
            self.code = code
        self.message = message

    def to_dict(self) -> dict:
        return {"code": int(self.code), "message": self.message}


class BadRequestError(BizError):
    """400：参数 / 校验失败，以及按 user_id 过滤时的越权（沿用现有行为）"""

    code = 400


class UnauthorizedError(BizError):
    """401：未带凭证、凭证无效，或直接访问他人资源"""

    code = 401


class NotFoundError(BizError):
    code = 404


class InternalError(BizError):
    code = 500


def _error_response(code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=code, content={"code": code, "message": message})


async def biz_error_handler(_req: Request, exc: BizError):
    return _error_response(int(exc.code), exc.message)


async def http_error_handler(_req: Request, exc: HTTPException):
    return _error_response(int(exc.status_code), str(exc.detail))


async def validation_error_handler(_req: Request, exc: RequestValidationError):
    errs = exc.errors()
    first = errs[0] if errs else {}
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = str(first.get("msg") or "invalid request")
    return _error_response(400, f"{loc}: {msg}" if loc else msg)


async def unhandled_error_handler(_req: Request, exc: Exception):
    logger.exception("UNHANDLED_EXC: %s", exc)
    return _error_response(500, "internal server error")


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BizError, biz_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
