"""异常处理器 -- 领域异常 / 外部依赖异常 -> HTTP 错误响应

每个异常类携带 status_code 与 code，此处统一渲染为：
{"error": {"code": ..., "message": ...}}
"""

import structlog
from eventadmin.core.exceptions import EventAdminError
from eventadmin.partner.exceptions import PartnerError
from fastapi import FastAPI, Request
from starlette.responses import JSONResponse

log = structlog.get_logger()


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
            }
        },
    )


async def event_admin_error_handler(request: Request, exc: EventAdminError) -> JSONResponse:
    await log.ainfo("request_rejected", code=exc.code, status_code=exc.status_code)
    return _error_response(exc.status_code, exc.code, exc.message)


async def partner_error_handler(request: Request, exc: PartnerError) -> JSONResponse:
    await log.awarning(
        "partner_dependency_failed",
        code=exc.code,
        status_code=exc.status_code,
        original_error=str(exc.original_error) if exc.original_error else None,
    )
    return _error_response(exc.status_code, exc.code, exc.message)


def register_exception_handlers(app: FastAPI) -> None:
    """注册异常处理器"""
    app.add_exception_handler(EventAdminError, event_admin_error_handler)
    app.add_exception_handler(PartnerError, partner_error_handler)
