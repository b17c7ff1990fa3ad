"""LoggingMiddleware

为每个 HTTP 请求生成 request_id，并确定一次请求方对端地址：
- 绑定到 structlog contextvars（request_id / method / path / client_address）
- 写入 request.state.client_address，供 deps.get_client_address 与授权闸门复用
对端地址只取传输层所见，不读取 X-Forwarded-For 等请求头。
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

REQUEST_ID_HEADER = "X-Request-ID"


def peer_address(request: Request) -> str:
    """传输层对端地址，无法获知时为空串"""
    return request.client.host if request.client else ""


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = str(ULID())
        client_address = peer_address(request)
        request.state.client_address = client_address

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_address=client_address,
        )

        log = structlog.get_logger()
        await log.ainfo("request_started")
        start_time = time.monotonic()

        response = await call_next(request)

        duration_ms = int((time.monotonic() - start_time) * 1000)
        if response.status_code >= 500:
            await log.awarning(
                "request_failed",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
        else:
            await log.ainfo(
                "request_completed",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
