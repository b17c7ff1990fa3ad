"""TraceMiddleware

针对单个 Event 的请求（/api/events/{event_id}）绑定 event_id，
贯穿该请求的授权与存储日志。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# ULID 长度
_EVENT_ID_LENGTH = 26


class TraceMiddleware(BaseHTTPMiddleware):
    """Event 级追踪中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        parts = request.url.path.strip("/").split("/")

        if len(parts) >= 3 and parts[0] == "api" and parts[1] == "events":
            event_id = parts[2]
            if len(event_id) == _EVENT_ID_LENGTH:
                structlog.contextvars.bind_contextvars(event_id=event_id)

        return await call_next(request)
