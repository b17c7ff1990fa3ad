"""Core 异常体系

每个异常携带对外 HTTP 状态码与错误码，由 gateway 的异常处理器统一渲染。
"""


class EventAdminError(Exception):
    """Core 基础异常"""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EventNotFoundError(EventAdminError):
    """请求的 Event 不存在"""

    status_code = 404
    code = "EVENT_NOT_FOUND"

    def __init__(self, event_id: str) -> None:
        super().__init__("Event not found")
        self.event_id = event_id


class NotAuthorizedError(EventAdminError):
    """合作方明确拒绝当前国家的 ads 类型事件

    这是正常的拒绝结果，不是依赖故障。
    """

    status_code = 403
    code = "NOT_AUTHORIZED"

    def __init__(self, message: str, country_code: str = "") -> None:
        super().__init__(message)
        self.country_code = country_code
