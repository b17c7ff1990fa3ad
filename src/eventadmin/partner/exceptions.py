"""Partner 异常体系

外部依赖（地理定位、广告合作方）的每种故障对应一个独立异常类，
调用方据此映射到不同的对外状态码。拒绝授权不是故障，不在此处。
"""


class PartnerError(Exception):
    """Partner 包基础异常"""

    status_code: int = 500
    code: str = "PARTNER_ERROR"

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        """
        Args:
            message: 错误描述
            original_error: 原始异常（如果有）
        """
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class LocationUnavailableError(PartnerError):
    """地理定位查询失败（网络错误、非 2xx、响应格式错误、超时）

    不会回退到任何默认国家。
    """

    status_code = 500
    code = "LOCATION_UNAVAILABLE"

    def __init__(
        self,
        address: str,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__("Failed to get location information", original_error)
        self.address = address


class PartnerUnauthorizedError(PartnerError):
    """广告合作方返回 401（凭据配置错误）"""

    status_code = 401
    code = "PARTNER_UNAUTHORIZED"

    def __init__(self) -> None:
        super().__init__("Unauthorized")


class PartnerBadRequestError(PartnerError):
    """广告合作方返回 400"""

    status_code = 400
    code = "PARTNER_BAD_REQUEST"

    def __init__(self) -> None:
        super().__init__("Bad Request")


class PartnerUnavailableError(PartnerError):
    """广告合作方不可用（其他非 2xx 状态、连接失败、超时）"""

    status_code = 500
    code = "PARTNER_UNAVAILABLE"

    def __init__(
        self,
        status: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__("Ad partner service unavailable", original_error)
        self.status = status
