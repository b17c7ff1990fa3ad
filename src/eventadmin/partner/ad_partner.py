"""AdPartnerClient -- 国家代码 -> 是否允许 ads 类型事件

查询广告合作方接口（basic auth），响应字段 ads 与许可标记精确匹配时允许。
HTTP 故障按状态码分类为独立异常；拒绝授权返回 False，不抛异常。
"""

import time

import httpx
import structlog

from .exceptions import (
    PartnerBadRequestError,
    PartnerUnauthorizedError,
    PartnerUnavailableError,
)

log = structlog.get_logger()

# 合作方表示"允许"的精确取值
PERMITTED_SENTINEL = "sure, why not!"


class AdPartnerClient:
    """广告合作方客户端

    凭据属于配置，不随请求变化。每次调用独立查询，不重试。
    """

    def __init__(
        self,
        url: str,
        username: str,
        password: str,
        timeout_s: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """初始化广告合作方客户端

        Args:
            url: 合作方接口 URL
            username: basic auth 用户名
            password: basic auth 密码
            timeout_s: 请求超时（秒）
            transport: 可选的 httpx transport（测试注入用）
        """
        self._url = url
        self._auth = httpx.BasicAuth(username, password)
        self._timeout_s = timeout_s
        self._transport = transport

    async def check_permission(self, country_code: str) -> bool:
        """查询指定国家是否允许 ads 类型事件

        Args:
            country_code: 两位国家代码

        Returns:
            True 仅当响应 ads 字段精确等于许可标记

        Raises:
            PartnerUnauthorizedError: 合作方返回 401
            PartnerBadRequestError: 合作方返回 400
            PartnerUnavailableError: 其他非 2xx 状态、连接失败或超时
        """
        start_time = time.monotonic()
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._timeout_s,
            ) as http_client:
                resp = await http_client.get(
                    self._url,
                    params={"countryCode": country_code},
                    auth=self._auth,
                )
        except httpx.HTTPError as e:
            log.error(
                "ad_partner_unreachable",
                country_code=country_code,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise PartnerUnavailableError(original_error=e) from e
        finally:
            structlog.contextvars.bind_contextvars(
                ad_partner_duration_ms=int((time.monotonic() - start_time) * 1000),
            )

        if resp.status_code == 401:
            log.error("ad_partner_unauthorized", country_code=country_code)
            raise PartnerUnauthorizedError()
        if resp.status_code == 400:
            log.warning("ad_partner_bad_request", country_code=country_code)
            raise PartnerBadRequestError()
        if not resp.is_success:
            log.error(
                "ad_partner_failed",
                country_code=country_code,
                status_code=resp.status_code,
            )
            raise PartnerUnavailableError(status=resp.status_code)

        try:
            data = resp.json()
        except ValueError:
            data = None

        ads = data.get("ads") if isinstance(data, dict) else None
        granted = ads == PERMITTED_SENTINEL

        log.info("ad_partner_checked", country_code=country_code, granted=granted)
        return granted
