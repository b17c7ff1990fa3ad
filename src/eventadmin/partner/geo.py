"""GeoLocationClient -- 客户端网络地址 -> 国家代码

本机回环地址直接返回默认国家，不发起网络请求；
其余地址查询外部地理定位服务，取响应中的 countryCode 字段。
"""

import time

import httpx
import structlog

from .exceptions import LocationUnavailableError

log = structlog.get_logger()

# 回环地址默认国家
DEFAULT_COUNTRY_CODE = "US"

LOOPBACK_ADDRESSES = frozenset({"127.0.0.1", "::1", "::ffff:127.0.0.1"})


def is_loopback(address: str) -> bool:
    """判断地址是否指向本机"""
    return address in LOOPBACK_ADDRESSES or "localhost" in address


class GeoLocationClient:
    """地理定位客户端

    每次调用独立查询，不缓存结果，不重试。
    """

    def __init__(
        self,
        base_url: str = "http://ip-api.com/json",
        timeout_s: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """初始化地理定位客户端

        Args:
            base_url: 查询基础 URL，地址拼接在路径末尾
            timeout_s: 请求超时（秒）
            transport: 可选的 httpx transport（测试注入用）
        """
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._transport = transport

    async def resolve_country(self, address: str) -> str:
        """解析地址所在国家

        Args:
            address: 客户端网络地址

        Returns:
            两位国家代码

        Raises:
            LocationUnavailableError: 查询失败或响应中没有国家代码
        """
        if is_loopback(address):
            log.debug("geo_loopback_bypass", address=address, country_code=DEFAULT_COUNTRY_CODE)
            return DEFAULT_COUNTRY_CODE

        if not address:
            log.warning("geo_lookup_skipped_empty_address")
            raise LocationUnavailableError(address)

        url = f"{self._base_url}/{address}"
        start_time = time.monotonic()
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._timeout_s,
            ) as http_client:
                resp = await http_client.get(url)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            log.warning(
                "geo_lookup_failed",
                address=address,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise LocationUnavailableError(address, original_error=e) from e
        finally:
            structlog.contextvars.bind_contextvars(
                geo_duration_ms=int((time.monotonic() - start_time) * 1000),
            )

        country_code = data.get("countryCode") if isinstance(data, dict) else None
        if not isinstance(country_code, str) or not country_code:
            log.warning("geo_lookup_malformed", address=address)
            raise LocationUnavailableError(address)

        log.debug("geo_lookup_completed", address=address, country_code=country_code)
        return country_code
