"""Event Admin Partner -- 外部服务调用层

地理定位与广告合作方客户端的公开接口导出。
"""

from .ad_partner import PERMITTED_SENTINEL, AdPartnerClient

# 配置
from .config import PartnerConfig, load_partner_config

# 异常
from .exceptions import (
    LocationUnavailableError,
    PartnerBadRequestError,
    PartnerError,
    PartnerUnauthorizedError,
    PartnerUnavailableError,
)
from .geo import DEFAULT_COUNTRY_CODE, GeoLocationClient, is_loopback

__all__ = [
    "GeoLocationClient",
    "AdPartnerClient",
    "DEFAULT_COUNTRY_CODE",
    "PERMITTED_SENTINEL",
    "is_loopback",
    "PartnerConfig",
    "load_partner_config",
    "PartnerError",
    "LocationUnavailableError",
    "PartnerUnauthorizedError",
    "PartnerBadRequestError",
    "PartnerUnavailableError",
]
