"""PartnerConfig -- 外部服务配置加载

从环境变量加载地理定位与广告合作方的地址、凭据和超时。
"""

import os

import structlog
from pydantic import BaseModel, Field, SecretStr

log = structlog.get_logger()

DEFAULT_TIMEOUT_S = 10


class PartnerConfig(BaseModel):
    """外部服务配置 -- 从环境变量加载

    环境变量:
        EVENTADMIN_GEO_BASE_URL: 地理定位查询基础 URL
        EVENTADMIN_AD_PARTNER_URL: 广告合作方接口 URL
        EVENTADMIN_AD_PARTNER_USERNAME: 合作方 basic auth 用户名
        EVENTADMIN_AD_PARTNER_PASSWORD: 合作方 basic auth 密码
        EVENTADMIN_HTTP_TIMEOUT_S: 外部调用超时（秒，默认 10）
    """

    geo_base_url: str = Field(
        default="http://ip-api.com/json",
        description="地理定位查询基础 URL，地址拼接在路径末尾",
    )
    ad_partner_url: str = Field(
        default="https://us-central1-o7tools.cloudfunctions.net/fun7-ad-partner",
        description="广告合作方接口 URL",
    )
    ad_partner_username: str = Field(
        default="fun7user",
        description="合作方 basic auth 用户名",
    )
    ad_partner_password: SecretStr = Field(
        default=SecretStr("fun7pass"),
        description="合作方 basic auth 密码",
    )
    timeout_s: int = Field(
        default=DEFAULT_TIMEOUT_S,
        ge=1,
        description="外部调用超时（秒）",
    )


def load_partner_config() -> PartnerConfig:
    """从环境变量加载 Partner 配置

    环境变量映射:
        EVENTADMIN_GEO_BASE_URL -> geo_base_url
        EVENTADMIN_AD_PARTNER_URL -> ad_partner_url
        EVENTADMIN_AD_PARTNER_USERNAME -> ad_partner_username
        EVENTADMIN_AD_PARTNER_PASSWORD -> ad_partner_password
        EVENTADMIN_HTTP_TIMEOUT_S -> timeout_s (默认 10)

    Returns:
        PartnerConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("EVENTADMIN_GEO_BASE_URL"):
        kwargs["geo_base_url"] = val

    if val := os.environ.get("EVENTADMIN_AD_PARTNER_URL"):
        kwargs["ad_partner_url"] = val

    if val := os.environ.get("EVENTADMIN_AD_PARTNER_USERNAME"):
        kwargs["ad_partner_username"] = val

    if val := os.environ.get("EVENTADMIN_AD_PARTNER_PASSWORD"):
        kwargs["ad_partner_password"] = SecretStr(val)

    if val := os.environ.get("EVENTADMIN_HTTP_TIMEOUT_S"):
        try:
            timeout_s = int(val)
        except ValueError:
            timeout_s = 0
        if timeout_s >= 1:
            kwargs["timeout_s"] = timeout_s
        else:
            log.warning(
                "invalid_timeout_config",
                env_var="EVENTADMIN_HTTP_TIMEOUT_S",
                value=val,
                fallback=DEFAULT_TIMEOUT_S,
            )

    return PartnerConfig(**kwargs)
