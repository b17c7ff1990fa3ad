"""EventAuthorizationGate -- ads 类型事件的地理授权闸门

目标类型不是 ads 时直接放行，不做任何外部调用。
目标类型是 ads 时按顺序执行：
1. 地址 -> 国家代码（GeoLocationClient）
2. 国家代码 -> 是否允许（AdPartnerClient）
3. 不允许 -> NotAuthorizedError；允许 -> 返回授权上下文

外部依赖的故障原样向上传播，不做转换、不重试。
"""

from enum import StrEnum
from typing import Protocol

import structlog
from eventadmin.core.exceptions import NotAuthorizedError
from eventadmin.core.models import EventType, is_gated
from pydantic import BaseModel, Field

log = structlog.get_logger()


class AuthorizationAction(StrEnum):
    """触发授权的写操作"""

    CREATE = "create"
    UPDATE = "update"


_DENIAL_MESSAGES: dict[AuthorizationAction, str] = {
    AuthorizationAction.CREATE: "Not authorized to create ads type events",
    AuthorizationAction.UPDATE: "Not authorized to update to ads type events",
}


class LocationResolver(Protocol):
    async def resolve_country(self, address: str) -> str: ...


class PermissionChecker(Protocol):
    async def check_permission(self, country_code: str) -> bool: ...


class AuthorizationContext(BaseModel):
    """单次受限请求的授权上下文，请求结束即丢弃，不持久化"""

    client_address: str = Field(description="请求方网络地址")
    resolved_country_code: str | None = Field(default=None, description="解析出的国家代码")
    permission_granted: bool | None = Field(default=None, description="合作方授权结果")


class EventAuthorizationGate:
    """授权闸门 -- 编排地理定位与合作方授权两步查询"""

    def __init__(
        self,
        location_resolver: LocationResolver,
        permission_checker: PermissionChecker,
    ) -> None:
        self._location_resolver = location_resolver
        self._permission_checker = permission_checker

    async def authorize(
        self,
        intended_type: EventType | str | None,
        client_address: str,
        action: AuthorizationAction = AuthorizationAction.CREATE,
    ) -> AuthorizationContext | None:
        """校验目标类型在请求方所在国家是否允许

        Args:
            intended_type: 写入后的目标类型；None 表示本次写入不改变类型
            client_address: 请求方网络地址
            action: create / update，决定拒绝时的提示文案

        Returns:
            非受限类型返回 None；受限类型授权通过时返回 AuthorizationContext

        Raises:
            NotAuthorizedError: 合作方拒绝
            LocationUnavailableError: 地理定位失败
            PartnerUnauthorizedError / PartnerBadRequestError / PartnerUnavailableError:
                合作方调用失败
        """
        if not is_gated(intended_type):
            return None

        context = AuthorizationContext(client_address=client_address)

        # 第二步依赖第一步的结果，必须串行
        context.resolved_country_code = await self._location_resolver.resolve_country(
            client_address
        )
        context.permission_granted = await self._permission_checker.check_permission(
            context.resolved_country_code
        )

        # 授权结果绑定到日志上下文，本请求后续的 event_created / request_rejected 一并输出
        structlog.contextvars.bind_contextvars(
            ads_country_code=context.resolved_country_code,
            ads_permission="granted" if context.permission_granted else "denied",
        )

        if not context.permission_granted:
            log.info(
                "ads_permission_denied",
                action=action.value,
                country_code=context.resolved_country_code,
            )
            raise NotAuthorizedError(
                _DENIAL_MESSAGES[action],
                country_code=context.resolved_country_code,
            )

        log.info(
            "ads_permission_granted",
            action=action.value,
            country_code=context.resolved_country_code,
        )
        return context
