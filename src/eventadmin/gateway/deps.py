"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store 与服务实例

Store 与授权闸门通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from eventadmin.core.store import StoreGroup
from fastapi import Depends, Request

from .middleware.logging_mw import peer_address
from .services.authorization import EventAuthorizationGate
from .services.event_service import EventService


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_authorization_gate(request: Request) -> EventAuthorizationGate:
    """从 app.state 获取授权闸门"""
    return request.app.state.authorization_gate


def get_event_service(
    store_group: StoreGroup = Depends(get_store_group),
    gate: EventAuthorizationGate = Depends(get_authorization_gate),
) -> EventService:
    """构造请求级 EventService"""
    return EventService(store_group, gate)


def get_client_address(request: Request) -> str:
    """请求方对端地址

    优先复用 LoggingMiddleware 已确定并绑定到日志上下文的地址，
    未经过该中间件时（如单独挂载路由的测试）回退到传输层地址。
    """
    return getattr(request.state, "client_address", None) or peer_address(request)
