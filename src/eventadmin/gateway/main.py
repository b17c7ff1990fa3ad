"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + 外部服务客户端与授权闸门初始化 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from eventadmin.core.config import get_db_path
from eventadmin.core.store import create_store_group
from eventadmin.partner import AdPartnerClient, GeoLocationClient, load_partner_config
from fastapi import FastAPI

from .errors import register_exception_handlers
from .middleware.logging_config import setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import events, health
from .services.authorization import EventAuthorizationGate

log = structlog.get_logger()


def build_authorization_gate(
    geo_client: GeoLocationClient,
    ad_partner_client: AdPartnerClient,
) -> EventAuthorizationGate:
    """组装授权闸门"""
    return EventAuthorizationGate(
        location_resolver=geo_client,
        permission_checker=ad_partner_client,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化 DB 和外部服务客户端，关闭时清理连接"""
    store_group = await create_store_group(get_db_path())
    app.state.store_group = store_group

    try:
        partner_config = load_partner_config()
        app.state.partner_config = partner_config

        geo_client = GeoLocationClient(
            base_url=partner_config.geo_base_url,
            timeout_s=partner_config.timeout_s,
        )
        ad_partner_client = AdPartnerClient(
            url=partner_config.ad_partner_url,
            username=partner_config.ad_partner_username,
            password=partner_config.ad_partner_password.get_secret_value(),
            timeout_s=partner_config.timeout_s,
        )
        app.state.authorization_gate = build_authorization_gate(geo_client, ad_partner_client)
        log.info(
            "authorization_gate_initialized",
            geo_base_url=partner_config.geo_base_url,
            ad_partner_url=partner_config.ad_partner_url,
            timeout_s=partner_config.timeout_s,
        )

        yield
    finally:
        await store_group.conn.close()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="Event Admin",
        version="0.1.0",
        description="Event 管理后台 API",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Trace 后 Logging）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)

    setup_logging()
    register_exception_handlers(app)

    app.include_router(events.router, tags=["events"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
