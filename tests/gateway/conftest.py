"""gateway 测试配置 -- FastAPI app + 外部服务 MockTransport fixture"""

import os
from collections.abc import AsyncGenerator, Callable
from dataclasses import dataclass, field
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from eventadmin.core.store import create_store_group
from eventadmin.gateway.services.authorization import EventAuthorizationGate
from eventadmin.partner import PERMITTED_SENTINEL, AdPartnerClient, GeoLocationClient
from httpx import ASGITransport, AsyncClient


@dataclass
class FakePartners:
    """记录外部调用的假地理定位 + 假合作方"""

    geo_status: int = 200
    geo_payload: dict = field(default_factory=lambda: {"countryCode": "SI"})
    partner_status: int = 200
    partner_payload: dict = field(default_factory=lambda: {"ads": PERMITTED_SENTINEL})
    partner_error: Exception | None = None
    geo_calls: list[httpx.Request] = field(default_factory=list)
    partner_calls: list[httpx.Request] = field(default_factory=list)

    def _geo_handler(self, request: httpx.Request) -> httpx.Response:
        self.geo_calls.append(request)
        return httpx.Response(self.geo_status, json=self.geo_payload)

    def _partner_handler(self, request: httpx.Request) -> httpx.Response:
        self.partner_calls.append(request)
        if self.partner_error is not None:
            raise self.partner_error
        return httpx.Response(self.partner_status, json=self.partner_payload)

    def build_gate(self) -> EventAuthorizationGate:
        return EventAuthorizationGate(
            location_resolver=GeoLocationClient(
                base_url="http://geo.test/json",
                transport=httpx.MockTransport(self._geo_handler),
            ),
            permission_checker=AdPartnerClient(
                url="https://partner.test/fun7-ad-partner",
                username="fun7user",
                password="fun7pass",
                transport=httpx.MockTransport(self._partner_handler),
            ),
        )

    @property
    def call_count(self) -> int:
        return len(self.geo_calls) + len(self.partner_calls)


@pytest.fixture
def partners() -> FakePartners:
    """默认：地理定位返回 SI，合作方允许"""
    return FakePartners()


@pytest_asyncio.fixture
async def test_app(tmp_path: Path, partners: FakePartners):
    """创建测试用 FastAPI app，手动初始化 lifespan 状态"""
    os.environ["EVENTADMIN_DB_PATH"] = str(tmp_path / "test.db")

    from eventadmin.gateway.main import create_app

    app = create_app()

    # 手动初始化（绕过 lifespan）
    store_group = await create_store_group(str(tmp_path / "test.db"))
    app.state.store_group = store_group
    app.state.authorization_gate = partners.build_gate()

    yield app

    await store_group.conn.close()
    os.environ.pop("EVENTADMIN_DB_PATH", None)


@pytest.fixture
def make_client(test_app) -> Callable[[str], AsyncClient]:
    """按指定对端地址创建 AsyncClient"""

    def _make(client_host: str = "127.0.0.1") -> AsyncClient:
        return AsyncClient(
            transport=ASGITransport(app=test_app, client=(client_host, 50000)),
            base_url="http://test",
        )

    return _make


@pytest_asyncio.fixture
async def client(make_client) -> AsyncGenerator[AsyncClient, None]:
    """本机地址（127.0.0.1）的 AsyncClient"""
    async with make_client() as ac:
        yield ac
