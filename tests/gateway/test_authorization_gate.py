"""EventAuthorizationGate 单元测试

测试内容：
1. 非 ads 类型短路，不调用任何外部依赖
2. ads 类型：先定位后授权，严格串行
3. 拒绝时区分 create / update 文案
4. 外部依赖故障原样传播
5. 授权结果绑定到日志上下文
"""

from unittest.mock import AsyncMock

import pytest
import structlog
from eventadmin.core.exceptions import NotAuthorizedError
from eventadmin.core.models import EventType
from eventadmin.gateway.services.authorization import (
    AuthorizationAction,
    AuthorizationContext,
    EventAuthorizationGate,
)
from eventadmin.partner.exceptions import (
    LocationUnavailableError,
    PartnerBadRequestError,
    PartnerUnauthorizedError,
    PartnerUnavailableError,
)


@pytest.fixture
def resolver() -> AsyncMock:
    mock = AsyncMock()
    mock.resolve_country.return_value = "US"
    return mock


@pytest.fixture
def checker() -> AsyncMock:
    mock = AsyncMock()
    mock.check_permission.return_value = True
    return mock


@pytest.fixture
def gate(resolver, checker) -> EventAuthorizationGate:
    return EventAuthorizationGate(location_resolver=resolver, permission_checker=checker)


class TestShortCircuit:
    """非受限类型测试"""

    @pytest.mark.parametrize(
        "event_type",
        [EventType.APP, EventType.LIVEOPS, EventType.CROSSPROMO, None],
    )
    @pytest.mark.parametrize("address", ["127.0.0.1", "8.8.8.8", "", "not-an-address"])
    async def test_no_lookups(self, gate, resolver, checker, event_type, address):
        """不调用定位与授权"""
        result = await gate.authorize(event_type, address)

        assert result is None
        resolver.resolve_country.assert_not_awaited()
        checker.check_permission.assert_not_awaited()


class TestGatedType:
    """ads 类型测试"""

    async def test_granted_returns_context(self, gate, resolver, checker):
        """授权通过返回上下文"""
        resolver.resolve_country.return_value = "SI"

        context = await gate.authorize(EventType.ADS, "89.212.1.1")

        assert isinstance(context, AuthorizationContext)
        assert context.client_address == "89.212.1.1"
        assert context.resolved_country_code == "SI"
        assert context.permission_granted is True
        resolver.resolve_country.assert_awaited_once_with("89.212.1.1")
        checker.check_permission.assert_awaited_once_with("SI")

    async def test_plain_string_type_is_gated(self, gate, checker):
        """字符串 "ads" 同样触发授权"""
        await gate.authorize("ads", "127.0.0.1")
        checker.check_permission.assert_awaited_once()

    async def test_location_before_permission(self, gate, resolver, checker):
        """先定位，后授权"""
        order: list[str] = []

        async def resolve(address):
            order.append("resolve")
            return "US"

        async def check(country_code):
            order.append("check")
            return True

        resolver.resolve_country.side_effect = resolve
        checker.check_permission.side_effect = check

        await gate.authorize(EventType.ADS, "127.0.0.1")
        assert order == ["resolve", "check"]

    async def test_denied_on_create(self, gate, checker):
        """创建被拒绝"""
        checker.check_permission.return_value = False

        with pytest.raises(NotAuthorizedError) as exc_info:
            await gate.authorize(EventType.ADS, "127.0.0.1", AuthorizationAction.CREATE)

        assert str(exc_info.value) == "Not authorized to create ads type events"
        assert exc_info.value.status_code == 403
        assert exc_info.value.country_code == "US"

    async def test_denied_on_update(self, gate, checker):
        """更新被拒绝"""
        checker.check_permission.return_value = False

        with pytest.raises(NotAuthorizedError) as exc_info:
            await gate.authorize(EventType.ADS, "127.0.0.1", AuthorizationAction.UPDATE)

        assert str(exc_info.value) == "Not authorized to update to ads type events"

    async def test_no_caching_between_calls(self, gate, resolver, checker):
        """每次请求重新定位与授权"""
        await gate.authorize(EventType.ADS, "127.0.0.1")
        await gate.authorize(EventType.ADS, "127.0.0.1")

        assert resolver.resolve_country.await_count == 2
        assert checker.check_permission.await_count == 2


class TestFailurePropagation:
    """外部依赖故障测试"""

    async def test_location_failure_skips_permission(self, gate, resolver, checker):
        """定位失败时不调用授权"""
        resolver.resolve_country.side_effect = LocationUnavailableError("8.8.8.8")

        with pytest.raises(LocationUnavailableError):
            await gate.authorize(EventType.ADS, "8.8.8.8")
        checker.check_permission.assert_not_awaited()

    @pytest.mark.parametrize(
        "error",
        [
            PartnerUnauthorizedError(),
            PartnerBadRequestError(),
            PartnerUnavailableError(status=500),
        ],
    )
    async def test_partner_failure_propagates_unchanged(self, gate, checker, error):
        """合作方故障原样传播"""
        checker.check_permission.side_effect = error

        with pytest.raises(type(error)) as exc_info:
            await gate.authorize(EventType.ADS, "127.0.0.1")
        assert exc_info.value is error


class TestLogContext:
    """授权结果日志上下文测试"""

    async def test_granted_bound(self, gate, resolver):
        """授权通过绑定国家代码与结果"""
        structlog.contextvars.clear_contextvars()
        resolver.resolve_country.return_value = "SI"

        await gate.authorize(EventType.ADS, "89.212.1.1")

        bound = structlog.contextvars.get_contextvars()
        assert bound["ads_country_code"] == "SI"
        assert bound["ads_permission"] == "granted"

    async def test_denied_bound(self, gate, checker):
        """拒绝时同样绑定结果"""
        structlog.contextvars.clear_contextvars()
        checker.check_permission.return_value = False

        with pytest.raises(NotAuthorizedError):
            await gate.authorize(EventType.ADS, "127.0.0.1")

        bound = structlog.contextvars.get_contextvars()
        assert bound["ads_country_code"] == "US"
        assert bound["ads_permission"] == "denied"

    async def test_non_gated_binds_nothing(self, gate):
        """非 ads 类型不绑定授权字段"""
        structlog.contextvars.clear_contextvars()

        await gate.authorize(EventType.APP, "127.0.0.1")

        assert "ads_permission" not in structlog.contextvars.get_contextvars()
