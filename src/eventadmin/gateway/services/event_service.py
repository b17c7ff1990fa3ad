"""EventService -- Event 创建/查询/更新/删除业务逻辑

写操作在目标类型为 ads 时先经过授权闸门，
授权通过之前不写入任何数据，因此不需要补偿回滚。
"""

import structlog
from eventadmin.core.exceptions import EventNotFoundError
from eventadmin.core.models import Event, EventCreate, EventType, EventUpdate
from eventadmin.core.store import StoreGroup

from .authorization import AuthorizationAction, EventAuthorizationGate

log = structlog.get_logger()


class EventService:
    """Event 业务服务"""

    def __init__(self, store_group: StoreGroup, gate: EventAuthorizationGate) -> None:
        self._stores = store_group
        self._gate = gate

    async def create_event(self, data: EventCreate, client_address: str) -> Event:
        """创建 Event

        Args:
            data: 已校验的创建请求
            client_address: 请求方网络地址

        Returns:
            已持久化的 Event
        """
        await self._gate.authorize(data.type, client_address, AuthorizationAction.CREATE)

        event = await self._stores.event_store.create_event(data)
        log.info(
            "event_created",
            event_id=event.event_id,
            type=event.type.value,
            priority=event.priority,
        )
        return event

    async def list_events(self, event_type: EventType | None = None) -> list[Event]:
        """查询 Event 列表"""
        return await self._stores.event_store.list_events(event_type)

    async def get_event(self, event_id: str) -> Event:
        """查询单个 Event，不存在时抛出 EventNotFoundError"""
        event = await self._stores.event_store.get_event(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    async def update_event(
        self,
        event_id: str,
        patch: EventUpdate,
        client_address: str,
    ) -> Event:
        """部分更新 Event

        授权以补丁中的目标类型为准：设置（或重复设置）为 ads 都会重新授权，
        从 ads 改为其他类型不需要授权。
        """
        event = await self.get_event(event_id)
        changes = patch.changes()

        await self._gate.authorize(
            changes.get("type"),
            client_address,
            AuthorizationAction.UPDATE,
        )

        updated = await self._stores.event_store.save_event(event.model_copy(update=changes))
        log.info(
            "event_updated",
            event_id=event_id,
            fields=sorted(changes),
        )
        return updated

    async def remove_event(self, event_id: str) -> None:
        """删除 Event，不存在时抛出 EventNotFoundError"""
        await self.get_event(event_id)
        await self._stores.event_store.delete_event(event_id)
        log.info("event_removed", event_id=event_id)
