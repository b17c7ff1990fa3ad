"""Store Protocol 接口定义

定义 EventStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from typing import Protocol

from ..models.enums import EventType
from ..models.event import Event, EventCreate


class EventStore(Protocol):
    """Event 存储接口

    event_id 与时间戳由存储实现负责分配，调用方不传入。
    """

    async def create_event(self, data: EventCreate) -> Event:
        """创建 Event 记录，返回带 event_id 与时间戳的完整记录"""
        ...

    async def get_event(self, event_id: str) -> Event | None:
        """根据 event_id 查询 Event"""
        ...

    async def list_events(self, event_type: EventType | None = None) -> list[Event]:
        """查询 Event 列表，支持按类型筛选"""
        ...

    async def save_event(self, event: Event) -> Event:
        """保存已存在的 Event（刷新 updated_at）"""
        ...

    async def delete_event(self, event_id: str) -> bool:
        """删除 Event，返回是否确有记录被删除"""
        ...
