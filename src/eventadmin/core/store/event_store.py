"""EventStore SQLite 实现

负责分配 event_id（ULID）与维护 created_at / updated_at。
每次写操作独立提交，失败时回滚。
"""

from datetime import UTC, datetime

import aiosqlite
from ulid import ULID

from ..models.enums import EventType
from ..models.event import Event, EventCreate


class SqliteEventStore:
    """EventStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_event(self, data: EventCreate) -> Event:
        """创建 Event 记录"""
        now = datetime.now(UTC)
        event = Event(
            event_id=str(ULID()),
            name=data.name,
            description=data.description,
            type=data.type,
            priority=data.priority,
            created_at=now,
            updated_at=now,
        )
        try:
            await self._conn.execute(
                """
                INSERT INTO events (event_id, name, description, type, priority,
                                    created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    event.event_id,
                    event.name,
                    event.description,
                    event.type.value,
                    event.priority,
                    event.created_at.isoformat(),
                    event.updated_at.isoformat(),
                ),
            )
            await self._conn.commit()
        except Exception:
            await self._conn.rollback()
            raise
        return event

    async def get_event(self, event_id: str) -> Event | None:
        """根据 event_id 查询 Event"""
        cursor = await self._conn.execute(
            "SELECT * FROM events WHERE event_id = ?",
            (event_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_event(row)

    async def list_events(self, event_type: EventType | None = None) -> list[Event]:
        """查询 Event 列表，支持按类型筛选，按 created_at 倒序"""
        if event_type:
            cursor = await self._conn.execute(
                "SELECT * FROM events WHERE type = ? ORDER BY created_at DESC, event_id DESC",
                (event_type.value,),
            )
        else:
            cursor = await self._conn.execute(
                "SELECT * FROM events ORDER BY created_at DESC, event_id DESC"
            )
        rows = await cursor.fetchall()
        return [self._row_to_event(row) for row in rows]

    async def save_event(self, event: Event) -> Event:
        """保存已存在的 Event，刷新 updated_at"""
        saved = event.model_copy(update={"updated_at": datetime.now(UTC)})
        try:
            await self._conn.execute(
                """
                UPDATE events
                SET name = ?, description = ?, type = ?, priority = ?, updated_at = ?
                WHERE event_id = ?
                """,
                (
                    saved.name,
                    saved.description,
                    saved.type.value,
                    saved.priority,
                    saved.updated_at.isoformat(),
                    saved.event_id,
                ),
            )
            await self._conn.commit()
        except Exception:
            await self._conn.rollback()
            raise
        return saved

    async def delete_event(self, event_id: str) -> bool:
        """删除 Event"""
        try:
            cursor = await self._conn.execute(
                "DELETE FROM events WHERE event_id = ?",
                (event_id,),
            )
            await self._conn.commit()
        except Exception:
            await self._conn.rollback()
            raise
        return cursor.rowcount > 0

    @staticmethod
    def _row_to_event(row: aiosqlite.Row) -> Event:
        """将数据库行转换为 Event 模型"""
        return Event(
            event_id=row[0],
            name=row[1],
            description=row[2],
            type=row[3],
            priority=row[4],
            created_at=datetime.fromisoformat(row[5]),
            updated_at=datetime.fromisoformat(row[6]),
        )
