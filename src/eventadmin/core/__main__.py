"""CLI 入口模块 -- python -m eventadmin.core <command>

支持的命令：
  init-db               初始化数据库 schema
  list-events [type]    列出已存储的 Event，可按类型筛选
"""

import asyncio
import sys

from .config import get_db_path
from .models.enums import EventType

_USAGE = """用法: python -m eventadmin.core <command>
命令:
  init-db               初始化数据库 schema
  list-events [type]    列出已存储的 Event（type: app/liveops/crosspromo/ads）"""


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print(_USAGE)
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_database())
    elif command == "list-events":
        event_type = None
        if len(sys.argv) > 2:
            try:
                event_type = EventType(sys.argv[2])
            except ValueError:
                print(f"未知类型: {sys.argv[2]}")
                sys.exit(1)
        asyncio.run(list_events(event_type))
    else:
        print(f"未知命令: {command}")
        print("可用命令: init-db, list-events")
        sys.exit(1)


async def init_database() -> None:
    """创建数据库文件与 schema"""
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    await store_group.conn.close()
    print("初始化完成")


async def list_events(event_type: EventType | None = None) -> None:
    """打印已存储的 Event"""
    from .store import create_store_group

    store_group = await create_store_group(get_db_path())

    try:
        events = await store_group.event_store.list_events(event_type)
        for event in events:
            print(
                f"{event.event_id}  {event.type.value:<10}  "
                f"p{event.priority:<2}  {event.name}"
            )
        print(f"共 {len(events)} 条")
    finally:
        await store_group.conn.close()


if __name__ == "__main__":
    main()
