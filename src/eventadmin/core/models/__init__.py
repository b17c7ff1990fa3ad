"""Event Admin Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import GATED_EVENT_TYPE, EventType, is_gated
from .event import Event, EventCreate, EventUpdate

__all__ = [
    # 枚举
    "EventType",
    "GATED_EVENT_TYPE",
    "is_gated",
    # 模型
    "Event",
    "EventCreate",
    "EventUpdate",
]
