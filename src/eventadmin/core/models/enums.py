"""枚举定义 -- Event 类型

EventType 是封闭枚举，只有 ADS 需要经过地理授权。
"""

from enum import StrEnum


class EventType(StrEnum):
    """Event 类型"""

    APP = "app"
    LIVEOPS = "liveops"
    CROSSPROMO = "crosspromo"
    ADS = "ads"


# 需要地理授权的类型
GATED_EVENT_TYPE: EventType = EventType.ADS


def is_gated(event_type: EventType | str | None) -> bool:
    """判断目标类型是否需要经过授权闸门"""
    return event_type == GATED_EVENT_TYPE
