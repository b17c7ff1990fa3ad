"""Event Domain Model + 输入模型

Event 是持久化记录；EventCreate / EventUpdate 是边界输入，
负责字段存在性、取值范围和枚举成员校验。
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from ..config import PRIORITY_MAX, PRIORITY_MIN
from .enums import EventType


class Event(BaseModel):
    """Event 数据模型

    event_id 由存储层在创建时分配（ULID），之后不可变；
    created_at / updated_at 同样由存储层维护。
    """

    event_id: str = Field(description="唯一标识，ULID 格式")
    name: str = Field(description="事件名称")
    description: str = Field(description="事件描述")
    type: EventType = Field(description="事件类型")
    priority: int = Field(ge=PRIORITY_MIN, le=PRIORITY_MAX, description="优先级 0-10")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="更新时间")


class EventCreate(BaseModel):
    """创建 Event 的请求体"""

    name: str = Field(min_length=1, description="事件名称")
    description: str = Field(min_length=1, description="事件描述")
    type: EventType = Field(description="事件类型")
    priority: int = Field(
        ge=PRIORITY_MIN,
        le=PRIORITY_MAX,
        strict=True,
        description="优先级 0-10",
    )


class EventUpdate(BaseModel):
    """部分更新 Event 的请求体

    只有显式传入的字段会被应用；显式传入 null 视为非法。
    """

    name: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    type: EventType | None = Field(default=None)
    priority: int | None = Field(
        default=None,
        ge=PRIORITY_MIN,
        le=PRIORITY_MAX,
        strict=True,
    )

    @field_validator("name", "description", "type", "priority", mode="before")
    @classmethod
    def _reject_explicit_null(cls, value):
        # 默认值不会触发校验器，能走到这里的 None 一定是显式传入
        if value is None:
            raise ValueError("field may be omitted but not null")
        return value

    def changes(self) -> dict:
        """返回显式设置的字段"""
        return self.model_dump(exclude_unset=True)
