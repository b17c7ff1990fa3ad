"""Event CRUD 路由

POST   /api/events              创建 Event（ads 类型需授权）
GET    /api/events              Event 列表，支持 type 筛选
GET    /api/events/{event_id}   Event 详情
PATCH  /api/events/{event_id}   部分更新（目标类型为 ads 时需授权）
DELETE /api/events/{event_id}   删除 Event

失败由 gateway.errors 中注册的异常处理器统一渲染：
- 404: Event 不存在
- 403: 合作方拒绝 ads 类型
- 401 / 400: 合作方返回对应状态
- 500: 地理定位或合作方不可用
"""

from eventadmin.core.models import Event, EventCreate, EventType, EventUpdate
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from starlette.responses import JSONResponse

from ..deps import get_client_address, get_event_service
from ..services.event_service import EventService

router = APIRouter()


class EventResponse(BaseModel):
    """Event 响应"""

    event_id: str
    name: str
    description: str
    type: str
    priority: int
    created_at: str
    updated_at: str


class EventListResponse(BaseModel):
    """Event 列表响应"""

    events: list[EventResponse]


class DeleteResponse(BaseModel):
    """删除成功响应"""

    event_id: str
    status: str


def _to_response(event: Event) -> EventResponse:
    return EventResponse(
        event_id=event.event_id,
        name=event.name,
        description=event.description,
        type=event.type.value,
        priority=event.priority,
        created_at=event.created_at.isoformat(),
        updated_at=event.updated_at.isoformat(),
    )


@router.post("/api/events", status_code=201, response_model=EventResponse)
async def create_event(
    body: EventCreate,
    service: EventService = Depends(get_event_service),
    client_address: str = Depends(get_client_address),
):
    """创建 Event

    - 201: 创建成功
    - 403: Not authorized to create ads type events
    """
    event = await service.create_event(body, client_address)
    return _to_response(event)


@router.get("/api/events", response_model=EventListResponse)
async def list_events(
    event_type: EventType | None = Query(default=None, alias="type", description="按类型筛选"),
    service: EventService = Depends(get_event_service),
):
    """查询 Event 列表，按 created_at 倒序"""
    events = await service.list_events(event_type)
    return EventListResponse(events=[_to_response(e) for e in events])


@router.get("/api/events/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    service: EventService = Depends(get_event_service),
):
    """查询 Event 详情"""
    event = await service.get_event(event_id)
    return _to_response(event)


@router.patch("/api/events/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    body: EventUpdate,
    service: EventService = Depends(get_event_service),
    client_address: str = Depends(get_client_address),
):
    """部分更新 Event

    - 200: 更新成功
    - 403: Not authorized to update to ads type events
    - 404: Event 不存在
    """
    event = await service.update_event(event_id, body, client_address)
    return _to_response(event)


@router.delete("/api/events/{event_id}")
async def delete_event(
    event_id: str,
    service: EventService = Depends(get_event_service),
):
    """删除 Event"""
    await service.remove_event(event_id)
    return JSONResponse(
        status_code=200,
        content=DeleteResponse(event_id=event_id, status="DELETED").model_dump(),
    )
