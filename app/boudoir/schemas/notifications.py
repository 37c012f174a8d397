from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from app.boudoir.schemas.common import PaginationMeta


class NotificationItem(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    type: str
    title: str
    message: str
    actor_id: UUID | None = None
    entity_id: str | None = None
    entity_type: str | None = None
    is_read: bool
    read_at: datetime | None = None
    created_at: datetime


class NotificationListResponse(BaseModel):
    notifications: list[NotificationItem]
    unread_count: int
    pagination: PaginationMeta
    trace_id: str


class NotificationResponse(BaseModel):
    notification: NotificationItem
    trace_id: str


class MarkAllReadResponse(BaseModel):
    updated: int
    trace_id: str
