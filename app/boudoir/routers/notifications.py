from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from app.boudoir.core.deps import require_active_user
from app.boudoir.db.session import get_db
from app.boudoir.schemas.common import PaginationMeta, page_offset
from app.boudoir.schemas.notifications import (
    MarkAllReadResponse,
    NotificationItem,
    NotificationListResponse,
    NotificationResponse,
)
from app.boudoir.services.notifications import NotificationService

router = APIRouter()


@router.get("/notifications", response_model=NotificationListResponse)
def list_notifications(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    unread_only: bool = Query(default=False, alias="unreadOnly"),
    current_user=Depends(require_active_user),
    db=Depends(get_db),
):
    rows, total, unread = NotificationService(db).list_for_user(
        current_user.id,
        unread_only=unread_only,
        limit=limit,
        offset=page_offset(page, limit),
    )
    return NotificationListResponse(
        notifications=[NotificationItem.model_validate(row) for row in rows],
        unread_count=unread,
        pagination=PaginationMeta.build(page=page, limit=limit, total=total),
        trace_id=getattr(request.state, "trace_id", ""),
    )


@router.patch("/notifications", response_model=MarkAllReadResponse, summary="Mark every notification read")
def mark_all_read(
    request: Request,
    current_user=Depends(require_active_user),
    db=Depends(get_db),
):
    updated = NotificationService(db).mark_all_read(current_user)
    return MarkAllReadResponse(updated=updated, trace_id=getattr(request.state, "trace_id", ""))


@router.post("/notifications/{notification_id}/read", response_model=NotificationResponse)
def mark_read(
    request: Request,
    notification_id: UUID,
    current_user=Depends(require_active_user),
    db=Depends(get_db),
):
    notification = NotificationService(db).mark_read(current_user, notification_id)
    return NotificationResponse(
        notification=NotificationItem.model_validate(notification),
        trace_id=getattr(request.state, "trace_id", ""),
    )
