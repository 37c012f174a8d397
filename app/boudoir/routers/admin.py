from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from app.boudoir.core.deps import require_roles
from app.boudoir.db.session import get_db
from app.boudoir.schemas.admin import (
    AdminUserCreateRequest,
    AdminUserListResponse,
    AdminUserResponse,
    AdminUserUpdateRequest,
)
from app.boudoir.schemas.auth import UserOut, UserRole, UserStatus
from app.boudoir.schemas.common import PaginationMeta, page_offset
from app.boudoir.services.activity import ActivityEvent, ActivityService
from app.boudoir.services.users import UserAdminService

router = APIRouter()


@router.get("/users", response_model=AdminUserListResponse)
def list_users(
    request: Request,
    search: str | None = Query(default=None, max_length=100),
    role: UserRole | None = Query(default=None),
    status: UserStatus | None = Query(default=None),
    sort_by: Literal["name", "email", "created_at", "last_login_at"] = Query(default="created_at", alias="sortBy"),
    sort_order: Literal["asc", "desc"] = Query(default="desc", alias="sortOrder"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=25, ge=1, le=100),
    _admin=Depends(require_roles("ADMIN")),
    db=Depends(get_db),
):
    users, total = UserAdminService(db).list_users(
        role=role,
        status=status,
        search=search.strip() if search and search.strip() else None,
        limit=limit,
        offset=page_offset(page, limit),
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return AdminUserListResponse(
        users=[UserOut.model_validate(user) for user in users],
        pagination=PaginationMeta.build(page=page, limit=limit, total=total),
        trace_id=getattr(request.state, "trace_id", ""),
    )


@router.post("/users", response_model=AdminUserResponse, status_code=201)
def create_user(
    request: Request,
    payload: AdminUserCreateRequest,
    admin=Depends(require_roles("ADMIN")),
    db=Depends(get_db),
):
    trace_id = getattr(request.state, "trace_id", "")
    user = UserAdminService(db).create_user(payload)
    ActivityService(db).record(
        ActivityEvent(
            user_id=admin.id,
            action="ADMIN_USER_CREATE",
            entity_type="user",
            entity_id=str(user.id),
            metadata={"role": user.role},
            trace_id=trace_id,
        )
    )
    return AdminUserResponse(user=UserOut.model_validate(user), trace_id=trace_id)


@router.patch("/users/{user_id}", response_model=AdminUserResponse)
def update_user(
    request: Request,
    user_id: UUID,
    payload: AdminUserUpdateRequest,
    admin=Depends(require_roles("ADMIN")),
    db=Depends(get_db),
):
    trace_id = getattr(request.state, "trace_id", "")
    user = UserAdminService(db).update_user(admin, user_id, payload)
    ActivityService(db).record(
        ActivityEvent(
            user_id=admin.id,
            action="ADMIN_USER_UPDATE",
            entity_type="user",
            entity_id=str(user.id),
            metadata=payload.model_dump(exclude_none=True),
            trace_id=trace_id,
        )
    )
    return AdminUserResponse(user=UserOut.model_validate(user), trace_id=trace_id)
