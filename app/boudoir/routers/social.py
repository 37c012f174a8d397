from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from app.boudoir.core.deps import require_active_user
from app.boudoir.db.session import get_db
from app.boudoir.schemas.common import PaginationMeta, page_offset
from app.boudoir.schemas.social import (
    FeedResponse,
    FollowListResponse,
    FollowRequest,
    FollowStatusResponse,
    FollowUserItem,
)
from app.boudoir.services.activity import ActivityEvent, ActivityService
from app.boudoir.services.articles import ArticleService
from app.boudoir.services.follows import FollowService

router = APIRouter()


def _follow_items(rows) -> list[FollowUserItem]:
    return [
        FollowUserItem(id=user.id, name=user.name, role=user.role, location=user.location, followed_at=followed_at)
        for user, followed_at in rows
    ]


@router.post("/users/{user_id}/follow", response_model=FollowStatusResponse)
def toggle_follow(
    request: Request,
    user_id: UUID,
    payload: FollowRequest,
    current_user=Depends(require_active_user),
    db=Depends(get_db),
):
    trace_id = getattr(request.state, "trace_id", "")
    service = FollowService(db)
    is_following = service.toggle(current_user, user_id, payload.action)
    ActivityService(db).record(
        ActivityEvent(
            user_id=current_user.id,
            action="FOLLOW" if is_following else "UNFOLLOW",
            entity_type="user",
            entity_id=str(user_id),
            trace_id=trace_id,
        )
    )
    _, followers, following = service.status(current_user, user_id)
    return FollowStatusResponse(
        is_following=is_following,
        followers_count=followers,
        following_count=following,
        trace_id=trace_id,
    )


@router.get("/users/{user_id}/follow", response_model=FollowStatusResponse)
def follow_status(
    request: Request,
    user_id: UUID,
    current_user=Depends(require_active_user),
    db=Depends(get_db),
):
    is_following, followers, following = FollowService(db).status(current_user, user_id)
    return FollowStatusResponse(
        is_following=is_following,
        followers_count=followers,
        following_count=following,
        trace_id=getattr(request.state, "trace_id", ""),
    )


@router.get("/users/{user_id}/followers", response_model=FollowListResponse)
def list_followers(
    request: Request,
    user_id: UUID,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    db=Depends(get_db),
):
    rows, total = FollowService(db).followers(user_id, limit=limit, offset=page_offset(page, limit))
    return FollowListResponse(
        users=_follow_items(rows),
        pagination=PaginationMeta.build(page=page, limit=limit, total=total),
        trace_id=getattr(request.state, "trace_id", ""),
    )


@router.get("/users/{user_id}/following", response_model=FollowListResponse)
def list_following(
    request: Request,
    user_id: UUID,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    db=Depends(get_db),
):
    rows, total = FollowService(db).following(user_id, limit=limit, offset=page_offset(page, limit))
    return FollowListResponse(
        users=_follow_items(rows),
        pagination=PaginationMeta.build(page=page, limit=limit, total=total),
        trace_id=getattr(request.state, "trace_id", ""),
    )


@router.get("/feed", response_model=FeedResponse, summary="Articles from followed sellers")
def feed(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=12, ge=1, le=50),
    current_user=Depends(require_active_user),
    db=Depends(get_db),
):
    articles, total, following_count = FollowService(db).feed(
        current_user, limit=limit, offset=page_offset(page, limit)
    )
    return FeedResponse(
        articles=ArticleService(db).to_items(articles, viewer=current_user),
        pagination=PaginationMeta.build(page=page, limit=limit, total=total),
        following_count=following_count,
        trace_id=getattr(request.state, "trace_id", ""),
    )
