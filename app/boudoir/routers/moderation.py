from fastapi import APIRouter, Depends, Query, Request

from app.boudoir.core.deps import require_roles
from app.boudoir.db.session import get_db
from app.boudoir.schemas.common import PaginationMeta, page_offset
from app.boudoir.schemas.moderation import (
    ModerationAction,
    ModerationDecisionResponse,
    ModerationHistoryResponse,
    ModerationLogItem,
    ModerationQueueResponse,
    ModerationRequest,
)
from app.boudoir.services.activity import ActivityEvent, ActivityService
from app.boudoir.services.articles import ArticleService
from app.boudoir.services.moderation import ModerationService

router = APIRouter()


@router.get("/moderation", response_model=ModerationQueueResponse, summary="Articles awaiting moderation")
def moderation_queue(
    request: Request,
    _moderator=Depends(require_roles("MODERATOR", "ADMIN")),
    db=Depends(get_db),
):
    articles = ModerationService(db).pending()
    return ModerationQueueResponse(
        articles=ArticleService(db).to_items(articles),
        total=len(articles),
        trace_id=getattr(request.state, "trace_id", ""),
    )


@router.post("/moderation", response_model=ModerationDecisionResponse, summary="Approve or reject an article")
def moderate_article(
    request: Request,
    payload: ModerationRequest,
    moderator=Depends(require_roles("MODERATOR", "ADMIN")),
    db=Depends(get_db),
):
    trace_id = getattr(request.state, "trace_id", "")
    article = ModerationService(db).decide(
        moderator,
        article_id=payload.article_id,
        action=payload.action,
        notes=payload.notes,
        rejection_reason=payload.rejection_reason,
    )
    ActivityService(db).record(
        ActivityEvent(
            user_id=moderator.id,
            action=f"MODERATION_{payload.action}",
            entity_type="article",
            entity_id=str(article.id),
            trace_id=trace_id,
        )
    )
    return ModerationDecisionResponse(
        article=ArticleService(db).to_items([article])[0],
        action=payload.action,
        trace_id=trace_id,
    )


@router.get("/admin/moderation-history", response_model=ModerationHistoryResponse)
def moderation_history(
    request: Request,
    action: ModerationAction | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    _admin=Depends(require_roles("ADMIN")),
    db=Depends(get_db),
):
    rows, total = ModerationService(db).history(action=action, limit=limit, offset=page_offset(page, limit))
    return ModerationHistoryResponse(
        logs=[
            ModerationLogItem(
                id=log.id,
                article_id=log.article_id,
                article_title=title,
                moderator_id=log.moderator_id,
                moderator_name=moderator_name,
                action=log.action,
                notes=log.notes,
                rejection_reason=log.rejection_reason,
                created_at=log.created_at,
            )
            for log, title, moderator_name in rows
        ],
        pagination=PaginationMeta.build(page=page, limit=limit, total=total),
        trace_id=getattr(request.state, "trace_id", ""),
    )
