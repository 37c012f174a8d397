from decimal import Decimal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response

from app.boudoir.core.config import settings
from app.boudoir.core.deps import get_optional_user, require_active_user, require_roles
from app.boudoir.db.session import get_db
from app.boudoir.repos.articles import ArticleRepository
from app.boudoir.schemas.articles import (
    ArticleCondition,
    ArticleCreateRequest,
    ArticleDetailResponse,
    ArticleListResponse,
    ArticleResponse,
    ArticleUpdateRequest,
    PaymentItem,
    PaymentRequest,
    PaymentResponse,
    PublicSort,
)
from app.boudoir.schemas.common import PaginationMeta, page_offset
from app.boudoir.schemas.social import FavoriteResponse
from app.boudoir.services.activity import ActivityEvent, ActivityService
from app.boudoir.services.articles import ArticleService

router = APIRouter()


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value or value.upper() == "ALL":
        return None
    return value


@router.get("/articles", response_model=ArticleListResponse, summary="Browse published articles")
def list_articles(
    request: Request,
    search: str | None = Query(default=None, max_length=100),
    category_id: UUID | None = Query(default=None, alias="categoryId"),
    min_price: Decimal | None = Query(default=None, alias="minPrice", ge=0),
    max_price: Decimal | None = Query(default=None, alias="maxPrice", ge=0),
    condition: ArticleCondition | None = Query(default=None),
    size: str | None = Query(default=None, max_length=20),
    sort_by: PublicSort = Query(default="newest", alias="sortBy"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.ARTICLES_DEFAULT_PAGE_SIZE, ge=1, le=settings.ARTICLES_MAX_PAGE_SIZE),
    viewer=Depends(get_optional_user),
    db=Depends(get_db),
):
    articles, total = ArticleRepository(db).list_public(
        search=_blank_to_none(search),
        category_id=category_id,
        min_price=min_price,
        max_price=max_price,
        condition=condition,
        size=_blank_to_none(size),
        sort_by=sort_by,
        limit=limit,
        offset=page_offset(page, limit),
    )
    return ArticleListResponse(
        articles=ArticleService(db).to_items(articles, viewer=viewer),
        pagination=PaginationMeta.build(page=page, limit=limit, total=total),
        trace_id=getattr(request.state, "trace_id", ""),
    )


@router.post("/articles", response_model=ArticleResponse, status_code=201, summary="Create an article")
def create_article(
    request: Request,
    payload: ArticleCreateRequest,
    seller=Depends(require_roles("SELLER")),
    db=Depends(get_db),
):
    trace_id = getattr(request.state, "trace_id", "")
    service = ArticleService(db)
    article = service.create(seller, payload)
    ActivityService(db).record(
        ActivityEvent(
            user_id=seller.id,
            action="ARTICLE_CREATE",
            entity_type="article",
            entity_id=str(article.id),
            metadata={"title": article.title},
            trace_id=trace_id,
        )
    )
    return ArticleResponse(article=service.to_items([article])[0], trace_id=trace_id)


@router.get("/articles/{article_id}", response_model=ArticleDetailResponse)
def get_article(
    request: Request,
    article_id: UUID,
    viewer=Depends(get_optional_user),
    db=Depends(get_db),
):
    service = ArticleService(db)
    article, similar = service.get_detail(article_id, viewer=viewer)
    return ArticleDetailResponse(
        article=service.to_items([article], viewer=viewer)[0],
        similar=service.to_items(similar, viewer=viewer),
        trace_id=getattr(request.state, "trace_id", ""),
    )


@router.patch("/articles/{article_id}", response_model=ArticleResponse)
def update_article(
    request: Request,
    article_id: UUID,
    payload: ArticleUpdateRequest,
    current_user=Depends(require_active_user),
    db=Depends(get_db),
):
    service = ArticleService(db)
    article = service.update(current_user, article_id, payload)
    return ArticleResponse(article=service.to_items([article])[0], trace_id=getattr(request.state, "trace_id", ""))


@router.delete("/articles/{article_id}", status_code=204)
def delete_article(
    article_id: UUID,
    current_user=Depends(require_active_user),
    db=Depends(get_db),
):
    ArticleService(db).delete(current_user, article_id)
    return Response(status_code=204)


@router.post("/articles/{article_id}/duplicate", response_model=ArticleResponse, status_code=201)
def duplicate_article(
    request: Request,
    article_id: UUID,
    seller=Depends(require_roles("SELLER")),
    db=Depends(get_db),
):
    trace_id = getattr(request.state, "trace_id", "")
    service = ArticleService(db)
    article = service.duplicate(seller, article_id)
    ActivityService(db).record(
        ActivityEvent(
            user_id=seller.id,
            action="ARTICLE_DUPLICATE",
            entity_type="article",
            entity_id=str(article.id),
            metadata={"source_id": str(article_id)},
            trace_id=trace_id,
        )
    )
    return ArticleResponse(article=service.to_items([article])[0], trace_id=trace_id)


@router.post("/articles/{article_id}/payment", response_model=PaymentResponse, status_code=201)
def pay_for_article(
    request: Request,
    article_id: UUID,
    payload: PaymentRequest,
    current_user=Depends(require_roles("SELLER")),
    db=Depends(get_db),
):
    trace_id = getattr(request.state, "trace_id", "")
    service = ArticleService(db)
    payment, article = service.pay(current_user, article_id, payload)
    ActivityService(db).record(
        ActivityEvent(
            user_id=current_user.id,
            action="PAYMENT",
            entity_type="article",
            entity_id=str(article.id),
            metadata={"method": payment.method, "amount": str(payment.amount)},
            trace_id=trace_id,
        )
    )
    return PaymentResponse(
        payment=PaymentItem.model_validate(payment),
        article=service.to_items([article])[0],
        trace_id=trace_id,
    )


@router.post("/articles/{article_id}/favorite", response_model=FavoriteResponse, status_code=201)
def add_favorite(
    request: Request,
    article_id: UUID,
    current_user=Depends(require_active_user),
    db=Depends(get_db),
):
    trace_id = getattr(request.state, "trace_id", "")
    ArticleService(db).add_favorite(current_user, article_id)
    ActivityService(db).record(
        ActivityEvent(
            user_id=current_user.id,
            action="FAVORITE_ADD",
            entity_type="article",
            entity_id=str(article_id),
            trace_id=trace_id,
        )
    )
    return FavoriteResponse(article_id=article_id, is_favorited=True, trace_id=trace_id)


@router.delete("/articles/{article_id}/favorite", response_model=FavoriteResponse)
def remove_favorite(
    request: Request,
    article_id: UUID,
    current_user=Depends(require_active_user),
    db=Depends(get_db),
):
    ArticleService(db).remove_favorite(current_user, article_id)
    return FavoriteResponse(
        article_id=article_id,
        is_favorited=False,
        trace_id=getattr(request.state, "trace_id", ""),
    )
