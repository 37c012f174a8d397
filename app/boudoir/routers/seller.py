from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from app.boudoir.core.deps import require_active_user, require_roles
from app.boudoir.db.session import get_db
from app.boudoir.repos.articles import SELLER_STATUS_FILTERS
from app.boudoir.schemas.articles import SellerArticleListResponse, SellerSort
from app.boudoir.schemas.common import PaginationMeta, page_offset
from app.boudoir.schemas.social import FavoriteListResponse
from app.boudoir.services.articles import ArticleService

router = APIRouter()


@router.get("/seller/articles", response_model=SellerArticleListResponse, summary="List the seller's own articles")
def list_seller_articles(
    request: Request,
    search: str | None = Query(default=None, max_length=100),
    status: str = Query(default="all"),
    category_id: UUID | None = Query(default=None, alias="categoryId"),
    sort_by: SellerSort = Query(default="recent", alias="sortBy"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    seller=Depends(require_roles("SELLER")),
    db=Depends(get_db),
):
    normalized_status = status.strip().lower()
    items, total = ArticleService(db).list_for_seller(
        seller,
        search=search.strip() if search and search.strip() else None,
        status=normalized_status if normalized_status in SELLER_STATUS_FILTERS else None,
        category_id=category_id,
        sort_by=sort_by,
        limit=limit,
        offset=page_offset(page, limit),
    )
    return SellerArticleListResponse(
        articles=items,
        pagination=PaginationMeta.build(page=page, limit=limit, total=total),
        trace_id=getattr(request.state, "trace_id", ""),
    )


@router.get("/user/favorites", response_model=FavoriteListResponse)
def list_favorites(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    current_user=Depends(require_active_user),
    db=Depends(get_db),
):
    items, total = ArticleService(db).list_favorites(current_user, limit=limit, offset=page_offset(page, limit))
    return FavoriteListResponse(
        articles=items,
        pagination=PaginationMeta.build(page=page, limit=limit, total=total),
        trace_id=getattr(request.state, "trace_id", ""),
    )
