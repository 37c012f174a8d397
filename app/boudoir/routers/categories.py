from fastapi import APIRouter, Depends, Query, Request

from app.boudoir.core.deps import require_roles
from app.boudoir.core.error_catalog import AppError, ErrorCatalog
from app.boudoir.db.models import Category
from app.boudoir.db.session import get_db
from app.boudoir.repos.categories import CategoryRepository
from app.boudoir.schemas.categories import (
    CategoryCreateRequest,
    CategoryItem,
    CategoryListResponse,
    CategoryResponse,
)

router = APIRouter()


def _category_item(category, count: int = 0) -> CategoryItem:
    return CategoryItem(
        id=category.id,
        name=category.name,
        slug=category.slug,
        description=category.description,
        article_count=count,
    )


@router.get("/categories", response_model=CategoryListResponse)
def list_categories(request: Request, db=Depends(get_db)):
    rows = CategoryRepository(db).list_with_article_counts()
    return CategoryListResponse(
        categories=[_category_item(category, count) for category, count in rows],
        trace_id=getattr(request.state, "trace_id", ""),
    )


@router.post("/categories", response_model=CategoryResponse, status_code=201)
def create_category(
    request: Request,
    payload: CategoryCreateRequest,
    _admin=Depends(require_roles("ADMIN")),
    db=Depends(get_db),
):
    repo = CategoryRepository(db)
    if repo.find_conflict(payload.name.strip(), payload.slug) is not None:
        raise AppError(ErrorCatalog.CATEGORY_ALREADY_EXISTS)
    category = repo.create(
        Category(name=payload.name.strip(), slug=payload.slug, description=payload.description)
    )
    return CategoryResponse(
        category=_category_item(category),
        trace_id=getattr(request.state, "trace_id", ""),
    )


@router.get("/categories/stats", response_model=CategoryListResponse, summary="Best stocked categories")
def category_stats(
    request: Request,
    limit: int = Query(default=4, ge=1, le=20),
    db=Depends(get_db),
):
    rows = CategoryRepository(db).list_with_article_counts(most_stocked_first=True, limit=limit)
    return CategoryListResponse(
        categories=[_category_item(category, count) for category, count in rows],
        trace_id=getattr(request.state, "trace_id", ""),
    )
