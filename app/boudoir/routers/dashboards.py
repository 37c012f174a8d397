from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from app.boudoir.core.deps import get_optional_user, require_roles
from app.boudoir.db.session import get_db
from app.boudoir.schemas.common import PaginationMeta, page_offset
from app.boudoir.schemas.dashboards import BuyerDashboardResponse, SellerDashboardResponse, SellerPageResponse
from app.boudoir.services.dashboards import DashboardService

router = APIRouter()


@router.get("/seller/dashboard", response_model=SellerDashboardResponse, summary="Seller statistics")
def seller_dashboard(
    request: Request,
    seller=Depends(require_roles("SELLER", "ADMIN")),
    db=Depends(get_db),
):
    stats, recent = DashboardService(db).seller_dashboard(seller)
    return SellerDashboardResponse(
        stats=stats,
        recent_articles=recent,
        trace_id=getattr(request.state, "trace_id", ""),
    )


@router.get("/buyer/dashboard", response_model=BuyerDashboardResponse, summary="Buyer overview")
def buyer_dashboard(
    request: Request,
    buyer=Depends(require_roles("BUYER", "ADMIN")),
    db=Depends(get_db),
):
    stats, feed = DashboardService(db).buyer_dashboard(buyer)
    return BuyerDashboardResponse(stats=stats, recent_feed=feed, trace_id=getattr(request.state, "trace_id", ""))


@router.get("/sellers/{seller_id}", response_model=SellerPageResponse, summary="Public seller page")
def seller_page(
    request: Request,
    seller_id: UUID,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=12, ge=1, le=50),
    viewer=Depends(get_optional_user),
    db=Depends(get_db),
):
    profile, articles, total = DashboardService(db).seller_page(
        seller_id, viewer=viewer, limit=limit, offset=page_offset(page, limit)
    )
    return SellerPageResponse(
        seller=profile,
        articles=articles,
        pagination=PaginationMeta.build(page=page, limit=limit, total=total),
        trace_id=getattr(request.state, "trace_id", ""),
    )
