from typing import Literal

from fastapi import APIRouter, Depends, Query, Request

from app.boudoir.core.config import settings
from app.boudoir.core.deps import require_roles
from app.boudoir.db.session import get_db
from app.boudoir.schemas.analytics import AnalyticsResponse
from app.boudoir.services.analytics import AnalyticsService

router = APIRouter()

_PERIOD = Query(default=settings.ANALYTICS_DEFAULT_PERIOD_DAYS, ge=1, le=365)


@router.get("/analytics/{endpoint}", response_model=AnalyticsResponse, summary="Admin analytics by endpoint")
def analytics(
    request: Request,
    endpoint: Literal["overview", "users", "articles", "revenue", "activities"],
    period: int = _PERIOD,
    action: str | None = Query(default=None, max_length=100),
    _admin=Depends(require_roles("ADMIN")),
    db=Depends(get_db),
):
    service = AnalyticsService(db)
    if endpoint == "overview":
        result = service.overview(period)
    elif endpoint == "users":
        result = service.users(period)
    elif endpoint == "articles":
        result = service.articles(period)
    elif endpoint == "revenue":
        result = service.revenue(period)
    else:
        result = service.activities(period, action=action)
    return AnalyticsResponse(result=result, trace_id=getattr(request.state, "trace_id", ""))
