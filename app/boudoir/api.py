from fastapi import APIRouter

from app.boudoir.core.config import settings
from app.boudoir.routers.admin import router as admin_router
from app.boudoir.routers.analytics import router as analytics_router
from app.boudoir.routers.articles import router as articles_router
from app.boudoir.routers.auth import router as auth_router
from app.boudoir.routers.categories import router as categories_router
from app.boudoir.routers.dashboards import router as dashboards_router
from app.boudoir.routers.health import router as health_router
from app.boudoir.routers.metrics import router as metrics_router
from app.boudoir.routers.moderation import router as moderation_router
from app.boudoir.routers.notifications import router as notifications_router
from app.boudoir.routers.profile import router as profile_router
from app.boudoir.routers.reports import router as reports_router
from app.boudoir.routers.seller import router as seller_router
from app.boudoir.routers.social import router as social_router
from app.boudoir.schemas.errors import DEFAULT_ERROR_RESPONSES

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(auth_router, prefix="/api/auth", tags=["auth"], responses=DEFAULT_ERROR_RESPONSES)
api_router.include_router(categories_router, prefix="/api", tags=["categories"], responses=DEFAULT_ERROR_RESPONSES)
api_router.include_router(articles_router, prefix="/api", tags=["articles"], responses=DEFAULT_ERROR_RESPONSES)
api_router.include_router(seller_router, prefix="/api", tags=["seller"], responses=DEFAULT_ERROR_RESPONSES)
api_router.include_router(dashboards_router, prefix="/api", tags=["dashboards"], responses=DEFAULT_ERROR_RESPONSES)
api_router.include_router(profile_router, prefix="/api", tags=["profile"], responses=DEFAULT_ERROR_RESPONSES)
api_router.include_router(moderation_router, prefix="/api", tags=["moderation"], responses=DEFAULT_ERROR_RESPONSES)
api_router.include_router(reports_router, prefix="/api", tags=["reports"], responses=DEFAULT_ERROR_RESPONSES)
api_router.include_router(admin_router, prefix="/api/admin", tags=["admin"], responses=DEFAULT_ERROR_RESPONSES)
api_router.include_router(analytics_router, prefix="/api/admin", tags=["analytics"], responses=DEFAULT_ERROR_RESPONSES)
api_router.include_router(social_router, prefix="/api", tags=["social"], responses=DEFAULT_ERROR_RESPONSES)
api_router.include_router(notifications_router, prefix="/api", tags=["notifications"], responses=DEFAULT_ERROR_RESPONSES)
if settings.METRICS_ENABLED:
    api_router.include_router(metrics_router, tags=["ops"])
