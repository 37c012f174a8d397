from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel

from app.boudoir.schemas.articles import ArticleItem, SellerArticleItem
from app.boudoir.schemas.common import PaginationMeta


class SellerDashboardStats(BaseModel):
    active_articles: int
    paused_articles: int
    pending_payment_articles: int
    pending_moderation_articles: int
    rejected_articles: int
    total_views: int
    favorites_received: int
    total_sales: int
    this_month_sales: int
    sales_growth: float
    fees_paid: Decimal


class SellerDashboardResponse(BaseModel):
    stats: SellerDashboardStats
    recent_articles: list[SellerArticleItem]
    trace_id: str


class BuyerDashboardStats(BaseModel):
    favorite_items: int
    following_count: int
    unread_notifications: int


class BuyerDashboardResponse(BaseModel):
    stats: BuyerDashboardStats
    recent_feed: list[ArticleItem]
    trace_id: str


class SellerProfile(BaseModel):
    id: UUID
    name: str
    location: str | None = None
    member_since: datetime
    active_articles: int
    followers_count: int
    following_count: int
    is_following: bool = False


class SellerPageResponse(BaseModel):
    seller: SellerProfile
    articles: list[ArticleItem]
    pagination: PaginationMeta
    trace_id: str
