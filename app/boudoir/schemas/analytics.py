"""Admin analytics payloads.

Every result carries a ``kind`` literal so clients can decode a response
into the matching model without inspecting its fields.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field


class DailyCount(BaseModel):
    date: str
    count: int


class DailyRevenue(BaseModel):
    date: str
    count: int
    revenue: Decimal


class LabelCount(BaseModel):
    label: str
    count: int


class TopArticle(BaseModel):
    id: UUID
    title: str
    views: int
    price: Decimal
    seller_name: str
    category_name: str


class _AnalyticsBase(BaseModel):
    period_days: int
    generated_at: datetime


class OverviewAnalytics(_AnalyticsBase):
    kind: Literal["overview"] = "overview"
    total_users: int
    total_articles: int
    active_users: int
    total_sales: int
    total_revenue: Decimal
    conversion_rate: float
    pending_moderation: int
    new_users: list[DailyCount]
    new_articles: list[DailyCount]
    sales: list[DailyRevenue]
    top_articles: list[TopArticle]


class SellerActivity(BaseModel):
    id: UUID
    name: str
    articles_count: int


class UsersAnalytics(_AnalyticsBase):
    kind: Literal["users"] = "users"
    total_users: int
    active_users: int
    retention_rate: float
    new_users_this_period: int
    by_role: list[LabelCount]
    by_status: list[LabelCount]
    new_users: list[DailyCount]
    most_active_sellers: list[SellerActivity]


class CategoryBreakdown(BaseModel):
    category: str
    count: int
    average_price: Decimal | None = None


class ConditionBreakdown(BaseModel):
    condition: str
    count: int
    average_price: Decimal | None = None


class ArticlesAnalytics(_AnalyticsBase):
    kind: Literal["articles"] = "articles"
    total_articles: int
    average_price: Decimal | None = None
    total_views: int
    by_category: list[CategoryBreakdown]
    by_condition: list[ConditionBreakdown]
    by_status: list[LabelCount]
    new_articles: list[DailyCount]
    top_viewed: list[TopArticle]


class MethodBreakdown(BaseModel):
    method: str
    count: int
    revenue: Decimal


class SellerRevenue(BaseModel):
    seller_id: UUID
    seller_name: str
    seller_location: str | None = None
    transaction_count: int
    total_revenue: Decimal


class RevenueAnalytics(_AnalyticsBase):
    kind: Literal["revenue"] = "revenue"
    total_revenue: Decimal
    transaction_count: int
    average_transaction: Decimal | None = None
    current_month_revenue: Decimal
    last_month_revenue: Decimal
    growth_rate: float
    by_method: list[MethodBreakdown]
    daily: list[DailyRevenue]
    top_sellers: list[SellerRevenue]


class ActivityItem(BaseModel):
    id: UUID
    user_id: UUID
    user_name: str | None = None
    user_role: str | None = None
    action: str
    entity_type: str | None = None
    entity_id: str | None = None
    metadata: dict | None = None
    created_at: datetime


class ActivitiesAnalytics(_AnalyticsBase):
    kind: Literal["activities"] = "activities"
    total_activities: int
    unique_users: int
    action_breakdown: list[LabelCount]
    activities: list[ActivityItem]


AnalyticsResult = Annotated[
    Union[OverviewAnalytics, UsersAnalytics, ArticlesAnalytics, RevenueAnalytics, ActivitiesAnalytics],
    Field(discriminator="kind"),
]


class AnalyticsResponse(BaseModel):
    result: AnalyticsResult
    trace_id: str
