from datetime import date, datetime, time, timedelta
from decimal import Decimal

from app.boudoir.db.models import Article, User
from app.boudoir.repos.analytics import AnalyticsRepository
from app.boudoir.schemas.analytics import (
    ActivitiesAnalytics,
    ActivityItem,
    ArticlesAnalytics,
    CategoryBreakdown,
    ConditionBreakdown,
    DailyCount,
    DailyRevenue,
    LabelCount,
    MethodBreakdown,
    OverviewAnalytics,
    RevenueAnalytics,
    SellerActivity,
    SellerRevenue,
    TopArticle,
    UsersAnalytics,
)

ACTIVE_WINDOW_DAYS = 30
RETENTION_WINDOW_DAYS = 7


def _decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _optional_decimal(value) -> Decimal | None:
    return None if value is None else _decimal(value).quantize(Decimal("0.01"))


def _day(value) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    return str(value)


def _percent(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, 2)


def _month_start(value: date) -> datetime:
    return datetime.combine(value.replace(day=1), time.min)


class AnalyticsService:
    def __init__(self, db, *, now: datetime | None = None):
        self.repo = AnalyticsRepository(db)
        self.now = now or datetime.utcnow()

    def window(self, period_days: int) -> tuple[datetime, datetime]:
        start = datetime.combine((self.now - timedelta(days=period_days)).date(), time.min)
        end = datetime.combine(self.now.date(), time.max)
        return start, end

    def _top_articles(self, limit: int) -> list[TopArticle]:
        return [
            TopArticle(
                id=article_id,
                title=title,
                views=views,
                price=_decimal(price),
                seller_name=seller_name,
                category_name=category_name,
            )
            for article_id, title, views, price, seller_name, category_name in self.repo.top_articles_by_views(limit)
        ]

    def _daily(self, column, start, end, *filters) -> list[DailyCount]:
        return [DailyCount(date=_day(day), count=count) for day, count in self.repo.daily_counts(column, start, end, *filters)]

    def _daily_revenue(self, start, end) -> list[DailyRevenue]:
        return [
            DailyRevenue(date=_day(day), count=count, revenue=_decimal(revenue))
            for day, count, revenue in self.repo.daily_revenue(start, end)
        ]

    def overview(self, period_days: int) -> OverviewAnalytics:
        start, end = self.window(period_days)
        total_users = self.repo.count(User)
        sales_count, revenue, _ = self.repo.completed_payment_totals(start, end)
        return OverviewAnalytics(
            period_days=period_days,
            generated_at=self.now,
            total_users=total_users,
            total_articles=self.repo.count(Article),
            active_users=self.repo.count(User, User.last_login_at >= self.now - timedelta(days=ACTIVE_WINDOW_DAYS)),
            total_sales=sales_count,
            total_revenue=_decimal(revenue),
            conversion_rate=_percent(self.repo.buyers_count(), total_users),
            pending_moderation=self.repo.count(Article, Article.status == "PENDING_MODERATION"),
            new_users=self._daily(User.created_at, start, end),
            new_articles=self._daily(Article.created_at, start, end),
            sales=self._daily_revenue(start, end),
            top_articles=self._top_articles(5),
        )

    def users(self, period_days: int) -> UsersAnalytics:
        start, end = self.window(period_days)
        total_users = self.repo.count(User)
        recently_active = self.repo.count(
            User, User.last_login_at >= self.now - timedelta(days=RETENTION_WINDOW_DAYS)
        )
        new_users = self._daily(User.created_at, start, end)
        return UsersAnalytics(
            period_days=period_days,
            generated_at=self.now,
            total_users=total_users,
            active_users=recently_active,
            retention_rate=_percent(recently_active, total_users),
            new_users_this_period=sum(item.count for item in new_users),
            by_role=[LabelCount(label=role, count=count) for role, count in self.repo.grouped_counts(User.role)],
            by_status=[LabelCount(label=status, count=count) for status, count in self.repo.grouped_counts(User.status)],
            new_users=new_users,
            most_active_sellers=[
                SellerActivity(id=user_id, name=name, articles_count=count)
                for user_id, name, count in self.repo.most_active_sellers(10)
            ],
        )

    def articles(self, period_days: int) -> ArticlesAnalytics:
        start, end = self.window(period_days)
        total, average_price, total_views = self.repo.article_totals()
        return ArticlesAnalytics(
            period_days=period_days,
            generated_at=self.now,
            total_articles=total,
            average_price=_optional_decimal(average_price),
            total_views=int(total_views or 0),
            by_category=[
                CategoryBreakdown(category=name, count=count, average_price=_optional_decimal(avg))
                for name, count, avg in self.repo.articles_by_category()
            ],
            by_condition=[
                ConditionBreakdown(condition=condition, count=count, average_price=_optional_decimal(avg))
                for condition, count, avg in self.repo.articles_by_condition()
            ],
            by_status=[LabelCount(label=status, count=count) for status, count in self.repo.grouped_counts(Article.status)],
            new_articles=self._daily(Article.created_at, start, end),
            top_viewed=self._top_articles(10),
        )

    def revenue(self, period_days: int) -> RevenueAnalytics:
        start, end = self.window(period_days)
        count, total, average = self.repo.completed_payment_totals(start, end)

        current_month_start = _month_start(self.now.date())
        last_month_start = _month_start((current_month_start - timedelta(days=1)).date())
        _, current_month, _ = self.repo.completed_payment_totals(current_month_start, end)
        _, last_month, _ = self.repo.completed_payment_totals(
            last_month_start, current_month_start - timedelta(microseconds=1)
        )
        current_month = _decimal(current_month)
        last_month = _decimal(last_month)
        if last_month > 0:
            growth = float(round((current_month - last_month) / last_month * 100, 2))
        else:
            growth = 100.0 if current_month > 0 else 0.0

        return RevenueAnalytics(
            period_days=period_days,
            generated_at=self.now,
            total_revenue=_decimal(total),
            transaction_count=count,
            average_transaction=_optional_decimal(average),
            current_month_revenue=current_month,
            last_month_revenue=last_month,
            growth_rate=growth,
            by_method=[
                MethodBreakdown(method=method, count=method_count, revenue=_decimal(amount))
                for method, method_count, amount in self.repo.revenue_by_method(start, end)
            ],
            daily=self._daily_revenue(start, end),
            top_sellers=[
                SellerRevenue(
                    seller_id=seller_id,
                    seller_name=name,
                    seller_location=location,
                    transaction_count=seller_count,
                    total_revenue=_decimal(amount),
                )
                for seller_id, name, location, seller_count, amount in self.repo.top_sellers_by_revenue(start, end)
            ],
        )

    def activities(self, period_days: int, *, action: str | None = None, limit: int = 50) -> ActivitiesAnalytics:
        start, _ = self.window(period_days)
        breakdown, unique_users = self.repo.activity_breakdown(start)
        rows = self.repo.activities_since(start, action=action, limit=limit)
        return ActivitiesAnalytics(
            period_days=period_days,
            generated_at=self.now,
            total_activities=sum(count for _, count in breakdown),
            unique_users=unique_users,
            action_breakdown=[LabelCount(label=name, count=count) for name, count in breakdown],
            activities=[
                ActivityItem(
                    id=activity.id,
                    user_id=activity.user_id,
                    user_name=user_name,
                    user_role=user_role,
                    action=activity.action,
                    entity_type=activity.entity_type,
                    entity_id=activity.entity_id,
                    metadata=activity.activity_metadata,
                    created_at=activity.created_at,
                )
                for activity, user_name, user_role in rows
            ],
        )
