from datetime import datetime

from sqlalchemy import func, select

from app.boudoir.db.models import Article, Category, Payment, User, UserActivity
from app.boudoir.repos.base import Repository


def _completed_between(start: datetime, end: datetime):
    return (
        Payment.status == "COMPLETED",
        Payment.completed_at >= start,
        Payment.completed_at <= end,
    )


class AnalyticsRepository(Repository):
    """Read-only aggregate queries backing the admin analytics endpoints."""

    def count(self, model, *filters) -> int:
        stmt = select(func.count()).select_from(model).where(*filters)
        return self._run(f"analytics.count.{model.__tablename__}", lambda: self.db.execute(stmt).scalar_one())

    def completed_payment_totals(self, start: datetime, end: datetime):
        stmt = select(
            func.count(Payment.id),
            func.coalesce(func.sum(Payment.amount), 0),
            func.avg(Payment.amount),
        ).where(*_completed_between(start, end))
        return self._run("analytics.completed_payment_totals", lambda: self.db.execute(stmt).one())

    def daily_counts(self, column, start: datetime, end: datetime, *filters):
        day = func.date(column)
        stmt = (
            select(day, func.count())
            .where(column >= start, column <= end, *filters)
            .group_by(day)
            .order_by(day)
        )
        return self._run("analytics.daily_counts", lambda: self.db.execute(stmt).all())

    def daily_revenue(self, start: datetime, end: datetime):
        day = func.date(Payment.completed_at)
        stmt = (
            select(day, func.count(Payment.id), func.coalesce(func.sum(Payment.amount), 0))
            .where(*_completed_between(start, end))
            .group_by(day)
            .order_by(day)
        )
        return self._run("analytics.daily_revenue", lambda: self.db.execute(stmt).all())

    def buyers_count(self) -> int:
        stmt = select(func.count(func.distinct(Payment.user_id))).where(Payment.status == "COMPLETED")
        return self._run("analytics.buyers_count", lambda: self.db.execute(stmt).scalar_one())

    def top_articles_by_views(self, limit: int = 5):
        stmt = (
            select(Article.id, Article.title, Article.views, Article.price, User.name, Category.name)
            .join(User, User.id == Article.seller_id)
            .join(Category, Category.id == Article.category_id)
            .order_by(Article.views.desc(), Article.created_at.desc())
            .limit(limit)
        )
        return self._run("analytics.top_articles_by_views", lambda: self.db.execute(stmt).all())

    def grouped_counts(self, column):
        stmt = select(column, func.count()).group_by(column).order_by(column)
        return self._run("analytics.grouped_counts", lambda: self.db.execute(stmt).all())

    def articles_by_category(self):
        stmt = (
            select(Category.name, func.count(Article.id), func.avg(Article.price))
            .join(Article, Article.category_id == Category.id)
            .group_by(Category.id, Category.name)
            .order_by(func.count(Article.id).desc(), Category.name)
        )
        return self._run("analytics.articles_by_category", lambda: self.db.execute(stmt).all())

    def articles_by_condition(self):
        stmt = (
            select(Article.condition, func.count(Article.id), func.avg(Article.price))
            .group_by(Article.condition)
            .order_by(Article.condition)
        )
        return self._run("analytics.articles_by_condition", lambda: self.db.execute(stmt).all())

    def article_totals(self):
        stmt = select(
            func.count(Article.id),
            func.avg(Article.price),
            func.coalesce(func.sum(Article.views), 0),
        )
        return self._run("analytics.article_totals", lambda: self.db.execute(stmt).one())

    def revenue_by_method(self, start: datetime, end: datetime):
        stmt = (
            select(Payment.method, func.count(Payment.id), func.coalesce(func.sum(Payment.amount), 0))
            .where(*_completed_between(start, end))
            .group_by(Payment.method)
            .order_by(Payment.method)
        )
        return self._run("analytics.revenue_by_method", lambda: self.db.execute(stmt).all())

    def top_sellers_by_revenue(self, start: datetime, end: datetime, limit: int = 10):
        revenue = func.coalesce(func.sum(Payment.amount), 0)
        stmt = (
            select(User.id, User.name, User.location, func.count(Payment.id), revenue)
            .join(Article, Article.seller_id == User.id)
            .join(Payment, Payment.article_id == Article.id)
            .where(*_completed_between(start, end))
            .group_by(User.id, User.name, User.location)
            .order_by(revenue.desc())
            .limit(limit)
        )
        return self._run("analytics.top_sellers_by_revenue", lambda: self.db.execute(stmt).all())

    def most_active_sellers(self, limit: int = 10):
        stmt = (
            select(User.id, User.name, func.count(Article.id))
            .join(Article, Article.seller_id == User.id)
            .group_by(User.id, User.name)
            .order_by(func.count(Article.id).desc(), User.name)
            .limit(limit)
        )
        return self._run("analytics.most_active_sellers", lambda: self.db.execute(stmt).all())

    def activities_since(self, since: datetime, *, action: str | None = None, limit: int = 50):
        filters = [UserActivity.created_at >= since]
        if action:
            filters.append(UserActivity.action == action)
        stmt = (
            select(UserActivity, User.name, User.role)
            .outerjoin(User, User.id == UserActivity.user_id)
            .where(*filters)
            .order_by(UserActivity.created_at.desc())
            .limit(limit)
        )
        return self._run("analytics.activities_since", lambda: self.db.execute(stmt).all())

    def activity_breakdown(self, since: datetime):
        stmt = (
            select(UserActivity.action, func.count(UserActivity.id))
            .where(UserActivity.created_at >= since)
            .group_by(UserActivity.action)
            .order_by(UserActivity.action)
        )
        unique_stmt = select(func.count(func.distinct(UserActivity.user_id))).where(UserActivity.created_at >= since)

        def operation():
            return self.db.execute(stmt).all(), self.db.execute(unique_stmt).scalar_one()

        return self._run("analytics.activity_breakdown", operation)
