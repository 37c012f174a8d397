from datetime import date, datetime, time, timedelta

from app.boudoir.core.error_catalog import AppError, ErrorCatalog
from app.boudoir.repos.articles import ArticleRepository
from app.boudoir.repos.favorites import FavoriteRepository
from app.boudoir.repos.follows import FollowRepository
from app.boudoir.repos.notifications import NotificationRepository
from app.boudoir.repos.payments import PaymentRepository
from app.boudoir.repos.users import UserRepository
from app.boudoir.schemas.dashboards import BuyerDashboardStats, SellerDashboardStats, SellerProfile
from app.boudoir.services.articles import ArticleService

RECENT_LIMIT = 5


def _month_start(value: date) -> datetime:
    return datetime.combine(value.replace(day=1), time.min)


def growth_rate(current: int, previous: int) -> float:
    if previous > 0:
        return round((current - previous) / previous * 100, 1)
    return 100.0 if current > 0 else 0.0


class DashboardService:
    def __init__(self, db, *, now: datetime | None = None):
        self.articles = ArticleService(db)
        self.article_repo = ArticleRepository(db)
        self.favorites = FavoriteRepository(db)
        self.follows = FollowRepository(db)
        self.notifications = NotificationRepository(db)
        self.payments = PaymentRepository(db)
        self.users = UserRepository(db)
        self.now = now or datetime.utcnow()

    def seller_dashboard(self, seller):
        month_start = _month_start(self.now.date())
        last_month_start = _month_start((month_start - timedelta(days=1)).date())
        stats = self.article_repo.seller_stats(
            seller.id, month_start=month_start, last_month_start=last_month_start
        )
        by_status = stats["by_status"]

        def count(status, available=None):
            return sum(
                value
                for (row_status, row_available), value in by_status.items()
                if row_status == status and (available is None or row_available == available)
            )

        recent, _ = self.articles.list_for_seller(seller, status="active", limit=RECENT_LIMIT, offset=0)
        return (
            SellerDashboardStats(
                active_articles=count("APPROVED", True),
                paused_articles=count("APPROVED", False),
                pending_payment_articles=count("PENDING_PAYMENT"),
                pending_moderation_articles=count("PENDING_MODERATION"),
                rejected_articles=count("REJECTED"),
                total_views=stats["total_views"],
                favorites_received=stats["favorites_received"],
                total_sales=stats["total_sales"],
                this_month_sales=stats["this_month_sales"],
                sales_growth=growth_rate(stats["this_month_sales"], stats["last_month_sales"]),
                fees_paid=self.payments.total_for_user(seller.id),
            ),
            recent,
        )

    def buyer_dashboard(self, user):
        seller_ids = self.follows.following_ids(user.id)
        feed, _ = self.article_repo.list_by_sellers(seller_ids, limit=RECENT_LIMIT)
        _, _, unread = self.notifications.list_for_user(user.id, unread_only=True, limit=1)
        return (
            BuyerDashboardStats(
                favorite_items=self.favorites.count_for_user(user.id),
                following_count=len(seller_ids),
                unread_notifications=unread,
            ),
            self.articles.to_items(feed, viewer=user),
        )

    def seller_page(self, seller_id, *, viewer=None, limit: int, offset: int):
        seller = self.users.get_by_id(seller_id)
        if seller is None or seller.role != "SELLER" or seller.status != "ACTIVE":
            raise AppError(ErrorCatalog.SELLER_NOT_FOUND)
        articles, total = self.article_repo.list_by_sellers([seller.id], limit=limit, offset=offset)
        followers, following = self.follows.counts(seller.id)
        is_following = (
            viewer is not None and viewer.id != seller.id and self.follows.get(viewer.id, seller.id) is not None
        )
        profile = SellerProfile(
            id=seller.id,
            name=seller.name,
            location=seller.location,
            member_since=seller.created_at,
            active_articles=total,
            followers_count=followers,
            following_count=following,
            is_following=is_following,
        )
        return profile, self.articles.to_items(articles, viewer=viewer), total
