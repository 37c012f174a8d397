from datetime import datetime
from decimal import Decimal

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.orm import selectinload

from app.boudoir.db.models import Article, Favorite, ModerationLog, Report
from app.boudoir.repos.base import Repository


PUBLIC_SORTS = {"newest", "oldest", "price-asc", "price-desc", "popular"}
SELLER_SORTS = {"recent", "price-high", "price-low"}

# display status -> (status, is_available) constraint
SELLER_STATUS_FILTERS = {
    "active": ("APPROVED", True),
    "paused": ("APPROVED", False),
    "sold": (None, False),
    "approved": ("APPROVED", None),
    "pending_payment": ("PENDING_PAYMENT", None),
    "pending_moderation": ("PENDING_MODERATION", None),
    "rejected": ("REJECTED", None),
}


def _favorites_count_subquery():
    return (
        select(Favorite.article_id, func.count(Favorite.id).label("favorites_count"))
        .group_by(Favorite.article_id)
        .subquery()
    )


def _search_filter(search: str):
    pattern = f"%{search.strip()}%"
    return or_(Article.title.ilike(pattern), Article.description.ilike(pattern))


class ArticleRepository(Repository):
    def get_by_id(self, article_id):
        stmt = (
            select(Article)
            .where(Article.id == article_id)
            .options(selectinload(Article.seller), selectinload(Article.category), selectinload(Article.payment))
        )
        return self._run("articles.get_by_id", lambda: self.db.execute(stmt).scalars().first())

    def list_public(
        self,
        *,
        search: str | None = None,
        category_id=None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        condition: str | None = None,
        size: str | None = None,
        sort_by: str = "newest",
        limit: int | None = None,
        offset: int | None = None,
    ):
        filters = [Article.status == "APPROVED", Article.is_available.is_(True)]
        if search:
            filters.append(_search_filter(search))
        if category_id:
            filters.append(Article.category_id == category_id)
        if min_price is not None:
            filters.append(Article.price >= min_price)
        if max_price is not None:
            filters.append(Article.price <= max_price)
        if condition:
            filters.append(Article.condition == condition)
        if size:
            filters.append(func.lower(Article.size) == size.strip().lower())

        stmt = select(Article).where(*filters).options(selectinload(Article.seller), selectinload(Article.category))
        count_stmt = select(func.count()).select_from(Article).where(*filters)

        if sort_by == "oldest":
            stmt = stmt.order_by(Article.created_at.asc())
        elif sort_by == "price-asc":
            stmt = stmt.order_by(Article.price.asc(), Article.created_at.desc())
        elif sort_by == "price-desc":
            stmt = stmt.order_by(Article.price.desc(), Article.created_at.desc())
        elif sort_by == "popular":
            favorites = _favorites_count_subquery()
            stmt = stmt.outerjoin(favorites, favorites.c.article_id == Article.id).order_by(
                func.coalesce(favorites.c.favorites_count, 0).desc(),
                Article.created_at.desc(),
            )
        else:
            stmt = stmt.order_by(Article.created_at.desc())

        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        def operation():
            rows = self.db.execute(stmt).scalars().all()
            total = self.db.execute(count_stmt).scalar_one()
            return rows, total

        return self._run("articles.list_public", operation)

    def list_by_seller(
        self,
        seller_id,
        *,
        search: str | None = None,
        status: str | None = None,
        category_id=None,
        sort_by: str = "recent",
        limit: int | None = None,
        offset: int | None = None,
    ):
        filters = [Article.seller_id == seller_id]
        if search:
            filters.append(_search_filter(search))
        if status and status in SELLER_STATUS_FILTERS:
            db_status, available = SELLER_STATUS_FILTERS[status]
            if db_status is not None:
                filters.append(Article.status == db_status)
            if available is not None:
                filters.append(Article.is_available.is_(available))
        if category_id:
            filters.append(Article.category_id == category_id)

        stmt = select(Article).where(*filters).options(selectinload(Article.category))
        count_stmt = select(func.count()).select_from(Article).where(*filters)

        if sort_by == "price-high":
            stmt = stmt.order_by(Article.price.desc())
        elif sort_by == "price-low":
            stmt = stmt.order_by(Article.price.asc())
        else:
            stmt = stmt.order_by(Article.created_at.desc())

        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        def operation():
            rows = self.db.execute(stmt).scalars().all()
            total = self.db.execute(count_stmt).scalar_one()
            return rows, total

        return self._run("articles.list_by_seller", operation)

    def list_pending_moderation(self):
        stmt = (
            select(Article)
            .where(Article.status == "PENDING_MODERATION")
            .options(selectinload(Article.seller), selectinload(Article.category), selectinload(Article.payment))
            .order_by(Article.created_at.asc())
        )
        return self._run("articles.list_pending_moderation", lambda: self.db.execute(stmt).scalars().all())

    def list_similar(self, article: Article, limit: int = 4):
        stmt = (
            select(Article)
            .where(
                Article.category_id == article.category_id,
                Article.id != article.id,
                Article.status == "APPROVED",
                Article.is_available.is_(True),
            )
            .options(selectinload(Article.seller), selectinload(Article.category))
            .order_by(Article.created_at.desc())
            .limit(limit)
        )
        return self._run("articles.list_similar", lambda: self.db.execute(stmt).scalars().all())

    def list_by_sellers(self, seller_ids, *, limit: int | None = None, offset: int | None = None):
        if not seller_ids:
            return [], 0
        filters = [
            Article.seller_id.in_(list(seller_ids)),
            Article.status == "APPROVED",
            Article.is_available.is_(True),
        ]
        stmt = (
            select(Article)
            .where(*filters)
            .options(selectinload(Article.seller), selectinload(Article.category))
            .order_by(func.coalesce(Article.published_at, Article.created_at).desc())
        )
        count_stmt = select(func.count()).select_from(Article).where(*filters)
        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        def operation():
            rows = self.db.execute(stmt).scalars().all()
            total = self.db.execute(count_stmt).scalar_one()
            return rows, total

        return self._run("articles.list_by_sellers", operation)

    def favorites_counts(self, article_ids) -> dict:
        if not article_ids:
            return {}
        stmt = (
            select(Favorite.article_id, func.count(Favorite.id))
            .where(Favorite.article_id.in_(list(article_ids)))
            .group_by(Favorite.article_id)
        )
        rows = self._run("articles.favorites_counts", lambda: self.db.execute(stmt).all())
        return {article_id: count for article_id, count in rows}

    def seller_stats(self, seller_id, *, month_start: datetime, last_month_start: datetime) -> dict:
        """Counts for the seller dashboard; a sale is an approved article taken off the market."""
        sold = [Article.seller_id == seller_id, Article.status == "APPROVED", Article.is_available.is_(False)]
        by_status_stmt = (
            select(Article.status, Article.is_available, func.count(Article.id))
            .where(Article.seller_id == seller_id)
            .group_by(Article.status, Article.is_available)
        )
        views_stmt = select(func.coalesce(func.sum(Article.views), 0)).where(Article.seller_id == seller_id)
        favorites_stmt = (
            select(func.count(Favorite.id))
            .join(Article, Favorite.article_id == Article.id)
            .where(Article.seller_id == seller_id)
        )
        sales_stmt = select(func.count(Article.id)).where(*sold)
        this_month_stmt = select(func.count(Article.id)).where(*sold, Article.updated_at >= month_start)
        last_month_stmt = select(func.count(Article.id)).where(
            *sold, Article.updated_at >= last_month_start, Article.updated_at < month_start
        )

        def operation():
            return {
                "by_status": {(status, bool(available)): count for status, available, count in self.db.execute(by_status_stmt).all()},
                "total_views": int(self.db.execute(views_stmt).scalar_one() or 0),
                "favorites_received": self.db.execute(favorites_stmt).scalar_one(),
                "total_sales": self.db.execute(sales_stmt).scalar_one(),
                "this_month_sales": self.db.execute(this_month_stmt).scalar_one(),
                "last_month_sales": self.db.execute(last_month_stmt).scalar_one(),
            }

        return self._run("articles.seller_stats", operation)

    def create(self, article: Article) -> Article:
        return self._save("articles.create", article)

    def update(self, article: Article, **changes) -> Article:
        return self._update("articles.update", article, **changes)

    def increment_views(self, article: Article) -> None:
        stmt = update(Article).where(Article.id == article.id).values(views=Article.views + 1)
        self._commit("articles.increment_views", lambda: self.db.execute(stmt))

    def delete(self, article: Article) -> None:
        def apply():
            self.db.execute(delete(ModerationLog).where(ModerationLog.article_id == article.id))
            self.db.execute(delete(Report).where(Report.article_id == article.id))
            self.db.delete(article)

        self._commit("articles.delete", apply)
