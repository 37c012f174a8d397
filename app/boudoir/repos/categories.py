from sqlalchemy import and_, func, or_, select

from app.boudoir.db.models import Article, Category
from app.boudoir.repos.base import Repository


class CategoryRepository(Repository):
    def get_by_id(self, category_id):
        return self._run("categories.get_by_id", lambda: self.db.get(Category, category_id))

    def find_conflict(self, name: str, slug: str):
        stmt = select(Category).where(or_(func.lower(Category.name) == name.strip().lower(), Category.slug == slug))
        return self._run("categories.find_conflict", lambda: self.db.execute(stmt).scalars().first())

    def list_with_article_counts(self, *, most_stocked_first: bool = False, limit: int | None = None):
        """Categories with their count of publicly visible articles, by name or by that count."""
        article_count = func.count(Article.id)
        stmt = (
            select(Category, article_count)
            .outerjoin(
                Article,
                and_(
                    Article.category_id == Category.id,
                    Article.status == "APPROVED",
                    Article.is_available.is_(True),
                ),
            )
            .group_by(Category.id)
        )
        if most_stocked_first:
            stmt = stmt.order_by(article_count.desc(), Category.name.asc())
        else:
            stmt = stmt.order_by(Category.name.asc())
        if limit:
            stmt = stmt.limit(limit)
        return self._run("categories.list_with_article_counts", lambda: self.db.execute(stmt).all())

    def create(self, category: Category) -> Category:
        return self._save("categories.create", category)
