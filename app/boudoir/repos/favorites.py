from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from app.boudoir.db.models import Article, Favorite
from app.boudoir.repos.base import Repository


class FavoriteRepository(Repository):
    def get(self, user_id, article_id):
        stmt = select(Favorite).where(Favorite.user_id == user_id, Favorite.article_id == article_id)
        return self._run("favorites.get", lambda: self.db.execute(stmt).scalars().first())

    def list_for_user(self, user_id, *, limit: int | None = None, offset: int | None = None):
        stmt = (
            select(Favorite)
            .where(Favorite.user_id == user_id)
            .options(
                selectinload(Favorite.article).selectinload(Article.seller),
                selectinload(Favorite.article).selectinload(Article.category),
            )
            .order_by(Favorite.created_at.desc())
        )
        count_stmt = select(func.count()).select_from(Favorite).where(Favorite.user_id == user_id)
        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        def operation():
            rows = self.db.execute(stmt).scalars().all()
            total = self.db.execute(count_stmt).scalar_one()
            return rows, total

        return self._run("favorites.list_for_user", operation)

    def article_ids_for_user(self, user_id, article_ids) -> set:
        if not article_ids:
            return set()
        stmt = select(Favorite.article_id).where(
            Favorite.user_id == user_id,
            Favorite.article_id.in_(list(article_ids)),
        )
        return set(self._run("favorites.article_ids_for_user", lambda: self.db.execute(stmt).scalars().all()))

    def create(self, favorite: Favorite) -> Favorite:
        return self._save("favorites.create", favorite)

    def delete(self, favorite: Favorite) -> None:
        self._commit("favorites.delete", lambda: self.db.delete(favorite))

    def count_for_user(self, user_id) -> int:
        stmt = select(func.count()).select_from(Favorite).where(Favorite.user_id == user_id)
        return self._run("favorites.count_for_user", lambda: self.db.execute(stmt).scalar_one())
