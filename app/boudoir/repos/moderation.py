from sqlalchemy import func, select

from app.boudoir.db.models import Article, ModerationLog, User
from app.boudoir.repos.base import Repository


class ModerationRepository(Repository):
    def record_decision(self, article: Article, log: ModerationLog, **changes) -> Article:
        def apply():
            for key, value in changes.items():
                setattr(article, key, value)
            self.db.add(article)
            self.db.add(log)
            return article

        updated = self._commit("moderation.record_decision", apply)
        self.db.refresh(updated)
        return updated

    def list_history(self, *, action: str | None = None, limit: int | None = None, offset: int | None = None):
        filters = []
        if action:
            filters.append(ModerationLog.action == action.strip().upper())
        stmt = (
            select(ModerationLog, Article.title, User.name)
            .join(Article, Article.id == ModerationLog.article_id)
            .join(User, User.id == ModerationLog.moderator_id)
            .where(*filters)
            .order_by(ModerationLog.created_at.desc())
        )
        count_stmt = select(func.count()).select_from(ModerationLog).where(*filters)
        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        def operation():
            rows = self.db.execute(stmt).all()
            total = self.db.execute(count_stmt).scalar_one()
            return rows, total

        return self._run("moderation.list_history", operation)
