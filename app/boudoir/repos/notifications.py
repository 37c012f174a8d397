from datetime import datetime

from sqlalchemy import func, select, update

from app.boudoir.db.models import Notification
from app.boudoir.repos.base import Repository


class NotificationRepository(Repository):
    def get_by_id(self, notification_id):
        return self._run("notifications.get_by_id", lambda: self.db.get(Notification, notification_id))

    def list_for_user(
        self,
        user_id,
        *,
        unread_only: bool = False,
        limit: int | None = None,
        offset: int | None = None,
    ):
        filters = [Notification.user_id == user_id]
        if unread_only:
            filters.append(Notification.is_read.is_(False))
        stmt = select(Notification).where(*filters).order_by(Notification.created_at.desc())
        count_stmt = select(func.count()).select_from(Notification).where(*filters)
        unread_stmt = (
            select(func.count())
            .select_from(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
        )
        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        def operation():
            rows = self.db.execute(stmt).scalars().all()
            total = self.db.execute(count_stmt).scalar_one()
            unread = self.db.execute(unread_stmt).scalar_one()
            return rows, total, unread

        return self._run("notifications.list_for_user", operation)

    def create_many(self, notifications: list[Notification]) -> list[Notification]:
        if not notifications:
            return []

        def apply():
            self.db.add_all(notifications)
            return notifications

        return self._commit("notifications.create_many", apply)

    def mark_read(self, notification: Notification) -> Notification:
        return self._update("notifications.mark_read", notification, is_read=True, read_at=datetime.utcnow())

    def mark_all_read(self, user_id) -> int:
        stmt = (
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True, read_at=datetime.utcnow())
        )
        return self._commit("notifications.mark_all_read", lambda: self.db.execute(stmt).rowcount)
