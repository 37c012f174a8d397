import logging
from dataclasses import dataclass

from app.boudoir.core.error_catalog import AppError, ErrorCatalog
from app.boudoir.core.logging import log_json
from app.boudoir.db.models import Notification
from app.boudoir.repos.notifications import NotificationRepository

logger = logging.getLogger("boudoir.notifications")


@dataclass
class NotificationMessage:
    type: str
    title: str
    message: str
    actor_id: object | None = None
    entity_id: str | None = None
    entity_type: str | None = None


class NotificationService:
    def __init__(self, db):
        self.repo = NotificationRepository(db)

    def notify(self, user_ids, message: NotificationMessage) -> int:
        """Fan a message out to ``user_ids``; delivery problems never fail the caller."""
        recipients = [user_id for user_id in dict.fromkeys(user_ids) if user_id != message.actor_id]
        if not recipients:
            return 0
        notifications = [
            Notification(
                user_id=user_id,
                actor_id=message.actor_id,
                type=message.type,
                title=message.title,
                message=message.message,
                entity_id=str(message.entity_id) if message.entity_id is not None else None,
                entity_type=message.entity_type,
            )
            for user_id in recipients
        ]
        try:
            self.repo.create_many(notifications)
        except Exception as exc:
            log_json(
                logger,
                {
                    "event": "notification_failed",
                    "type": message.type,
                    "recipients": len(recipients),
                    "error_class": exc.__class__.__name__,
                },
                level=logging.WARNING,
            )
            return 0
        return len(notifications)

    def list_for_user(self, user_id, *, unread_only: bool, limit: int, offset: int):
        return self.repo.list_for_user(user_id, unread_only=unread_only, limit=limit, offset=offset)

    def mark_read(self, user, notification_id) -> Notification:
        notification = self.repo.get_by_id(notification_id)
        if notification is None or notification.user_id != user.id:
            raise AppError(ErrorCatalog.NOTIFICATION_NOT_FOUND)
        if notification.is_read:
            return notification
        return self.repo.mark_read(notification)

    def mark_all_read(self, user) -> int:
        return self.repo.mark_all_read(user.id)
