import logging
from datetime import datetime

from app.boudoir.core.error_catalog import AppError, ErrorCatalog
from app.boudoir.core.logging import log_json
from app.boudoir.core.metrics import metrics
from app.boudoir.db.models import ModerationLog
from app.boudoir.repos.articles import ArticleRepository
from app.boudoir.repos.follows import FollowRepository
from app.boudoir.repos.moderation import ModerationRepository
from app.boudoir.services.notifications import NotificationMessage, NotificationService

logger = logging.getLogger("boudoir.moderation")


class ModerationService:
    def __init__(self, db):
        self.articles = ArticleRepository(db)
        self.repo = ModerationRepository(db)
        self.follows = FollowRepository(db)
        self.notifications = NotificationService(db)

    def pending(self):
        return self.articles.list_pending_moderation()

    def decide(self, moderator, *, article_id, action: str, notes: str | None, rejection_reason: str | None):
        article = self.articles.get_by_id(article_id)
        if article is None:
            raise AppError(ErrorCatalog.ARTICLE_NOT_FOUND)
        if article.status != "PENDING_MODERATION":
            raise AppError(ErrorCatalog.ARTICLE_NOT_PENDING_MODERATION, details={"status": article.status})

        now = datetime.utcnow()
        log = ModerationLog(
            article_id=article.id,
            moderator_id=moderator.id,
            action=action,
            notes=notes,
            rejection_reason=rejection_reason if action == "REJECT" else None,
            created_at=now,
        )
        if action == "APPROVE":
            changes = {
                "status": "APPROVED",
                "is_available": True,
                "published_at": now,
                "moderation_notes": notes,
                "rejection_reason": None,
            }
        else:
            changes = {
                "status": "REJECTED",
                "is_available": False,
                "moderation_notes": notes,
                "rejection_reason": rejection_reason,
            }
        article = self.repo.record_decision(article, log, updated_at=now, **changes)
        metrics.increment_moderation_decision(action)
        log_json(
            logger,
            {
                "event": "moderation_decision",
                "article_id": str(article.id),
                "moderator_id": str(moderator.id),
                "action": action,
            },
        )
        self._notify(moderator, article, action, rejection_reason)
        return article

    def _notify(self, moderator, article, action: str, rejection_reason: str | None) -> None:
        if action == "APPROVE":
            self.notifications.notify(
                [article.seller_id],
                NotificationMessage(
                    type="ARTICLE_APPROVED",
                    title="Article approuvé",
                    message=f"Votre article \"{article.title}\" est maintenant en ligne",
                    actor_id=moderator.id,
                    entity_id=str(article.id),
                    entity_type="article",
                ),
            )
            followers = self.follows.follower_ids(article.seller_id)
            self.notifications.notify(
                followers,
                NotificationMessage(
                    type="NEW_ARTICLE_FROM_FOLLOWED",
                    title="Nouvel article",
                    message=f"{article.seller.name} a publié \"{article.title}\"",
                    actor_id=article.seller_id,
                    entity_id=str(article.id),
                    entity_type="article",
                ),
            )
            return
        self.notifications.notify(
            [article.seller_id],
            NotificationMessage(
                type="ARTICLE_REJECTED",
                title="Article refusé",
                message=f"Votre article \"{article.title}\" a été refusé : {rejection_reason}",
                actor_id=moderator.id,
                entity_id=str(article.id),
                entity_type="article",
            ),
        )

    def history(self, *, action: str | None, limit: int, offset: int):
        return self.repo.list_history(action=action, limit=limit, offset=offset)
