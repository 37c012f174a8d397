from app.boudoir.core.error_catalog import AppError, ErrorCatalog
from app.boudoir.db.models import Follow
from app.boudoir.repos.articles import ArticleRepository
from app.boudoir.repos.follows import FollowRepository
from app.boudoir.repos.users import UserRepository
from app.boudoir.services.notifications import NotificationMessage, NotificationService


class FollowService:
    def __init__(self, db):
        self.repo = FollowRepository(db)
        self.users = UserRepository(db)
        self.articles = ArticleRepository(db)
        self.notifications = NotificationService(db)

    def _get_user_or_404(self, user_id):
        user = self.users.get_by_id(user_id)
        if user is None:
            raise AppError(ErrorCatalog.USER_NOT_FOUND)
        return user

    def toggle(self, follower, target_id, action: str) -> bool:
        """Apply ``follow`` or ``unfollow`` and return the resulting follow state."""
        if follower.id == target_id:
            raise AppError(ErrorCatalog.CANNOT_FOLLOW_SELF)
        target = self._get_user_or_404(target_id)
        existing = self.repo.get(follower.id, target.id)
        if action == "follow":
            if existing is not None:
                raise AppError(ErrorCatalog.ALREADY_FOLLOWING)
            self.repo.create(Follow(follower_id=follower.id, following_id=target.id))
            self.notifications.notify(
                [target.id],
                NotificationMessage(
                    type="NEW_FOLLOWER",
                    title="Nouvel abonné",
                    message=f"{follower.name} vous suit désormais",
                    actor_id=follower.id,
                    entity_id=str(follower.id),
                    entity_type="user",
                ),
            )
            return True
        if existing is None:
            raise AppError(ErrorCatalog.NOT_FOLLOWING)
        self.repo.delete(existing)
        return False

    def status(self, viewer, target_id):
        target = self._get_user_or_404(target_id)
        is_following = viewer.id != target.id and self.repo.get(viewer.id, target.id) is not None
        followers, following = self.repo.counts(target.id)
        return is_following, followers, following

    def followers(self, user_id, *, limit: int, offset: int):
        self._get_user_or_404(user_id)
        return self.repo.list_followers(user_id, limit=limit, offset=offset)

    def following(self, user_id, *, limit: int, offset: int):
        self._get_user_or_404(user_id)
        return self.repo.list_following(user_id, limit=limit, offset=offset)

    def feed(self, user, *, limit: int, offset: int):
        seller_ids = self.repo.following_ids(user.id)
        articles, total = self.articles.list_by_sellers(seller_ids, limit=limit, offset=offset)
        return articles, total, len(seller_ids)
