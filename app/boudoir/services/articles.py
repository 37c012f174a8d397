from datetime import datetime

from app.boudoir.core.error_catalog import AppError, ErrorCatalog
from app.boudoir.db.models import Article, Favorite, Payment
from app.boudoir.repos.articles import ArticleRepository
from app.boudoir.repos.categories import CategoryRepository
from app.boudoir.repos.favorites import FavoriteRepository
from app.boudoir.repos.payments import PaymentRepository
from app.boudoir.schemas.articles import ArticleItem, CategorySummary, SellerArticleItem, SellerSummary
from app.boudoir.services.notifications import NotificationMessage, NotificationService


def display_status(article: Article) -> str:
    if article.status == "PENDING_MODERATION":
        return "PENDING_MODERATION"
    if article.status == "PENDING_PAYMENT":
        return "PENDING_PAYMENT"
    if article.status == "REJECTED":
        return "REJECTED"
    if article.status == "APPROVED":
        return "ACTIVE" if article.is_available else "PAUSED"
    return "ACTIVE" if article.is_available else "SOLD"


def to_article_item(article: Article, *, favorites_count: int = 0, is_favorited: bool = False) -> ArticleItem:
    seller = article.seller
    category = article.category
    return ArticleItem(
        id=article.id,
        title=article.title,
        description=article.description,
        price=article.price,
        size=article.size,
        condition=article.condition,
        images=list(article.images or []),
        status=article.status,
        is_available=article.is_available,
        views=article.views,
        favorites_count=favorites_count,
        is_favorited=is_favorited,
        rejection_reason=article.rejection_reason,
        seller=SellerSummary(id=seller.id, name=seller.name, location=seller.location) if seller else None,
        category=CategorySummary(id=category.id, name=category.name, slug=category.slug) if category else None,
        published_at=article.published_at,
        created_at=article.created_at,
        updated_at=article.updated_at,
    )


class ArticleService:
    def __init__(self, db):
        self.db = db
        self.repo = ArticleRepository(db)
        self.categories = CategoryRepository(db)
        self.favorites = FavoriteRepository(db)
        self.payments = PaymentRepository(db)
        self.notifications = NotificationService(db)

    def to_items(self, articles, viewer=None) -> list[ArticleItem]:
        ids = [article.id for article in articles]
        counts = self.repo.favorites_counts(ids)
        favorited = self.favorites.article_ids_for_user(viewer.id, ids) if viewer is not None else set()
        return [
            to_article_item(
                article,
                favorites_count=counts.get(article.id, 0),
                is_favorited=article.id in favorited,
            )
            for article in articles
        ]

    def get_or_404(self, article_id) -> Article:
        article = self.repo.get_by_id(article_id)
        if article is None:
            raise AppError(ErrorCatalog.ARTICLE_NOT_FOUND)
        return article

    @staticmethod
    def _is_public(article: Article) -> bool:
        return article.status == "APPROVED" and article.is_available

    @staticmethod
    def _can_see_unpublished(article: Article, viewer) -> bool:
        if viewer is None:
            return False
        return viewer.id == article.seller_id or viewer.role in {"MODERATOR", "ADMIN"}

    def _ensure_owner(self, article: Article, user) -> None:
        if article.seller_id != user.id:
            raise AppError(ErrorCatalog.ARTICLE_NOT_OWNED)

    def _ensure_category(self, category_id) -> None:
        if self.categories.get_by_id(category_id) is None:
            raise AppError(ErrorCatalog.CATEGORY_NOT_FOUND)

    def get_detail(self, article_id, viewer=None):
        article = self.get_or_404(article_id)
        if not self._is_public(article) and not self._can_see_unpublished(article, viewer):
            raise AppError(ErrorCatalog.ARTICLE_NOT_FOUND)
        if viewer is None or viewer.id != article.seller_id:
            self.repo.increment_views(article)
            self.db.refresh(article)
        similar = self.repo.list_similar(article, limit=4)
        return article, similar

    def create(self, seller, payload) -> Article:
        self._ensure_category(payload.category_id)
        article = Article(
            seller_id=seller.id,
            category_id=payload.category_id,
            title=payload.title.strip(),
            description=payload.description.strip(),
            price=payload.price,
            size=payload.size,
            condition=payload.condition,
            images=list(payload.images),
            status="PENDING_PAYMENT",
            is_available=False,
        )
        return self.repo.create(article)

    def duplicate(self, user, article_id) -> Article:
        """Copy one of the seller's articles as a fresh listing that still has to be paid for."""
        original = self.get_or_404(article_id)
        if original.seller_id != user.id:
            raise AppError(ErrorCatalog.ARTICLE_NOT_FOUND)
        title = f"{original.title} (Copie)"
        if len(title) > 100:
            title = f"{original.title[:100 - len(' (Copie)')]} (Copie)"
        copy = Article(
            seller_id=user.id,
            category_id=original.category_id,
            title=title,
            description=original.description,
            price=original.price,
            size=original.size,
            condition=original.condition,
            images=list(original.images or []),
            status="PENDING_PAYMENT",
            is_available=False,
        )
        return self.repo.create(copy)

    def update(self, user, article_id, payload) -> Article:
        article = self.get_or_404(article_id)
        self._ensure_owner(article, user)
        changes = payload.model_dump(exclude_unset=True)
        if "category_id" in changes and changes["category_id"] is not None:
            self._ensure_category(changes["category_id"])
        changes = {key: value for key, value in changes.items() if value is not None or key == "size"}
        if "is_available" in changes and article.status != "APPROVED":
            # availability only toggles once an article is live
            changes.pop("is_available")
        content_fields = {"title", "description", "price", "category_id", "condition", "size", "images"}
        if article.status == "REJECTED" and content_fields.intersection(changes):
            changes["status"] = "PENDING_MODERATION"
            changes["rejection_reason"] = None
        changes["updated_at"] = datetime.utcnow()
        return self.repo.update(article, **changes)

    def delete(self, user, article_id) -> None:
        article = self.get_or_404(article_id)
        if user.role != "ADMIN":
            self._ensure_owner(article, user)
        self.repo.delete(article)

    def pay(self, user, article_id, payload):
        article = self.get_or_404(article_id)
        self._ensure_owner(article, user)
        if article.status != "PENDING_PAYMENT" or self.payments.get_by_article(article.id) is not None:
            raise AppError(ErrorCatalog.ARTICLE_NOT_AWAITING_PAYMENT)
        now = datetime.utcnow()
        payment = Payment(
            article_id=article.id,
            user_id=user.id,
            amount=article.price,
            method=payload.method,
            status="COMPLETED",
            transaction_id=payload.transaction_id,
            created_at=now,
            completed_at=now,
        )
        payment = self.payments.create_with_article_status(payment, article, status="PENDING_MODERATION")
        return payment, article

    def add_favorite(self, user, article_id) -> Favorite:
        article = self.get_or_404(article_id)
        if not self._is_public(article):
            raise AppError(ErrorCatalog.ARTICLE_NOT_FOUND)
        if self.favorites.get(user.id, article.id) is not None:
            raise AppError(ErrorCatalog.ALREADY_FAVORITED)
        favorite = self.favorites.create(Favorite(user_id=user.id, article_id=article.id))
        self.notifications.notify(
            [article.seller_id],
            NotificationMessage(
                type="ARTICLE_LIKED",
                title="Nouvel article favori",
                message=f"{user.name} a ajouté \"{article.title}\" à ses favoris",
                actor_id=user.id,
                entity_id=str(article.id),
                entity_type="article",
            ),
        )
        return favorite

    def remove_favorite(self, user, article_id) -> None:
        favorite = self.favorites.get(user.id, article_id)
        if favorite is None:
            raise AppError(ErrorCatalog.FAVORITE_NOT_FOUND)
        self.favorites.delete(favorite)

    def list_favorites(self, user, *, limit: int, offset: int):
        favorites, total = self.favorites.list_for_user(user.id, limit=limit, offset=offset)
        articles = [favorite.article for favorite in favorites]
        return self.to_items(articles, viewer=user), total

    def list_for_seller(self, seller, *, limit: int, offset: int, **filters):
        articles, total = self.repo.list_by_seller(seller.id, limit=limit, offset=offset, **filters)
        counts = self.repo.favorites_counts([article.id for article in articles])
        items = [
            SellerArticleItem(
                **to_article_item(article, favorites_count=counts.get(article.id, 0)).model_dump(),
                display_status=display_status(article),
            )
            for article in articles
        ]
        return items, total
