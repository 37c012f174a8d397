from decimal import Decimal

from sqlalchemy import func, select

from app.boudoir.db.models import Payment
from app.boudoir.repos.base import Repository


class PaymentRepository(Repository):
    def get_by_article(self, article_id):
        stmt = select(Payment).where(Payment.article_id == article_id)
        return self._run("payments.get_by_article", lambda: self.db.execute(stmt).scalars().first())

    def create_with_article_status(self, payment: Payment, article, *, status: str) -> Payment:
        def apply():
            self.db.add(payment)
            article.status = status
            self.db.add(article)
            return payment

        saved = self._commit("payments.create", apply)
        self.db.refresh(saved)
        self.db.refresh(article)
        return saved

    def total_for_user(self, user_id) -> Decimal:
        stmt = select(func.coalesce(func.sum(Payment.amount), 0)).where(
            Payment.user_id == user_id, Payment.status == "COMPLETED"
        )
        total = self._run("payments.total_for_user", lambda: self.db.execute(stmt).scalar_one())
        return Decimal(str(total or 0))
