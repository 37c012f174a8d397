import logging
from datetime import datetime

from app.boudoir.core.error_catalog import AppError, ErrorCatalog
from app.boudoir.core.logging import log_json
from app.boudoir.db.models import Report
from app.boudoir.repos.articles import ArticleRepository
from app.boudoir.repos.reports import ReportRepository
from app.boudoir.repos.users import UserRepository
from app.boudoir.schemas.reports import ReportedArticle, ReportItem, ReportParty

logger = logging.getLogger("boudoir.reports")

CLOSED_STATUSES = {"RESOLVED", "DISMISSED"}


def to_report_item(report: Report) -> ReportItem:
    article = report.article
    user = report.reported_user
    return ReportItem(
        id=report.id,
        type=report.type,
        reason=report.reason,
        description=report.description,
        status=report.status,
        reporter=ReportParty(id=report.reporter.id, name=report.reporter.name),
        article=ReportedArticle(id=article.id, title=article.title, seller_id=article.seller_id) if article else None,
        user=ReportParty(id=user.id, name=user.name) if user else None,
        moderator_id=report.moderator_id,
        moderator_notes=report.moderator_notes,
        resolved_at=report.resolved_at,
        created_at=report.created_at,
    )


class ReportService:
    def __init__(self, db):
        self.repo = ReportRepository(db)
        self.articles = ArticleRepository(db)
        self.users = UserRepository(db)

    def create(self, reporter, payload) -> Report:
        article_id = payload.article_id if payload.type == "ARTICLE" else None
        user_id = payload.user_id if payload.type == "USER" else None
        if article_id is None and user_id is None:
            raise AppError(ErrorCatalog.REPORT_TARGET_REQUIRED, details={"type": payload.type})

        if article_id is not None:
            article = self.articles.get_by_id(article_id)
            if article is None:
                raise AppError(ErrorCatalog.ARTICLE_NOT_FOUND)
            if article.seller_id == reporter.id:
                raise AppError(ErrorCatalog.CANNOT_REPORT_SELF)
        else:
            if user_id == reporter.id:
                raise AppError(ErrorCatalog.CANNOT_REPORT_SELF)
            if self.users.get_by_id(user_id) is None:
                raise AppError(ErrorCatalog.USER_NOT_FOUND)

        if self.repo.find_existing(reporter.id, article_id=article_id, user_id=user_id) is not None:
            raise AppError(ErrorCatalog.ALREADY_REPORTED)

        report = self.repo.create(
            Report(
                reporter_id=reporter.id,
                type=payload.type,
                reason=payload.reason,
                description=(payload.description or "").strip() or None,
                article_id=article_id,
                user_id=user_id,
                status="PENDING",
            )
        )
        log_json(
            logger,
            {
                "event": "report_created",
                "report_id": str(report.id),
                "type": report.type,
                "reason": report.reason,
            },
        )
        return report

    def get_or_404(self, report_id) -> Report:
        report = self.repo.get_by_id(report_id)
        if report is None:
            raise AppError(ErrorCatalog.REPORT_NOT_FOUND)
        return report

    def list_reports(self, **filters):
        return self.repo.list_filtered(**filters)

    def review(self, moderator, report_id, payload) -> Report:
        report = self.get_or_404(report_id)
        changes = {
            "status": payload.status,
            "moderator_id": moderator.id,
            "resolved_at": datetime.utcnow() if payload.status in CLOSED_STATUSES else None,
        }
        if payload.moderator_notes is not None:
            changes["moderator_notes"] = payload.moderator_notes.strip() or None
        report = self.repo.update(report, **changes)
        log_json(
            logger,
            {
                "event": "report_reviewed",
                "report_id": str(report.id),
                "moderator_id": str(moderator.id),
                "status": report.status,
            },
        )
        return report
