from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from app.boudoir.db.models import Report
from app.boudoir.repos.base import Repository


class ReportRepository(Repository):
    def get_by_id(self, report_id):
        stmt = (
            select(Report)
            .where(Report.id == report_id)
            .options(selectinload(Report.reporter), selectinload(Report.reported_user), selectinload(Report.article))
        )
        return self._run("reports.get_by_id", lambda: self.db.execute(stmt).scalars().first())

    def find_existing(self, reporter_id, *, article_id=None, user_id=None):
        stmt = select(Report).where(
            Report.reporter_id == reporter_id,
            Report.article_id == article_id if article_id is not None else Report.article_id.is_(None),
            Report.user_id == user_id if user_id is not None else Report.user_id.is_(None),
        )
        return self._run("reports.find_existing", lambda: self.db.execute(stmt).scalars().first())

    def list_filtered(
        self,
        *,
        status: str | None = None,
        report_type: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ):
        filters = []
        if status:
            filters.append(Report.status == status)
        if report_type:
            filters.append(Report.type == report_type)
        stmt = (
            select(Report)
            .where(*filters)
            .options(selectinload(Report.reporter), selectinload(Report.reported_user), selectinload(Report.article))
            .order_by(Report.created_at.desc())
        )
        count_stmt = select(func.count()).select_from(Report).where(*filters)
        pending_stmt = select(func.count()).select_from(Report).where(Report.status == "PENDING")
        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        def operation():
            rows = self.db.execute(stmt).scalars().all()
            total = self.db.execute(count_stmt).scalar_one()
            pending = self.db.execute(pending_stmt).scalar_one()
            return rows, total, pending

        return self._run("reports.list_filtered", operation)

    def create(self, report: Report) -> Report:
        return self._save("reports.create", report)

    def update(self, report: Report, **changes) -> Report:
        return self._update("reports.update", report, **changes)
