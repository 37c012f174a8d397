from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from app.boudoir.core.deps import require_active_user, require_roles
from app.boudoir.db.session import get_db
from app.boudoir.schemas.common import PaginationMeta, page_offset
from app.boudoir.schemas.reports import (
    ReportCreateRequest,
    ReportListResponse,
    ReportResponse,
    ReportStatus,
    ReportType,
    ReportUpdateRequest,
)
from app.boudoir.services.activity import ActivityEvent, ActivityService
from app.boudoir.services.reports import ReportService, to_report_item

router = APIRouter()


@router.post("/reports", response_model=ReportResponse, status_code=201, summary="Report an article or a user")
def create_report(
    request: Request,
    payload: ReportCreateRequest,
    current_user=Depends(require_active_user),
    db=Depends(get_db),
):
    trace_id = getattr(request.state, "trace_id", "")
    report = ReportService(db).create(current_user, payload)
    ActivityService(db).record(
        ActivityEvent(
            user_id=current_user.id,
            action="REPORT_CREATE",
            entity_type="report",
            entity_id=str(report.id),
            metadata={"type": report.type, "reason": report.reason},
            trace_id=trace_id,
        )
    )
    return ReportResponse(report=to_report_item(report), trace_id=trace_id)


@router.get("/reports", response_model=ReportListResponse, summary="Reports queue")
def list_reports(
    request: Request,
    status: ReportStatus | None = Query(default=None),
    report_type: ReportType | None = Query(default=None, alias="type"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    _moderator=Depends(require_roles("MODERATOR", "ADMIN")),
    db=Depends(get_db),
):
    reports, total, pending = ReportService(db).list_reports(
        status=status,
        report_type=report_type,
        limit=limit,
        offset=page_offset(page, limit),
    )
    return ReportListResponse(
        reports=[to_report_item(report) for report in reports],
        pagination=PaginationMeta.build(page=page, limit=limit, total=total),
        pending_count=pending,
        trace_id=getattr(request.state, "trace_id", ""),
    )


@router.get("/reports/{report_id}", response_model=ReportResponse)
def get_report(
    request: Request,
    report_id: UUID,
    _moderator=Depends(require_roles("MODERATOR", "ADMIN")),
    db=Depends(get_db),
):
    report = ReportService(db).get_or_404(report_id)
    return ReportResponse(report=to_report_item(report), trace_id=getattr(request.state, "trace_id", ""))


@router.patch("/reports/{report_id}", response_model=ReportResponse, summary="Review a report")
def review_report(
    request: Request,
    report_id: UUID,
    payload: ReportUpdateRequest,
    moderator=Depends(require_roles("MODERATOR", "ADMIN")),
    db=Depends(get_db),
):
    trace_id = getattr(request.state, "trace_id", "")
    report = ReportService(db).review(moderator, report_id, payload)
    ActivityService(db).record(
        ActivityEvent(
            user_id=moderator.id,
            action=f"REPORT_{report.status}",
            entity_type="report",
            entity_id=str(report.id),
            trace_id=trace_id,
        )
    )
    return ReportResponse(report=to_report_item(report), trace_id=trace_id)
