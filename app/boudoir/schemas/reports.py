from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field

from app.boudoir.schemas.common import PaginationMeta

ReportType = Literal["ARTICLE", "USER"]
ReportReason = Literal[
    "INAPPROPRIATE_CONTENT",
    "SPAM",
    "FAKE_PRODUCT",
    "HARASSMENT",
    "FRAUD",
    "COPYRIGHT_VIOLATION",
    "OTHER",
]
ReportStatus = Literal["PENDING", "UNDER_REVIEW", "RESOLVED", "DISMISSED"]


class ReportCreateRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "example": {
                "type": "ARTICLE",
                "reason": "FAKE_PRODUCT",
                "description": "Les photos viennent d'un autre site",
                "article_id": "4f7f2c5e-9cfd-4efa-a575-2a0ad38df4e8",
            }
        }
    }

    type: ReportType
    reason: ReportReason
    description: str | None = Field(default=None, max_length=1000)
    article_id: UUID | None = Field(default=None, validation_alias=AliasChoices("article_id", "articleId"))
    user_id: UUID | None = Field(default=None, validation_alias=AliasChoices("user_id", "userId"))


class ReportUpdateRequest(BaseModel):
    status: ReportStatus
    moderator_notes: str | None = Field(
        default=None,
        max_length=1000,
        validation_alias=AliasChoices("moderator_notes", "moderatorNotes"),
    )


class ReportParty(BaseModel):
    id: UUID
    name: str


class ReportedArticle(BaseModel):
    id: UUID
    title: str
    seller_id: UUID


class ReportItem(BaseModel):
    id: UUID
    type: str
    reason: str
    description: str | None = None
    status: str
    reporter: ReportParty
    article: ReportedArticle | None = None
    user: ReportParty | None = None
    moderator_id: UUID | None = None
    moderator_notes: str | None = None
    resolved_at: datetime | None = None
    created_at: datetime


class ReportResponse(BaseModel):
    report: ReportItem
    trace_id: str


class ReportListResponse(BaseModel):
    reports: list[ReportItem]
    pagination: PaginationMeta
    pending_count: int
    trace_id: str
