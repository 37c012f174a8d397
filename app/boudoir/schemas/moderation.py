from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field, model_validator

from app.boudoir.schemas.articles import ArticleItem
from app.boudoir.schemas.common import PaginationMeta

ModerationAction = Literal["APPROVE", "REJECT"]


class ModerationRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "example": {
                "article_id": "4f7f2c5e-9cfd-4efa-a575-2a0ad38df4e8",
                "action": "REJECT",
                "rejection_reason": "Photos floues",
            }
        }
    }

    article_id: UUID = Field(validation_alias=AliasChoices("article_id", "articleId"))
    action: ModerationAction
    notes: str | None = Field(default=None, max_length=1000)
    rejection_reason: str | None = Field(
        default=None,
        max_length=500,
        validation_alias=AliasChoices("rejection_reason", "rejectionReason"),
    )

    @model_validator(mode="after")
    def ensure_rejection_reason(self):
        if self.action == "REJECT" and not (self.rejection_reason or "").strip():
            raise ValueError("rejection_reason is required when rejecting an article")
        return self


class ModerationQueueResponse(BaseModel):
    articles: list[ArticleItem]
    total: int
    trace_id: str


class ModerationDecisionResponse(BaseModel):
    article: ArticleItem
    action: ModerationAction
    trace_id: str


class ModerationLogItem(BaseModel):
    id: UUID
    article_id: UUID
    article_title: str
    moderator_id: UUID
    moderator_name: str
    action: str
    notes: str | None = None
    rejection_reason: str | None = None
    created_at: datetime


class ModerationHistoryResponse(BaseModel):
    logs: list[ModerationLogItem]
    pagination: PaginationMeta
    trace_id: str
