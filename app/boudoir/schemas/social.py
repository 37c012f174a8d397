from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel

from app.boudoir.schemas.articles import ArticleItem
from app.boudoir.schemas.common import PaginationMeta


class FollowRequest(BaseModel):
    action: Literal["follow", "unfollow"]


class FollowStatusResponse(BaseModel):
    is_following: bool
    followers_count: int
    following_count: int
    trace_id: str


class FollowUserItem(BaseModel):
    id: UUID
    name: str
    role: str
    location: str | None = None
    followed_at: datetime


class FollowListResponse(BaseModel):
    users: list[FollowUserItem]
    pagination: PaginationMeta
    trace_id: str


class FavoriteResponse(BaseModel):
    article_id: UUID
    is_favorited: bool
    trace_id: str


class FavoriteListResponse(BaseModel):
    articles: list[ArticleItem]
    pagination: PaginationMeta
    trace_id: str


class FeedResponse(BaseModel):
    articles: list[ArticleItem]
    pagination: PaginationMeta
    following_count: int
    trace_id: str
