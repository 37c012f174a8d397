from datetime import datetime
from decimal import Decimal
from typing import Literal
from urllib.parse import urlparse
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.boudoir.core.config import settings
from app.boudoir.schemas.common import PaginationMeta

ArticleCondition = Literal["EXCELLENT", "GOOD", "FAIR"]
ArticleStatus = Literal["PENDING_PAYMENT", "PENDING_MODERATION", "APPROVED", "REJECTED"]
DisplayStatus = Literal["ACTIVE", "PAUSED", "SOLD", "PENDING_MODERATION", "PENDING_PAYMENT", "REJECTED"]
PaymentMethod = Literal["MOBILE_MONEY", "CARD", "CASH"]
PublicSort = Literal["newest", "oldest", "price-asc", "price-desc", "popular"]
SellerSort = Literal["recent", "price-high", "price-low"]


def _validate_price(value: Decimal | None) -> Decimal | None:
    if value is None:
        return value
    if value < 1:
        raise ValueError("price must be at least 1")
    if value > settings.ARTICLE_MAX_PRICE:
        raise ValueError(f"price cannot exceed {settings.ARTICLE_MAX_PRICE}")
    return value


def _validate_images(images: list[str] | None) -> list[str] | None:
    if images is None:
        return images
    if not images:
        raise ValueError("at least one image is required")
    if len(images) > settings.ARTICLE_MAX_IMAGES:
        raise ValueError(f"at most {settings.ARTICLE_MAX_IMAGES} images are allowed")
    for url in images:
        parsed = urlparse(url)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ValueError(f"invalid image URL: {url}")
    return images


class ArticleCreateRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Grand boubou brode",
                "description": "Boubou en bazin riche, porte deux fois.",
                "price": "8500",
                "category_id": "4f7f2c5e-9cfd-4efa-a575-2a0ad38df4e8",
                "condition": "EXCELLENT",
                "size": "L",
                "images": ["https://cdn.example.com/boubou-1.jpg"],
            }
        }
    }

    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10, max_length=1000)
    price: Decimal
    category_id: UUID
    condition: ArticleCondition
    size: str | None = Field(default=None, max_length=20)
    images: list[str]

    @field_validator("price")
    @classmethod
    def check_price(cls, value):
        return _validate_price(value)

    @field_validator("images")
    @classmethod
    def check_images(cls, value):
        return _validate_images(value)


class ArticleUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=3, max_length=100)
    description: str | None = Field(default=None, min_length=10, max_length=1000)
    price: Decimal | None = None
    category_id: UUID | None = None
    condition: ArticleCondition | None = None
    size: str | None = Field(default=None, max_length=20)
    images: list[str] | None = None
    is_available: bool | None = None

    @field_validator("price")
    @classmethod
    def check_price(cls, value):
        return _validate_price(value)

    @field_validator("images")
    @classmethod
    def check_images(cls, value):
        return _validate_images(value)


class SellerSummary(BaseModel):
    id: UUID
    name: str
    location: str | None = None


class CategorySummary(BaseModel):
    id: UUID
    name: str
    slug: str


class ArticleItem(BaseModel):
    id: UUID
    title: str
    description: str
    price: Decimal
    size: str | None = None
    condition: str
    images: list[str]
    status: str
    is_available: bool
    views: int
    favorites_count: int = 0
    is_favorited: bool = False
    rejection_reason: str | None = None
    seller: SellerSummary | None = None
    category: CategorySummary | None = None
    published_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class SellerArticleItem(ArticleItem):
    display_status: DisplayStatus


class ArticleResponse(BaseModel):
    article: ArticleItem
    trace_id: str


class ArticleDetailResponse(BaseModel):
    article: ArticleItem
    similar: list[ArticleItem]
    trace_id: str


class ArticleListResponse(BaseModel):
    articles: list[ArticleItem]
    pagination: PaginationMeta
    trace_id: str


class SellerArticleListResponse(BaseModel):
    articles: list[SellerArticleItem]
    pagination: PaginationMeta
    trace_id: str


class PaymentRequest(BaseModel):
    method: PaymentMethod
    transaction_id: str | None = Field(default=None, max_length=100)


class PaymentItem(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    article_id: UUID
    amount: Decimal
    method: str
    status: str
    transaction_id: str | None = None
    created_at: datetime
    completed_at: datetime | None = None


class PaymentResponse(BaseModel):
    payment: PaymentItem
    article: ArticleItem
    trace_id: str
