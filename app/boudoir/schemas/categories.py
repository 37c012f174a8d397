from uuid import UUID

from pydantic import BaseModel, Field


class CategoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    slug: str = Field(..., min_length=1, max_length=60, pattern=r"^[a-z0-9-]+$")
    description: str | None = Field(default=None, max_length=200)


class CategoryItem(BaseModel):
    id: UUID
    name: str
    slug: str
    description: str | None = None
    article_count: int = 0


class CategoryResponse(BaseModel):
    category: CategoryItem
    trace_id: str


class CategoryListResponse(BaseModel):
    categories: list[CategoryItem]
    trace_id: str
