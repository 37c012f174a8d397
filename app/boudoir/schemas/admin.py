from pydantic import BaseModel, EmailStr, Field, model_validator

from app.boudoir.schemas.auth import UserOut, UserRole, UserStatus
from app.boudoir.schemas.common import PaginationMeta


class AdminUserCreateRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=150)
    email: EmailStr
    password: str
    role: UserRole = "BUYER"
    location: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)


class AdminUserUpdateRequest(BaseModel):
    role: UserRole | None = None
    status: UserStatus | None = None

    @model_validator(mode="after")
    def ensure_change(self):
        if self.role is None and self.status is None:
            raise ValueError("role or status is required")
        return self


class AdminUserResponse(BaseModel):
    user: UserOut
    trace_id: str


class AdminUserListResponse(BaseModel):
    users: list[UserOut]
    pagination: PaginationMeta
    trace_id: str
