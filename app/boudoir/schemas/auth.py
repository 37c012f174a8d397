from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

UserRole = Literal["BUYER", "SELLER", "MODERATOR", "ADMIN"]
UserStatus = Literal["ACTIVE", "SUSPENDED"]


class UserOut(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    name: str
    email: str
    role: str
    status: str
    is_active: bool
    location: str | None = None
    phone: str | None = None
    last_login_at: datetime | None = None
    created_at: datetime


class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Awa Diop",
                "email": "awa@example.com",
                "password": "Boubou2024",
                "role": "SELLER",
                "location": "Dakar",
            }
        }
    }

    name: str = Field(..., min_length=2, max_length=150)
    email: EmailStr
    password: str
    role: Literal["BUYER", "SELLER"] = "BUYER"
    location: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)


class LoginRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "awa@example.com",
                "password": "Boubou2024",
            }
        }
    }

    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
    trace_id: str


class OAuth2TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    user: UserOut
    trace_id: str


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str


class ChangePasswordResponse(BaseModel):
    ok: bool
    message: str
    trace_id: str


# Senegalese mobile numbers, with or without the country code
PHONE_PATTERN = r"^(\+221|221)?[0-9]{9}$"


class ProfileUpdateRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Awa Diop",
                "phone": "+221771234567",
                "location": "Thiès",
            }
        }
    }

    name: str | None = Field(default=None, min_length=2, max_length=50)
    phone: str | None = Field(default=None, pattern=PHONE_PATTERN)
    location: str | None = Field(default=None, max_length=100)
