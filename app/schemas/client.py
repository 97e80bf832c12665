import uuid
from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from app.model.client import Gender
from app.schemas.base import ApiModel


class ClientCreate(ApiModel):
    name: str = Field(min_length=1, max_length=255)
    phone: str = Field(min_length=1, max_length=20)
    email: EmailStr = Field(max_length=255)
    gender: Gender

    @field_validator("name", "phone", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class ClientUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = Field(default=None, min_length=1, max_length=20)
    email: EmailStr | None = Field(default=None, max_length=255)
    gender: Gender | None = None

    @field_validator("name", "phone", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class ClientRead(ApiModel):
    id: uuid.UUID
    name: str
    phone: str
    email: str
    gender: Gender
    admin_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class Pagination(ApiModel):
    page: int
    limit: int
    total: int
    pages: int


class ClientListResponse(ApiModel):
    items: list[ClientRead]
    pagination: Pagination


class ClientStats(ApiModel):
    total: int
    recent: int
    growth: str
