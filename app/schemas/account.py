import re
import uuid
from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from app.model.account import AccountRole
from app.schemas.base import ApiModel

_PASSWORD_RULE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")
_CODE_RULE = re.compile(r"^\d{6}$")
_BCRYPT_MAX_BYTES = 72


def _normalize_email(v: str) -> str:
    return v.strip().lower()


def _validate_password(v: str) -> str:
    if len(v) < 8:
        raise ValueError("Password must be at least 8 characters")
    if len(v.encode("utf-8")) > _BCRYPT_MAX_BYTES:
        raise ValueError("Password must not exceed 72 bytes")
    if not _PASSWORD_RULE.match(v):
        raise ValueError(
            "Password must contain at least one uppercase letter, one lowercase letter, and one number"
        )
    return v


def _validate_code(v: str) -> str:
    if not _CODE_RULE.match(v):
        raise ValueError("Code must be exactly 6 digits")
    return v


class EmailPayload(ApiModel):
    email: EmailStr = Field(max_length=255)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v) if isinstance(v, str) else v


class RegisterRequest(EmailPayload):
    business_name: str = Field(min_length=2, max_length=255)
    password: str
    contact_number: str = Field(min_length=10, max_length=20)
    address: str = Field(min_length=10)

    @field_validator("business_name", "contact_number", "address", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _validate_password(v)


class LoginRequest(EmailPayload):
    password: str = Field(min_length=1)


class UpdateProfileRequest(ApiModel):
    business_name: str | None = Field(default=None, min_length=2, max_length=255)
    contact_number: str | None = Field(default=None, min_length=10, max_length=20)
    address: str | None = Field(default=None, min_length=10)

    @field_validator("business_name", "contact_number", "address", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class VerifyCodeRequest(EmailPayload):
    code: str

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        return _validate_code(v)


class ResetPasswordRequest(ApiModel):
    reset_token: str = Field(min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _validate_password(v)


class AccountRead(ApiModel):
    """Visão pública da conta: nunca inclui hash de senha nem códigos."""

    id: uuid.UUID
    business_name: str
    email: str
    contact_number: str | None = None
    address: str | None = None
    role: AccountRole
    is_email_verified: bool
    is_active: bool
    last_login_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class UserResponse(ApiModel):
    user: AccountRead


class AuthResponse(ApiModel):
    message: str
    user: AccountRead
    access_token: str
    token_type: str = "bearer"


class ResendVerificationResponse(ApiModel):
    message: str
    sent: bool


class ResetTokenResponse(ApiModel):
    message: str
    reset_token: str
