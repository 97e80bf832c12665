from __future__ import annotations

import enum
from datetime import datetime

import sqlalchemy as sa
from sqlmodel import Field
from sqlalchemy import UniqueConstraint

from app.model.base import BaseModel


class AccountRole(str, enum.Enum):
    BUSINESS = "business"
    SUPER_ADMIN = "super_admin"


class Account(BaseModel, table=True):
    """
    Conta de negócio (designer) ou administrador (tabela account no banco).

    Observações:
      - `email` é globalmente único e sempre gravado em minúsculas.
      - `password_hash` pode ser NULL (contas sem senha local).
      - Código e expiração são gravados e limpos juntos: nunca existe código sem expiração.
    """

    __tablename__ = "account"

    business_name: str = Field(max_length=255)
    email: str = Field(max_length=255, index=True)
    password_hash: str | None = Field(default=None, nullable=True)
    contact_number: str | None = Field(default=None, nullable=True, max_length=20)
    address: str | None = Field(default=None, nullable=True)

    # Persistir enums pelos *values* ("business"/"super_admin"), como string no banco.
    role: AccountRole = Field(
        default=AccountRole.BUSINESS,
        sa_type=sa.Enum(
            AccountRole,
            name="account_role",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
    )

    is_active: bool = Field(default=True, nullable=False)
    is_email_verified: bool = Field(default=False, nullable=False)
    last_login_at: datetime | None = Field(
        default=None,
        sa_type=sa.DateTime(timezone=True),
        nullable=True,
    )

    email_verification_code: str | None = Field(default=None, nullable=True, max_length=6)
    email_verification_expires_at: datetime | None = Field(
        default=None,
        sa_type=sa.DateTime(timezone=True),
        nullable=True,
    )
    password_reset_code: str | None = Field(default=None, nullable=True, max_length=6)
    password_reset_expires_at: datetime | None = Field(
        default=None,
        sa_type=sa.DateTime(timezone=True),
        nullable=True,
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_account_email"),
    )

    def set_verification_code(self, code: str | None, expires_at: datetime | None) -> None:
        if (code is None) != (expires_at is None):
            raise ValueError("código de verificação e expiração devem ser definidos juntos")
        self.email_verification_code = code
        self.email_verification_expires_at = expires_at

    def set_reset_code(self, code: str | None, expires_at: datetime | None) -> None:
        if (code is None) != (expires_at is None):
            raise ValueError("código de reset e expiração devem ser definidos juntos")
        self.password_reset_code = code
        self.password_reset_expires_at = expires_at
