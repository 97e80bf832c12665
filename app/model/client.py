import enum
import uuid

import sqlalchemy as sa
from sqlmodel import Field

from app.model.base import BaseModel


class Gender(str, enum.Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class Client(BaseModel, table=True):
    """Cliente de uma conta de negócio. Toda leitura/escrita filtra por admin_id."""

    __tablename__ = "client"

    name: str = Field(max_length=255, index=True)
    phone: str = Field(max_length=20)
    email: str = Field(max_length=255)
    gender: Gender = Field(
        sa_type=sa.Enum(
            Gender,
            name="client_gender",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
    )
    admin_id: uuid.UUID = Field(foreign_key="account.id", ondelete="CASCADE", index=True, nullable=False)
