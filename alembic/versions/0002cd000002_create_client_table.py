"""create client table

Revision ID: 0002cd000002
Revises: 0001ab000001
Create Date: 2026-10-18 09:30:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0002cd000002"
down_revision: Union[str, None] = "0001ab000001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "client",
        sa.Column("id", sa.Uuid(), nullable=False, primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("gender", sa.String(length=6), nullable=False),
        sa.Column("admin_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        # Remover a conta remove os clientes
        sa.ForeignKeyConstraint(["admin_id"], ["account.id"], ondelete="CASCADE"),
        sa.CheckConstraint("gender IN ('Male', 'Female', 'Other')", name="ck_client_gender"),
    )

    op.create_index(op.f("ix_client_admin_id"), "client", ["admin_id"], unique=False)
    op.create_index(op.f("ix_client_name"), "client", ["name"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_client_name"), table_name="client")
    op.drop_index(op.f("ix_client_admin_id"), table_name="client")
    op.drop_table("client")
