"""create account table

Revision ID: 0001ab000001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001ab000001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "account",
        sa.Column("id", sa.Uuid(), nullable=False, primary_key=True),
        sa.Column("business_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=True),
        sa.Column("contact_number", sa.String(length=20), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("role", sa.String(length=11), nullable=False, server_default="business"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_email_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("email_verification_code", sa.String(length=6), nullable=True),
        sa.Column("email_verification_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("password_reset_code", sa.String(length=6), nullable=True),
        sa.Column("password_reset_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("email", name="uq_account_email"),
    )

    op.create_index(op.f("ix_account_email"), "account", ["email"], unique=False)

    # Código e expiração andam juntos
    op.create_check_constraint(
        "ck_account_verification_code_expiry",
        "account",
        "(email_verification_code IS NULL) = (email_verification_expires_at IS NULL)",
    )
    op.create_check_constraint(
        "ck_account_reset_code_expiry",
        "account",
        "(password_reset_code IS NULL) = (password_reset_expires_at IS NULL)",
    )
    op.create_check_constraint(
        "ck_account_role",
        "account",
        "role IN ('business', 'super_admin')",
    )


def downgrade() -> None:
    op.drop_constraint("ck_account_role", "account", type_="check")
    op.drop_constraint("ck_account_reset_code_expiry", "account", type_="check")
    op.drop_constraint("ck_account_verification_code_expiry", "account", type_="check")
    op.drop_index(op.f("ix_account_email"), table_name="account")
    op.drop_table("account")
