"""initial tracker tables

Revision ID: 0001_tracker
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001_tracker"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_accounts")),
    )

    op.create_table(
        "cashouts",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("account_id", sa.String(64), sa.ForeignKey("accounts.id", name=op.f("fk_cashouts_account_id_accounts")), nullable=False),
        sa.Column("game", sa.String(50), nullable=True),
        sa.Column("currency", sa.String(20), nullable=True),
        sa.Column("amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("payout", sa.Float(), nullable=False, server_default="0"),
        sa.Column("amount_multiplier", sa.Float(), nullable=False, server_default="0"),
        sa.Column("payout_multiplier", sa.Float(), nullable=False, server_default="0"),
        sa.Column("amount_usd", sa.Float(), nullable=True),
        sa.Column("payout_usd", sa.Float(), nullable=True),
        sa.Column("upstream_updated_at", sa.String(64), nullable=True),
        sa.Column("captured_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("raw_json", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_cashouts")),
    )
    op.create_index(op.f("ix_cashouts_account_id"), "cashouts", ["account_id"])
    op.create_index(op.f("ix_cashouts_payout_multiplier"), "cashouts", ["payout_multiplier"])
    op.create_index(op.f("ix_cashouts_captured_at"), "cashouts", ["captured_at"])
    op.create_index("ix_cashouts_account_id_payout_multiplier", "cashouts", ["account_id", "payout_multiplier"])


def downgrade() -> None:
    op.drop_index("ix_cashouts_account_id_payout_multiplier", table_name="cashouts")
    op.drop_index(op.f("ix_cashouts_captured_at"), table_name="cashouts")
    op.drop_index(op.f("ix_cashouts_payout_multiplier"), table_name="cashouts")
    op.drop_index(op.f("ix_cashouts_account_id"), table_name="cashouts")
    op.drop_table("cashouts")
    op.drop_table("accounts")
