"""create sleep entries table"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0004_create_sleep_entries"
down_revision = "0003_create_time_entries"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "sleep_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("bedtime", sa.String(length=5), nullable=False),
        sa.Column("wakeup_time", sa.String(length=5), nullable=False),
        sa.Column("quality", sa.String(length=10), nullable=False, server_default="good"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_sleep_entries_date", "sleep_entries", ["date"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_sleep_entries_date", table_name="sleep_entries")
    op.drop_table("sleep_entries")
