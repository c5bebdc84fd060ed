"""create time entries table"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0003_create_time_entries"
down_revision = "0002_add_recurrence"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "time_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("category", sa.String(length=50), nullable=False, server_default=""),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_time_entries_date", "time_entries", ["date"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_time_entries_date", table_name="time_entries")
    op.drop_table("time_entries")
