"""add recurrence fields"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0002_add_recurrence"
down_revision = "0001_create_tasks"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column("tasks", sa.Column("recurrence_type", sa.String(length=20), nullable=True))
    op.add_column(
        "tasks",
        sa.Column("recurrence_interval", sa.Integer(), nullable=False, server_default="1"),
    )
    op.add_column("tasks", sa.Column("recurrence_days_of_week", sa.String(length=20), nullable=True))
    op.add_column("tasks", sa.Column("recurrence_end_date", sa.String(length=10), nullable=True))
    op.add_column("tasks", sa.Column("recurrence_custom", sa.Text(), nullable=True))


def downgrade() -> None:
    op.drop_column("tasks", "recurrence_custom")
    op.drop_column("tasks", "recurrence_end_date")
    op.drop_column("tasks", "recurrence_days_of_week")
    op.drop_column("tasks", "recurrence_interval")
    op.drop_column("tasks", "recurrence_type")
