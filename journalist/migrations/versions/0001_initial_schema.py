"""initial_schema

Version: 1

Creates the bullets table: one row per bullet, grouped into entries by
date and ordered by id within each type.
"""
from alembic import op
import sqlalchemy as sa


def upgrade() -> None:
    """Create bullets table and its lookup indexes."""
    op.create_table(
        "bullets",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        # task, event, note, priority, inspiration, insight, misstep
        sa.Column("type", sa.String(), nullable=False),
        # pending, completed, migrated, scheduled (tasks and priorities only)
        sa.Column("task_state", sa.String(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.current_timestamp(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.current_timestamp(),
        ),
    )

    op.create_index("idx_bullets_date", "bullets", ["date"])
    op.create_index("idx_bullets_type", "bullets", ["type"])
    op.create_index("idx_bullets_date_type", "bullets", ["date", "type"])
    op.create_index("idx_bullets_updated", "bullets", ["updated_at"])
