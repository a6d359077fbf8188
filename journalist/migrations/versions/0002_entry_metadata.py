"""entry_metadata

Version: 2

Adds the secondary index tables rebuilt by refresh_metadata:
term_frequency (word counts across bullets) and cross_references (dates
mentioned inside entries).
"""
from alembic import op
import sqlalchemy as sa


def upgrade() -> None:
    """Create term_frequency and cross_references tables."""
    op.create_table(
        "term_frequency",
        sa.Column("term", sa.String(), primary_key=True),
        sa.Column("frequency", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("first_seen", sa.Date(), nullable=False),
        sa.Column("last_seen", sa.Date(), nullable=False),
    )
    op.create_index("idx_term_frequency_last_seen", "term_frequency", ["last_seen"])

    op.create_table(
        "cross_references",
        sa.Column("source_date", sa.Date(), nullable=False),
        sa.Column("target_date", sa.Date(), nullable=False),
        sa.Column("reference_type", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("source_date", "target_date", "reference_type"),
    )
    op.create_index(
        "idx_cross_references_target", "cross_references", ["target_date"]
    )
