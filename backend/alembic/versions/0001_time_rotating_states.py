"""Create the time_rotating_states table."""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op


# Revision identifiers, used by Alembic.
revision = "0001_time_rotating_states"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "time_rotating_states",
        sa.Column("address", sa.Text(), primary_key=True),
        sa.Column("id", sa.Text(), nullable=False),
        sa.Column("rfc3339", sa.Text(), nullable=False),
        sa.Column("rotation_rfc3339", sa.Text(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("day", sa.Integer(), nullable=False),
        sa.Column("hour", sa.Integer(), nullable=False),
        sa.Column("minute", sa.Integer(), nullable=False),
        sa.Column("second", sa.Integer(), nullable=False),
        sa.Column("unix", sa.BigInteger(), nullable=False),
        sa.Column("rotation_days", sa.Integer(), nullable=True),
        sa.Column("rotation_hours", sa.Integer(), nullable=True),
        sa.Column("rotation_minutes", sa.Integer(), nullable=True),
        sa.Column("rotation_months", sa.Integer(), nullable=True),
        sa.Column("rotation_years", sa.Integer(), nullable=True),
        sa.Column("triggers", sa.JSON(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.CheckConstraint("month BETWEEN 1 AND 12", name="ck_time_rotating_states_month_range"),
        sa.CheckConstraint("day BETWEEN 1 AND 31", name="ck_time_rotating_states_day_range"),
    )
    op.create_index("ix_time_rotating_states_unix", "time_rotating_states", ["unix"])


def downgrade() -> None:
    op.drop_index("ix_time_rotating_states_unix", table_name="time_rotating_states")
    op.drop_table("time_rotating_states")
