"""initial schema: work_entries, user_settings

Revision ID: 0001
Revises:
Create Date: 2026-10-19

work_entries: one row per recorded day (unique day).
user_settings: single settings record (id = 1).
Yen amounts are integer columns; block lists and profile are JSON text.
"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "work_entries",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("selected_blocks", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("leader_blocks", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("sub_leader_blocks", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("support_minutes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("allowance_amount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("location", sa.String(16), nullable=False, server_default="hiraoka"),
        sa.Column("campus", sa.String(32), nullable=True),
        sa.Column("has_transport", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("transport_cost", sa.Integer(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_work_entries_day", "work_entries", ["day"], unique=True)

    op.create_table(
        "user_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("teaching_hourly_rate", sa.Integer(), nullable=False),
        sa.Column("hourly_rate", sa.Integer(), nullable=False),
        sa.Column("transport_cost", sa.Integer(), nullable=False),
        sa.Column("campus_transport_rates", sa.Text(), nullable=False, server_default="{}"),
        sa.Column("default_campus", sa.String(32), nullable=False),
        sa.Column("closing_day", sa.Integer(), nullable=False),
        sa.Column("payment_month_lag", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("annual_limit", sa.Integer(), nullable=False),
        sa.Column("profile", sa.Text(), nullable=False, server_default="{}"),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )


def downgrade() -> None:
    op.drop_table("user_settings")
    op.drop_index("ix_work_entries_day", table_name="work_entries")
    op.drop_table("work_entries")
