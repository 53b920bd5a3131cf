"""participants and winners

Revision ID: 0001
Revises:
Create Date: 2025-01-06 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "participants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("token_no", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=False),
        sa.Column("year", sa.String(length=4), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("participants_pkey")),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_participants_token_no", "participants", ["token_no"])

    op.create_table(
        "winners",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("participant_id", sa.String(length=64), nullable=True),
        sa.Column("participant_snapshot", sa.JSON(), nullable=False),
        sa.Column("rank", sa.String(length=32), nullable=False),
        sa.Column("year", sa.String(length=4), nullable=False),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("winners_pkey")),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_winners_year_rank", "winners", ["year", "rank"])
    op.create_index("ix_winners_participant_year", "winners", ["participant_id", "year"])


def downgrade() -> None:
    op.drop_index("ix_winners_participant_year", table_name="winners")
    op.drop_index("ix_winners_year_rank", table_name="winners")
    op.drop_table("winners")
    op.drop_index("ix_participants_token_no", table_name="participants")
    op.drop_table("participants")
