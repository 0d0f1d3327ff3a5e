"""create matches, frames and breaks tables

Revision ID: 20250301_000001
Revises:
Create Date: 2025-03-01 00:00:01
"""

import sqlmodel.sql.sqltypes
from alembic import op  # type: ignore[attr-defined]
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "20250301_000001"
down_revision = None
branch_labels = None
depends_on = None

# Shared by three tables; created once up front.
PLAYER_ENUM = postgresql.ENUM("player_a", "player_b", name="player", create_type=False)


def upgrade() -> None:
    PLAYER_ENUM.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "matches",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("season", sa.Integer(), nullable=False),
        sa.Column("played_on", sa.Date(), nullable=False),
        sa.Column("best_of", sa.Integer(), nullable=False),
        sa.Column("first_breaker", PLAYER_ENUM, nullable=True),
        sa.Column("winner", PLAYER_ENUM, nullable=True),
        sa.Column("notes", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_matches_season"), "matches", ["season"], unique=False)
    op.create_index(op.f("ix_matches_played_on"), "matches", ["played_on"], unique=False)

    op.create_table(
        "frames",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("match_id", sa.Uuid(), nullable=False),
        sa.Column("frame_no", sa.Integer(), nullable=False),
        sa.Column("score_a", sa.Integer(), nullable=False),
        sa.Column("score_b", sa.Integer(), nullable=False),
        sa.Column("winner", PLAYER_ENUM, nullable=True),
        sa.Column("breaker", PLAYER_ENUM, nullable=True),
        sa.Column("season", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["match_id"], ["matches.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("match_id", "frame_no", name="uq_frames_match_frame_no"),
    )
    op.create_index(op.f("ix_frames_match_id"), "frames", ["match_id"], unique=False)
    op.create_index(op.f("ix_frames_season"), "frames", ["season"], unique=False)

    op.create_table(
        "breaks",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("match_id", sa.Uuid(), nullable=False),
        sa.Column("frame_id", sa.Uuid(), nullable=True),
        sa.Column("player", PLAYER_ENUM, nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("season", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["frame_id"], ["frames.id"]),
        sa.ForeignKeyConstraint(["match_id"], ["matches.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("points >= 10", name="ck_breaks_points_min"),
    )
    op.create_index(op.f("ix_breaks_match_id"), "breaks", ["match_id"], unique=False)
    op.create_index(op.f("ix_breaks_frame_id"), "breaks", ["frame_id"], unique=False)
    op.create_index(op.f("ix_breaks_season"), "breaks", ["season"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_breaks_season"), table_name="breaks")
    op.drop_index(op.f("ix_breaks_frame_id"), table_name="breaks")
    op.drop_index(op.f("ix_breaks_match_id"), table_name="breaks")
    op.drop_table("breaks")
    op.drop_index(op.f("ix_frames_season"), table_name="frames")
    op.drop_index(op.f("ix_frames_match_id"), table_name="frames")
    op.drop_table("frames")
    op.drop_index(op.f("ix_matches_played_on"), table_name="matches")
    op.drop_index(op.f("ix_matches_season"), table_name="matches")
    op.drop_table("matches")
    PLAYER_ENUM.drop(op.get_bind(), checkfirst=True)
