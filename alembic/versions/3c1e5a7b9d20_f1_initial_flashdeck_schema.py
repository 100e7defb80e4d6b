"""f1_initial_flashdeck_schema

Revision ID: 3c1e5a7b9d20
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "3c1e5a7b9d20"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column("last_seen_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )

    op.create_table(
        "decks",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("last_studied", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_decks_user_id_users",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_decks"),
    )
    op.create_index("idx_decks_user_created", "decks", ["user_id", "created_at"])

    op.create_table(
        "cards",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("deck_id", sa.BigInteger(), nullable=False),
        sa.Column("front", sa.Text(), nullable=False),
        sa.Column("back", sa.Text(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("difficulty", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("times_reviewed", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("times_correct", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("last_reviewed", sa.DateTime(timezone=True), nullable=True),
        sa.Column("next_review", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.CheckConstraint("times_reviewed >= 0", name="ck_cards_times_reviewed_non_negative"),
        sa.CheckConstraint("times_correct >= 0", name="ck_cards_times_correct_non_negative"),
        sa.ForeignKeyConstraint(
            ["deck_id"],
            ["decks.id"],
            name="fk_cards_deck_id_decks",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_cards"),
    )
    op.create_index("idx_cards_deck_position", "cards", ["deck_id", "position"])

    op.create_table(
        "study_sessions",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("deck_id", sa.BigInteger(), nullable=False),
        sa.Column("cards_studied", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("cards_correct", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("duration_seconds", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "session_type",
            sa.String(length=16),
            nullable=False,
            server_default=sa.text("'study'"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.CheckConstraint("cards_studied >= 0", name="ck_study_sessions_cards_studied_non_negative"),
        sa.CheckConstraint("cards_correct >= 0", name="ck_study_sessions_cards_correct_non_negative"),
        sa.CheckConstraint("duration_seconds >= 0", name="ck_study_sessions_duration_non_negative"),
        sa.ForeignKeyConstraint(
            ["deck_id"],
            ["decks.id"],
            name="fk_study_sessions_deck_id_decks",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_study_sessions"),
    )
    op.create_index("idx_study_sessions_deck_created", "study_sessions", ["deck_id", "created_at"])

    op.create_table(
        "streak_state",
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("current_streak", sa.Integer(), nullable=False),
        sa.Column("longest_streak", sa.Integer(), nullable=False),
        sa.Column("last_study_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("streak_started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("current_streak >= 0", name="ck_streak_state_current_streak_non_negative"),
        sa.CheckConstraint(
            "longest_streak >= current_streak",
            name="ck_streak_state_longest_covers_current",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_streak_state_user_id_users",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("user_id", name="pk_streak_state"),
    )

    op.create_table(
        "past_streaks",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("streak_length", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.CheckConstraint("streak_length >= 0", name="ck_past_streaks_streak_length_non_negative"),
        sa.CheckConstraint(
            "start_date IS NULL OR end_date IS NULL OR end_date >= start_date",
            name="ck_past_streaks_end_not_before_start",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_past_streaks_user_id_users",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_past_streaks"),
    )
    op.create_index("idx_past_streaks_user_ended", "past_streaks", ["user_id", "id"])


def downgrade() -> None:
    op.drop_index("idx_past_streaks_user_ended", table_name="past_streaks")
    op.drop_table("past_streaks")
    op.drop_table("streak_state")
    op.drop_index("idx_study_sessions_deck_created", table_name="study_sessions")
    op.drop_table("study_sessions")
    op.drop_index("idx_cards_deck_position", table_name="cards")
    op.drop_table("cards")
    op.drop_index("idx_decks_user_created", table_name="decks")
    op.drop_table("decks")
    op.drop_table("users")
