"""Initial schema — user profiles and their five related tables.

Revision ID: 001_initial
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
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
    ]


def _profile_fk() -> sa.Column:
    return sa.Column(
        "profile_id",
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey("user_profiles.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )


def upgrade() -> None:
    # ── 1. user_profiles ────────────────────────────────────────────
    op.create_table(
        "user_profiles",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), unique=True, nullable=False),
        sa.Column(
            "email",
            sa.String(320),
            nullable=False,
            comment="Lower-cased, trimmed",
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("team", sa.String(255), nullable=True),
        sa.Column("job_title", sa.String(255), nullable=True),
        sa.Column("birthday", sa.Date, nullable=True),
        sa.Column("avatar_url", sa.String, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_user_profiles_email", "user_profiles", ["email"], unique=True)

    # ── 2. core_values ──────────────────────────────────────────────
    op.create_table(
        "core_values",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _profile_fk(),
        sa.Column(
            "values",
            postgresql.JSONB,
            nullable=False,
            comment="Array of up to 5 values",
        ),
        *_timestamps(),
    )

    # ── 3. character_strengths ──────────────────────────────────────
    op.create_table(
        "character_strengths",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _profile_fk(),
        sa.Column(
            "strengths",
            postgresql.JSONB,
            nullable=False,
            comment="Array of up to 5 strengths",
        ),
        *_timestamps(),
    )

    # ── 4. chronotypes ──────────────────────────────────────────────
    op.create_table(
        "chronotypes",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _profile_fk(),
        sa.Column(
            "types",
            postgresql.JSONB,
            nullable=False,
            comment="Lion / Bear / Wolf / Dolphin",
        ),
        sa.Column("primary_type", sa.String(16), nullable=True),
        *_timestamps(),
    )

    # ── 5. big_five_profiles ────────────────────────────────────────
    op.create_table(
        "big_five_profiles",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _profile_fk(),
        sa.Column("neuroticism_data", postgresql.JSONB, nullable=False),
        sa.Column("extraversion_data", postgresql.JSONB, nullable=False),
        sa.Column("openness_data", postgresql.JSONB, nullable=False),
        sa.Column("agreeableness_data", postgresql.JSONB, nullable=False),
        sa.Column("conscientiousness_data", postgresql.JSONB, nullable=False),
        *_timestamps(),
    )

    # ── 6. goals ────────────────────────────────────────────────────
    op.create_table(
        "goals",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _profile_fk(),
        sa.Column("period", sa.String(100), nullable=False, comment='e.g. "Q1 2025"'),
        sa.Column("professional_goals", sa.Text, nullable=True),
        sa.Column("personal_goals", sa.Text, nullable=True),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table("goals")
    op.drop_table("big_five_profiles")
    op.drop_table("chronotypes")
    op.drop_table("character_strengths")
    op.drop_table("core_values")
    op.drop_index("ix_user_profiles_email", table_name="user_profiles")
    op.drop_table("user_profiles")
