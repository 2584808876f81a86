"""create problem sessions and submissions

Revision ID: a1f3c9e2b7d4
Revises:
Create Date: 2026-10-19 14:20:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1f3c9e2b7d4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "math_problem_sessions",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("problem_text", sa.Text(), nullable=False),
        sa.Column("correct_answer", sa.Integer(), nullable=False),
        sa.Column("hint", sa.Text(), nullable=True),
        sa.Column("difficulty", sa.String(length=16), nullable=False),
        sa.Column("topic", sa.String(length=32), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_math_problem_sessions"),
    )
    op.create_index(
        "ix_math_problem_sessions_created_at", "math_problem_sessions", ["created_at"]
    )

    op.create_table(
        "math_problem_submissions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("session_id", sa.String(length=36), nullable=False),
        sa.Column("user_answer", sa.Integer(), nullable=False),
        sa.Column("is_correct", sa.Boolean(), nullable=False),
        sa.Column("feedback_text", sa.Text(), nullable=False),
        sa.Column("time_taken_seconds", sa.Integer(), nullable=True),
        sa.Column("stars_earned", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["session_id"],
            ["math_problem_sessions.id"],
            name="fk_math_problem_submissions_session_id_math_problem_sessions",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_math_problem_submissions"),
    )
    op.create_index(
        "ix_math_problem_submissions_session_id", "math_problem_submissions", ["session_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_math_problem_submissions_session_id", table_name="math_problem_submissions")
    op.drop_table("math_problem_submissions")
    op.drop_index("ix_math_problem_sessions_created_at", table_name="math_problem_sessions")
    op.drop_table("math_problem_sessions")
