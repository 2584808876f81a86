from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Optional

import sqlalchemy as sa
from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db import Base


def _new_session_id() -> str:
    return str(uuid.uuid4())


class ProblemSession(Base):
    """One generated word problem. Written once, never updated or deleted."""

    __tablename__ = "math_problem_sessions"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_session_id)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), index=True
    )
    problem_text: Mapped[str] = mapped_column(Text)
    correct_answer: Mapped[int] = mapped_column(Integer)
    hint: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    difficulty: Mapped[str] = mapped_column(String(16), default="medium")
    topic: Mapped[str] = mapped_column(String(32), default="random")


class Submission(Base):
    __tablename__ = "math_problem_submissions"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC)
    )
    session_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("math_problem_sessions.id"), index=True
    )
    user_answer: Mapped[int] = mapped_column(Integer)
    # fixed at insert time: user_answer == session.correct_answer
    is_correct: Mapped[bool] = mapped_column(Boolean)
    feedback_text: Mapped[str] = mapped_column(Text)
    time_taken_seconds: Mapped[Optional[int]] = mapped_column(sa.Integer, nullable=True)
    stars_earned: Mapped[int] = mapped_column(Integer, default=0)
