# schemas/problems.py
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Difficulty = Literal["easy", "medium", "hard"]
Topic = Literal["addition", "subtraction", "multiplication", "division", "random"]

# ---------- Generate ----------


class GenerateProblemRequest(BaseModel):
    difficulty: Difficulty = "medium"
    topic: Topic = "random"


class ProblemOut(BaseModel):
    problem_text: str
    final_answer: int
    # not every model reply carries one; omitted from the response when missing
    hint: Optional[str] = None


class GenerateProblemResponse(BaseModel):
    problem: ProblemOut
    sessionId: str


# ---------- Submit ----------


class SubmitAnswerRequest(BaseModel):
    sessionId: str = Field(min_length=1)
    userAnswer: int
    timeTakenSeconds: Optional[int] = Field(default=None, ge=0)

    @field_validator("userAnswer", mode="before")
    @classmethod
    def _reject_bool(cls, v: Any) -> Any:
        # pydantic's lax int mode would turn true/false into 1/0
        if isinstance(v, bool):
            raise ValueError("userAnswer must be a number")
        return v


class SubmitAnswerResponse(BaseModel):
    isCorrect: bool
    feedback: str
    starsEarned: int = 0


# ---------- Read models ----------


class SessionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    created_at: datetime | None
    problem_text: str
    hint: str | None = None
    difficulty: str
    topic: str


class SubmissionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_at: datetime | None
    session_id: str
    user_answer: int
    is_correct: bool
    feedback_text: str
    time_taken_seconds: int | None = None
    stars_earned: int


class SubmissionList(BaseModel):
    ok: bool
    items: List[SubmissionOut]
    count: int
