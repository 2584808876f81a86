# routers/problems.py
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import ValidationError

from db import SessionLocal
from deps.auth import require_client
from feedback import generate_feedback
from llm import TextGenerator, get_generator
from models import ProblemSession, Submission
from normalizer import normalize_problem
from prompts import build_problem_prompt
from schemas.problems import (
    GenerateProblemRequest,
    GenerateProblemResponse,
    SessionOut,
    SubmissionList,
    SubmissionOut,
    SubmitAnswerRequest,
    SubmitAnswerResponse,
)
from scoring import evaluate

logger = logging.getLogger("mathbuddy.problems")

router = APIRouter(prefix="/api/math-problem", tags=["problems"])

_BAD_SETTINGS_MSG = "Invalid difficulty or topic."
_MISSING_FIELDS_MSG = "Missing required fields: sessionId and userAnswer"
_NOT_FOUND_MSG = "Problem session not found"


@router.post(
    "",
    status_code=201,
    response_model=GenerateProblemResponse,
    response_model_exclude_none=True,
)
def generate_problem(
    payload: Any = Body(default=None),
    generator: TextGenerator = Depends(get_generator),
):
    try:
        req = GenerateProblemRequest.model_validate(payload or {})
    except ValidationError:
        raise HTTPException(status_code=400, detail=_BAD_SETTINGS_MSG)

    try:
        raw = generator.generate(
            build_problem_prompt(req.difficulty, req.topic), json_mode=True
        )
        problem = normalize_problem(raw)

        with SessionLocal() as db:
            session = ProblemSession(
                problem_text=problem.problem_text,
                correct_answer=problem.final_answer,
                hint=problem.hint,
                difficulty=req.difficulty,
                topic=req.topic,
            )
            db.add(session)
            db.commit()
            db.refresh(session)
            session_id = session.id
    except Exception as e:
        logger.exception("generate_problem_failed difficulty=%s topic=%s", req.difficulty, req.topic)
        raise HTTPException(status_code=500, detail=f"Failed to generate problem: {e}")

    logger.info(
        "problem_created session=%s difficulty=%s topic=%s", session_id, req.difficulty, req.topic
    )
    return GenerateProblemResponse(problem=problem, sessionId=session_id)


@router.post("/submit", status_code=201, response_model=SubmitAnswerResponse)
def submit_answer(
    payload: Any = Body(default=None),
    generator: TextGenerator = Depends(get_generator),
):
    # Validate before touching the database or the model
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail=_MISSING_FIELDS_MSG)
    try:
        req = SubmitAnswerRequest.model_validate(payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail=_MISSING_FIELDS_MSG)

    try:
        with SessionLocal() as db:
            session = db.get(ProblemSession, req.sessionId)
            if session:
                problem_text = session.problem_text
                correct_answer = session.correct_answer
                difficulty = session.difficulty
    except Exception as e:
        logger.exception("session_lookup_failed session=%s", req.sessionId)
        raise HTTPException(status_code=500, detail=f"Failed to submit answer: {e}")

    if not session:
        logger.info("session_not_found session=%s", req.sessionId)
        raise HTTPException(status_code=404, detail=_NOT_FOUND_MSG)

    result = evaluate(req.userAnswer, correct_answer, req.timeTakenSeconds, difficulty)

    try:
        feedback_text = generate_feedback(
            generator, problem_text, correct_answer, req.userAnswer, result.is_correct
        )
    except Exception as e:
        logger.exception("feedback_failed session=%s", req.sessionId)
        raise HTTPException(status_code=500, detail=f"Failed to submit answer: {e}")

    # Persisting is secondary: the learner still gets feedback if this fails
    try:
        with SessionLocal() as db:
            db.add(
                Submission(
                    session_id=req.sessionId,
                    user_answer=req.userAnswer,
                    is_correct=result.is_correct,
                    feedback_text=feedback_text,
                    time_taken_seconds=req.timeTakenSeconds,
                    stars_earned=result.stars,
                )
            )
            db.commit()
    except Exception:
        logger.exception("submission_save_failed session=%s", req.sessionId)

    return SubmitAnswerResponse(
        isCorrect=result.is_correct, feedback=feedback_text, starsEarned=result.stars
    )


@router.get("/{session_id}", response_model=SessionOut)
def get_session(session_id: str):
    # Public endpoint: the correct answer is never exposed here
    with SessionLocal() as db:
        s = db.get(ProblemSession, session_id)
        if not s:
            raise HTTPException(status_code=404, detail=_NOT_FOUND_MSG)
        return SessionOut.model_validate(s)


@router.get(
    "/{session_id}/submissions",
    response_model=SubmissionList,
    dependencies=[Depends(require_client)],
)
def list_submissions(session_id: str, limit: int = Query(default=20)):
    limit = max(1, min(limit, 100))

    with SessionLocal() as db:
        if not db.get(ProblemSession, session_id):
            raise HTTPException(status_code=404, detail=_NOT_FOUND_MSG)
        rows = (
            db.query(Submission)
            .filter(Submission.session_id == session_id)
            .order_by(Submission.created_at.desc(), Submission.id.desc())
            .limit(limit)
            .all()
        )
        items = [SubmissionOut.model_validate(r) for r in rows]
    return {"ok": True, "items": items, "count": len(items)}
