from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Dict, Optional

from schemas.problems import ProblemOut

_log = logging.getLogger("mathbuddy.normalizer")

# --- Parsing policy toggles -------------------------------------------------------
# If True: text that no strategy can parse is replaced by DEFAULT_PROBLEM.
# If False: it raises InvalidAIResponse and the request fails with a 500.
FALLBACK_ON_PARSE_FAILURE = True

DEFAULT_PROBLEM: Dict[str, Any] = {
    "problem_text": (
        "Sarah has 25 apples. She gives 10 apples to her friend. "
        "How many apples does Sarah have left?"
    ),
    "final_answer": 15,
}

_FENCE_OPEN_RE = re.compile(r"^\s*```[A-Za-z0-9_-]*\s*")
_FENCE_CLOSE_RE = re.compile(r"\s*```\s*$")
_DECODER = json.JSONDecoder()


class InvalidAIResponse(ValueError):
    """Model output parsed, but does not describe a usable problem."""


def _loads_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None
    # a bare list/number/string is not a problem object
    return data if isinstance(data, dict) else None


def _strip_fences(text: str) -> str:
    text = _FENCE_OPEN_RE.sub("", text, count=1)
    return _FENCE_CLOSE_RE.sub("", text, count=1)


def _extract_object(text: str) -> Optional[Dict[str, Any]]:
    # first "{" that starts a complete JSON object; stray braces in prose are skipped
    idx = text.find("{")
    while idx != -1:
        try:
            data, _ = _DECODER.raw_decode(text, idx)
        except json.JSONDecodeError:
            data = None
        if isinstance(data, dict):
            return data
        idx = text.find("{", idx + 1)
    return None


def parse_problem_json(raw_text: Optional[str]) -> Dict[str, Any]:
    """
    Best-effort parse of model output into a dict:
      1. the whole text as JSON
      2. code fences stripped, then the first complete {...} object in the text
      3. DEFAULT_PROBLEM (or InvalidAIResponse when the fallback is disabled)
    """
    text = (raw_text or "").strip()

    data = _loads_object(text)
    if data is not None:
        return data

    _log.warning("ai_json_direct_parse_failed len=%d", len(text))
    data = _extract_object(_strip_fences(text))
    if data is not None:
        return data

    if not FALLBACK_ON_PARSE_FAILURE:
        _log.error("ai_json_unparseable raw=%r", text[:200])
        raise InvalidAIResponse("AI response could not be parsed as JSON")

    _log.warning("ai_json_fallback_default raw=%r", text[:200])
    return dict(DEFAULT_PROBLEM)


def _coerce_answer(value: Any) -> int:
    # bool is an int subclass; "true" is not an answer
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidAIResponse("Invalid AI response format: final_answer is not a number")
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise InvalidAIResponse(
                "Invalid AI response format: final_answer is not a whole number"
            )
        return int(value)
    return value


def validate_problem(data: Dict[str, Any]) -> ProblemOut:
    problem_text = data.get("problem_text")
    if not isinstance(problem_text, str) or not problem_text.strip():
        raise InvalidAIResponse("Invalid AI response format: problem_text is empty")

    final_answer = _coerce_answer(data.get("final_answer"))

    hint = data.get("hint")
    if not isinstance(hint, str) or not hint.strip():
        _log.info("ai_response_without_hint")
        hint = None
    else:
        hint = hint.strip()

    return ProblemOut(problem_text=problem_text.strip(), final_answer=final_answer, hint=hint)


def normalize_problem(raw_text: Optional[str]) -> ProblemOut:
    return validate_problem(parse_problem_json(raw_text))
