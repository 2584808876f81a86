from __future__ import annotations

from typing import NamedTuple, Optional, Tuple

# (three-star limit, two-star limit) in seconds; strictly-below comparisons
STAR_THRESHOLDS: dict[str, Tuple[int, int]] = {
    "easy": (30, 60),
    "medium": (60, 120),
    "hard": (120, 180),
}
DEFAULT_DIFFICULTY = "medium"


class Evaluation(NamedTuple):
    is_correct: bool
    stars: int


def is_correct(user_answer: int, correct_answer: int) -> bool:
    return user_answer == correct_answer


def compute_stars(
    correct: bool, time_taken_seconds: Optional[int], difficulty: Optional[str]
) -> int:
    """
    0 stars unless the answer is correct AND a time was recorded.
    Otherwise 3 / 2 / 1 depending on how the time compares with the
    difficulty's thresholds.
    """
    if not correct or time_taken_seconds is None:
        return 0
    three, two = STAR_THRESHOLDS.get(difficulty, STAR_THRESHOLDS[DEFAULT_DIFFICULTY])
    if time_taken_seconds < three:
        return 3
    if time_taken_seconds < two:
        return 2
    return 1


def evaluate(
    user_answer: int,
    correct_answer: int,
    time_taken_seconds: Optional[int] = None,
    difficulty: Optional[str] = None,
) -> Evaluation:
    ok = is_correct(user_answer, correct_answer)
    return Evaluation(is_correct=ok, stars=compute_stars(ok, time_taken_seconds, difficulty))
