from __future__ import annotations

from llm import TextGenerator
from prompts import build_feedback_prompt


def generate_feedback(
    generator: TextGenerator,
    problem_text: str,
    correct_answer: int,
    user_answer: int,
    is_correct: bool,
) -> str:
    # Free text from the model; only surrounding whitespace is touched.
    prompt = build_feedback_prompt(problem_text, correct_answer, user_answer, is_correct)
    return generator.generate(prompt).strip()
