# Prompt templates sent to the text-generation model.
# Audience is fixed: Primary 5 (10-11 years old).

from __future__ import annotations

DIFFICULTY_GUIDE = {
    "easy": "Use whole numbers up to 100 and a single step.",
    "medium": "Use whole numbers up to 1,000 and one or two steps.",
    "hard": "Use whole numbers up to 10,000 and two or three steps.",
}

TOPIC_GUIDE = {
    "addition": "The problem must be solved using addition.",
    "subtraction": "The problem must be solved using subtraction.",
    "multiplication": "The problem must be solved using multiplication.",
    "division": "The problem must be solved using division, with no remainder.",
    "random": (
        "The problem may use any of addition, subtraction, multiplication or division."
    ),
}

_PROBLEM_TEMPLATE = """\
Generate a math word problem suitable for Primary 5 students (10-11 years old).
Difficulty: {difficulty}. {difficulty_guide}
Topic: {topic}. {topic_guide}
The final answer must be a single whole number.
Make it engaging and relatable for children.

IMPORTANT: Return your response in this exact JSON format:
{{
  "problem_text": "A bakery sold 45 cupcakes in the morning and 32 cupcakes in the afternoon. How many cupcakes did they sell in total?",
  "final_answer": 77,
  "hint": "Add the morning and afternoon sales together."
}}

The hint should nudge the student towards the method without giving away the answer.
Do not include any other text or explanation, just the JSON.
"""

_FEEDBACK_TEMPLATE = """\
Original problem: {problem_text}
Correct answer: {correct_answer}
User's answer: {user_answer}
Was the user correct? {verdict}

Generate personalized feedback that:
- {focus}
- Helps the user understand the math concept
- Encourages continued learning
- Keeps a friendly, supportive tone suitable for Primary 5 students

Keep the feedback concise but helpful (2-3 sentences).
"""


def build_problem_prompt(difficulty: str = "medium", topic: str = "random") -> str:
    if difficulty not in DIFFICULTY_GUIDE:
        raise ValueError(f"unknown difficulty: {difficulty!r}")
    if topic not in TOPIC_GUIDE:
        raise ValueError(f"unknown topic: {topic!r}")
    return _PROBLEM_TEMPLATE.format(
        difficulty=difficulty,
        difficulty_guide=DIFFICULTY_GUIDE[difficulty],
        topic=topic,
        topic_guide=TOPIC_GUIDE[topic],
    )


def build_feedback_prompt(
    problem_text: str, correct_answer: int, user_answer: int, is_correct: bool
) -> str:
    focus = (
        "Praises the user and reinforces the correct method"
        if is_correct
        else "Explains the correct solution step by step"
    )
    return _FEEDBACK_TEMPLATE.format(
        problem_text=problem_text,
        correct_answer=correct_answer,
        user_answer=user_answer,
        verdict="Yes" if is_correct else "No",
        focus=focus,
    )
