"""
Wellness assessment scoring.

Answers are keyed by question number. Question 2 rates stress (1-10),
question 6 rates self-connection (1-10) and question 3 names the area the
client most wants to work on.
"""
import re
from typing import Any, Dict, List, Optional, Union

from app.schemas_pkg.assessment import Analysis

Answers = Union[Dict[str, Any], List[Any]]

STRESS_QUESTION = 2
FOCUS_QUESTION = 3
SELF_CONNECTION_QUESTION = 6

DEFAULT_RATING = 5
DEFAULT_FOCUS = "Spiritual Growth & Inner Peace"
MIN_SCORE = 50
MAX_SCORE = 100

RECOMMENDATIONS = [
    "Begin daily gratitude practice with Maa Durga's blessings",
    "Schedule regular meditation and energy healing sessions",
    "Work on subconscious reprogramming for limiting beliefs",
    "Join our transformation package for comprehensive healing",
]

NEXT_STEPS = [
    "Book a free 15-minute consultation call",
    "Join our divine community WhatsApp group",
    "Start the 7-day gratitude challenge",
    "Schedule your first transformation session",
]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def get_answer(answers: Answers, question: int) -> Any:
    if isinstance(answers, list):
        return answers[question] if 0 <= question < len(answers) else None
    if str(question) in answers:
        return answers[str(question)]
    return answers.get(question)


def leading_int(value: Any) -> Optional[int]:
    """Integer prefix of a value ("7", "7 - very high", 7.9 -> 7), else None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return int(value) if value == value and abs(value) != float("inf") else None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def _rating(answers: Answers, question: int) -> int:
    # zero counts as unanswered
    return leading_int(get_answer(answers, question)) or DEFAULT_RATING


def calculate_score(stress: int, self_connection: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, 100 - stress * 5 + self_connection * 5))


def determine_primary_focus(answers: Answers) -> str:
    focus = get_answer(answers, FOCUS_QUESTION)
    return str(focus) if focus else DEFAULT_FOCUS


def generate_analysis(answers: Answers) -> Analysis:
    score = calculate_score(
        _rating(answers, STRESS_QUESTION),
        _rating(answers, SELF_CONNECTION_QUESTION),
    )
    return Analysis(
        overall_score=score,
        primary_focus=determine_primary_focus(answers),
        recommendations=list(RECOMMENDATIONS),
        next_steps=list(NEXT_STEPS),
    )
