"""
Compliance Scoring

10 points per affirmative answer, 5 per partial, 0 otherwise. The raw sum is
capped at max(100, catalog_size * 10) and normalized to 0..100.
"""

from typing import Sequence

from ...constants import FULL_COMPLIANCE_POINTS, MIN_SCORE_CAP, PARTIAL_COMPLIANCE_POINTS
from ...models import AnswerBase


def answer_points(answer: AnswerBase) -> int:
    if answer.is_full_compliance:
        return FULL_COMPLIANCE_POINTS
    if answer.is_partial_compliance:
        return PARTIAL_COMPLIANCE_POINTS
    return 0


def raw_points(answers: Sequence[AnswerBase]) -> int:
    """Unnormalized point total."""
    return sum(answer_points(a) for a in answers)


def score_cap(catalog_size: int) -> int:
    return max(MIN_SCORE_CAP, catalog_size * FULL_COMPLIANCE_POINTS)


def score(answers: Sequence[AnswerBase], catalog_size: int) -> int:
    """
    Compute the compliance score.

    Args:
        answers: Parsed answers
        catalog_size: Number of questions in the catalog the answers belong to

    Returns:
        Integer in 0..100, monotone non-decreasing when any single answer is
        upgraded (unanswered/negative -> parcial -> sim)
    """
    cap = score_cap(catalog_size)
    capped = min(raw_points(answers), cap)
    return round(100 * capped / cap)
