"""
Assessment Services Package

Question catalog composition, compliance scoring, sector analysis and the
questionnaire save flow.
"""

from .catalog import base_catalog, compose, compose_for_organization, sector_key, sector_questions
from .scoring import score, score_cap
from .sector_analysis import analyze
from .service import AssessmentResult, AssessmentService

__all__ = [
    "AssessmentResult",
    "AssessmentService",
    "analyze",
    "base_catalog",
    "compose",
    "compose_for_organization",
    "score",
    "score_cap",
    "sector_key",
    "sector_questions",
]
