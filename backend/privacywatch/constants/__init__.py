"""
PrivacyWatch Constants Module

Centralized constants for the LGPD questionnaire, sector taxonomy and
evidence document limits.
"""

from .lgpd import (
    ALLOWED_DOCUMENT_EXTENSIONS,
    ALLOWED_DOCUMENT_TYPES,
    ANY_ANSWER,
    BASE_SECTOR,
    CUSTOM_SECTOR,
    CUSTOM_SECTOR_ID_OFFSET,
    FULL_COMPLIANCE_ANSWER,
    FULL_COMPLIANCE_POINTS,
    MAX_DOCUMENT_SIZE,
    MIN_SCORE_CAP,
    NEGATIVE_RESPONSES,
    PARTIAL_COMPLIANCE_ANSWER,
    PARTIAL_COMPLIANCE_POINTS,
    SECTOR_DISPLAY_NAMES,
    SECTOR_TAXONOMY,
)

__all__ = [
    "ALLOWED_DOCUMENT_EXTENSIONS",
    "ALLOWED_DOCUMENT_TYPES",
    "ANY_ANSWER",
    "BASE_SECTOR",
    "CUSTOM_SECTOR",
    "CUSTOM_SECTOR_ID_OFFSET",
    "FULL_COMPLIANCE_ANSWER",
    "FULL_COMPLIANCE_POINTS",
    "MAX_DOCUMENT_SIZE",
    "MIN_SCORE_CAP",
    "NEGATIVE_RESPONSES",
    "PARTIAL_COMPLIANCE_ANSWER",
    "PARTIAL_COMPLIANCE_POINTS",
    "SECTOR_DISPLAY_NAMES",
    "SECTOR_TAXONOMY",
]
