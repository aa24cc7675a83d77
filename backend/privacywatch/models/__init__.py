"""
PrivacyWatch domain models

Pydantic models for questionnaires, remediation tasks and audit records.
"""

from .assessment_models import (
    Answer,
    AnswerBase,
    AnswerSet,
    MultiChoice,
    OrganizationProfile,
    Question,
    SectorAnalysis,
    SingleChoice,
    TextAnswer,
    Unanswered,
    normalize_answer_value,
    parse_answer,
    parse_answers,
)
from .audit_models import (
    AuditEvent,
    AuditFailed,
    AuditOutcome,
    AuditRecord,
    AuditRecorded,
    RequestContext,
)
from .enums import (
    AccessLevel,
    AnswerKind,
    CompanySize,
    DerivationMode,
    SuspiciousActivityType,
    TaskPriority,
    TaskStatus,
)
from .task_models import EvidenceReference, RemediationTask

__all__ = [
    # Assessment
    "Answer",
    "AnswerBase",
    "AnswerSet",
    "MultiChoice",
    "OrganizationProfile",
    "Question",
    "SectorAnalysis",
    "SingleChoice",
    "TextAnswer",
    "Unanswered",
    "normalize_answer_value",
    "parse_answer",
    "parse_answers",
    # Audit
    "AuditEvent",
    "AuditFailed",
    "AuditOutcome",
    "AuditRecord",
    "AuditRecorded",
    "RequestContext",
    # Enums
    "AccessLevel",
    "AnswerKind",
    "CompanySize",
    "DerivationMode",
    "SuspiciousActivityType",
    "TaskPriority",
    "TaskStatus",
    # Tasks
    "EvidenceReference",
    "RemediationTask",
]
