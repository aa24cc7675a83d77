"""
PrivacyWatch Schemas

Request/response models for the HTTP layer and the security audit report.
"""

from .api_schemas import (
    AnswerSubmissionRequest,
    AnswerSubmissionResponse,
    CatalogResponse,
    DocumentValidationResponse,
    EvidenceUploadRequest,
    SectorAnalysisResponse,
    SectorAnswersRequest,
    TaskActionRequest,
    TaskListResponse,
)
from .security_audit_schemas import (
    ResourceAccessPattern,
    SecurityAuditReport,
    SuspiciousActivity,
    TaskSecurityMetrics,
    TopUser,
    UserActivitySummary,
)

__all__ = [
    "AnswerSubmissionRequest",
    "AnswerSubmissionResponse",
    "CatalogResponse",
    "DocumentValidationResponse",
    "EvidenceUploadRequest",
    "SectorAnalysisResponse",
    "SectorAnswersRequest",
    "TaskActionRequest",
    "TaskListResponse",
    "ResourceAccessPattern",
    "SecurityAuditReport",
    "SuspiciousActivity",
    "TaskSecurityMetrics",
    "TopUser",
    "UserActivitySummary",
]
