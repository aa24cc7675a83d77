"""
API Schemas

Pydantic request and response models for the HTTP layer.
"""

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

from ..models import DerivationMode, Question, RemediationTask, SectorAnalysis

RawAnswerValue = Union[None, str, List[str]]


# =============================================================================
# Assessment
# =============================================================================


class CatalogResponse(BaseModel):
    """Questionnaire composed for an organization."""

    organization_id: str
    total: int
    questions: List[Question]


class AnswerSubmissionRequest(BaseModel):
    """Request model for saving questionnaire answers."""

    answers: List[RawAnswerValue] = Field(..., description="Answers aligned with the catalog by position")
    mode: DerivationMode = Field(
        ..., description="reset replaces all tasks, append only adds newly triggered ones"
    )
    is_complete: bool = False
    observations: Optional[str] = Field(None, max_length=5000)
    include_evidence: bool = Field(False, description="Also derive evidence attachment tasks")


class AnswerSubmissionResponse(BaseModel):
    organization_id: str
    version: int
    compliance_score: int = Field(ge=0, le=100)
    catalog_size: int
    is_complete: bool
    tasks_created: int
    tasks: List[RemediationTask] = Field(default_factory=list)


class SectorAnswersRequest(BaseModel):
    """Request model for a sector questionnaire."""

    answers: List[RawAnswerValue]
    reset: bool = Field(False, description="Cancel the organization's open tasks first")


class SectorAnalysisResponse(BaseModel):
    organization_id: str
    sectors: Dict[str, SectorAnalysis]


# =============================================================================
# Tasks
# =============================================================================


class TaskListResponse(BaseModel):
    organization_id: str
    total: int
    tasks: List[RemediationTask]


class TaskActionRequest(BaseModel):
    """Optional comments accompanying a task transition."""

    comments: Optional[str] = Field(None, max_length=5000)


class EvidenceUploadRequest(BaseModel):
    """
    Metadata of an uploaded evidence document.

    File bytes are handled by external storage; only metadata reaches the engine.
    """

    file_name: str
    file_size: int
    mime_type: str


# =============================================================================
# Documents
# =============================================================================


class DocumentValidationResponse(BaseModel):
    is_valid: bool
    errors: List[str] = Field(default_factory=list)
