"""
Remediation Task Models

Tasks are produced by the derivation engine and moved through their
lifecycle by the workflow service. Both write through a TaskStore.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import TaskPriority, TaskStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EvidenceReference(BaseModel):
    """Pointer to an uploaded evidence document held by the file store."""

    model_config = ConfigDict(frozen=True)

    document_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    file_name: str
    file_size: int
    mime_type: str
    uploaded_at: datetime = Field(default_factory=_utcnow)


class RemediationTask(BaseModel):
    """A concrete action an organization must take to close a compliance gap."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    organization_id: str
    template_key: str
    title: str
    description: str = ""
    category: str
    priority: TaskPriority
    status: TaskStatus = TaskStatus.PENDING
    steps: List[str] = Field(default_factory=list)
    due_in_days: int = 30
    due_date: Optional[datetime] = None
    lgpd_requirement: Optional[str] = None
    sector: Optional[str] = None

    # Review workflow
    evidence: List[EvidenceReference] = Field(default_factory=list)
    user_comments: Optional[str] = None
    reviewer_comments: Optional[str] = None
    reviewed_by: Optional[str] = None

    created_at: datetime = Field(default_factory=_utcnow)
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @model_validator(mode="after")
    def fill_due_date(self) -> "RemediationTask":
        if self.due_date is None:
            self.due_date = self.created_at + timedelta(days=self.due_in_days)
        return self

    @property
    def is_open(self) -> bool:
        return self.status not in (TaskStatus.COMPLETED, TaskStatus.CANCELLED)
