"""
Security Audit Schemas

Pydantic models for the security audit report and per-organization task
security metrics.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..models.enums import SuspiciousActivityType

# =============================================================================
# Report Sections
# =============================================================================


class SuspiciousActivity(BaseModel):
    """An actor whose behaviour crossed one of the anomaly thresholds."""

    type: SuspiciousActivityType
    user_id: Optional[str] = None
    description: str
    count: int
    timeframe: str


class UserActivitySummary(BaseModel):
    """Per-actor aggregate over the report window."""

    total_actions: int = 0
    success_rate: int = Field(0, ge=0, le=100, description="Percentage of successful actions")
    resource_types: List[str] = Field(default_factory=list)
    last_activity: Optional[datetime] = None


class ResourceAccessPattern(BaseModel):
    """Aggregate for one (resource_type, action) pair."""

    resource_type: str
    action: str
    count: int = 0
    unique_users: int = 0
    success_rate: int = Field(0, ge=0, le=100)


class TopUser(BaseModel):
    user_id: Optional[str] = None
    action_count: int


# =============================================================================
# Report
# =============================================================================


class SecurityAuditReport(BaseModel):
    """Read-only analysis of the audit records in a time window."""

    period: str = Field(..., description="'YYYY-MM-DD to YYYY-MM-DD'")
    total_actions: int = 0
    failed_actions: int = 0
    suspicious_activities: List[SuspiciousActivity] = Field(default_factory=list)
    user_activity_summary: Dict[str, UserActivitySummary] = Field(default_factory=dict)
    resource_access_patterns: Dict[str, ResourceAccessPattern] = Field(default_factory=dict)
    rate_violations: int = 0
    top_users: List[TopUser] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class TaskSecurityMetrics(BaseModel):
    """Counters combining an organization's tasks with its audit trail."""

    total_tasks: int = 0
    tasks_with_documents: int = 0
    audited_actions: int = 0
    document_uploads: int = 0
    task_submissions: int = 0
    access_violations: int = 0
