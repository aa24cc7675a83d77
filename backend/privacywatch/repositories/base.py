"""
Store Interfaces

Abstract persistence boundaries for the engine. Services depend on these
interfaces only; in-memory and SQL implementations live alongside.

Any exception raised by an implementation is treated as a store failure:
task store failures surface to the caller as DependencyError, audit store
failures are absorbed by the audit recorder.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..models import AnswerSet, AuditRecord, OrganizationProfile, RemediationTask


class TaskStore(ABC):
    """Persistence for remediation tasks"""

    @abstractmethod
    def create_task(self, task: RemediationTask) -> RemediationTask:
        """Insert a new task and return the stored copy."""

    @abstractmethod
    def list_tasks(self, organization_id: str) -> List[RemediationTask]:
        """All tasks for an organization, oldest first, cancelled included."""

    @abstractmethod
    def get_task(self, task_id: str) -> Optional[RemediationTask]:
        """Task by id, or None."""

    @abstractmethod
    def update_task(self, task: RemediationTask) -> RemediationTask:
        """
        Replace a stored task.

        Raises:
            TaskNotFoundError: If the task id is unknown
        """

    @abstractmethod
    def delete_all_tasks(self, organization_id: str) -> int:
        """Hard-delete every task of an organization. Returns the count removed."""

    @abstractmethod
    def cancel_all_tasks(self, organization_id: str) -> int:
        """Mark every open task of an organization cancelled. Returns the count changed."""


class AuditStore(ABC):
    """Append-only audit log"""

    @abstractmethod
    def append(self, record: AuditRecord) -> None:
        """Persist one record."""

    @abstractmethod
    def query_range(self, start: datetime, end: datetime) -> List[AuditRecord]:
        """Records with start <= created_at <= end, oldest first."""

    @abstractmethod
    def query_actor(
        self, actor_id: str, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[AuditRecord]:
        """Records of one actor, optionally bounded in time, oldest first."""


class ProfileStore(ABC):
    @abstractmethod
    def get_profile(self, organization_id: str) -> Optional[OrganizationProfile]:
        """Organization profile, or None if the organization never declared one."""


class AnswerStore(ABC):
    @abstractmethod
    def get_latest_answers(self, organization_id: str) -> Optional[AnswerSet]:
        """Most recent answer set version, or None."""

    @abstractmethod
    def save_answers(self, answer_set: AnswerSet) -> AnswerSet:
        """Store a new version. The returned copy carries the assigned version number."""
