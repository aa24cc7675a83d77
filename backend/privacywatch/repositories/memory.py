"""
In-Memory Stores

Process-local implementations of the store interfaces. Every store guards
its collection with a single lock and hands out copies, so callers can never
mutate stored state without going through the store.
"""

import logging
import threading
from datetime import datetime
from typing import Dict, List, Optional

from ..exceptions import TaskNotFoundError
from ..models import (
    AnswerSet,
    AuditRecord,
    OrganizationProfile,
    RemediationTask,
    TaskStatus,
)
from .base import AnswerStore, AuditStore, ProfileStore, TaskStore

logger = logging.getLogger(__name__)


class InMemoryTaskStore(TaskStore):
    def __init__(self):
        self._tasks: Dict[str, RemediationTask] = {}
        self._lock = threading.Lock()

    def create_task(self, task: RemediationTask) -> RemediationTask:
        with self._lock:
            self._tasks[task.id] = task.model_copy(deep=True)
        return task.model_copy(deep=True)

    def list_tasks(self, organization_id: str) -> List[RemediationTask]:
        with self._lock:
            tasks = [t for t in self._tasks.values() if t.organization_id == organization_id]
        tasks.sort(key=lambda t: t.created_at)
        return [t.model_copy(deep=True) for t in tasks]

    def get_task(self, task_id: str) -> Optional[RemediationTask]:
        with self._lock:
            task = self._tasks.get(task_id)
        return task.model_copy(deep=True) if task else None

    def update_task(self, task: RemediationTask) -> RemediationTask:
        with self._lock:
            if task.id not in self._tasks:
                raise TaskNotFoundError(task.id)
            self._tasks[task.id] = task.model_copy(deep=True)
        return task.model_copy(deep=True)

    def delete_all_tasks(self, organization_id: str) -> int:
        with self._lock:
            doomed = [tid for tid, t in self._tasks.items() if t.organization_id == organization_id]
            for tid in doomed:
                del self._tasks[tid]
        return len(doomed)

    def cancel_all_tasks(self, organization_id: str) -> int:
        changed = 0
        with self._lock:
            for task in self._tasks.values():
                if task.organization_id == organization_id and task.is_open:
                    task.status = TaskStatus.CANCELLED
                    changed += 1
        return changed


class InMemoryAuditStore(AuditStore):
    def __init__(self):
        self._records: List[AuditRecord] = []
        self._lock = threading.Lock()

    def append(self, record: AuditRecord) -> None:
        with self._lock:
            self._records.append(record.model_copy(deep=True))

    def query_range(self, start: datetime, end: datetime) -> List[AuditRecord]:
        with self._lock:
            records = [r for r in self._records if start <= r.created_at <= end]
        return [r.model_copy(deep=True) for r in sorted(records, key=lambda r: r.created_at)]

    def query_actor(
        self, actor_id: str, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[AuditRecord]:
        with self._lock:
            records = [
                r
                for r in self._records
                if r.actor_id == actor_id
                and (start is None or r.created_at >= start)
                and (end is None or r.created_at <= end)
            ]
        return [r.model_copy(deep=True) for r in sorted(records, key=lambda r: r.created_at)]

    def __len__(self) -> int:
        return len(self._records)


class InMemoryProfileStore(ProfileStore):
    def __init__(self):
        self._profiles: Dict[str, OrganizationProfile] = {}
        self._lock = threading.Lock()

    def get_profile(self, organization_id: str) -> Optional[OrganizationProfile]:
        with self._lock:
            profile = self._profiles.get(organization_id)
        return profile.model_copy(deep=True) if profile else None

    def save_profile(self, profile: OrganizationProfile) -> OrganizationProfile:
        with self._lock:
            self._profiles[profile.organization_id] = profile.model_copy(deep=True)
        return profile


class InMemoryAnswerStore(AnswerStore):
    def __init__(self):
        self._versions: Dict[str, List[AnswerSet]] = {}
        self._lock = threading.Lock()

    def get_latest_answers(self, organization_id: str) -> Optional[AnswerSet]:
        with self._lock:
            versions = self._versions.get(organization_id)
            latest = versions[-1] if versions else None
        return latest.model_copy(deep=True) if latest else None

    def save_answers(self, answer_set: AnswerSet) -> AnswerSet:
        with self._lock:
            versions = self._versions.setdefault(answer_set.organization_id, [])
            stored = answer_set.model_copy(update={"version": len(versions) + 1}, deep=True)
            versions.append(stored)
        logger.debug("Saved answer set version %d for %s", stored.version, stored.organization_id)
        return stored.model_copy(deep=True)
