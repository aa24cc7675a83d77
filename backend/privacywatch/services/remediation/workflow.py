"""
Task Workflow Service

Moves remediation tasks through their review lifecycle:

    pending -> in_progress -> in_review -> approved -> completed
    pending -> in_review
    rejected -> in_review | in_progress

Guards:
- entering in_review requires at least one evidence document
- rejecting requires a reviewer comment
- evidence cannot be attached once a task is in review or later

Each read-modify-write of a task runs under that task's lock. Every
successful transition is written to the audit trail with the previous and
new status.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Dict, FrozenSet, Optional

from ...exceptions import DependencyError, EngineError, InvalidTransitionError, TaskNotFoundError
from ...models import EvidenceReference, RemediationTask, RequestContext, TaskStatus
from ...repositories import TaskStore
from ...utils.logging_security import sanitize_id_for_log
from ..audit.recorder import AuditRecorder

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[TaskStatus, FrozenSet[TaskStatus]] = {
    TaskStatus.PENDING: frozenset({TaskStatus.IN_PROGRESS, TaskStatus.IN_REVIEW}),
    TaskStatus.IN_PROGRESS: frozenset({TaskStatus.IN_REVIEW}),
    TaskStatus.IN_REVIEW: frozenset({TaskStatus.APPROVED, TaskStatus.REJECTED}),
    TaskStatus.REJECTED: frozenset({TaskStatus.IN_REVIEW, TaskStatus.IN_PROGRESS}),
    TaskStatus.APPROVED: frozenset({TaskStatus.COMPLETED}),
    TaskStatus.COMPLETED: frozenset(),
    TaskStatus.CANCELLED: frozenset(),
}

EVIDENCE_LOCKED_STATUSES: FrozenSet[TaskStatus] = frozenset(
    {TaskStatus.IN_REVIEW, TaskStatus.APPROVED, TaskStatus.COMPLETED, TaskStatus.CANCELLED}
)


def check_transition(task: RemediationTask, target: TaskStatus, reviewer_comments: Optional[str] = None) -> None:
    """
    Validate a status change without applying it.

    Raises:
        InvalidTransitionError: If the lifecycle or a guard forbids the change
    """
    if target not in ALLOWED_TRANSITIONS.get(task.status, frozenset()):
        raise InvalidTransitionError(task.status, target)

    if target == TaskStatus.IN_REVIEW and not task.evidence:
        raise InvalidTransitionError(task.status, target, "At least one evidence document is required")

    if target == TaskStatus.REJECTED and not (reviewer_comments and reviewer_comments.strip()):
        raise InvalidTransitionError(task.status, target, "Reviewer comments are required when rejecting")


class TaskWorkflowService:
    """Applies lifecycle transitions through the task store and audits them"""

    def __init__(
        self,
        task_store: TaskStore,
        recorder: AuditRecorder,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.task_store = task_store
        self.recorder = recorder
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self._task_locks: Dict[str, threading.Lock] = {}
        self._task_locks_guard = threading.Lock()

    def _task_lock(self, task_id: str) -> threading.Lock:
        with self._task_locks_guard:
            return self._task_locks.setdefault(task_id, threading.Lock())

    # ------------------------------------------------------------------
    # Store access
    # ------------------------------------------------------------------

    def get_task(self, task_id: str) -> RemediationTask:
        try:
            task = self.task_store.get_task(task_id)
        except Exception as e:
            raise DependencyError("get_task", e) from e
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def _save(self, task: RemediationTask) -> RemediationTask:
        try:
            return self.task_store.update_task(task)
        except EngineError:
            raise
        except Exception as e:
            logger.error("Task store update_task failed for %s: %s", sanitize_id_for_log(task.id), e)
            raise DependencyError("update_task", e) from e

    # ------------------------------------------------------------------
    # Evidence
    # ------------------------------------------------------------------

    def attach_evidence(
        self, task_id: str, evidence: EvidenceReference, context: RequestContext
    ) -> RemediationTask:
        """
        Attach an uploaded document to a task.

        Raises:
            TaskNotFoundError: Unknown task
            InvalidTransitionError: Task is in review, approved, completed or cancelled
        """
        with self._task_lock(task_id):
            task = self.get_task(task_id)
            if task.status in EVIDENCE_LOCKED_STATUSES:
                raise InvalidTransitionError(
                    task.status, task.status, "Documents cannot be attached to a task in this status"
                )

            task.evidence.append(evidence)
            saved = self._save(task)

        self.recorder.record_action(
            context,
            "create",
            "document",
            evidence.document_id,
            details={
                "task_id": task.id,
                "file_name": evidence.file_name,
                "file_size": evidence.file_size,
                "mime_type": evidence.mime_type,
            },
        )
        return saved

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self, task_id: str, context: RequestContext) -> RemediationTask:
        return self._transition(task_id, TaskStatus.IN_PROGRESS, context, action="update")

    def submit(self, task_id: str, context: RequestContext, user_comments: Optional[str] = None) -> RemediationTask:
        """Send a task for review. Requires at least one evidence document."""
        return self._transition(task_id, TaskStatus.IN_REVIEW, context, action="submit", user_comments=user_comments)

    def resubmit(self, task_id: str, context: RequestContext, user_comments: Optional[str] = None) -> RemediationTask:
        """Send a rejected task back for review."""
        return self._transition(
            task_id,
            TaskStatus.IN_REVIEW,
            context,
            action="submit",
            user_comments=user_comments,
            details={"resubmission": True},
            required_status=TaskStatus.REJECTED,
        )

    def approve(
        self, task_id: str, context: RequestContext, reviewer_comments: Optional[str] = None
    ) -> RemediationTask:
        return self._transition(
            task_id, TaskStatus.APPROVED, context, action="approve", reviewer_comments=reviewer_comments
        )

    def reject(self, task_id: str, context: RequestContext, reviewer_comments: Optional[str]) -> RemediationTask:
        return self._transition(
            task_id, TaskStatus.REJECTED, context, action="reject", reviewer_comments=reviewer_comments
        )

    def complete(self, task_id: str, context: RequestContext) -> RemediationTask:
        return self._transition(task_id, TaskStatus.COMPLETED, context, action="complete")

    def _transition(
        self,
        task_id: str,
        target: TaskStatus,
        context: RequestContext,
        action: str,
        user_comments: Optional[str] = None,
        reviewer_comments: Optional[str] = None,
        details: Optional[dict] = None,
        required_status: Optional[TaskStatus] = None,
    ) -> RemediationTask:
        with self._task_lock(task_id):
            task = self.get_task(task_id)
            if required_status is not None and task.status != required_status:
                raise InvalidTransitionError(
                    task.status, target, f"Only {required_status.value} tasks can take this action"
                )
            check_transition(task, target, reviewer_comments)

            previous = task.status
            now = self.clock()
            task.status = target

            if target == TaskStatus.IN_REVIEW:
                task.submitted_at = now
                if user_comments is not None:
                    task.user_comments = user_comments
                task.reviewer_comments = None
            elif target in (TaskStatus.APPROVED, TaskStatus.REJECTED):
                task.reviewed_at = now
                task.reviewed_by = context.actor_id
                task.reviewer_comments = reviewer_comments
            elif target == TaskStatus.COMPLETED:
                task.completed_at = now

            saved = self._save(task)

        logger.info(
            "Task %s moved from %s to %s", sanitize_id_for_log(task.id), previous.value, target.value
        )
        self.recorder.record_action(
            context,
            action,
            "task",
            task.id,
            details=details or {},
            previous_state={"status": previous.value},
            new_state={"status": target.value},
        )
        return saved
