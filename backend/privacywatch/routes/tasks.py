"""
Remediation Task API Routes

Task listing, evidence attachment and the review workflow.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from ..exceptions import DependencyError
from ..models import EvidenceReference, RemediationTask, RequestContext
from ..schemas import EvidenceUploadRequest, TaskActionRequest, TaskListResponse
from ..utils.file_security import sanitize_filename, validate_document
from ..utils.logging_security import sanitize_id_for_log
from .dependencies import (
    ServiceContainer,
    get_container,
    get_request_context,
    rate_limit,
    require_access,
    require_admin,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Remediation Tasks"])


def _owned_task(
    container: ServiceContainer, context: RequestContext, task_id: str, action: str
) -> RemediationTask:
    task = container.workflow.get_task(task_id)
    require_access(container, context, task.organization_id, action, "task", task_id)
    return task


def _comments(request: Optional[TaskActionRequest]) -> Optional[str]:
    return request.comments if request is not None else None


@router.get("/organizations/{organization_id}/tasks", response_model=TaskListResponse)
async def list_tasks(
    organization_id: str,
    context: RequestContext = Depends(rate_limit("list_tasks", "task")),
    container: ServiceContainer = Depends(get_container),
) -> TaskListResponse:
    require_access(container, context, organization_id, "read", "task")
    try:
        tasks = container.task_store.list_tasks(organization_id)
    except Exception as e:
        logger.error("Error listing tasks for %s: %s", sanitize_id_for_log(organization_id), e)
        raise DependencyError("list_tasks", e) from e
    return TaskListResponse(organization_id=organization_id, total=len(tasks), tasks=tasks)


@router.get("/tasks/{task_id}", response_model=RemediationTask)
async def get_task(
    task_id: str,
    context: RequestContext = Depends(get_request_context),
    container: ServiceContainer = Depends(get_container),
) -> RemediationTask:
    return _owned_task(container, context, task_id, "read")


@router.post("/tasks/{task_id}/documents", response_model=RemediationTask, status_code=status.HTTP_201_CREATED)
async def attach_document(
    task_id: str,
    request: EvidenceUploadRequest,
    context: RequestContext = Depends(rate_limit("upload_document", "document")),
    container: ServiceContainer = Depends(get_container),
) -> RemediationTask:
    """
    Attach an uploaded evidence document to a task.

    Every metadata violation is returned, not just the first.
    """
    _owned_task(container, context, task_id, "create")

    result = validate_document(
        request.file_name, request.file_size, request.mime_type, max_size=container.settings.max_upload_size
    )
    if not result.is_valid:
        container.recorder.record_action(
            context,
            "create",
            "document",
            details={"task_id": task_id, "errors": result.errors},
            success=False,
            error_message="; ".join(result.errors),
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Documento inválido", "errors": result.errors},
        )

    evidence = EvidenceReference(
        file_name=sanitize_filename(request.file_name),
        file_size=request.file_size,
        mime_type=request.mime_type,
        uploaded_at=datetime.now(timezone.utc),
    )
    return container.workflow.attach_evidence(task_id, evidence, context)


@router.post("/tasks/{task_id}/start", response_model=RemediationTask)
async def start_task(
    task_id: str,
    context: RequestContext = Depends(rate_limit("submit_task", "task")),
    container: ServiceContainer = Depends(get_container),
) -> RemediationTask:
    _owned_task(container, context, task_id, "update")
    return container.workflow.start(task_id, context)


@router.post("/tasks/{task_id}/submit", response_model=RemediationTask)
async def submit_task(
    task_id: str,
    request: Optional[TaskActionRequest] = None,
    context: RequestContext = Depends(rate_limit("submit_task", "task")),
    container: ServiceContainer = Depends(get_container),
) -> RemediationTask:
    """
    Send a task for review (requires at least one evidence document)
    """
    _owned_task(container, context, task_id, "submit")
    return container.workflow.submit(task_id, context, user_comments=_comments(request))


@router.post("/tasks/{task_id}/resubmit", response_model=RemediationTask)
async def resubmit_task(
    task_id: str,
    request: Optional[TaskActionRequest] = None,
    context: RequestContext = Depends(rate_limit("submit_task", "task")),
    container: ServiceContainer = Depends(get_container),
) -> RemediationTask:
    _owned_task(container, context, task_id, "submit")
    return container.workflow.resubmit(task_id, context, user_comments=_comments(request))


@router.post("/tasks/{task_id}/approve", response_model=RemediationTask)
async def approve_task(
    task_id: str,
    request: Optional[TaskActionRequest] = None,
    context: RequestContext = Depends(rate_limit("review_task", "task")),
    container: ServiceContainer = Depends(get_container),
) -> RemediationTask:
    require_admin(container, context, "approve", "task", task_id)
    return container.workflow.approve(task_id, context, reviewer_comments=_comments(request))


@router.post("/tasks/{task_id}/reject", response_model=RemediationTask)
async def reject_task(
    task_id: str,
    request: TaskActionRequest,
    context: RequestContext = Depends(rate_limit("review_task", "task")),
    container: ServiceContainer = Depends(get_container),
) -> RemediationTask:
    """
    Reject a task under review. Reviewer comments are mandatory.
    """
    require_admin(container, context, "reject", "task", task_id)
    return container.workflow.reject(task_id, context, reviewer_comments=request.comments)


@router.post("/tasks/{task_id}/complete", response_model=RemediationTask)
async def complete_task(
    task_id: str,
    context: RequestContext = Depends(rate_limit("submit_task", "task")),
    container: ServiceContainer = Depends(get_container),
) -> RemediationTask:
    _owned_task(container, context, task_id, "complete")
    return container.workflow.complete(task_id, context)
