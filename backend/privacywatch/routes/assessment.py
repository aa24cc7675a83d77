"""
Assessment API Routes

Questionnaire catalog, answer submission, sector questionnaires and sector
analysis for an organization.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ..models import AnswerSet, RequestContext
from ..schemas import (
    AnswerSubmissionRequest,
    AnswerSubmissionResponse,
    CatalogResponse,
    SectorAnalysisResponse,
    SectorAnswersRequest,
    TaskListResponse,
)
from .dependencies import ServiceContainer, get_container, get_request_context, rate_limit, require_access

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/organizations/{organization_id}", tags=["Assessment"])


@router.get("/questions", response_model=CatalogResponse)
async def get_questions(
    organization_id: str,
    context: RequestContext = Depends(get_request_context),
    container: ServiceContainer = Depends(get_container),
) -> CatalogResponse:
    """
    Get the questionnaire composed for the organization's declared sectors
    """
    require_access(container, context, organization_id, "read", "assessment")
    questions = container.assessment.get_catalog(organization_id)
    return CatalogResponse(organization_id=organization_id, total=len(questions), questions=questions)


@router.get("/answers", response_model=AnswerSet)
async def get_latest_answers(
    organization_id: str,
    context: RequestContext = Depends(get_request_context),
    container: ServiceContainer = Depends(get_container),
) -> AnswerSet:
    require_access(container, context, organization_id, "read", "assessment")
    latest = container.assessment.get_latest_answers(organization_id)
    if latest is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No answers saved")
    return latest


@router.post("/answers", response_model=AnswerSubmissionResponse)
async def submit_answers(
    organization_id: str,
    request: AnswerSubmissionRequest,
    context: RequestContext = Depends(rate_limit("submit_answers", "assessment")),
    container: ServiceContainer = Depends(get_container),
) -> AnswerSubmissionResponse:
    """
    Save a new answer set version and derive remediation tasks.

    The caller must choose the derivation mode: reset when restarting the
    assessment, append when continuing it.
    """
    require_access(container, context, organization_id, "update", "assessment")

    result = container.assessment.save_answers(
        organization_id,
        request.answers,
        context,
        mode=request.mode,
        is_complete=request.is_complete,
        observations=request.observations,
        include_evidence=request.include_evidence,
    )
    return AnswerSubmissionResponse(
        organization_id=organization_id,
        version=result.answer_set.version,
        compliance_score=result.answer_set.compliance_score,
        catalog_size=result.catalog_size,
        is_complete=result.answer_set.is_complete,
        tasks_created=len(result.tasks),
        tasks=result.tasks,
    )


@router.get("/sector-analysis", response_model=SectorAnalysisResponse)
async def get_sector_analysis(
    organization_id: str,
    context: RequestContext = Depends(get_request_context),
    container: ServiceContainer = Depends(get_container),
) -> SectorAnalysisResponse:
    require_access(container, context, organization_id, "read", "assessment")
    sectors = container.assessment.sector_analysis(organization_id)
    return SectorAnalysisResponse(organization_id=organization_id, sectors=sectors)


@router.post("/sectors/{sector_key}/answers", response_model=TaskListResponse)
async def submit_sector_answers(
    organization_id: str,
    sector_key: str,
    request: SectorAnswersRequest,
    context: RequestContext = Depends(rate_limit("submit_answers", "task")),
    container: ServiceContainer = Depends(get_container),
) -> TaskListResponse:
    """
    Derive sector-tagged remediation tasks from a sector questionnaire
    """
    require_access(container, context, organization_id, "create", "task")
    tasks = container.assessment.submit_sector_answers(
        organization_id, sector_key, request.answers, context, reset=request.reset
    )
    return TaskListResponse(organization_id=organization_id, total=len(tasks), tasks=tasks)
