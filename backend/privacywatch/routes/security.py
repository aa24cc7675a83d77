"""
Security Monitoring API Routes

Security audit report over a time window (administrators) and
per-organization task security metrics.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..models import RequestContext
from ..schemas import SecurityAuditReport, TaskSecurityMetrics
from .dependencies import (
    ServiceContainer,
    get_container,
    get_request_context,
    rate_limit,
    require_access,
    require_admin,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/security", tags=["Security Monitoring"])

DEFAULT_REPORT_DAYS = 30


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


@router.get("/audit-report", response_model=SecurityAuditReport)
async def get_audit_report(
    start: Optional[datetime] = Query(None, description="Window start, defaults to 30 days ago"),
    end: Optional[datetime] = Query(None, description="Window end, defaults to now"),
    context: RequestContext = Depends(rate_limit("security_report", "security_report")),
    container: ServiceContainer = Depends(get_container),
) -> SecurityAuditReport:
    """
    Security audit report: suspicious activity, per-user and per-resource
    statistics, and recommendations
    """
    require_admin(container, context, "read", "security_report")

    end = _as_utc(end) if end else datetime.now(timezone.utc)
    start = _as_utc(start) if start else end - timedelta(days=DEFAULT_REPORT_DAYS)
    if start > end:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="start must not be after end")

    report = container.reporter.report(start, end)
    container.recorder.record_action(
        context,
        "read",
        "security_report",
        details={"period": report.period, "total_actions": report.total_actions},
    )
    return report


@router.get("/organizations/{organization_id}/metrics", response_model=TaskSecurityMetrics)
async def get_task_security_metrics(
    organization_id: str,
    context: RequestContext = Depends(get_request_context),
    container: ServiceContainer = Depends(get_container),
) -> TaskSecurityMetrics:
    require_access(container, context, organization_id, "read", "security_metrics")
    return container.reporter.task_security_metrics(organization_id)
