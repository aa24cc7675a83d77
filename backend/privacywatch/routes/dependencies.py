"""
Route Dependencies

Service wiring, request context extraction, access checks and rate limiting
shared by every router.

Authentication is handled upstream: the gateway forwards the authenticated
user id and role in the X-User-Id and X-User-Role headers.
"""

import logging
from typing import Callable, Optional, Sequence

from fastapi import Depends, Header, HTTPException, Request, Response, status

from ..config import Settings, get_settings
from ..middleware.rate_limiting import RateLimiter, get_rate_limiter
from ..models import RequestContext
from ..rbac import AccessControlEvaluator, UserRole
from ..repositories import (
    AuditStore,
    InMemoryAnswerStore,
    InMemoryAuditStore,
    InMemoryProfileStore,
    InMemoryTaskStore,
    SqlAuditStore,
)
from ..services.assessment import AssessmentService
from ..services.audit import AuditRecorder, SecurityAuditReporter
from ..services.remediation import TaskDerivationEngine, TaskWorkflowService
from ..utils.logging_security import sanitize_for_log, sanitize_id_for_log

logger = logging.getLogger(__name__)


# =============================================================================
# Service Container
# =============================================================================


class ServiceContainer:
    """Stores and services for one application instance"""

    def __init__(
        self,
        task_store=None,
        audit_store: Optional[AuditStore] = None,
        profile_store=None,
        answer_store=None,
        rate_limiter: Optional[RateLimiter] = None,
        settings: Optional[Settings] = None,
    ):
        # Explicit None checks: empty in-memory stores are falsy
        self.settings = settings if settings is not None else get_settings()
        self.task_store = task_store if task_store is not None else InMemoryTaskStore()
        self.audit_store = audit_store if audit_store is not None else _default_audit_store(self.settings)
        self.profile_store = profile_store if profile_store is not None else InMemoryProfileStore()
        self.answer_store = answer_store if answer_store is not None else InMemoryAnswerStore()
        self.rate_limiter = rate_limiter if rate_limiter is not None else get_rate_limiter()

        self.recorder = AuditRecorder(self.audit_store)
        self.engine = TaskDerivationEngine(self.task_store)
        self.assessment = AssessmentService(self.profile_store, self.answer_store, self.engine, self.recorder)
        self.workflow = TaskWorkflowService(self.task_store, self.recorder)
        self.reporter = SecurityAuditReporter(self.audit_store, self.task_store, self.settings)


def _default_audit_store(settings: Settings) -> AuditStore:
    if not settings.audit_database_url:
        return InMemoryAuditStore()

    store = SqlAuditStore.from_url(settings.audit_database_url)
    store.create_schema()
    logger.info("Audit records persisted to SQL audit store")
    return store


# Global instance for dependency injection
_container = None


def get_container() -> ServiceContainer:
    """Get or create the global service container"""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


# =============================================================================
# Request Context
# =============================================================================


def get_client_ip(request: Request, trusted_proxies: Sequence[str] = ()) -> str:
    """
    Peer address of the request.

    The first X-Forwarded-For hop replaces it only when the peer is a
    configured trusted proxy.
    """
    peer = request.client.host if request.client is not None else None
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded and peer is not None and peer in trusted_proxies:
        return forwarded.split(",")[0].strip() or peer
    return peer or "unknown"


def get_request_context(
    request: Request,
    x_user_id: Optional[str] = Header(None),
    x_user_role: Optional[str] = Header(None),
    container: ServiceContainer = Depends(get_container),
) -> RequestContext:
    """
    Build the acting user's context from gateway headers.

    Raises:
        HTTPException: 401 if no user id was forwarded
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")

    role = (x_user_role or UserRole.USER.value).strip().lower()
    if role not in {r.value for r in UserRole}:
        logger.warning("Unknown role %s for %s, treating as user", sanitize_for_log(role), sanitize_id_for_log(x_user_id))
        role = UserRole.USER.value

    return RequestContext(
        actor_id=x_user_id.strip(),
        role=role,
        ip_address=get_client_ip(request, container.settings.trusted_proxies),
        user_agent=request.headers.get("user-agent", "unknown"),
    )


# =============================================================================
# Access Control
# =============================================================================


def require_access(
    container: ServiceContainer,
    context: RequestContext,
    resource_owner_id: str,
    action: str,
    resource_type: str,
    resource_id: Optional[str] = None,
) -> None:
    """
    Enforce owner/admin access, recording denials in the audit trail.

    Raises:
        HTTPException: 403 when access is denied
    """
    decision = AccessControlEvaluator.evaluate(context.actor_id, resource_owner_id, context.role)
    if not decision.has_access:
        container.recorder.record_access_denied(context, action, resource_type, resource_id or resource_owner_id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")


def require_admin(
    container: ServiceContainer,
    context: RequestContext,
    action: str,
    resource_type: str,
    resource_id: Optional[str] = None,
) -> None:
    if not AccessControlEvaluator.is_admin(context.role):
        container.recorder.record_access_denied(context, action, resource_type, resource_id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Administrator role required")


# =============================================================================
# Rate Limiting
# =============================================================================


def rate_limit(operation: str, resource_type: str) -> Callable[..., RequestContext]:
    """
    Dependency factory enforcing the preset limit for an operation.

    Adds X-RateLimit-* headers to the response. Refused calls are audited
    and rejected with 429 and Retry-After.

    Usage:
        @router.post("/tasks/{task_id}/submit")
        async def submit(context: RequestContext = Depends(rate_limit("submit_task", "task"))):
            ...
    """

    def dependency(
        response: Response,
        context: RequestContext = Depends(get_request_context),
        container: ServiceContainer = Depends(get_container),
    ) -> RequestContext:
        result = container.rate_limiter.check_operation(context.actor_id, operation)
        headers = result.headers()

        if not result.allowed:
            container.recorder.record_rate_limited(context, operation, resource_type)
            headers["Retry-After"] = str(result.retry_after_seconds())
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Muitas operações. Tente novamente mais tarde.",
                headers=headers,
            )

        for name, value in headers.items():
            response.headers[name] = value
        return context

    return dependency
