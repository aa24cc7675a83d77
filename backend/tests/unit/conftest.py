"""
Unit test fixtures and helpers.

Provides in-memory stores, a fixed clock and a FastAPI test client wired to
a fresh service container. Nothing here needs a database or network.
"""

from datetime import datetime, timezone
from typing import Iterator, List

import pytest
from fastapi.testclient import TestClient

from privacywatch.middleware.rate_limiting import RateLimiter
from privacywatch.models import Question, RequestContext
from privacywatch.repositories import (
    InMemoryAnswerStore,
    InMemoryAuditStore,
    InMemoryProfileStore,
    InMemoryTaskStore,
)
from privacywatch.services.assessment import base_catalog
from privacywatch.services.audit import AuditRecorder
from privacywatch.services.remediation import TaskDerivationEngine, TaskWorkflowService

FIXED_NOW = datetime(2024, 3, 15, 10, 0, tzinfo=timezone.utc)

ORG_ID = "org-user-1"
ADMIN_ID = "admin-1"


@pytest.fixture
def fixed_clock():
    """Clock that always returns FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def task_store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture
def audit_store() -> InMemoryAuditStore:
    return InMemoryAuditStore()


@pytest.fixture
def profile_store() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
def answer_store() -> InMemoryAnswerStore:
    return InMemoryAnswerStore()


@pytest.fixture
def recorder(audit_store, fixed_clock) -> AuditRecorder:
    return AuditRecorder(audit_store, clock=fixed_clock)


@pytest.fixture
def engine(task_store, fixed_clock) -> TaskDerivationEngine:
    return TaskDerivationEngine(task_store, clock=fixed_clock)


@pytest.fixture
def workflow(task_store, recorder, fixed_clock) -> TaskWorkflowService:
    return TaskWorkflowService(task_store, recorder, clock=fixed_clock)


@pytest.fixture
def base_questions() -> List[Question]:
    return base_catalog()


@pytest.fixture
def user_context() -> RequestContext:
    return RequestContext(actor_id=ORG_ID, role="user", ip_address="10.0.0.1", user_agent="pytest")


@pytest.fixture
def admin_context() -> RequestContext:
    return RequestContext(actor_id=ADMIN_ID, role="admin", ip_address="10.0.0.9", user_agent="pytest")


# =============================================================================
# API fixtures
# =============================================================================


@pytest.fixture
def container(task_store, audit_store, profile_store, answer_store):
    """Fresh service container with its own rate limiter."""
    from privacywatch.routes.dependencies import ServiceContainer

    return ServiceContainer(
        task_store=task_store,
        audit_store=audit_store,
        profile_store=profile_store,
        answer_store=answer_store,
        rate_limiter=RateLimiter(enabled=True),
    )


@pytest.fixture
def client(container) -> Iterator[TestClient]:
    """TestClient whose routes resolve to the fresh container."""
    from privacywatch.main import app
    from privacywatch.routes.dependencies import get_container

    app.dependency_overrides[get_container] = lambda: container
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

