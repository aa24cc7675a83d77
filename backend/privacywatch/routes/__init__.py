"""
PrivacyWatch API Routes Package

Usage:
    from privacywatch.routes import router
    app.include_router(router, prefix="/api")
"""

from fastapi import APIRouter

router = APIRouter()

from .assessment import router as assessment_router  # noqa: E402
from .documents import router as documents_router  # noqa: E402
from .security import router as security_router  # noqa: E402
from .tasks import router as tasks_router  # noqa: E402

router.include_router(assessment_router)
router.include_router(tasks_router)
router.include_router(documents_router)
router.include_router(security_router)

__all__ = ["router"]
