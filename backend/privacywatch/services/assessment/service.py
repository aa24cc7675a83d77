"""
Assessment Service

Orchestrates a questionnaire save:

    profile lookup -> compose catalog -> parse and validate answers
    -> score -> save answer set -> derive tasks -> audit

The derivation mode is always chosen by the caller; this service never
infers reset vs append.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ...constants import BASE_SECTOR
from ...exceptions import DependencyError, UnknownSectorError
from ...models import (
    AnswerSet,
    DerivationMode,
    OrganizationProfile,
    Question,
    RemediationTask,
    RequestContext,
    SectorAnalysis,
    parse_answers,
)
from ...repositories import AnswerStore, ProfileStore
from ...utils.logging_security import sanitize_for_log, sanitize_id_for_log
from ..audit.recorder import AuditRecorder
from ..remediation.engine import TaskDerivationEngine
from .catalog import base_catalog, compose, sector_questions
from .scoring import score
from .sector_analysis import analyze

logger = logging.getLogger(__name__)


@dataclass
class AssessmentResult:
    """Outcome of one questionnaire save."""

    answer_set: AnswerSet
    catalog_size: int
    tasks: List[RemediationTask] = field(default_factory=list)


class AssessmentService:
    def __init__(
        self,
        profile_store: ProfileStore,
        answer_store: AnswerStore,
        engine: TaskDerivationEngine,
        recorder: AuditRecorder,
    ):
        self.profile_store = profile_store
        self.answer_store = answer_store
        self.engine = engine
        self.recorder = recorder

    # =========================================================================
    # Catalog
    # =========================================================================

    def get_profile(self, organization_id: str) -> Optional[OrganizationProfile]:
        """Profile lookup that never fails the caller."""
        try:
            return self.profile_store.get_profile(organization_id)
        except Exception as e:
            logger.warning(
                "Profile lookup failed for %s: %s", sanitize_id_for_log(organization_id), sanitize_for_log(e)
            )
            return None

    def get_catalog(self, organization_id: str) -> List[Question]:
        profile = self.get_profile(organization_id)
        if profile is None:
            return base_catalog()
        return compose(profile)

    # =========================================================================
    # Answers
    # =========================================================================

    def get_latest_answers(self, organization_id: str) -> Optional[AnswerSet]:
        try:
            return self.answer_store.get_latest_answers(organization_id)
        except Exception as e:
            raise DependencyError("get_latest_answers", e) from e

    def save_answers(
        self,
        organization_id: str,
        raw_answers: Sequence[Any],
        context: RequestContext,
        mode: DerivationMode,
        is_complete: bool = False,
        observations: Optional[str] = None,
        include_evidence: bool = False,
    ) -> AssessmentResult:
        """
        Save a new answer set version and derive remediation tasks.

        Args:
            organization_id: Assessed organization
            raw_answers: Answers aligned with the organization's catalog
            context: Acting user
            mode: RESET or APPEND, chosen explicitly by the caller
            is_complete: Whether the questionnaire is finished
            observations: Free-text notes
            include_evidence: Also derive evidence attachment tasks

        Returns:
            AssessmentResult with the saved answer set and created tasks

        Raises:
            ValidationError: Answer array longer than the catalog or bad values
            DependencyError: Answer or task store failure
        """
        catalog = self.get_catalog(organization_id)
        answers = parse_answers(raw_answers, catalog)
        compliance_score = score(answers, len(catalog))

        answer_set = AnswerSet(
            organization_id=organization_id,
            answers=answers,
            is_complete=is_complete,
            compliance_score=compliance_score,
            observations=observations,
        )
        try:
            saved = self.answer_store.save_answers(answer_set)
        except Exception as e:
            logger.error("Answer store save failed for %s: %s", sanitize_id_for_log(organization_id), e)
            raise DependencyError("save_answers", e) from e

        tasks = self.engine.derive(organization_id, answers, catalog, mode, include_evidence=include_evidence)

        logger.info(
            "Saved assessment v%d for %s: score=%d, %d tasks derived",
            saved.version,
            sanitize_id_for_log(organization_id),
            compliance_score,
            len(tasks),
        )
        self.recorder.record_action(
            context,
            "update",
            "assessment",
            organization_id,
            details={
                "version": saved.version,
                "compliance_score": compliance_score,
                "is_complete": is_complete,
                "mode": mode.value,
                "tasks_created": len(tasks),
            },
        )
        return AssessmentResult(answer_set=saved, catalog_size=len(catalog), tasks=tasks)

    # =========================================================================
    # Sector flows
    # =========================================================================

    def sector_analysis(self, organization_id: str) -> Dict[str, SectorAnalysis]:
        """Per-sector breakdown of the latest answer set (empty answers if none saved)."""
        profile = self.get_profile(organization_id)
        catalog = compose(profile) if profile is not None else base_catalog()
        latest = self.get_latest_answers(organization_id)
        answers = parse_answers(latest.answers if latest else [], catalog)
        sectors = profile.sectors if profile is not None else []
        if profile is not None:
            sectors = sectors + profile.custom_sectors
        return analyze(answers, catalog, sectors)

    def sector_catalog(self, sector_key: str) -> List[Question]:
        """
        Questions of a sector questionnaire.

        Raises:
            UnknownSectorError: If the key has no registered questions
        """
        if sector_key == BASE_SECTOR:
            return base_catalog()
        questions = sector_questions(sector_key)
        if not questions:
            raise UnknownSectorError(sector_key)
        return questions

    def submit_sector_answers(
        self,
        organization_id: str,
        sector_key: str,
        raw_answers: Sequence[Any],
        context: RequestContext,
        reset: bool = False,
    ) -> List[RemediationTask]:
        """Derive sector-tagged tasks from a sector questionnaire."""
        questions = self.sector_catalog(sector_key)
        tasks = self.engine.derive_sector_tasks(organization_id, sector_key, raw_answers, questions, reset=reset)

        self.recorder.record_action(
            context,
            "create",
            "task",
            organization_id,
            details={"sector": sector_key, "reset": reset, "tasks_created": len(tasks)},
        )
        return tasks
