"""
Task Derivation Engine

Turns a submitted answer set into remediation tasks and writes them through
the task store. Template selection lives in rules.py; this module owns task
construction, the reset/append write modes and store error handling.
"""

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from ...constants import BASE_SECTOR
from ...exceptions import DependencyError, EngineError, ValidationError
from ...models import (
    AnswerBase,
    DerivationMode,
    Question,
    RemediationTask,
    TaskPriority,
    TaskStatus,
    parse_answers,
)
from ...repositories import TaskStore
from ...utils.logging_security import sanitize_id_for_log
from .rules import select_template_keys
from .templates import TaskTemplate, get_template

logger = logging.getLogger(__name__)

T = TypeVar("T")

SECTOR_TASK_PREFIX = "sector:"

SECTOR_CATEGORIES: Dict[str, str] = {
    "rh": "data_protection",
    "ti": "security",
    "vendas": "consent",
    "marketing": "consent",
    "financas": "data_protection",
    "atendimento": "data_subject_rights",
}
DEFAULT_SECTOR_CATEGORY = "documentation"

LGPD_REQUIREMENTS: Dict[int, str] = {
    1: "Art. 9º - Política de Privacidade",
    2: "Art. 41 - Encarregado de Dados",
    3: "Art. 37 - Registro de Operações",
    4: "Art. 18 - Direitos do Titular",
}

NEGATIVE_TITLES: Dict[int, str] = {
    1: "Implementar Política de Privacidade",
    2: "Designar Responsável por Proteção de Dados",
    3: "Realizar Mapeamento de Dados Pessoais",
    4: "Criar Procedimentos para Solicitações de Titulares",
}

PARTIAL_TITLES: Dict[int, str] = {
    1: "Revisar e Atualizar Política de Privacidade",
    3: "Completar Mapeamento de Dados Pessoais",
    4: "Aprimorar Procedimentos para Solicitações",
}

NEGATIVE_DUE_DAYS = 15
PARTIAL_DUE_DAYS = 30


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def task_from_template(organization_id: str, template: TaskTemplate, now: Optional[datetime] = None) -> RemediationTask:
    now = now or _utcnow()
    return RemediationTask(
        organization_id=organization_id,
        template_key=template.key,
        title=template.title,
        description=template.description,
        category=template.category,
        priority=template.priority,
        steps=list(template.steps),
        due_in_days=template.due_in_days,
        due_date=now + timedelta(days=template.due_in_days),
        created_at=now,
    )


def sector_task_for_answer(
    organization_id: str,
    question: Question,
    answer: AnswerBase,
    sector_label: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Optional[RemediationTask]:
    """
    Build the sector-tagged task for one non-affirmative answer.

    Negative answers yield a high-priority task due in 15 days, partial
    answers a medium-priority task due in 30 days. Anything else yields None.

    Args:
        organization_id: Owning organization
        question: Question the answer belongs to
        answer: Parsed answer
        sector_label: Tag shown in the title; defaults to the question's sector
        now: Creation time
    """
    if answer.is_partial_compliance:
        priority, due_in_days, urgency = TaskPriority.MEDIUM, PARTIAL_DUE_DAYS, "MELHORIA - "
        title = PARTIAL_TITLES.get(question.id, f"Melhorar: {question.prompt[:50]}...")
    elif answer.is_negative:
        priority, due_in_days, urgency = TaskPriority.HIGH, NEGATIVE_DUE_DAYS, "URGENTE - "
        title = NEGATIVE_TITLES.get(question.id, f"Adequação: {question.prompt[:50]}...")
    else:
        return None

    now = now or _utcnow()
    label = sector_label or question.sector
    return RemediationTask(
        organization_id=organization_id,
        template_key=f"{SECTOR_TASK_PREFIX}{question.id}",
        title=f"[{label}] {title}",
        description=f"{urgency}{question.description or question.prompt}. Setor específico: {question.sector}",
        category=SECTOR_CATEGORIES.get(question.sector, DEFAULT_SECTOR_CATEGORY),
        priority=priority,
        due_in_days=due_in_days,
        due_date=now + timedelta(days=due_in_days),
        lgpd_requirement=LGPD_REQUIREMENTS.get(question.id, f"Adequação setorial - {question.sector}"),
        sector=question.sector,
        created_at=now,
    )


class TaskDerivationEngine:
    """
    Derive remediation tasks from questionnaire answers.

    Writes for one organization are serialized by a per-organization lock so
    a reset never interleaves with another derivation for the same
    organization.
    """

    def __init__(self, task_store: TaskStore, clock: Optional[Callable[[], datetime]] = None):
        self.task_store = task_store
        self.clock = clock or _utcnow
        self._org_locks: Dict[str, threading.Lock] = {}
        self._org_locks_guard = threading.Lock()

    def _org_lock(self, organization_id: str) -> threading.Lock:
        with self._org_locks_guard:
            return self._org_locks.setdefault(organization_id, threading.Lock())

    def _store_call(self, operation: str, fn: Callable[..., T], *args: Any) -> T:
        try:
            return fn(*args)
        except EngineError:
            raise
        except Exception as e:
            logger.error("Task store %s failed: %s", operation, e)
            raise DependencyError(operation, e) from e

    def derive(
        self,
        organization_id: str,
        answers: Sequence[Any],
        catalog: Sequence[Question],
        mode: DerivationMode,
        include_evidence: bool = False,
    ) -> List[RemediationTask]:
        """
        Derive and persist tasks for an answer set.

        Produces the baseline templates, every template whose trigger rule
        fires, optional evidence templates, and one sector-tagged task per
        non-affirmative answer on a sector-specific question.

        Args:
            organization_id: Owning organization
            answers: Answers aligned with catalog (parsed or raw)
            catalog: Catalog snapshot the answers were given against
            mode: RESET replaces all prior tasks, APPEND only adds template
                keys not already present among non-cancelled tasks
            include_evidence: Also derive "attach evidence" tasks

        Returns:
            The tasks created by this call

        Raises:
            ValidationError: Bad mode or answers longer than the catalog
            DependencyError: If the task store fails
        """
        if not isinstance(mode, DerivationMode):
            raise ValidationError(f"Unknown derivation mode: {mode!r}")

        parsed = parse_answers(answers, catalog)
        pairs = list(zip(catalog, parsed))
        now = self.clock()

        candidates = [
            task_from_template(organization_id, get_template(key), now)
            for key in select_template_keys(pairs, include_evidence=include_evidence)
        ]
        for question, answer in pairs:
            if question.sector == BASE_SECTOR:
                continue
            task = sector_task_for_answer(organization_id, question, answer, now=now)
            if task is not None:
                candidates.append(task)

        with self._org_lock(organization_id):
            if mode == DerivationMode.RESET:
                removed = self._store_call("delete_all_tasks", self.task_store.delete_all_tasks, organization_id)
                logger.info(
                    "Reset derivation removed %d tasks for %s", removed or 0, sanitize_id_for_log(organization_id)
                )
            else:
                candidates = self._without_existing(organization_id, candidates)

            created = [self._store_call("create_task", self.task_store.create_task, t) for t in candidates]

        logger.info(
            "Derived %d tasks for %s (mode=%s)", len(created), sanitize_id_for_log(organization_id), mode.value
        )
        return created

    def derive_sector_tasks(
        self,
        organization_id: str,
        sector_key: str,
        answers: Sequence[Any],
        questions: Sequence[Question],
        reset: bool = False,
    ) -> List[RemediationTask]:
        """
        Sector questionnaire flow: one tagged task per negative or partial answer.

        Every question passed in is considered, base questions included. When
        reset is set, the organization's open tasks are cancelled first.

        Raises:
            ValidationError: If there are more answers than questions
            DependencyError: If the task store fails
        """
        parsed = parse_answers(answers, questions)
        now = self.clock()

        candidates = []
        for question, answer in zip(questions, parsed):
            task = sector_task_for_answer(organization_id, question, answer, sector_label=sector_key, now=now)
            if task is not None:
                candidates.append(task)

        with self._org_lock(organization_id):
            if reset:
                cancelled = self._store_call("cancel_all_tasks", self.task_store.cancel_all_tasks, organization_id)
                logger.info(
                    "Cancelled %d open tasks for %s", cancelled or 0, sanitize_id_for_log(organization_id)
                )
            created = [self._store_call("create_task", self.task_store.create_task, t) for t in candidates]

        return created

    def _without_existing(self, organization_id: str, candidates: List[RemediationTask]) -> List[RemediationTask]:
        existing = self._store_call("list_tasks", self.task_store.list_tasks, organization_id)
        present = {t.template_key for t in existing if t.status != TaskStatus.CANCELLED}
        return [t for t in candidates if t.template_key not in present]
