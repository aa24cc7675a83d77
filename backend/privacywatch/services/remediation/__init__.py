"""
Remediation Services Package

Task templates, declarative trigger rules, the derivation engine and the
task review workflow.
"""

from .engine import TaskDerivationEngine, sector_task_for_answer, task_from_template
from .rules import EVIDENCE_RULES, TRIGGER_RULES, TriggerRule, select_template_keys
from .templates import BASELINE_TEMPLATE_KEYS, EVIDENCE_TEMPLATES, TASK_TEMPLATES, TaskTemplate, get_template
from .workflow import ALLOWED_TRANSITIONS, TaskWorkflowService, check_transition

__all__ = [
    "ALLOWED_TRANSITIONS",
    "BASELINE_TEMPLATE_KEYS",
    "EVIDENCE_RULES",
    "EVIDENCE_TEMPLATES",
    "TASK_TEMPLATES",
    "TRIGGER_RULES",
    "TaskDerivationEngine",
    "TaskTemplate",
    "TaskWorkflowService",
    "TriggerRule",
    "check_transition",
    "get_template",
    "sector_task_for_answer",
    "select_template_keys",
    "task_from_template",
]
