"""
Remediation Trigger Rules

Declarative rules mapping answers to remediation templates. Rules are keyed
on question id (and therefore sector), never on the position of an answer
in the submitted array, so sector extensions cannot shift them.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, List, Sequence, Tuple

from ...constants import ANY_ANSWER, FULL_COMPLIANCE_ANSWER
from ...models import AnswerBase, Question, normalize_answer_value
from .templates import BASELINE_TEMPLATE_KEYS

Condition = Callable[[Question, AnswerBase], bool]


def negative_answer(question: Question, answer: AnswerBase) -> bool:
    """Any value in the negative vocabulary; multi-choice counts if one choice is negative."""
    return answer.is_negative


def evidence_answer(question: Question, answer: AnswerBase) -> bool:
    """The answer claims what the question's evidence marker asks for."""
    marker = question.evidence_if_answer
    if marker is None:
        return False
    if marker == ANY_ANSWER:
        return answer.is_answered
    if normalize_answer_value(marker) == FULL_COMPLIANCE_ANSWER:
        return answer.is_full_compliance
    return normalize_answer_value(marker) in answer.normalized_values()


@dataclass(frozen=True)
class TriggerRule:
    """Derive template_key when any listed question's answer satisfies condition"""

    template_key: str
    question_ids: FrozenSet[int]
    condition: Condition = field(default=negative_answer)

    def matches(self, question: Question, answer: AnswerBase) -> bool:
        return question.id in self.question_ids and self.condition(question, answer)


TRIGGER_RULES: Tuple[TriggerRule, ...] = (
    # Q2: DPO designated
    TriggerRule("dpo", frozenset({2})),
    # Q17 access-controlled room, Q18 locked archive, Q25 backups, TI 501 security policy
    TriggerRule("security", frozenset({17, 18, 25, 501})),
    # TI 503: incident response plan
    TriggerRule("incidentResponse", frozenset({503})),
    # Atendimento 603: staff trained
    TriggerRule("training", frozenset({603})),
    # Q14: sharing disclosed to the data subject
    TriggerRule("vendorManagement", frozenset({14})),
)

EVIDENCE_TEMPLATE_BY_QUESTION: Dict[int, str] = {
    1: "attachPrivacyPolicyDoc",
    3: "attachDataMappingDoc",
    4: "attachDataSubjectProceduresDoc",
    10: "attachConsentDoc",
    14: "attachSharingNotificationDoc",
    20: "attachCloudProviderDoc",
    22: "attachSystemContractDoc",
    23: "attachInternationalTransferDoc",
    101: "attachHrDataCollectionDoc",
    103: "attachSensitiveDataConsentDoc",
    201: "attachFinancialSecurityDoc",
    202: "attachPaymentCertificationDoc",
    301: "attachMarketingConsentDoc",
    304: "attachCookiePolicyDoc",
    402: "attachCrmSecurityDoc",
    501: "attachItSecurityPolicyDoc",
    503: "attachIncidentResponsePlanDoc",
    601: "attachDataRequestProcessDoc",
    603: "attachTrainingCertificatesDoc",
}

EVIDENCE_RULES: Tuple[TriggerRule, ...] = tuple(
    TriggerRule(template_key, frozenset({question_id}), evidence_answer)
    for question_id, template_key in EVIDENCE_TEMPLATE_BY_QUESTION.items()
)


def select_template_keys(
    pairs: Sequence[Tuple[Question, AnswerBase]],
    include_evidence: bool = False,
    trigger_rules: Sequence[TriggerRule] = TRIGGER_RULES,
    evidence_rules: Sequence[TriggerRule] = EVIDENCE_RULES,
) -> List[str]:
    """
    Decide which templates an answer set calls for.

    Order: baseline templates, then triggered templates in rule order, then
    evidence templates in rule order. Each key appears once.

    Args:
        pairs: (question, answer) pairs from one catalog snapshot
        include_evidence: Also evaluate evidence rules

    Returns:
        Ordered, de-duplicated template keys
    """
    keys: List[str] = list(BASELINE_TEMPLATE_KEYS)

    rules: List[TriggerRule] = list(trigger_rules)
    if include_evidence:
        rules.extend(evidence_rules)

    for rule in rules:
        if rule.template_key in keys:
            continue
        if any(rule.matches(question, answer) for question, answer in pairs):
            keys.append(rule.template_key)

    return keys
