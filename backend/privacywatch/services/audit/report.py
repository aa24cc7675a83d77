"""
Security Audit Reporter

Batch analysis over a time window of audit records. Surfaces suspicious
activity signals, per-actor and per-resource statistics and templated
recommendations. Read-only: running a report never writes to any store.
"""

import logging
from collections import Counter, defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Set

from ...config import Settings, get_settings
from ...exceptions import DependencyError
from ...models import AuditRecord, SuspiciousActivityType
from ...repositories import AuditStore, TaskStore
from ...schemas.security_audit_schemas import (
    ResourceAccessPattern,
    SecurityAuditReport,
    SuspiciousActivity,
    TaskSecurityMetrics,
    TopUser,
    UserActivitySummary,
)
from ...utils.logging_security import sanitize_id_for_log
from .recorder import ACCESS_DENIED_MESSAGE, RATE_LIMIT_MESSAGE

logger = logging.getLogger(__name__)

RECOMMENDATION_HIGH_FAILURE = (
    "Alto número de ações falhadas detectado. Revisar logs de erro e implementar melhor validação de entrada."
)
RECOMMENDATION_SUSPICIOUS = (
    "Atividades suspeitas detectadas. Revisar padrões de acesso e considerar implementar alertas automáticos."
)
RECOMMENDATION_RATE_VIOLATIONS = (
    "Muitas violações de rate limiting. Considerar ajustar limites ou implementar medidas mais restritivas."
)
RECOMMENDATION_LOW_VOLUME = (
    "Baixo volume de atividade auditada. Verificar se todos os endpoints importantes estão sendo monitorados."
)
RECOMMENDATION_NORMAL = "Sistema apresenta padrões de segurança normais. Continuar monitoramento regular."


def _percentage(part: int, total: int) -> int:
    return round(part / total * 100) if total else 0


def _hour_bucket(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%dT%H")


class SecurityAuditReporter:
    """
    Analyze audit records for a time window.

    Example:
        reporter = SecurityAuditReporter(audit_store, task_store)
        report = reporter.report(start, end)
        for activity in report.suspicious_activities:
            print(activity.description)
    """

    def __init__(
        self,
        audit_store: AuditStore,
        task_store: Optional[TaskStore] = None,
        settings: Optional[Settings] = None,
    ):
        self.audit_store = audit_store
        self.task_store = task_store
        self.settings = settings or get_settings()

    # =========================================================================
    # Report
    # =========================================================================

    def report(self, start: datetime, end: datetime) -> SecurityAuditReport:
        """
        Build the security audit report for [start, end].

        Args:
            start: Window start (inclusive)
            end: Window end (inclusive)

        Returns:
            SecurityAuditReport

        Raises:
            DependencyError: If the audit store cannot be read
        """
        try:
            records = self.audit_store.query_range(start, end)
        except Exception as e:
            logger.error("Error generating security audit report: %s", e)
            raise DependencyError("query_range", e) from e

        period = f"{start.date().isoformat()} to {end.date().isoformat()}"
        total_actions = len(records)
        failed_actions = sum(1 for r in records if not r.success)
        suspicious = self.detect_suspicious_activities(records, period)
        rate_violations = sum(1 for r in records if r.error_message and RATE_LIMIT_MESSAGE in r.error_message)

        report = SecurityAuditReport(
            period=period,
            total_actions=total_actions,
            failed_actions=failed_actions,
            suspicious_activities=suspicious,
            user_activity_summary=self.summarize_users(records),
            resource_access_patterns=self.analyze_resource_access(records),
            rate_violations=rate_violations,
            top_users=self.top_users(records),
            recommendations=self.recommendations(total_actions, failed_actions, suspicious, rate_violations),
        )

        logger.info(
            "Security audit report for %s: %d actions, %d failed, %d suspicious",
            period,
            total_actions,
            failed_actions,
            len(suspicious),
        )
        return report

    # =========================================================================
    # Suspicious Activity Detection
    # =========================================================================

    def detect_suspicious_activities(
        self, records: Sequence[AuditRecord], period: str
    ) -> List[SuspiciousActivity]:
        """Burst activity per (actor, hour), repeated access denials and IP fan-out"""
        settings = self.settings
        suspicious: List[SuspiciousActivity] = []

        by_hour: Counter = Counter()
        denials: Counter = Counter()
        ips: Dict[str, Set[str]] = defaultdict(set)

        for record in records:
            if record.actor_id is None:
                continue
            by_hour[(record.actor_id, _hour_bucket(record.created_at))] += 1
            if not record.success and record.error_message and ACCESS_DENIED_MESSAGE in record.error_message:
                denials[record.actor_id] += 1
            if record.ip_address and record.ip_address != "unknown":
                ips[record.actor_id].add(record.ip_address)

        for (actor_id, hour), count in by_hour.items():
            if count > settings.report_high_activity_threshold:
                suspicious.append(
                    SuspiciousActivity(
                        type=SuspiciousActivityType.HIGH_ACTIVITY,
                        user_id=actor_id,
                        description=f"Usuário {actor_id} executou {count} ações em uma hora",
                        count=count,
                        timeframe=hour,
                    )
                )

        for actor_id, count in denials.items():
            if count > settings.report_access_failure_threshold:
                suspicious.append(
                    SuspiciousActivity(
                        type=SuspiciousActivityType.MULTIPLE_ACCESS_FAILURES,
                        user_id=actor_id,
                        description=f"Usuário {actor_id} teve {count} tentativas de acesso negadas",
                        count=count,
                        timeframe=period,
                    )
                )

        for actor_id, addresses in ips.items():
            if len(addresses) > settings.report_distinct_ip_threshold:
                suspicious.append(
                    SuspiciousActivity(
                        type=SuspiciousActivityType.MULTIPLE_IP_ADDRESSES,
                        user_id=actor_id,
                        description=f"Usuário {actor_id} acessou de {len(addresses)} endereços IP diferentes",
                        count=len(addresses),
                        timeframe=period,
                    )
                )

        return suspicious

    # =========================================================================
    # Aggregates
    # =========================================================================

    @staticmethod
    def summarize_users(records: Sequence[AuditRecord]) -> Dict[str, UserActivitySummary]:
        totals: Counter = Counter()
        successes: Counter = Counter()
        resource_types: Dict[str, List[str]] = defaultdict(list)
        last_activity: Dict[str, datetime] = {}

        for record in records:
            actor_id = record.actor_id
            if actor_id is None:
                continue
            totals[actor_id] += 1
            if record.success:
                successes[actor_id] += 1
            if record.resource_type not in resource_types[actor_id]:
                resource_types[actor_id].append(record.resource_type)
            if actor_id not in last_activity or record.created_at > last_activity[actor_id]:
                last_activity[actor_id] = record.created_at

        return {
            actor_id: UserActivitySummary(
                total_actions=total,
                success_rate=_percentage(successes[actor_id], total),
                resource_types=resource_types[actor_id],
                last_activity=last_activity[actor_id],
            )
            for actor_id, total in totals.items()
        }

    @staticmethod
    def analyze_resource_access(records: Sequence[AuditRecord]) -> Dict[str, ResourceAccessPattern]:
        """Per (resource_type, action) counts keyed 'resource_type:action'"""
        totals: Counter = Counter()
        successes: Counter = Counter()
        users: Dict[str, Set[str]] = defaultdict(set)
        pairs: Dict[str, tuple] = {}

        for record in records:
            key = f"{record.resource_type}:{record.action}"
            pairs[key] = (record.resource_type, record.action)
            totals[key] += 1
            if record.success:
                successes[key] += 1
            if record.actor_id is not None:
                users[key].add(record.actor_id)

        return {
            key: ResourceAccessPattern(
                resource_type=pairs[key][0],
                action=pairs[key][1],
                count=total,
                unique_users=len(users[key]),
                success_rate=_percentage(successes[key], total),
            )
            for key, total in totals.items()
        }

    def top_users(self, records: Sequence[AuditRecord]) -> List[TopUser]:
        counts = Counter(r.actor_id for r in records if r.actor_id is not None)
        return [
            TopUser(user_id=actor_id, action_count=count)
            for actor_id, count in counts.most_common(self.settings.report_top_users_limit)
        ]

    def recommendations(
        self,
        total_actions: int,
        failed_actions: int,
        suspicious: Sequence[SuspiciousActivity],
        rate_violations: int,
    ) -> List[str]:
        settings = self.settings
        recommendations = []

        if failed_actions > total_actions * settings.report_failure_ratio_threshold:
            recommendations.append(RECOMMENDATION_HIGH_FAILURE)
        if suspicious:
            recommendations.append(RECOMMENDATION_SUSPICIOUS)
        if rate_violations > settings.report_rate_violation_threshold:
            recommendations.append(RECOMMENDATION_RATE_VIOLATIONS)
        if total_actions < settings.report_low_volume_threshold:
            recommendations.append(RECOMMENDATION_LOW_VOLUME)

        if not recommendations:
            recommendations.append(RECOMMENDATION_NORMAL)
        return recommendations

    # =========================================================================
    # Task Security Metrics
    # =========================================================================

    def task_security_metrics(self, organization_id: str) -> TaskSecurityMetrics:
        """
        Counters combining an organization's tasks with its audit trail.

        The organization's own user id is the actor whose records are counted.
        Any store failure yields zeroed metrics and an error log entry.
        """
        if self.task_store is None:
            logger.error("Task security metrics requested without a task store")
            return TaskSecurityMetrics()

        try:
            tasks = self.task_store.list_tasks(organization_id)
            records = [
                r
                for r in self.audit_store.query_actor(organization_id)
                if r.resource_type in ("task", "document")
            ]
        except Exception as e:
            logger.error(
                "Error getting task security metrics for %s: %s", sanitize_id_for_log(organization_id), e
            )
            return TaskSecurityMetrics()

        return TaskSecurityMetrics(
            total_tasks=len(tasks),
            tasks_with_documents=sum(1 for t in tasks if t.evidence),
            audited_actions=len(records),
            document_uploads=sum(1 for r in records if r.action == "create" and r.resource_type == "document"),
            task_submissions=sum(1 for r in records if r.action == "submit" and r.resource_type == "task"),
            access_violations=sum(
                1 for r in records if not r.success and r.error_message and ACCESS_DENIED_MESSAGE in r.error_message
            ),
        )
