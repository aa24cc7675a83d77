"""
Audit Recorder

Best-effort append-only write path for audit records. A record is fully
built before a single append; store failures are logged on the
privacywatch.audit channel and reported as AuditFailed, never raised.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from ...models import (
    AccessLevel,
    AuditEvent,
    AuditFailed,
    AuditOutcome,
    AuditRecord,
    AuditRecorded,
    RequestContext,
)
from ...repositories import AuditStore
from ...utils.logging_security import create_audit_log_entry, sanitize_error_message_for_log

audit_channel = logging.getLogger("privacywatch.audit")

ACCESS_DENIED_MESSAGE = "Access denied"
RATE_LIMIT_MESSAGE = "Rate limit exceeded"


class AuditRecorder:
    """Records audited actions through an AuditStore"""

    def __init__(self, store: AuditStore, clock: Optional[Callable[[], datetime]] = None):
        self.store = store
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def record(self, event: AuditEvent, context: RequestContext) -> AuditOutcome:
        """
        Build and append one audit record.

        Args:
            event: What happened
            context: Who did it and from where

        Returns:
            AuditRecorded on success, AuditFailed if the store rejected the write
        """
        try:
            record = AuditRecord.from_event(event, context, created_at=self.clock())
        except Exception as e:
            audit_channel.error(
                "Could not build audit record for %s: %s", event.action, sanitize_error_message_for_log(str(e))
            )
            return AuditFailed(reason=str(e))

        try:
            self.store.append(record)
        except Exception as e:
            audit_channel.error(
                "Audit store append failed: %s | %s",
                sanitize_error_message_for_log(str(e)),
                self._summary(record),
            )
            return AuditFailed(reason=str(e), record=record)

        audit_channel.info(self._summary(record))
        return AuditRecorded(record=record)

    def record_action(
        self,
        context: RequestContext,
        action: str,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        previous_state: Optional[Dict[str, Any]] = None,
        new_state: Optional[Dict[str, Any]] = None,
        success: bool = True,
        error_message: Optional[str] = None,
        access_level: Optional[AccessLevel] = None,
    ) -> AuditOutcome:
        """Keyword shortcut for record(AuditEvent(...), context)"""
        event = AuditEvent(
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            details=details or {},
            previous_state=previous_state,
            new_state=new_state,
            success=success,
            error_message=error_message,
            access_level=access_level,
        )
        return self.record(event, context)

    def record_access_denied(
        self, context: RequestContext, action: str, resource_type: str, resource_id: Optional[str] = None
    ) -> AuditOutcome:
        return self.record_action(
            context,
            action,
            resource_type,
            resource_id,
            success=False,
            error_message=ACCESS_DENIED_MESSAGE,
            access_level=AccessLevel.DENIED,
        )

    def record_rate_limited(
        self, context: RequestContext, operation: str, resource_type: str, resource_id: Optional[str] = None
    ) -> AuditOutcome:
        return self.record_action(
            context,
            operation,
            resource_type,
            resource_id,
            details={"operation": operation},
            success=False,
            error_message=RATE_LIMIT_MESSAGE,
        )

    @staticmethod
    def _summary(record: AuditRecord) -> str:
        return create_audit_log_entry(
            action=record.action,
            user_id=record.actor_id,
            resource_type=record.resource_type,
            resource_id=record.resource_id,
            ip_address=record.ip_address,
            success=record.success,
            error_message=record.error_message,
        )
