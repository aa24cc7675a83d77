"""
Audit Models

An AuditEvent describes what happened; the recorder combines it with the
RequestContext of the caller into a frozen AuditRecord before a single
append to the audit store.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import AccessLevel


class RequestContext(BaseModel):
    """Who is acting and from where. Supplied by the HTTP layer."""

    model_config = ConfigDict(frozen=True)

    actor_id: Optional[str] = None
    role: str = "user"
    ip_address: str = "unknown"
    user_agent: str = "unknown"


class AuditEvent(BaseModel):
    """Business-level description of an audited action."""

    action: str
    resource_type: str
    resource_id: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)
    previous_state: Optional[Dict[str, Any]] = None
    new_state: Optional[Dict[str, Any]] = None
    success: bool = True
    error_message: Optional[str] = None
    access_level: Optional[AccessLevel] = None


class AuditRecord(BaseModel):
    """Append-only audit log entry. Never modified after it is written."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    actor_id: Optional[str] = None
    action: str
    resource_type: str
    resource_id: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)
    previous_state: Optional[Dict[str, Any]] = None
    new_state: Optional[Dict[str, Any]] = None
    ip_address: str = "unknown"
    user_agent: str = "unknown"
    success: bool = True
    error_message: Optional[str] = None
    access_level: Optional[AccessLevel] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_event(
        cls, event: AuditEvent, context: RequestContext, created_at: Optional[datetime] = None
    ) -> "AuditRecord":
        data = event.model_dump()
        data.update(
            actor_id=context.actor_id,
            ip_address=context.ip_address,
            user_agent=context.user_agent,
        )
        if created_at is not None:
            data["created_at"] = created_at
        return cls(**data)


@dataclass(frozen=True)
class AuditRecorded:
    """The record reached the audit store."""

    record: AuditRecord

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class AuditFailed:
    """The audit store rejected the write. Already logged by the recorder."""

    reason: str
    record: Optional[AuditRecord] = None

    @property
    def ok(self) -> bool:
        return False


AuditOutcome = Union[AuditRecorded, AuditFailed]
