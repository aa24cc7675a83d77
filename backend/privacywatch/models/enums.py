"""
Shared Enums

Common enumeration types used across assessment, remediation and audit
modules. Kept separate to avoid circular imports between routes, services,
and models.

Usage:
    from privacywatch.models.enums import TaskStatus, DerivationMode
"""

from enum import Enum


class AnswerKind(str, Enum):
    """How a question is answered."""

    TEXT = "text"
    SINGLE = "single"
    MULTIPLE = "multiple"


class CompanySize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class TaskPriority(str, Enum):
    """Priority levels for remediation tasks"""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TaskStatus(str, Enum):
    """
    Lifecycle status of a remediation task.

    pending -> in_progress -> in_review -> approved | rejected
    rejected loops back through resubmission; approved maps to completed.
    cancelled is only set by a sector-scoped reset.
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    IN_REVIEW = "in_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DerivationMode(str, Enum):
    """
    How newly derived tasks combine with an organization's existing tasks.

    RESET replaces every prior task (explicit assessment restart).
    APPEND keeps prior tasks and only adds newly triggered ones.
    """

    RESET = "reset"
    APPEND = "append"


class AccessLevel(str, Enum):
    """Classification of an access decision"""

    OWNER = "owner"
    ADMIN = "admin"
    SHARED = "shared"
    DENIED = "denied"


class SuspiciousActivityType(str, Enum):
    HIGH_ACTIVITY = "high_activity"
    MULTIPLE_ACCESS_FAILURES = "multiple_access_failures"
    MULTIPLE_IP_ADDRESSES = "multiple_ip_addresses"
