"""
PrivacyWatch Engine Exceptions

Custom exceptions for assessment, remediation and storage operations.

Rate limiting and access control never raise: they return typed results
(RateLimitResult, AccessDecision) and the caller decides how to reject.
"""

from typing import List, Optional


class EngineError(Exception):
    """
    Base exception for all engine errors.

    Example:
        >>> try:
        ...     engine.derive(org_id, answers, catalog, DerivationMode.RESET)
        ... except EngineError as e:
        ...     logger.error(f"Derivation failed: {e}")
    """

    pass


class ValidationError(EngineError):
    """Raised when a pure function receives malformed input.

    Never retried automatically. Carries every violation so the caller can
    present a complete correction list.

    Attributes:
        errors: List of individual validation failures
    """

    def __init__(self, message: str = None, errors: Optional[List[str]] = None):
        self.errors = errors or []
        self.message = message or "; ".join(self.errors) or "Validation failed"
        super().__init__(self.message)


class UnknownSectorError(ValidationError):
    """Raised when a sector name is outside the closed taxonomy."""

    def __init__(self, sector: str):
        self.sector = sector
        super().__init__(f"Unknown sector: {sector}")


class AnswerLengthError(ValidationError):
    """Raised when an answer array is longer than the catalog it answers."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Answer set has {actual} entries but catalog has {expected} questions")


class InvalidAnswerError(ValidationError):
    """Raised when a raw answer value is neither a string nor a list of strings."""

    pass


class InvalidTransitionError(ValidationError):
    """Raised when a task status change violates the lifecycle or its guards.

    Example:
        if not task.evidence:
            raise InvalidTransitionError(
                task.status, TaskStatus.IN_REVIEW,
                "At least one evidence document is required"
            )
    """

    def __init__(self, current: str, target: str, reason: str = None):
        self.current = str(getattr(current, "value", current))
        self.target = str(getattr(target, "value", target))
        self.reason = reason
        message = f"Cannot move task from {self.current} to {self.target}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class TaskNotFoundError(EngineError):
    """Raised when a task id does not exist in the task store."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class DependencyError(EngineError):
    """Raised when an external store call fails.

    Task store failures propagate to the caller. Audit store failures are
    caught by the audit recorder and never reach business code.

    Attributes:
        operation: Store operation that failed
        cause: Underlying exception, if any
    """

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        message = f"Store operation failed: {operation}"
        if cause is not None:
            message += f" ({cause})"
        super().__init__(message)
