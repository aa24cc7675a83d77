"""
Audit Services Package

Best-effort audit recording and batch security analysis of the audit log.
"""

from .recorder import ACCESS_DENIED_MESSAGE, RATE_LIMIT_MESSAGE, AuditRecorder
from .report import SecurityAuditReporter

__all__ = [
    "ACCESS_DENIED_MESSAGE",
    "RATE_LIMIT_MESSAGE",
    "AuditRecorder",
    "SecurityAuditReporter",
]
